"""
Super admin endpoints: organization approval queue and global roles.

GET  /api/v1/admin/organizations/pending
POST /api/v1/admin/organizations/{org_id}/approve
POST /api/v1/admin/organizations/{org_id}/reject
PUT  /api/v1/admin/users/{user_id}/role
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from app.core.auth import require_actor
from app.policy import Actor, OrganizationLifecycle
from app.policy.store import ContentStore
from app.services import users as user_service
from app.services.store import get_store
from timeline_shared.schemas.organizations import (
    OrgResponse,
    PendingOrgItem,
    PendingOrgListResponse,
)
from timeline_shared.schemas.users import GlobalRoleUpdateRequest, UserProfileResponse

router = APIRouter()


@router.get("/organizations/pending", response_model=PendingOrgListResponse)
async def list_pending_orgs(
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    """Pending organization requests, newest first, with creator details."""
    pending = await OrganizationLifecycle(store).list_pending(actor)
    return PendingOrgListResponse(
        data=[
            PendingOrgItem(
                id=p.org.id,
                name=p.org.name,
                slug=p.org.slug,
                description=p.org.description,
                created_by=p.org.created_by,
                created_at=p.org.created_at,
                creator_email=p.creator.email if p.creator else None,
                creator_name=p.creator.full_name if p.creator else None,
            )
            for p in pending
        ]
    )


@router.post("/organizations/{org_id}/approve", response_model=OrgResponse)
async def approve_org(
    org_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    """Approve a pending org; its creator becomes org_admin. Repeat calls are no-ops."""
    org = await OrganizationLifecycle(store).approve(org_id, actor)
    return OrgResponse.model_validate(org)


@router.post("/organizations/{org_id}/reject", response_model=OrgResponse)
async def reject_org(
    org_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    """Reject a pending org. Has no effect on approved or rejected orgs."""
    org = await OrganizationLifecycle(store).reject(org_id, actor)
    return OrgResponse.model_validate(org)


@router.put("/users/{user_id}/role", response_model=UserProfileResponse)
async def set_user_role(
    user_id: uuid.UUID,
    body: GlobalRoleUpdateRequest,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    profile = await user_service.set_global_role(store, user_id, body.role, actor)
    return UserProfileResponse.model_validate(profile)
