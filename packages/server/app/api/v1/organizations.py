"""
Organization endpoints.

GET    /api/v1/orgs                          Orgs the actor belongs to or created
POST   /api/v1/orgs                          Request a new org (starts pending)
GET    /api/v1/orgs/{org_id}                 Org details (visible to members and the creator)
PATCH  /api/v1/orgs/{org_id}                 Update name/description (org admin)
DELETE /api/v1/orgs/{org_id}                 Delete org (org admin)
GET    /api/v1/orgs/{org_id}/members         Memberships visible to the actor
POST   /api/v1/orgs/{org_id}/members         Add or re-role a member (org admin)
PATCH  /api/v1/orgs/{org_id}/members/{uid}   Change a member's role (org admin)
DELETE /api/v1/orgs/{org_id}/members/{uid}   Remove a member (org admin or self)
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from app.core.auth import require_actor
from app.policy import Actor, OrganizationLifecycle
from app.policy.store import ContentStore
from app.services import organizations as org_service
from app.services.store import get_store
from timeline_shared.schemas.organizations import (
    OrgCreateRequest,
    OrgListResponse,
    OrgResponse,
    OrgUpdateRequest,
)
from timeline_shared.schemas.users import (
    MembershipAddRequest,
    MembershipListResponse,
    MembershipResponse,
    MembershipUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=OrgListResponse)
async def list_orgs(
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    """List orgs the authenticated user belongs to or has requested."""
    items = await org_service.list_user_orgs(store, actor)
    return OrgListResponse(data=items)


@router.post("", response_model=OrgResponse, status_code=201)
async def create_org(
    body: OrgCreateRequest,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    """Request a new organization. It stays pending until a super admin approves it."""
    org = await OrganizationLifecycle(store).create(body, actor)
    return OrgResponse.model_validate(org)


@router.get("/{org_id}", response_model=OrgResponse)
async def get_org(
    org_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    org = await org_service.get_org(store, org_id, actor)
    return OrgResponse.model_validate(org)


@router.patch("/{org_id}", response_model=OrgResponse)
async def update_org(
    org_id: uuid.UUID,
    body: OrgUpdateRequest,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    """Update org name or description (org admin only)."""
    org = await org_service.update_org(store, org_id, body, actor)
    return OrgResponse.model_validate(org)


@router.delete("/{org_id}")
async def delete_org(
    org_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    """Delete an org together with its memberships and topics (org admin only)."""
    await org_service.delete_org(store, org_id, actor)
    return {"ok": True}


# ---------------------------------------------------------------------------
# Memberships
# ---------------------------------------------------------------------------


@router.get("/{org_id}/members", response_model=MembershipListResponse)
async def list_members(
    org_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    members = await org_service.list_members(store, org_id, actor)
    return MembershipListResponse(
        data=[MembershipResponse.model_validate(m) for m in members]
    )


@router.post("/{org_id}/members", response_model=MembershipResponse, status_code=201)
async def add_member(
    org_id: uuid.UUID,
    body: MembershipAddRequest,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    membership = await org_service.add_member(store, org_id, body, actor)
    return MembershipResponse.model_validate(membership)


@router.patch("/{org_id}/members/{user_id}", response_model=MembershipResponse)
async def update_member(
    org_id: uuid.UUID,
    user_id: uuid.UUID,
    body: MembershipUpdateRequest,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    membership = await org_service.update_member(store, org_id, user_id, body, actor)
    return MembershipResponse.model_validate(membership)


@router.delete("/{org_id}/members/{user_id}")
async def remove_member(
    org_id: uuid.UUID,
    user_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    await org_service.remove_member(store, org_id, user_id, actor)
    return {"ok": True}
