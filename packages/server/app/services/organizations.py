"""
Organization service: visibility-filtered reads, admin updates, and
membership management. Approval transitions live in
``app.policy.lifecycle``.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import structlog

from app.models import Organization, OrganizationMembership
from app.policy import Actor, NotFound, OrganizationPolicy, PermissionDenied, RoleResolver
from app.policy.store import ContentStore
from timeline_shared.schemas.organizations import OrgUpdateRequest
from timeline_shared.schemas.users import MembershipAddRequest, MembershipUpdateRequest

log = structlog.get_logger()


def _policy(store: ContentStore) -> OrganizationPolicy:
    return OrganizationPolicy(RoleResolver(store))


async def list_user_orgs(store: ContentStore, actor: Actor) -> list[dict]:
    """Orgs the actor belongs to or created, with their effective role."""
    if not actor.is_authenticated:
        return []
    roles = RoleResolver(store)
    seen: dict[uuid.UUID, Organization] = {}

    for membership in await store.list_memberships(user_id=actor.user_id):
        org = await store.get_organization(membership.organization_id)
        if org is not None:
            seen[org.id] = org
    for org in await store.list_organizations():
        if org.created_by == actor.user_id:
            seen.setdefault(org.id, org)

    items = []
    for org in sorted(seen.values(), key=lambda o: o.name):
        role = await roles.org_role(org, actor)
        items.append(
            {
                "id": org.id,
                "name": org.name,
                "slug": org.slug,
                "status": org.status,
                "role": role,
            }
        )
    return items


async def get_org(store: ContentStore, org_id: uuid.UUID, actor: Actor) -> Organization:
    """Get an org the actor may see; invisible orgs are reported as missing."""
    org = await store.get_organization(org_id)
    if not await _policy(store).can_read(org, actor):
        raise NotFound("Organization not found", resource="Organization")
    return org


async def update_org(
    store: ContentStore,
    org_id: uuid.UUID,
    req: OrgUpdateRequest,
    actor: Actor,
) -> Organization:
    """Update org name/description (org admin or super admin)."""
    org = await get_org(store, org_id, actor)
    if not await _policy(store).can_manage(org, actor):
        raise PermissionDenied("Organization admin access required", resource="Organization")

    if req.name is not None:
        org.name = req.name
    if req.description is not None:
        org.description = req.description
    org.updated_at = datetime.now(timezone.utc)
    org = await store.save_organization(org)

    log.info("org.updated", org_id=str(org.id), slug=org.slug)
    return org


async def delete_org(store: ContentStore, org_id: uuid.UUID, actor: Actor) -> None:
    """Delete an org with its memberships and topics (org admin or super admin)."""
    org = await get_org(store, org_id, actor)
    if not await _policy(store).can_manage(org, actor):
        raise PermissionDenied("Organization admin access required", resource="Organization")

    async with store.transaction():
        await store.delete_organization(org)
    log.info("org.deleted", org_id=str(org_id), slug=org.slug, by=str(actor.user_id))


# ---------------------------------------------------------------------------
# Memberships
# ---------------------------------------------------------------------------

async def list_members(
    store: ContentStore, org_id: uuid.UUID, actor: Actor
) -> list[OrganizationMembership]:
    """Memberships visible to the actor: all for admins, otherwise their own."""
    org = await get_org(store, org_id, actor)
    policy = _policy(store)
    visible = []
    for membership in await store.list_memberships(org_id=org.id):
        if await policy.can_view_membership(org, membership, actor):
            visible.append(membership)
    return visible


async def add_member(
    store: ContentStore,
    org_id: uuid.UUID,
    req: MembershipAddRequest,
    actor: Actor,
) -> OrganizationMembership:
    org = await get_org(store, org_id, actor)
    if not await _policy(store).can_manage_members(org, actor):
        raise PermissionDenied("Organization admin access required", resource="Membership")
    if await store.get_profile(req.user_id) is None:
        raise NotFound("User not found", resource="UserProfile")

    async with store.transaction():
        membership = await store.get_membership(org.id, req.user_id)
        if membership is None:
            membership = OrganizationMembership(
                user_id=req.user_id, organization_id=org.id, role=req.role.value
            )
        else:
            membership.role = req.role.value
            membership.updated_at = datetime.now(timezone.utc)
        membership = await store.save_membership(membership)

    log.info(
        "org.member_added",
        org_id=str(org.id),
        user_id=str(req.user_id),
        role=req.role.value,
        by=str(actor.user_id),
    )
    return membership


async def update_member(
    store: ContentStore,
    org_id: uuid.UUID,
    user_id: uuid.UUID,
    req: MembershipUpdateRequest,
    actor: Actor,
) -> OrganizationMembership:
    org = await get_org(store, org_id, actor)
    if not await _policy(store).can_manage_members(org, actor):
        raise PermissionDenied("Organization admin access required", resource="Membership")
    membership = await store.get_membership(org.id, user_id)
    if membership is None:
        raise NotFound("Membership not found", resource="Membership")

    previous = membership.role
    membership.role = req.role.value
    membership.updated_at = datetime.now(timezone.utc)
    membership = await store.save_membership(membership)
    log.info(
        "org.member_role_changed",
        org_id=str(org.id),
        user_id=str(user_id),
        from_role=previous,
        to_role=req.role.value,
    )
    return membership


async def remove_member(
    store: ContentStore, org_id: uuid.UUID, user_id: uuid.UUID, actor: Actor
) -> None:
    """Remove a member (org admin, super admin, or the member themselves)."""
    org = await store.get_organization(org_id)
    if org is None:
        raise NotFound("Organization not found", resource="Organization")
    membership = await store.get_membership(org_id, user_id)
    policy = _policy(store)
    if membership is None or not await policy.can_view_membership(org, membership, actor):
        raise NotFound("Membership not found", resource="Membership")
    if not await policy.can_remove_membership(org, membership, actor):
        raise PermissionDenied("Organization admin access required", resource="Membership")

    await store.delete_membership(membership)
    log.info(
        "org.member_removed",
        org_id=str(org_id),
        user_id=str(user_id),
        self_removal=user_id == actor.user_id,
    )
