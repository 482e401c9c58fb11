"""
Organization approval lifecycle.

    pending ──approve──▶ approved   (creator upserted as org_admin)
       └─────reject───▶ rejected

Only super admins approve or reject. Repeating a transition, or requesting
one from a terminal state, is logged and leaves the organization untouched.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import structlog

from app.models import Organization, OrganizationMembership, UserProfile
from timeline_shared.schemas.common import OrgRole
from timeline_shared.schemas.organizations import ORG_TRANSITIONS, OrgCreateRequest, OrgStatus

from .actor import Actor
from .errors import InvalidState, NotFound, PermissionDenied
from .roles import RoleResolver
from .store import ContentStore

log = structlog.get_logger()


@dataclass(frozen=True)
class PendingOrganization:
    org: Organization
    creator: Optional[UserProfile]


def transition(org: Organization, target: OrgStatus) -> None:
    """Move ``org`` to ``target`` or raise InvalidState."""
    try:
        current = OrgStatus(org.status)
    except ValueError:
        raise InvalidState(f"Unknown organization status '{org.status}'")
    if target not in ORG_TRANSITIONS.get(current, []):
        raise InvalidState(
            f"Cannot move organization from '{current.value}' to '{target.value}'"
        )
    org.status = target.value
    org.updated_at = datetime.now(timezone.utc)


class OrganizationLifecycle:
    def __init__(self, store: ContentStore, roles: Optional[RoleResolver] = None):
        self._store = store
        self.roles = roles or RoleResolver(store)

    def _require_super_admin(self, actor: Optional[Actor], action: str) -> None:
        if not self.roles.is_super_admin(actor):
            log.warning(
                "org.lifecycle_denied",
                action=action,
                user_id=str(actor.user_id) if actor and actor.user_id else None,
            )
            raise PermissionDenied(
                f"Only super admins can {action} organizations", resource="Organization"
            )

    async def create(self, req: OrgCreateRequest, creator: Optional[Actor]) -> Organization:
        """Create a pending organization. No membership is granted until approval."""
        if creator is None or not creator.is_authenticated:
            raise PermissionDenied("Authentication required", resource="Organization")

        async with self._store.transaction():
            if await self._store.get_organization_by_slug(req.slug) is not None:
                raise InvalidState("Org slug already taken", resource="Organization")
            org = Organization(
                name=req.name,
                slug=req.slug,
                description=req.description,
                status=OrgStatus.PENDING.value,
                created_by=creator.user_id,
            )
            org = await self._store.save_organization(org)

        log.info("org.created", org_id=str(org.id), slug=org.slug, creator=str(creator.user_id))
        return org

    async def approve(self, org_id: uuid.UUID, actor: Optional[Actor]) -> Organization:
        self._require_super_admin(actor, "approve")

        async with self._store.transaction():
            org = await self._get(org_id)
            try:
                transition(org, OrgStatus.APPROVED)
            except InvalidState as exc:
                log.info("org.transition_ignored", org_id=str(org_id), reason=exc.message)
                return org

            org = await self._store.save_organization(org)
            if org.created_by is not None:
                await self._grant_creator_admin(org)

        log.info("org.approved", org_id=str(org.id), creator=str(org.created_by))
        return org

    async def reject(self, org_id: uuid.UUID, actor: Optional[Actor]) -> Organization:
        self._require_super_admin(actor, "reject")

        async with self._store.transaction():
            org = await self._get(org_id)
            try:
                transition(org, OrgStatus.REJECTED)
            except InvalidState as exc:
                log.info("org.transition_ignored", org_id=str(org_id), reason=exc.message)
                return org
            org = await self._store.save_organization(org)

        log.info("org.rejected", org_id=str(org.id))
        return org

    async def list_pending(self, actor: Optional[Actor]) -> list[PendingOrganization]:
        """Pending organizations, newest first, with their creator's profile."""
        self._require_super_admin(actor, "list pending")

        orgs = await self._store.list_organizations(status=OrgStatus.PENDING.value)
        orgs = sorted(orgs, key=lambda o: o.created_at, reverse=True)
        results = []
        for org in orgs:
            creator = None
            if org.created_by is not None:
                creator = await self._store.get_profile(org.created_by)
            results.append(PendingOrganization(org=org, creator=creator))
        return results

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    async def _get(self, org_id: uuid.UUID) -> Organization:
        # Concurrent approvals queue on the row; the later one sees the new status
        org = await self._store.get_organization_for_update(org_id)
        if org is None:
            raise NotFound("Organization not found", resource="Organization")
        return org

    async def _grant_creator_admin(self, org: Organization) -> None:
        membership = await self._store.get_membership(org.id, org.created_by)
        if membership is None:
            membership = OrganizationMembership(
                user_id=org.created_by,
                organization_id=org.id,
                role=OrgRole.ORG_ADMIN.value,
            )
        else:
            membership.role = OrgRole.ORG_ADMIN.value
            membership.updated_at = datetime.now(timezone.utc)
        await self._store.save_membership(membership)
