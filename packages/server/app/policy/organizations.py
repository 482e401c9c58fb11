"""
Organization, membership and profile visibility rules.

Membership visibility resolves the viewer's role through RoleResolver, which
reads memberships directly. It never asks whether the viewer may see the
memberships it is reading.
"""

from __future__ import annotations

from typing import Optional

from app.models import Organization, OrganizationMembership, UserProfile
from timeline_shared.schemas.organizations import OrgStatus

from .actor import Actor
from .roles import RoleResolver


class OrganizationPolicy:
    def __init__(self, roles: RoleResolver):
        self.roles = roles

    async def can_read(self, org: Optional[Organization], actor: Optional[Actor]) -> bool:
        if org is None:
            return False
        if self.roles.is_super_admin(actor):
            return True
        if _is_creator(org, actor):
            return True
        return org.status == OrgStatus.APPROVED.value and await self.roles.has_org_access(
            org, actor
        )

    async def can_manage(self, org: Optional[Organization], actor: Optional[Actor]) -> bool:
        """Update or delete the organization record."""
        if org is None:
            return False
        return await self.roles.is_org_admin(org, actor)

    async def can_view_membership(
        self,
        org: Optional[Organization],
        membership: OrganizationMembership,
        actor: Optional[Actor],
    ) -> bool:
        if actor is not None and actor.user_id is not None and membership.user_id == actor.user_id:
            return True
        return await self.roles.is_org_admin(org, actor)

    async def can_manage_members(
        self, org: Optional[Organization], actor: Optional[Actor]
    ) -> bool:
        """Add members or change their roles."""
        return await self.roles.is_org_admin(org, actor)

    async def can_remove_membership(
        self,
        org: Optional[Organization],
        membership: OrganizationMembership,
        actor: Optional[Actor],
    ) -> bool:
        # Self-removal is always allowed
        if actor is not None and actor.user_id is not None and membership.user_id == actor.user_id:
            return True
        return await self.roles.is_org_admin(org, actor)


def can_view_profile(profile: Optional[UserProfile], actor: Optional[Actor]) -> bool:
    if profile is None or actor is None or actor.user_id is None:
        return False
    return profile.id == actor.user_id or RoleResolver.is_super_admin(actor)


def _is_creator(org: Organization, actor: Optional[Actor]) -> bool:
    return (
        actor is not None
        and actor.user_id is not None
        and org.created_by is not None
        and org.created_by == actor.user_id
    )
