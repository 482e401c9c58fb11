"""
Role resolution: global role first, then organization membership.

This layer reads organizations and memberships straight from the store and
never consults any other policy, so its answers cannot depend on the order
in which checks run.
"""

from __future__ import annotations

from typing import Optional

from app.models import Organization
from timeline_shared.schemas.common import EDITOR_ROLES, EffectiveRole, GlobalRole
from timeline_shared.schemas.organizations import OrgStatus

from .actor import Actor
from .store import PolicyStore


class RoleResolver:
    """Resolves an actor's global role and per-organization role."""

    def __init__(self, store: PolicyStore):
        self._store = store

    @staticmethod
    def is_super_admin(actor: Optional[Actor]) -> bool:
        if actor is None or actor.user_id is None:
            return False
        return actor.global_role == GlobalRole.SUPER_ADMIN

    async def org_role(
        self, org: Optional[Organization], actor: Optional[Actor]
    ) -> EffectiveRole:
        if self.is_super_admin(actor):
            return EffectiveRole.SUPER_ADMIN
        if org is None or actor is None or actor.user_id is None:
            return EffectiveRole.NONE
        # Memberships of pending/rejected orgs stay latent
        if org.status != OrgStatus.APPROVED.value:
            return EffectiveRole.NONE

        membership = await self._store.get_membership(org.id, actor.user_id)
        if membership is None:
            return EffectiveRole.NONE
        try:
            return EffectiveRole(membership.role)
        except ValueError:
            return EffectiveRole.NONE

    async def has_org_access(
        self, org: Optional[Organization], actor: Optional[Actor]
    ) -> bool:
        return await self.org_role(org, actor) != EffectiveRole.NONE

    async def can_edit_org(
        self, org: Optional[Organization], actor: Optional[Actor]
    ) -> bool:
        return await self.org_role(org, actor) in EDITOR_ROLES

    async def is_org_admin(
        self, org: Optional[Organization], actor: Optional[Actor]
    ) -> bool:
        return await self.org_role(org, actor) in (
            EffectiveRole.SUPER_ADMIN,
            EffectiveRole.ORG_ADMIN,
        )

    async def org_role_by_id(self, org_id, actor: Optional[Actor]) -> EffectiveRole:
        """``org_role`` for callers holding only an id; missing orgs map to NONE."""
        if self.is_super_admin(actor):
            return EffectiveRole.SUPER_ADMIN
        if org_id is None:
            return EffectiveRole.NONE
        org = await self._store.get_organization(org_id)
        return await self.org_role(org, actor)
