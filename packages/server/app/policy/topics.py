"""
Topic access decisions.

    read    super admin | public | org access (org topic) | creator (no-org topic)
    create  super admin | can edit target org | authenticated (no org)
    update  super admin | can edit org (org topic) | creator of private no-org topic
    delete  same as update

Public topics without an organization are read-open but write-locked: only a
super admin may change them, including their nominal creator's attempts.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog

from app.models import Topic
from timeline_shared.schemas.common import EDITOR_ROLES, EffectiveRole, Operation

from .actor import Actor
from .errors import NotFound, PermissionDenied
from .ownership import Legacy, OrganizationOwned, Ownership, Personal, Public, ownership_of
from .roles import RoleResolver
from .store import PolicyStore

log = structlog.get_logger()


def decide(
    operation: Operation,
    ownership: Ownership,
    *,
    actor: Optional[Actor],
    is_public: bool,
    is_super_admin: bool,
    has_org_access: bool = False,
    can_edit_org: bool = False,
) -> bool:
    """The decision table for an existing topic, given pre-resolved roles."""
    if is_super_admin:
        return True
    user_id = actor.user_id if actor is not None else None

    if operation == Operation.READ:
        if is_public:
            return True
        if isinstance(ownership, OrganizationOwned):
            return has_org_access
        if isinstance(ownership, Personal):
            return user_id is not None and ownership.user_id == user_id
        return False

    if operation in (Operation.UPDATE, Operation.DELETE):
        if isinstance(ownership, OrganizationOwned):
            return can_edit_org
        if isinstance(ownership, Personal):
            return user_id is not None and ownership.user_id == user_id
        if isinstance(ownership, (Public, Legacy)):
            return False

    # CREATE is decided against a draft, see TopicAccess.can_create
    return False


class TopicAccess:
    """Permit checks for topics, backed by a RoleResolver."""

    def __init__(self, store: PolicyStore, roles: Optional[RoleResolver] = None):
        self._store = store
        self.roles = roles or RoleResolver(store)

    async def permits(
        self, operation: Operation, topic: Optional[Topic], actor: Optional[Actor]
    ) -> bool:
        if topic is None:
            return False
        if operation == Operation.CREATE:
            return await self.can_create(actor, organization_id=topic.organization_id)

        ownership = ownership_of(topic)
        is_super_admin = self.roles.is_super_admin(actor)

        role = EffectiveRole.NONE
        if isinstance(ownership, OrganizationOwned) and not is_super_admin:
            role = await self.roles.org_role_by_id(ownership.org_id, actor)

        return decide(
            operation,
            ownership,
            actor=actor,
            is_public=bool(topic.is_public),
            is_super_admin=is_super_admin,
            has_org_access=role != EffectiveRole.NONE,
            can_edit_org=role in EDITOR_ROLES,
        )

    async def can_read(self, topic: Optional[Topic], actor: Optional[Actor]) -> bool:
        return await self.permits(Operation.READ, topic, actor)

    async def can_update(self, topic: Optional[Topic], actor: Optional[Actor]) -> bool:
        return await self.permits(Operation.UPDATE, topic, actor)

    async def can_delete(self, topic: Optional[Topic], actor: Optional[Actor]) -> bool:
        return await self.permits(Operation.DELETE, topic, actor)

    async def can_create(
        self,
        actor: Optional[Actor],
        *,
        organization_id: Optional[uuid.UUID] = None,
    ) -> bool:
        """Creation against a draft: the new topic's owning org, if any."""
        if self.roles.is_super_admin(actor):
            return True
        if organization_id is not None:
            org = await self._store.get_organization(organization_id)
            return await self.roles.can_edit_org(org, actor)
        # Personal topic; created_by becomes the actor
        return actor is not None and actor.is_authenticated

    async def resolve(
        self,
        topic_id: uuid.UUID,
        actor: Optional[Actor],
        operation: Operation = Operation.READ,
    ) -> Topic:
        """Load a topic and enforce ``operation``.

        A topic the actor cannot read is reported as NotFound so its existence
        does not leak. PermissionDenied is raised only when the actor can see
        the topic but not perform the operation on it.
        """
        topic = await self._store.get_topic(topic_id)
        if topic is None:
            raise NotFound("Topic not found.", resource="Topic")
        if not await self.can_read(topic, actor):
            log.info("topic.access_hidden", topic_id=str(topic_id), operation=operation.value)
            raise NotFound("Topic not found.", resource="Topic")
        if operation != Operation.READ and not await self.permits(operation, topic, actor):
            log.info(
                "topic.access_denied",
                topic_id=str(topic_id),
                operation=operation.value,
                user_id=str(actor.user_id) if actor and actor.user_id else None,
            )
            raise PermissionDenied("Access denied.", resource="Topic")
        return topic

    async def check_create(
        self, actor: Optional[Actor], *, organization_id: Optional[uuid.UUID] = None
    ) -> None:
        if not await self.can_create(actor, organization_id=organization_id):
            log.info(
                "topic.create_denied",
                organization_id=str(organization_id) if organization_id else None,
            )
            raise PermissionDenied("Access denied.", resource="Topic")
