"""
Event access, derived from the parent topic.

    read                    parent topic read
    create/update/delete    authenticated and parent topic update

``related_topic_id`` is never consulted here; following the link means a
fresh topic check against the linked topic.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog

from app.models import Event, Topic
from timeline_shared.schemas.common import Operation

from .actor import Actor
from .errors import NotFound, PermissionDenied
from .store import PolicyStore
from .topics import TopicAccess

log = structlog.get_logger()

_MSG_NOT_FOUND = "Event not found."


class EventAccess:
    def __init__(self, store: PolicyStore, topics: Optional[TopicAccess] = None):
        self._store = store
        self.topics = topics or TopicAccess(store)

    async def permits_on_topic(
        self, operation: Operation, topic: Optional[Topic], actor: Optional[Actor]
    ) -> bool:
        """Decision for an event whose parent is ``topic``."""
        if topic is None:
            return False
        if operation == Operation.READ:
            return await self.topics.can_read(topic, actor)
        if actor is None or not actor.is_authenticated:
            return False
        return await self.topics.can_update(topic, actor)

    async def permits(
        self, operation: Operation, event: Optional[Event], actor: Optional[Actor]
    ) -> bool:
        if event is None:
            return False
        topic = await self._store.get_topic(event.topic_id)
        return await self.permits_on_topic(operation, topic, actor)

    async def can_read(self, event: Optional[Event], actor: Optional[Actor]) -> bool:
        return await self.permits(Operation.READ, event, actor)

    async def can_update(self, event: Optional[Event], actor: Optional[Actor]) -> bool:
        return await self.permits(Operation.UPDATE, event, actor)

    async def can_delete(self, event: Optional[Event], actor: Optional[Actor]) -> bool:
        return await self.permits(Operation.DELETE, event, actor)

    async def can_create(
        self, topic_id: uuid.UUID, actor: Optional[Actor]
    ) -> bool:
        topic = await self._store.get_topic(topic_id)
        return await self.permits_on_topic(Operation.CREATE, topic, actor)

    async def resolve(
        self,
        event_id: uuid.UUID,
        actor: Optional[Actor],
        operation: Operation = Operation.READ,
    ) -> Event:
        """Load an event and enforce ``operation``.

        Unreadable events are indistinguishable from missing ones.
        """
        event = await self._store.get_event(event_id)
        if event is None:
            raise NotFound(_MSG_NOT_FOUND, resource="Event")
        topic = await self._store.get_topic(event.topic_id)
        if not await self.permits_on_topic(Operation.READ, topic, actor):
            log.info("event.access_hidden", event_id=str(event_id), operation=operation.value)
            raise NotFound(_MSG_NOT_FOUND, resource="Event")
        if operation != Operation.READ and not await self.permits_on_topic(
            operation, topic, actor
        ):
            log.info("event.access_denied", event_id=str(event_id), operation=operation.value)
            raise PermissionDenied("Access denied.", resource="Event")
        return event

    async def check_create(self, topic_id: uuid.UUID, actor: Optional[Actor]) -> Topic:
        """Enforce event creation under ``topic_id`` and return the parent topic."""
        topic = await self.topics.resolve(topic_id, actor, Operation.READ)
        if not await self.permits_on_topic(Operation.CREATE, topic, actor):
            log.info("event.create_denied", topic_id=str(topic_id))
            raise PermissionDenied("Access denied.", resource="Event")
        return topic
