"""
Topic and event service.

Every read and write goes through TopicAccess/EventAccess; listings filter
per topic so callers only ever see what they may read.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Optional

import structlog

from app.models import Event, Topic
from app.policy import Actor, EventAccess, TopicAccess
from app.policy.store import ContentStore
from timeline_shared.schemas.common import Operation
from timeline_shared.schemas.topics import EventCreate, EventUpdate, TopicCreate, TopicUpdate

log = structlog.get_logger()


def topic_to_dict(topic: Topic, events: list[Event]) -> dict:
    return {
        "id": topic.id,
        "name": topic.name,
        "is_public": topic.is_public,
        "organization_id": topic.organization_id,
        "created_by": topic.created_by,
        "default_display_mode": topic.default_display_mode,
        "events": events,
        "created_at": topic.created_at,
        "updated_at": topic.updated_at,
    }


async def list_visible_topics(
    store: ContentStore,
    actor: Actor,
    *,
    organization_id: Optional[uuid.UUID] = None,
) -> list[dict]:
    """Readable topics ordered by name, each with its events ordered by year."""
    access = TopicAccess(store)
    topics = [
        t
        for t in await store.list_topics(organization_id=organization_id)
        if await access.can_read(t, actor)
    ]
    if not topics:
        return []

    by_topic: dict[uuid.UUID, list[Event]] = defaultdict(list)
    for event in await store.list_events([t.id for t in topics]):
        by_topic[event.topic_id].append(event)
    return [topic_to_dict(t, by_topic.get(t.id, [])) for t in topics]


async def get_topic(store: ContentStore, topic_id: uuid.UUID, actor: Actor) -> dict:
    topic = await TopicAccess(store).resolve(topic_id, actor, Operation.READ)
    events = await store.list_events([topic.id])
    return topic_to_dict(topic, list(events))


async def create_topic(store: ContentStore, req: TopicCreate, actor: Actor) -> dict:
    await TopicAccess(store).check_create(actor, organization_id=req.organization_id)

    topic = Topic(
        name=req.name,
        is_public=req.is_public,
        organization_id=req.organization_id,
        # Org-owned topics carry no personal owner
        created_by=actor.user_id if req.organization_id is None else None,
        default_display_mode=req.default_display_mode.value,
    )
    topic = await store.save_topic(topic)
    log.info(
        "topic.created",
        topic_id=str(topic.id),
        organization_id=str(topic.organization_id) if topic.organization_id else None,
        is_public=topic.is_public,
    )
    return topic_to_dict(topic, [])


async def update_topic(
    store: ContentStore, topic_id: uuid.UUID, req: TopicUpdate, actor: Actor
) -> dict:
    topic = await TopicAccess(store).resolve(topic_id, actor, Operation.UPDATE)
    update_data = req.model_dump(exclude_unset=True, mode="json")
    for key, value in update_data.items():
        setattr(topic, key, value)
    topic.updated_at = datetime.now(timezone.utc)
    topic = await store.save_topic(topic)

    log.info("topic.updated", topic_id=str(topic.id), fields=sorted(update_data))
    events = await store.list_events([topic.id])
    return topic_to_dict(topic, list(events))


async def delete_topic(store: ContentStore, topic_id: uuid.UUID, actor: Actor) -> None:
    topic = await TopicAccess(store).resolve(topic_id, actor, Operation.DELETE)
    async with store.transaction():
        await store.delete_topic(topic)
    log.info("topic.deleted", topic_id=str(topic_id))


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

async def list_topic_events(
    store: ContentStore, topic_id: uuid.UUID, actor: Actor
) -> list[Event]:
    topic = await TopicAccess(store).resolve(topic_id, actor, Operation.READ)
    return list(await store.list_events([topic.id]))


async def get_event(store: ContentStore, event_id: uuid.UUID, actor: Actor) -> Event:
    return await EventAccess(store).resolve(event_id, actor, Operation.READ)


async def _check_related_topic(
    store: ContentStore, related_topic_id: Optional[uuid.UUID], actor: Actor
) -> None:
    """A linked topic must exist and be readable; both failures read as NotFound."""
    if related_topic_id is not None:
        await TopicAccess(store).resolve(related_topic_id, actor, Operation.READ)


async def create_event(
    store: ContentStore, topic_id: uuid.UUID, req: EventCreate, actor: Actor
) -> Event:
    topic = await EventAccess(store).check_create(topic_id, actor)
    await _check_related_topic(store, req.related_topic_id, actor)
    event = Event(topic_id=topic.id, **req.model_dump())
    event = await store.save_event(event)
    log.info("event.created", event_id=str(event.id), topic_id=str(topic.id), year=event.year)
    return event


async def update_event(
    store: ContentStore, event_id: uuid.UUID, req: EventUpdate, actor: Actor
) -> Event:
    event = await EventAccess(store).resolve(event_id, actor, Operation.UPDATE)
    update_data = req.model_dump(exclude_unset=True)
    if "related_topic_id" in update_data:
        await _check_related_topic(store, update_data["related_topic_id"], actor)
    for key, value in update_data.items():
        setattr(event, key, value)
    event.updated_at = datetime.now(timezone.utc)
    event = await store.save_event(event)
    log.info("event.updated", event_id=str(event.id), fields=sorted(update_data))
    return event


async def delete_event(store: ContentStore, event_id: uuid.UUID, actor: Actor) -> None:
    event = await EventAccess(store).resolve(event_id, actor, Operation.DELETE)
    await store.delete_event(event)
    log.info("event.deleted", event_id=str(event_id), topic_id=str(event.topic_id))
