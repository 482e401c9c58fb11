"""
Topic endpoints.

GET    /api/v1/topics                    Topics the actor can read (with events)
POST   /api/v1/topics                    Create a personal or org-owned topic
GET    /api/v1/topics/{topic_id}         Topic with events ordered by year
PATCH  /api/v1/topics/{topic_id}         Update (policy-checked)
DELETE /api/v1/topics/{topic_id}         Delete with its events
GET    /api/v1/topics/{topic_id}/events  Events of a readable topic
POST   /api/v1/topics/{topic_id}/events  Add an event
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.core.auth import get_actor, require_actor
from app.policy import Actor
from app.policy.store import ContentStore
from app.services import topics as topic_service
from app.services.store import get_store
from timeline_shared.schemas.topics import (
    EventCreate,
    EventRead,
    TopicCreate,
    TopicRead,
    TopicUpdate,
)

router = APIRouter()


@router.get("", response_model=List[TopicRead])
async def list_topics(
    organization_id: Optional[uuid.UUID] = None,
    actor: Actor = Depends(get_actor),
    store: ContentStore = Depends(get_store),
):
    """List readable topics, optionally restricted to one organization."""
    return await topic_service.list_visible_topics(
        store, actor, organization_id=organization_id
    )


@router.post("", response_model=TopicRead, status_code=201)
async def create_topic(
    body: TopicCreate,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    return await topic_service.create_topic(store, body, actor)


@router.get("/{topic_id}", response_model=TopicRead)
async def get_topic(
    topic_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    store: ContentStore = Depends(get_store),
):
    return await topic_service.get_topic(store, topic_id, actor)


@router.patch("/{topic_id}", response_model=TopicRead)
async def update_topic(
    topic_id: uuid.UUID,
    body: TopicUpdate,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    return await topic_service.update_topic(store, topic_id, body, actor)


@router.delete("/{topic_id}")
async def delete_topic(
    topic_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    await topic_service.delete_topic(store, topic_id, actor)
    return {"ok": True}


@router.get("/{topic_id}/events", response_model=List[EventRead])
async def list_topic_events(
    topic_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    store: ContentStore = Depends(get_store),
):
    return await topic_service.list_topic_events(store, topic_id, actor)


@router.post("/{topic_id}/events", response_model=EventRead, status_code=201)
async def create_event(
    topic_id: uuid.UUID,
    body: EventCreate,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    return await topic_service.create_event(store, topic_id, body, actor)
