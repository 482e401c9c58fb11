"""
Event endpoints. Access is always derived from the parent topic.

GET    /api/v1/events/{event_id}
PATCH  /api/v1/events/{event_id}
DELETE /api/v1/events/{event_id}
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from app.core.auth import get_actor, require_actor
from app.policy import Actor
from app.policy.store import ContentStore
from app.services import topics as topic_service
from app.services.store import get_store
from timeline_shared.schemas.topics import EventRead, EventUpdate

router = APIRouter()


@router.get("/{event_id}", response_model=EventRead)
async def get_event(
    event_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    store: ContentStore = Depends(get_store),
):
    return await topic_service.get_event(store, event_id, actor)


@router.patch("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: uuid.UUID,
    body: EventUpdate,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    return await topic_service.update_event(store, event_id, body, actor)


@router.delete("/{event_id}")
async def delete_event(
    event_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    await topic_service.delete_event(store, event_id, actor)
    return {"ok": True}
