"""
User profile endpoints.

GET /api/v1/users/me          The caller's profile
GET /api/v1/users/{user_id}   A profile (self or super admin)
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from app.core.auth import require_actor
from app.policy import Actor
from app.policy.store import ContentStore
from app.services import users as user_service
from app.services.store import get_store
from timeline_shared.schemas.users import UserProfileResponse

router = APIRouter()


@router.get("/me", response_model=UserProfileResponse)
async def get_me(
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    profile = await user_service.get_profile(store, actor.user_id, actor)
    return UserProfileResponse.model_validate(profile)


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: uuid.UUID,
    actor: Actor = Depends(require_actor),
    store: ContentStore = Depends(get_store),
):
    profile = await user_service.get_profile(store, user_id, actor)
    return UserProfileResponse.model_validate(profile)
