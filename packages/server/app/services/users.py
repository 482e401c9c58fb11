"""
User profile service: first-authentication provisioning and global roles.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

import structlog

from app.models import UserProfile
from app.policy import Actor, NotFound, PermissionDenied, RoleResolver, can_view_profile
from app.policy.store import ContentStore
from timeline_shared.schemas.common import GlobalRole

log = structlog.get_logger()


async def ensure_profile(
    store: ContentStore,
    user_id: uuid.UUID,
    *,
    email: Optional[str] = None,
    full_name: Optional[str] = None,
    bootstrap_emails: Iterable[str] = (),
) -> UserProfile:
    """Return the user's profile, creating it on first authentication."""
    profile = await store.get_profile(user_id)
    if profile is not None:
        return profile

    bootstrap = {e.lower() for e in bootstrap_emails}
    role = GlobalRole.STANDARD_USER
    if email and email.lower() in bootstrap:
        role = GlobalRole.SUPER_ADMIN

    profile = UserProfile(id=user_id, email=email, full_name=full_name, role=role.value)
    profile = await store.save_profile(profile)
    log.info("user.profile_created", user_id=str(user_id), role=role.value)
    return profile


async def get_profile(
    store: ContentStore, user_id: uuid.UUID, actor: Actor
) -> UserProfile:
    """Own profile, or any profile for a super admin. Others look missing."""
    profile = await store.get_profile(user_id)
    if not can_view_profile(profile, actor):
        raise NotFound("User not found", resource="UserProfile")
    return profile


async def set_global_role(
    store: ContentStore,
    user_id: uuid.UUID,
    role: GlobalRole,
    actor: Actor,
) -> UserProfile:
    """Change a user's global role (super admin only)."""
    if not RoleResolver.is_super_admin(actor):
        raise PermissionDenied("Only super admins can change global roles", resource="UserProfile")
    if user_id == actor.user_id and role != GlobalRole.SUPER_ADMIN:
        raise PermissionDenied("Super admins cannot demote themselves", resource="UserProfile")

    profile = await store.get_profile(user_id)
    if profile is None:
        raise NotFound("User not found", resource="UserProfile")

    previous = profile.role
    profile.role = role.value
    profile.updated_at = datetime.now(timezone.utc)
    profile = await store.save_profile(profile)
    log.info(
        "user.global_role_changed",
        user_id=str(user_id),
        from_role=previous,
        to_role=role.value,
        by=str(actor.user_id),
    )
    return profile
