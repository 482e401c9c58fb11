"""The identity on whose behalf a permission decision is made."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from timeline_shared.schemas.common import GlobalRole


@dataclass(frozen=True, slots=True)
class Actor:
    user_id: UUID | None
    global_role: GlobalRole = GlobalRole.STANDARD_USER

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def from_profile(cls, profile) -> "Actor":
        try:
            role = GlobalRole(profile.role)
        except ValueError:
            # Unknown roles grant nothing beyond a standard user
            role = GlobalRole.STANDARD_USER
        return cls(user_id=profile.id, global_role=role)


ANONYMOUS = Actor(user_id=None)
