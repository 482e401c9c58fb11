"""User profile model (one row per authenticated identity)."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class UserProfile(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "user_profiles"

    email: Optional[str] = Field(default=None, unique=True, index=True)
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str = Field(default="standard_user", nullable=False)  # super_admin | standard_user
