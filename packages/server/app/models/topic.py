"""Topic model.

Ownership is carried by two nullable columns: ``organization_id`` for
org-owned topics and ``created_by`` for personal ones. Legacy rows may
have neither.
"""

from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class Topic(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "topics"

    name: str = Field(nullable=False)
    is_public: bool = Field(default=False, nullable=False, index=True)
    organization_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="organizations.id", index=True, ondelete="CASCADE"
    )
    created_by: Optional[uuid.UUID] = Field(
        default=None, foreign_key="user_profiles.id", index=True, ondelete="SET NULL"
    )
    default_display_mode: str = Field(default="years", nullable=False)  # years | days
