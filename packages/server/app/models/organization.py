"""Organization model."""

from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class Organization(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "organizations"

    name: str = Field(nullable=False, index=True)
    slug: str = Field(unique=True, nullable=False, index=True)
    description: Optional[str] = None
    status: str = Field(default="pending", nullable=False, index=True)
    # Nulled when the creator's profile is deleted
    created_by: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="user_profiles.id",
        ondelete="SET NULL",
    )
