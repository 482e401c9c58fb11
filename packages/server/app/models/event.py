"""Timeline event model (child of a Topic, no owner of its own)."""

from typing import Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class Event(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "events"

    topic_id: uuid.UUID = Field(
        foreign_key="topics.id", nullable=False, index=True, ondelete="CASCADE"
    )
    title: str = Field(nullable=False)
    date: str = Field(nullable=False)
    year: int = Field(nullable=False, index=True)
    description: str = Field(default="", nullable=False)
    short_description: Optional[str] = None
    image_url: str = Field(default="", nullable=False)
    details_url: Optional[str] = None
    tags: list = Field(default_factory=list, sa_type=sa.JSON, nullable=False)
    # Navigation-only link; carries no access implication
    related_topic_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="topics.id", ondelete="SET NULL"
    )
