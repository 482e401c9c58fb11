"""Topic and timeline event schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

from .common import TimelineDisplayMode


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    date: str = Field(min_length=1, max_length=100)
    year: int
    description: str = ""
    short_description: Optional[str] = None
    image_url: str = ""
    details_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    related_topic_id: Optional[uuid.UUID] = None

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, v: List[str]) -> List[str]:
        # "a, b ,,c" style input from forms arrives pre-split
        return [t.strip() for t in v if t and t.strip()]


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    image_url: Optional[str] = None
    details_url: Optional[str] = None
    tags: Optional[List[str]] = None
    related_topic_id: Optional[uuid.UUID] = None


class EventRead(BaseModel):
    id: uuid.UUID
    topic_id: uuid.UUID
    title: str
    date: str
    year: int
    description: str
    short_description: Optional[str] = None
    image_url: str
    details_url: Optional[str] = None
    tags: List[str] = []
    related_topic_id: Optional[uuid.UUID] = None

    model_config = {"from_attributes": True}


class TopicCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    is_public: bool = False
    organization_id: Optional[uuid.UUID] = None
    default_display_mode: TimelineDisplayMode = TimelineDisplayMode.YEARS


class TopicUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    is_public: Optional[bool] = None
    default_display_mode: Optional[TimelineDisplayMode] = None


class TopicRead(BaseModel):
    id: uuid.UUID
    name: str
    is_public: bool
    organization_id: Optional[uuid.UUID] = None
    created_by: Optional[uuid.UUID] = None
    default_display_mode: TimelineDisplayMode
    events: List[EventRead] = []
    created_at: datetime
    updated_at: datetime
