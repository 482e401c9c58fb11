"""User-Organization membership (unique per user/org pair)."""

import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class OrganizationMembership(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "organization_memberships"
    __table_args__ = (
        sa.UniqueConstraint("user_id", "organization_id", name="uq_membership_user_org"),
    )

    user_id: uuid.UUID = Field(
        foreign_key="user_profiles.id", nullable=False, index=True, ondelete="CASCADE"
    )
    organization_id: uuid.UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True, ondelete="CASCADE"
    )
    role: str = Field(default="org_viewer", nullable=False)  # org_admin | org_editor | org_viewer
