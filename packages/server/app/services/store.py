"""
SQLModel-backed implementation of the policy store interfaces.

Each lookup is a single primary-key or unique-key query. Writes flush but do
not commit; the request-scoped session commits when the request succeeds.
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from fastapi import Depends
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, select

from app.core.database import get_session
from app.models import Event, Organization, OrganizationMembership, Topic, UserProfile


class SqlStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield

    # -----------------------------------------------------------------------
    # Profiles
    # -----------------------------------------------------------------------

    async def get_profile(self, user_id: uuid.UUID) -> Optional[UserProfile]:
        return await self.session.get(UserProfile, user_id)

    async def get_profile_by_email(self, email: str) -> Optional[UserProfile]:
        result = await self.session.execute(
            select(UserProfile).where(UserProfile.email == email)
        )
        return result.scalar_one_or_none()

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        return await self._save(profile)

    # -----------------------------------------------------------------------
    # Organizations
    # -----------------------------------------------------------------------

    async def get_organization(self, org_id: uuid.UUID) -> Optional[Organization]:
        return await self.session.get(Organization, org_id)

    async def get_organization_for_update(
        self, org_id: uuid.UUID
    ) -> Optional[Organization]:
        result = await self.session.execute(
            select(Organization)
            .where(Organization.id == org_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_organization_by_slug(self, slug: str) -> Optional[Organization]:
        result = await self.session.execute(
            select(Organization).where(Organization.slug == slug)
        )
        return result.scalar_one_or_none()

    async def list_organizations(
        self, *, status: Optional[str] = None
    ) -> Sequence[Organization]:
        stmt = select(Organization).order_by(Organization.created_at.desc())
        if status is not None:
            stmt = stmt.where(Organization.status == status)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save_organization(self, org: Organization) -> Organization:
        return await self._save(org)

    async def delete_organization(self, org: Organization) -> None:
        # FK cascades remove memberships, topics and their events
        await self.session.delete(org)
        await self.session.flush()

    # -----------------------------------------------------------------------
    # Memberships
    # -----------------------------------------------------------------------

    async def get_membership(
        self, org_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[OrganizationMembership]:
        result = await self.session.execute(
            select(OrganizationMembership).where(
                OrganizationMembership.organization_id == org_id,
                OrganizationMembership.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_memberships(
        self,
        *,
        org_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> Sequence[OrganizationMembership]:
        stmt = select(OrganizationMembership).order_by(OrganizationMembership.created_at)
        if org_id is not None:
            stmt = stmt.where(OrganizationMembership.organization_id == org_id)
        if user_id is not None:
            stmt = stmt.where(OrganizationMembership.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save_membership(
        self, membership: OrganizationMembership
    ) -> OrganizationMembership:
        return await self._save(membership)

    async def delete_membership(self, membership: OrganizationMembership) -> None:
        await self.session.execute(
            delete(OrganizationMembership).where(OrganizationMembership.id == membership.id)
        )
        await self.session.flush()

    # -----------------------------------------------------------------------
    # Topics and events
    # -----------------------------------------------------------------------

    async def get_topic(self, topic_id: uuid.UUID) -> Optional[Topic]:
        return await self.session.get(Topic, topic_id)

    async def list_topics(
        self, *, organization_id: Optional[uuid.UUID] = None
    ) -> Sequence[Topic]:
        stmt = select(Topic).order_by(Topic.name)
        if organization_id is not None:
            stmt = stmt.where(Topic.organization_id == organization_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save_topic(self, topic: Topic) -> Topic:
        return await self._save(topic)

    async def delete_topic(self, topic: Topic) -> None:
        await self.session.execute(
            update(Event).where(Event.related_topic_id == topic.id).values(related_topic_id=None)
        )
        await self.session.execute(delete(Event).where(Event.topic_id == topic.id))
        await self.session.delete(topic)
        await self.session.flush()

    async def get_event(self, event_id: uuid.UUID) -> Optional[Event]:
        return await self.session.get(Event, event_id)

    async def list_events(self, topic_ids: Sequence[uuid.UUID]) -> Sequence[Event]:
        if not topic_ids:
            return []
        result = await self.session.execute(
            select(Event)
            .where(Event.topic_id.in_(list(topic_ids)))
            .order_by(Event.year, Event.created_at)
        )
        return list(result.scalars().all())

    async def save_event(self, event: Event) -> Event:
        return await self._save(event)

    async def delete_event(self, event: Event) -> None:
        await self.session.delete(event)
        await self.session.flush()

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    async def _save(self, obj):
        merged = await self.session.merge(obj)
        await self.session.flush()
        return merged


async def get_store(session: AsyncSession = Depends(get_session)) -> SqlStore:
    """FastAPI dependency; tests override it with an InMemoryStore."""
    return SqlStore(session)
