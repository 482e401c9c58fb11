"""
In-memory store implementing PolicyStore and ContentStore.

Records are copied on the way in and on the way out, so callers mutating a
fetched object see no effect until they save it, as with a database row.
``transaction()`` snapshots the tables and restores them if the block raises.
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence, TypeVar

from app.models import Event, Organization, OrganizationMembership, Topic, UserProfile

T = TypeVar("T")


def _clone(obj: T) -> T:
    return type(obj)(**obj.model_dump())


class InMemoryStore:
    def __init__(self) -> None:
        self.profiles: dict[uuid.UUID, UserProfile] = {}
        self.organizations: dict[uuid.UUID, Organization] = {}
        self.memberships: dict[tuple[uuid.UUID, uuid.UUID], OrganizationMembership] = {}
        self.topics: dict[uuid.UUID, Topic] = {}
        self.events: dict[uuid.UUID, Event] = {}

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        snapshot = (
            dict(self.profiles),
            dict(self.organizations),
            dict(self.memberships),
            dict(self.topics),
            dict(self.events),
        )
        try:
            yield
        except Exception:
            (
                self.profiles,
                self.organizations,
                self.memberships,
                self.topics,
                self.events,
            ) = snapshot
            raise

    # -----------------------------------------------------------------------
    # Profiles
    # -----------------------------------------------------------------------

    async def get_profile(self, user_id: uuid.UUID) -> Optional[UserProfile]:
        profile = self.profiles.get(user_id)
        return _clone(profile) if profile else None

    async def get_profile_by_email(self, email: str) -> Optional[UserProfile]:
        for profile in self.profiles.values():
            if profile.email == email:
                return _clone(profile)
        return None

    async def save_profile(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.id] = _clone(profile)
        return _clone(profile)

    # -----------------------------------------------------------------------
    # Organizations
    # -----------------------------------------------------------------------

    async def get_organization(self, org_id: uuid.UUID) -> Optional[Organization]:
        org = self.organizations.get(org_id)
        return _clone(org) if org else None

    async def get_organization_for_update(
        self, org_id: uuid.UUID
    ) -> Optional[Organization]:
        # Single-threaded; nothing to lock
        return await self.get_organization(org_id)

    async def get_organization_by_slug(self, slug: str) -> Optional[Organization]:
        for org in self.organizations.values():
            if org.slug == slug:
                return _clone(org)
        return None

    async def list_organizations(
        self, *, status: Optional[str] = None
    ) -> Sequence[Organization]:
        return [
            _clone(o)
            for o in self.organizations.values()
            if status is None or o.status == status
        ]

    async def save_organization(self, org: Organization) -> Organization:
        self.organizations[org.id] = _clone(org)
        return _clone(org)

    async def delete_organization(self, org: Organization) -> None:
        self.organizations.pop(org.id, None)
        self.memberships = {
            k: m for k, m in self.memberships.items() if m.organization_id != org.id
        }
        for topic in [t for t in self.topics.values() if t.organization_id == org.id]:
            await self.delete_topic(topic)

    # -----------------------------------------------------------------------
    # Memberships
    # -----------------------------------------------------------------------

    async def get_membership(
        self, org_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[OrganizationMembership]:
        membership = self.memberships.get((org_id, user_id))
        return _clone(membership) if membership else None

    async def list_memberships(
        self,
        *,
        org_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> Sequence[OrganizationMembership]:
        return [
            _clone(m)
            for m in self.memberships.values()
            if (org_id is None or m.organization_id == org_id)
            and (user_id is None or m.user_id == user_id)
        ]

    async def save_membership(
        self, membership: OrganizationMembership
    ) -> OrganizationMembership:
        key = (membership.organization_id, membership.user_id)
        existing = self.memberships.get(key)
        if existing is not None and existing.id != membership.id:
            raise ValueError("Membership already exists for this user and organization")
        self.memberships[key] = _clone(membership)
        return _clone(membership)

    async def delete_membership(self, membership: OrganizationMembership) -> None:
        self.memberships.pop((membership.organization_id, membership.user_id), None)

    # -----------------------------------------------------------------------
    # Topics and events
    # -----------------------------------------------------------------------

    async def get_topic(self, topic_id: uuid.UUID) -> Optional[Topic]:
        topic = self.topics.get(topic_id)
        return _clone(topic) if topic else None

    async def list_topics(
        self, *, organization_id: Optional[uuid.UUID] = None
    ) -> Sequence[Topic]:
        topics = [
            _clone(t)
            for t in self.topics.values()
            if organization_id is None or t.organization_id == organization_id
        ]
        return sorted(topics, key=lambda t: t.name)

    async def save_topic(self, topic: Topic) -> Topic:
        self.topics[topic.id] = _clone(topic)
        return _clone(topic)

    async def delete_topic(self, topic: Topic) -> None:
        self.topics.pop(topic.id, None)
        self.events = {k: e for k, e in self.events.items() if e.topic_id != topic.id}
        for key, event in list(self.events.items()):
            if event.related_topic_id == topic.id:
                event = _clone(event)
                event.related_topic_id = None
                self.events[key] = event

    async def get_event(self, event_id: uuid.UUID) -> Optional[Event]:
        event = self.events.get(event_id)
        return _clone(event) if event else None

    async def list_events(self, topic_ids: Sequence[uuid.UUID]) -> Sequence[Event]:
        wanted = set(topic_ids)
        # dict order is insertion order, so equal years keep creation order
        events = [_clone(e) for e in self.events.values() if e.topic_id in wanted]
        return sorted(events, key=lambda e: e.year)

    async def save_event(self, event: Event) -> Event:
        self.events[event.id] = _clone(event)
        return _clone(event)

    async def delete_event(self, event: Event) -> None:
        self.events.pop(event.id, None)
