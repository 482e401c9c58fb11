"""
Shared fixtures: an in-memory store seeded through small builders, actors
for each role, and an HTTP client whose store dependency is the same
in-memory store.
"""

from __future__ import annotations

import os
import uuid
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

# The app refuses the built-in signing key outside debug mode
os.environ.setdefault("TL_SECRET_KEY", "test-signing-key-not-for-production-0001")

from app.core.auth import create_jwt  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Event, Organization, OrganizationMembership, Topic, UserProfile
from app.policy import Actor
from app.policy.memory import InMemoryStore
from app.services.store import get_store
from timeline_shared.schemas.common import GlobalRole, OrgRole
from timeline_shared.schemas.organizations import OrgStatus


class Seed:
    """Builders that write straight into an InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def user(
        self, name: str = "user", role: GlobalRole = GlobalRole.STANDARD_USER
    ) -> Actor:
        profile = UserProfile(
            email=f"{name}-{uuid.uuid4().hex[:6]}@example.com",
            full_name=name.title(),
            role=role.value,
        )
        profile = await self.store.save_profile(profile)
        return Actor.from_profile(profile)

    async def org(
        self,
        name: str = "Acme",
        status: OrgStatus = OrgStatus.APPROVED,
        created_by: Optional[uuid.UUID] = None,
    ) -> Organization:
        org = Organization(
            name=name,
            slug=f"{name.lower()}-{uuid.uuid4().hex[:6]}",
            status=status.value,
            created_by=created_by,
        )
        return await self.store.save_organization(org)

    async def member(self, org: Organization, actor: Actor, role: OrgRole) -> OrganizationMembership:
        membership = OrganizationMembership(
            user_id=actor.user_id, organization_id=org.id, role=role.value
        )
        return await self.store.save_membership(membership)

    async def topic(
        self,
        name: str = "History",
        *,
        is_public: bool = False,
        organization_id: Optional[uuid.UUID] = None,
        created_by: Optional[uuid.UUID] = None,
    ) -> Topic:
        topic = Topic(
            name=name,
            is_public=is_public,
            organization_id=organization_id,
            created_by=created_by,
        )
        return await self.store.save_topic(topic)

    async def event(self, topic: Topic, title: str = "Founding", year: int = 1900) -> Event:
        event = Event(topic_id=topic.id, title=title, date=str(year), year=year)
        return await self.store.save_event(event)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seed(store) -> Seed:
    return Seed(store)


@pytest.fixture
async def alice(seed) -> Actor:
    return await seed.user("alice")


@pytest.fixture
async def bob(seed) -> Actor:
    return await seed.user("bob")


@pytest.fixture
async def root(seed) -> Actor:
    return await seed.user("root", GlobalRole.SUPER_ADMIN)


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def bearer():
    """Signed-JWT bearer auth headers for an actor."""

    def _headers(actor: Actor) -> dict:
        token, _ = create_jwt(actor.user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers
