"""
Storage interfaces consumed by the policy engine.

``PolicyStore`` is the read side the decision functions need: one lookup per
record, no filtering by policy. ``ContentStore`` adds the listings and writes
the lifecycle and use-case layer performs. Implementations are injected; the
engine never reaches for a global connection.
"""

from __future__ import annotations

import uuid
from typing import AsyncContextManager, Optional, Protocol, Sequence

from app.models import Event, Organization, OrganizationMembership, Topic, UserProfile


class PolicyStore(Protocol):
    async def get_profile(self, user_id: uuid.UUID) -> Optional[UserProfile]: ...

    async def get_organization(self, org_id: uuid.UUID) -> Optional[Organization]: ...

    async def get_membership(
        self, org_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[OrganizationMembership]: ...

    async def get_topic(self, topic_id: uuid.UUID) -> Optional[Topic]: ...

    async def get_event(self, event_id: uuid.UUID) -> Optional[Event]: ...


class ContentStore(PolicyStore, Protocol):
    def transaction(self) -> AsyncContextManager[None]:
        """All writes inside the block apply together or not at all."""
        ...

    # Profiles
    async def get_profile_by_email(self, email: str) -> Optional[UserProfile]: ...

    async def save_profile(self, profile: UserProfile) -> UserProfile: ...

    # Organizations
    async def get_organization_for_update(
        self, org_id: uuid.UUID
    ) -> Optional[Organization]:
        """Like ``get_organization``, but holds the row until the transaction ends."""
        ...

    async def get_organization_by_slug(self, slug: str) -> Optional[Organization]: ...

    async def list_organizations(
        self, *, status: Optional[str] = None
    ) -> Sequence[Organization]: ...

    async def save_organization(self, org: Organization) -> Organization: ...

    async def delete_organization(self, org: Organization) -> None: ...

    # Memberships
    async def list_memberships(
        self,
        *,
        org_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> Sequence[OrganizationMembership]: ...

    async def save_membership(
        self, membership: OrganizationMembership
    ) -> OrganizationMembership: ...

    async def delete_membership(self, membership: OrganizationMembership) -> None: ...

    # Topics and events
    async def list_topics(
        self, *, organization_id: Optional[uuid.UUID] = None
    ) -> Sequence[Topic]: ...

    async def save_topic(self, topic: Topic) -> Topic: ...

    async def delete_topic(self, topic: Topic) -> None: ...

    async def list_events(self, topic_ids: Sequence[uuid.UUID]) -> Sequence[Event]: ...

    async def save_event(self, event: Event) -> Event: ...

    async def delete_event(self, event: Event) -> None: ...
