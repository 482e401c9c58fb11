"""
Topic ownership modes.

The storage layer expresses ownership with two nullable columns; the policy
works on this explicit variant instead.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class OrganizationOwned:
    org_id: uuid.UUID


@dataclass(frozen=True, slots=True)
class Personal:
    """Private topic with no organization, owned by its creator."""

    user_id: uuid.UUID


@dataclass(frozen=True, slots=True)
class Public:
    """Public topic with no organization. Readable by all, writable by super admins."""


@dataclass(frozen=True, slots=True)
class Legacy:
    """Private topic with neither organization nor creator."""


Ownership = Union[OrganizationOwned, Personal, Public, Legacy]


def classify(
    *,
    organization_id: Optional[uuid.UUID],
    created_by: Optional[uuid.UUID],
    is_public: bool,
) -> Ownership:
    if organization_id is not None:
        return OrganizationOwned(organization_id)
    if is_public:
        return Public()
    if created_by is not None:
        return Personal(created_by)
    return Legacy()


def ownership_of(topic) -> Ownership:
    return classify(
        organization_id=topic.organization_id,
        created_by=topic.created_by,
        is_public=bool(topic.is_public),
    )
