"""User profile and organization membership schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, EmailStr, Field, UUID4

from .common import GlobalRole, OrgRole


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class GlobalRoleUpdateRequest(BaseModel):
    """Change a user's global role (super admin only)."""
    role: GlobalRole


class MembershipAddRequest(BaseModel):
    """Add a user to an organization."""
    user_id: UUID4
    role: OrgRole = OrgRole.ORG_VIEWER


class MembershipUpdateRequest(BaseModel):
    """Change a member's organization role."""
    role: OrgRole


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class UserProfileResponse(BaseModel):
    id: UUID4
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(default=None, max_length=200)
    avatar_url: Optional[str] = None
    role: GlobalRole
    created_at: datetime

    model_config = {"from_attributes": True}


class MembershipResponse(BaseModel):
    user_id: UUID4
    organization_id: UUID4
    role: OrgRole
    created_at: datetime

    model_config = {"from_attributes": True}


class MembershipListResponse(BaseModel):
    data: List[MembershipResponse]
