from enum import Enum


class GlobalRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    STANDARD_USER = "standard_user"


class OrgRole(str, Enum):
    ORG_ADMIN = "org_admin"
    ORG_EDITOR = "org_editor"
    ORG_VIEWER = "org_viewer"


class EffectiveRole(str, Enum):
    """An actor's resolved role within one organization."""
    SUPER_ADMIN = "super_admin"
    ORG_ADMIN = "org_admin"
    ORG_EDITOR = "org_editor"
    ORG_VIEWER = "org_viewer"
    NONE = "none"


# Roles allowed to create and modify content in an organization
EDITOR_ROLES: frozenset["EffectiveRole"] = frozenset(
    {EffectiveRole.SUPER_ADMIN, EffectiveRole.ORG_ADMIN, EffectiveRole.ORG_EDITOR}
)


class Operation(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class TimelineDisplayMode(str, Enum):
    YEARS = "years"
    DAYS = "days"

