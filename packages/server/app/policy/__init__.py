"""
Authorization and visibility decisions for topics, events and organizations.

Layers, each calling only the one below it:

    RoleResolver          global role, then organization membership
    TopicAccess           topic decision table over the Ownership variant
    EventAccess           projection onto the parent topic
    OrganizationLifecycle pending → approved | rejected
"""

from .actor import ANONYMOUS, Actor
from .errors import InvalidState, NotFound, PermissionDenied, PolicyError
from .events import EventAccess
from .lifecycle import OrganizationLifecycle, PendingOrganization
from .organizations import OrganizationPolicy, can_view_profile
from .ownership import Legacy, OrganizationOwned, Ownership, Personal, Public, ownership_of
from .roles import RoleResolver
from .store import ContentStore, PolicyStore
from .topics import TopicAccess, decide

__all__ = [
    "ANONYMOUS",
    "Actor",
    "ContentStore",
    "EventAccess",
    "InvalidState",
    "Legacy",
    "NotFound",
    "OrganizationLifecycle",
    "OrganizationOwned",
    "OrganizationPolicy",
    "Ownership",
    "PendingOrganization",
    "PermissionDenied",
    "Personal",
    "PolicyError",
    "PolicyStore",
    "Public",
    "RoleResolver",
    "TopicAccess",
    "can_view_profile",
    "decide",
    "ownership_of",
]
