"""
Policy error taxonomy.

Decision functions never raise these for missing data; they are raised by
the ``check``-style entry points and by lifecycle mutations.
"""

from __future__ import annotations


class PolicyError(Exception):
    """Base class for authorization and lifecycle failures."""

    code = "POLICY_ERROR"

    def __init__(self, message: str = "", *, resource: str | None = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.resource = resource


class PermissionDenied(PolicyError):
    """The actor lacks the role or ownership the operation requires."""

    code = "PERMISSION_DENIED"


class NotFound(PolicyError):
    """The referenced organization, topic, event or profile does not exist."""

    code = "NOT_FOUND"


class InvalidState(PolicyError):
    """A lifecycle transition was requested from a state that does not allow it."""

    code = "INVALID_STATE"
