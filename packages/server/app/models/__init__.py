# Importing the tables registers them on SQLModel.metadata for Alembic.
from .base import UUIDMixin, TimestampMixin  # noqa: F401
from .user import UserProfile  # noqa: F401
from .organization import Organization  # noqa: F401
from .membership import OrganizationMembership  # noqa: F401
from .topic import Topic  # noqa: F401
from .event import Event  # noqa: F401
