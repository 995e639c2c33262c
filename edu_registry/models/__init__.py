"""SQLAlchemy ORM models."""

from edu_registry.models.base import Base
from edu_registry.models.enums import Role
from edu_registry.models.user import User

__all__ = ["Base", "Role", "User"]
