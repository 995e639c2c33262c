"""Core app configuration, database, security and tokens."""

from edu_registry.core.config import get_settings, settings
from edu_registry.core.database import get_db
from edu_registry.core.tokens import TokenService, get_token_service

__all__ = ["get_settings", "settings", "get_db", "TokenService", "get_token_service"]
