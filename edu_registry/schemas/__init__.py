"""Pydantic request/response schemas."""

from edu_registry.schemas.auth import (
    AuthResponse,
    AvatarUpdateRequest,
    ChangePasswordRequest,
    FullProfileUpdateRequest,
    LoginRequest,
    MessageResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenClaims,
    UserListItem,
    UserPublic,
    UserResponse,
    UsersListResponse,
)
from edu_registry.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "AvatarUpdateRequest",
    "ChangePasswordRequest",
    "FullProfileUpdateRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "TokenClaims",
    "UserListItem",
    "UserPublic",
    "UserResponse",
    "UsersListResponse",
]
