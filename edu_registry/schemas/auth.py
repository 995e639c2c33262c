"""Request/response schemas for auth endpoints.

Wire names are camelCase (nombreCompleto, currentPassword, ...) to stay
compatible with existing clients; Python attributes are snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from edu_registry.models.enums import Role


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TokenClaims(CamelModel):
    """Identity carried inside an access token."""

    user_id: int
    email: str
    role: Role
    username: str | None = None
    nombre_completo: str | None = None
    institucion: str | None = None


# Required fields are optional here so that a missing one is reported as a 400
# by the service instead of FastAPI's 422.
class RegisterRequest(CamelModel):
    """Body for POST /auth/register."""

    email: str | None = Field(None, max_length=255)
    password: str | None = None
    nombre_completo: str | None = Field(None, max_length=255)
    telefono: str | None = Field(None, max_length=32)
    institucion: str | None = Field(None, max_length=255)
    username: str | None = Field(None, max_length=255)


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str | None = None
    password: str | None = None


class ProfileUpdateRequest(CamelModel):
    """Partial profile update; only fields present in the body are applied."""

    username: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    nombre_completo: str | None = Field(None, max_length=255)
    telefono: str | None = Field(None, max_length=32)
    institucion: str | None = Field(None, max_length=255)
    avatar: str | None = None


class FullProfileUpdateRequest(ProfileUpdateRequest):
    """Profile update that may also change the password."""

    current_password: str | None = None
    new_password: str | None = None


class AvatarUpdateRequest(CamelModel):
    avatar: str | None = None


class ChangePasswordRequest(CamelModel):
    current_password: str | None = None
    new_password: str | None = None


class UserPublic(CamelModel):
    """User projection returned to clients. Never includes the password."""

    id: int
    username: str
    email: str
    role: Role
    nombre_completo: str = ""
    telefono: str = ""
    institucion: str = ""
    avatar: str | None = None
    numero_trabajador: str | None = None

    @field_validator("nombre_completo", "telefono", "institucion", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        return v or ""


class UserListItem(UserPublic):
    """User entry for admin list (no password)."""

    created_at: datetime | None = None


class AuthResponse(CamelModel):
    """Token plus user, returned by register and login."""

    success: bool = True
    message: str
    token: str
    user: UserPublic


class UserResponse(CamelModel):
    success: bool = True
    message: str | None = None
    user: UserPublic


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class UsersListResponse(CamelModel):
    """Response for GET /auth/users (admin only)."""

    success: bool = True
    users: list[UserListItem]
    count: int
