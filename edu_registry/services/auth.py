"""Registration, login, profile and password operations on top of UserStore."""

import logging
from typing import Any

from edu_registry.core.errors import (
    ConflictError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from edu_registry.core.security import hash_password, validate_new_password, verify_password
from edu_registry.core.tokens import TokenService
from edu_registry.models import Role, User
from edu_registry.schemas.auth import (
    FullProfileUpdateRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenClaims,
)
from edu_registry.services.user_store import EMAIL_TAKEN_MESSAGE, UserStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Credenciales inválidas"
USER_NOT_FOUND_MESSAGE = "Usuario no encontrado"

# Avatars are stored inline as data URLs; the column is sized for ~16MB.
AVATAR_MAX_CHARS = 16_000_000

PROFILE_FIELDS = ("username", "email", "nombre_completo", "telefono", "institucion", "avatar")


def claims_for(user: User) -> TokenClaims:
    """Build token claims from a stored user."""
    return TokenClaims(
        user_id=user.id,
        email=user.email,
        role=Role(user.role),
        username=user.username,
        nombre_completo=user.nombre_completo,
        institucion=user.institucion or None,
    )


def register_user(
    store: UserStore, tokens: TokenService, body: RegisterRequest
) -> tuple[User, str]:
    """Create a user with role 'user' and return it with a fresh token."""
    if not body.email or not body.password or not body.nombre_completo:
        raise ValidationError("Email, contraseña y nombre son requeridos")
    validate_new_password(body.password)
    if store.email_taken(body.email):
        raise ConflictError(EMAIL_TAKEN_MESSAGE)

    user = store.add(
        User(
            email=body.email,
            username=body.username or body.email.split("@")[0],
            password_hash=hash_password(body.password),
            role=Role.USER.value,
            nombre_completo=body.nombre_completo,
            telefono=body.telefono,
            institucion=body.institucion,
        )
    )
    logger.info("User registered", extra={"user_id": user.id})
    return user, tokens.issue(claims_for(user))


def authenticate(
    store: UserStore, tokens: TokenService, email: str | None, password: str | None
) -> tuple[User, str]:
    """
    Check credentials and return the user with a fresh token.

    Unknown email, inactive account and wrong password all raise the same
    UnauthenticatedError so callers cannot tell which one happened.
    """
    if not email or not password:
        raise ValidationError("Email y contraseña requeridos")

    user = store.get_by_email(email)
    if user is None:
        logger.info("Login rejected: unknown email")
        raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)
    if not user.is_active:
        logger.info("Login rejected: inactive account", extra={"user_id": user.id})
        raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)

    check = verify_password(password, user.password_hash)
    if not check.valid:
        logger.info("Login rejected: wrong password", extra={"user_id": user.id})
        raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)
    if check.needs_rehash:
        store.set_password_hash(user, hash_password(password))
        logger.warning("Migrated legacy plaintext password to bcrypt", extra={"user_id": user.id})

    return user, tokens.issue(claims_for(user))


def get_profile(store: UserStore, user_id: int) -> User:
    user = store.get_by_id(user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return user


def change_password(
    store: UserStore, user_id: int, current_password: str | None, new_password: str | None
) -> None:
    """Replace the password after checking the current one (legacy plaintext accepted)."""
    if not current_password or not new_password:
        raise ValidationError(
            "La contraseña actual y la nueva contraseña son requeridas"
        )
    user = get_profile(store, user_id)
    if not verify_password(current_password, user.password_hash).valid:
        raise UnauthenticatedError("La contraseña actual es incorrecta")
    validate_new_password(new_password)
    store.update(user, {"password_hash": hash_password(new_password)})
    logger.info("Password changed", extra={"user_id": user.id})


def _profile_changes(store: UserStore, user: User, body: ProfileUpdateRequest) -> dict[str, Any]:
    """Fields explicitly present in the body, after uniqueness checks."""
    changes = {
        field: getattr(body, field)
        for field in PROFILE_FIELDS
        if field in body.model_fields_set
    }
    # null or empty email/username means "leave unchanged"; both columns are NOT NULL
    for field in ("email", "username"):
        if field in changes and not changes[field]:
            del changes[field]

    email = changes.get("email")
    if email and email != user.email and store.email_taken(email, exclude_id=user.id):
        raise ConflictError("El email ya está en uso por otro usuario")
    username = changes.get("username")
    if (
        username
        and username != user.username
        and store.username_taken(username, exclude_id=user.id)
    ):
        raise ConflictError("El nombre de usuario ya está en uso")
    return changes


def update_profile(store: UserStore, user_id: int, body: ProfileUpdateRequest) -> User:
    """Apply a partial profile update. An empty update is rejected."""
    user = get_profile(store, user_id)
    changes = _profile_changes(store, user, body)
    if not changes:
        raise ValidationError("No hay datos para actualizar")
    return store.update(user, changes)


def update_avatar(store: UserStore, user_id: int, avatar: str | None) -> User:
    if not avatar:
        raise ValidationError("Se requiere una imagen de avatar")
    if len(avatar) > AVATAR_MAX_CHARS:
        raise ValidationError(
            "La imagen de avatar es demasiado grande. Máximo 16MB permitido."
        )
    user = get_profile(store, user_id)
    return store.update(user, {"avatar": avatar})


def update_full_profile(
    store: UserStore, user_id: int, body: FullProfileUpdateRequest
) -> User:
    """
    Optionally change the password, then apply any profile fields.

    The password is only touched when both currentPassword and newPassword are
    given. Unlike update_profile, an update with no profile fields is not an error.
    """
    if body.avatar and len(body.avatar) > AVATAR_MAX_CHARS:
        raise ValidationError(
            "La imagen de avatar es demasiado grande. Máximo 16MB permitido."
        )
    if body.current_password and body.new_password:
        change_password(store, user_id, body.current_password, body.new_password)

    user = get_profile(store, user_id)
    changes = _profile_changes(store, user, body)
    if changes:
        user = store.update(user, changes)
    return user
