"""Auth endpoints: register, login, profile, password change and admin user list."""

from fastapi import APIRouter, status

from edu_registry.api.v1.dependencies import AdminUser, CurrentUser, Store, Tokens, http_error
from edu_registry.core.errors import AuthServiceError
from edu_registry.schemas.auth import (
    AuthResponse,
    AvatarUpdateRequest,
    ChangePasswordRequest,
    FullProfileUpdateRequest,
    LoginRequest,
    MessageResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    UserListItem,
    UserPublic,
    UserResponse,
    UsersListResponse,
)
from edu_registry.services import auth as auth_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, store: Store, tokens: Tokens) -> AuthResponse:
    """Create an account with role 'user' and return a token for it."""
    try:
        user, token = auth_service.register_user(store, tokens, body)
    except AuthServiceError as e:
        raise http_error(e) from e
    return AuthResponse(
        message="Usuario registrado exitosamente",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, store: Store, tokens: Tokens) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        user, token = auth_service.authenticate(store, tokens, body.email, body.password)
    except AuthServiceError as e:
        raise http_error(e) from e
    return AuthResponse(
        message="Login exitoso",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(current: CurrentUser, store: Store) -> UserResponse:
    try:
        user = auth_service.get_profile(store, current.user_id)
    except AuthServiceError as e:
        raise http_error(e) from e
    return UserResponse(user=UserPublic.model_validate(user))


@router.get("/verify", response_model=UserResponse)
def verify(current: CurrentUser, store: Store) -> UserResponse:
    """Check that the token is still good and return the current user record."""
    return get_profile(current, store)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    body: ProfileUpdateRequest, current: CurrentUser, store: Store
) -> UserResponse:
    try:
        user = auth_service.update_profile(store, current.user_id, body)
    except AuthServiceError as e:
        raise http_error(e) from e
    return UserResponse(
        message="Perfil actualizado exitosamente",
        user=UserPublic.model_validate(user),
    )


@router.put("/avatar", response_model=UserResponse)
def update_avatar(
    body: AvatarUpdateRequest, current: CurrentUser, store: Store
) -> UserResponse:
    try:
        user = auth_service.update_avatar(store, current.user_id, body.avatar)
    except AuthServiceError as e:
        raise http_error(e) from e
    return UserResponse(
        message="Avatar actualizado exitosamente",
        user=UserPublic.model_validate(user),
    )


@router.put("/update-full-profile", response_model=UserResponse)
def update_full_profile(
    body: FullProfileUpdateRequest, current: CurrentUser, store: Store
) -> UserResponse:
    """Profile fields plus an optional password change (currentPassword + newPassword)."""
    try:
        user = auth_service.update_full_profile(store, current.user_id, body)
    except AuthServiceError as e:
        raise http_error(e) from e
    return UserResponse(
        message="Perfil actualizado exitosamente",
        user=UserPublic.model_validate(user),
    )


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest, current: CurrentUser, store: Store
) -> MessageResponse:
    try:
        auth_service.change_password(
            store, current.user_id, body.current_password, body.new_password
        )
    except AuthServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Contraseña cambiada exitosamente")


@router.get("/users", response_model=UsersListResponse)
def list_users(_admin: AdminUser, store: Store) -> UsersListResponse:
    """List all users, newest first (admin only)."""
    users = [UserListItem.model_validate(u) for u in store.list_all()]
    return UsersListResponse(users=users, count=len(users))
