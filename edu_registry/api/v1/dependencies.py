"""FastAPI dependencies: datastore access, token checks and role enforcement."""

import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from edu_registry.core.database import get_db
from edu_registry.core.errors import AuthServiceError, ForbiddenError, UnauthenticatedError
from edu_registry.core.tokens import (
    TokenExpiredError,
    TokenMalformedError,
    TokenService,
    get_token_service,
)
from edu_registry.models.enums import Role
from edu_registry.schemas.auth import TokenClaims
from edu_registry.services.user_store import UserStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def http_error(exc: AuthServiceError, **extra: Any) -> HTTPException:
    """Translate a service error into an HTTPException; extra keys go into the detail."""
    detail: Any = {"message": exc.message, **extra} if extra else exc.message
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if exc.status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    return HTTPException(status_code=exc.status_code, detail=detail, headers=headers)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def authorize(*allowed_roles: Role) -> Callable[..., TokenClaims]:
    """
    Build a dependency that requires a valid Bearer token.

    With no roles any authenticated user passes; otherwise the token's role must
    be one of allowed_roles (403 if not). The decoded claims are returned and
    also stored on request.state.user.
    """
    for role in allowed_roles:
        if not isinstance(role, Role):
            raise TypeError(f"authorize() expects Role members, got {role!r}")
    required = frozenset(allowed_roles)

    def dependency(
        request: Request,
        tokens: Annotated[TokenService, Depends(get_token_service)],
        authorization: Annotated[str | None, Header()] = None,
    ) -> TokenClaims:
        if not authorization:
            raise http_error(
                UnauthenticatedError("Acceso no autorizado: Token no proporcionado")
            )
        token = authorization[len(BEARER_PREFIX):]
        if (
            not authorization.startswith(BEARER_PREFIX)
            or not token
            or any(c.isspace() for c in token)
        ):
            raise http_error(
                UnauthenticatedError("Formato de token inválido. Use: Bearer <token>")
            )

        try:
            claims = tokens.decode(token)
        except TokenExpiredError as e:
            raise http_error(
                UnauthenticatedError("Token expirado. Por favor, inicie sesión nuevamente")
            ) from e
        except TokenMalformedError as e:
            logger.info("Rejected malformed token: %s", e.message)
            raise http_error(UnauthenticatedError("Token inválido o mal formado")) from e

        request.state.user = claims

        if required and claims.role not in required:
            logger.info(
                "Access denied: role %s not in %s",
                claims.role.value,
                sorted(r.value for r in required),
                extra={"user_id": claims.user_id, "path": request.url.path},
            )
            raise http_error(
                ForbiddenError("Acceso denegado: No tienes los permisos necesarios"),
                requiredRoles=sorted(r.value for r in required),
                userRole=claims.role.value,
            )
        return claims

    return dependency


CurrentUser = Annotated[TokenClaims, Depends(authorize())]
AdminUser = Annotated[TokenClaims, Depends(authorize(Role.ADMIN))]
Store = Annotated[UserStore, Depends(get_user_store)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
