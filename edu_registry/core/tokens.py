"""Issue and validate signed, time-limited access tokens (JWT)."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import jwt
from pydantic import ValidationError as PydanticValidationError

from edu_registry.core.config import get_settings
from edu_registry.schemas.auth import TokenClaims


class TokenError(Exception):
    """Base class for token validation failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenExpiredError(TokenError):
    """Signature is valid but the token is past its exp claim."""


class TokenMalformedError(TokenError):
    """Bad signature, broken structure, or claims that do not describe a user."""


class TokenService:
    """
    Signs and decodes access tokens with one process-wide secret.

    The secret is fixed for the life of the instance; there is no key rotation,
    so changing it invalidates every token already issued.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 1440) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: TokenClaims, now: datetime | None = None) -> str:
        """Create a token carrying claims plus iat and exp (iat + expire_minutes)."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = claims.model_dump(mode="json", by_alias=True)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry; return the claims.
        Raises TokenExpiredError or TokenMalformedError.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except jwt.PyJWTError as e:
            raise TokenMalformedError(str(e)) from e
        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError as e:
            raise TokenMalformedError("Token claims are invalid") from e


@lru_cache
def get_token_service() -> TokenService:
    """Dependency: token service built once from settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )
