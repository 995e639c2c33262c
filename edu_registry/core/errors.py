"""Error taxonomy for the auth services; routes map these onto HTTP responses."""

from fastapi import status


class AuthServiceError(Exception):
    """Base class for expected failures raised by the auth services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AuthServiceError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AuthServiceError):
    """Uniqueness violation (email or username already in use)."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(AuthServiceError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AuthServiceError):
    """Authenticated, but the role is not allowed."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AuthServiceError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
