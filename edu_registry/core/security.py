"""Password hashing and verification, including the legacy plaintext migration path."""

import hmac
import logging
from typing import NamedTuple

import bcrypt

from edu_registry.core.config import settings
from edu_registry.core.errors import ValidationError

logger = logging.getLogger(__name__)

# Minimum length for any newly set password (registration, change, admin CLI).
PASSWORD_MIN_LEN = 6

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72


class PasswordCheck(NamedTuple):
    """Outcome of verify_password. needs_rehash asks the caller to store a fresh hash."""

    valid: bool
    needs_rehash: bool


def _to_bcrypt_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(
        _to_bcrypt_bytes(plain_password), bcrypt.gensalt(rounds=cost)
    ).decode("utf-8")


def _bcrypt_matches(plain_password: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(_to_bcrypt_bytes(plain_password), stored.encode("utf-8"))
    except (ValueError, TypeError):
        # stored is not a bcrypt hash (legacy row)
        return False


# --- Legacy plaintext compatibility ------------------------------------------
# Accounts imported from the previous system still hold their password in clear
# text. A match here is accepted once and the caller replaces the stored value
# with a bcrypt hash. Delete this function and its call in verify_password when
# `SELECT count(*) FROM users WHERE password NOT LIKE '$2%'` returns 0.
def _legacy_plaintext_matches(plain_password: str, stored: str) -> bool:
    return hmac.compare_digest(plain_password.encode("utf-8"), stored.encode("utf-8"))


def verify_password(plain_password: str, stored: str | None) -> PasswordCheck:
    """
    Check a password against the stored credential. Pure: never writes anything.

    A bcrypt match returns (True, False). A match through the legacy plaintext
    path returns (True, True) so the caller can persist hash_password(plain).
    """
    if stored is None:
        return PasswordCheck(valid=False, needs_rehash=False)
    if _bcrypt_matches(plain_password, stored):
        return PasswordCheck(valid=True, needs_rehash=False)
    if _legacy_plaintext_matches(plain_password, stored):
        logger.debug("Password matched through the legacy plaintext path")
        return PasswordCheck(valid=True, needs_rehash=True)
    return PasswordCheck(valid=False, needs_rehash=False)


def validate_new_password(password: str) -> None:
    """Raise ValidationError if a password about to be stored is too short."""
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(
            f"La nueva contraseña debe tener al menos {PASSWORD_MIN_LEN} caracteres"
        )
