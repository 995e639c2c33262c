"""Credential store: the only code that reads or writes User rows."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edu_registry.core.errors import ConflictError
from edu_registry.models import User

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "El email ya está registrado"
WORKER_NUMBER_TAKEN_MESSAGE = "El número de trabajador ya existe"
DUPLICATE_MESSAGE = "El registro ya existe"


class UserStore:
    """
    Lookup and update operations over the users table for one request session.

    Writes commit immediately. Email uniqueness is enforced by the database
    unique constraint; an IntegrityError on commit is rolled back and reported
    as ConflictError, covering the race between two concurrent registrations.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.session.scalars(select(User).where(User.email == email)).first()

    def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        stmt = select(User.id).where(User.email == email)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.scalars(stmt).first() is not None

    def username_taken(self, username: str, exclude_id: int | None = None) -> bool:
        stmt = select(User.id).where(User.username == username)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.scalars(stmt).first() is not None

    def list_all(self) -> list[User]:
        """All users, newest first."""
        return list(
            self.session.scalars(select(User).order_by(User.created_at.desc(), User.id.desc()))
        )

    def add(self, user: User) -> User:
        self.session.add(user)
        self._commit()
        self.session.refresh(user)
        return user

    def update(self, user: User, changes: dict[str, Any]) -> User:
        """Apply column changes (attribute name -> value) and commit."""
        for field, value in changes.items():
            setattr(user, field, value)
        self._commit()
        self.session.refresh(user)
        return user

    def set_password_hash(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        self._commit()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Rejected write on users: unique constraint violated")
            raise ConflictError(_conflict_message(e)) from e


def _conflict_message(error: IntegrityError) -> str:
    """Pick a message from the violated column; SQLite and Postgres both name it."""
    text = str(error.orig).lower()
    if "numero_trabajador" in text:
        return WORKER_NUMBER_TAKEN_MESSAGE
    if "email" in text:
        return EMAIL_TAKEN_MESSAGE
    return DUPLICATE_MESSAGE
