"""Tests for the create_user CLI, with SessionLocal patched to an in-memory database."""

import unittest
from unittest.mock import patch

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from edu_registry.core.security import verify_password
from edu_registry.models import Base, User
from edu_registry.scripts import create_user


class TestCreateUserCli(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine)
        patcher = patch.object(create_user, "SessionLocal", self.Session)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self.engine.dispose)

    def _users(self) -> list[User]:
        with self.Session() as db:
            return list(db.scalars(select(User)))

    def test_creates_admin_with_worker_number(self) -> None:
        code = create_user.main(
            ["admin@tec.mx", "s3cret-pass", "Ana Admin", "admin", "--worker-number", "1024"]
        )
        self.assertEqual(code, 0)
        (user,) = self._users()
        self.assertEqual(user.role, "admin")
        self.assertEqual(user.username, "admin")
        self.assertEqual(user.numero_trabajador, "1024")
        self.assertTrue(verify_password("s3cret-pass", user.password_hash).valid)
        self.assertFalse(verify_password("s3cret-pass", user.password_hash).needs_rehash)

    def test_defaults_to_user_role(self) -> None:
        self.assertEqual(create_user.main(["u@tec.mx", "s3cret-pass", "Uli"]), 0)
        self.assertEqual(self._users()[0].role, "user")

    def test_duplicate_email(self) -> None:
        self.assertEqual(create_user.main(["u@tec.mx", "s3cret-pass", "Uli"]), 0)
        self.assertEqual(create_user.main(["u@tec.mx", "other-pass", "Uli 2"]), 1)
        self.assertEqual(len(self._users()), 1)

    def test_duplicate_worker_number(self) -> None:
        args = ["admin@tec.mx", "s3cret-pass", "Ana", "admin", "--worker-number", "7"]
        self.assertEqual(create_user.main(args), 0)
        args2 = ["otro@tec.mx", "s3cret-pass", "Otro", "admin", "--worker-number", "7"]
        with self.assertLogs(create_user.logger, level="ERROR") as logs:
            self.assertEqual(create_user.main(args2), 1)
        self.assertIn("El número de trabajador ya existe", logs.output[0])
        self.assertEqual(len(self._users()), 1)

    def test_short_password(self) -> None:
        self.assertEqual(create_user.main(["u@tec.mx", "abc", "Uli"]), 1)
        self.assertEqual(self._users(), [])

    def test_worker_number_only_for_admins(self) -> None:
        code = create_user.main(["u@tec.mx", "s3cret-pass", "Uli", "--worker-number", "7"])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
