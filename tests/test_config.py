"""Unit tests for edu_registry.core.config: validation of auth-related settings."""

import unittest

from pydantic import ValidationError

from edu_registry.core.config import INSECURE_DEV_JWT_SECRET, Settings


class TestJwtSettings(unittest.TestCase):
    def test_default_expiry_is_24_hours(self) -> None:
        self.assertEqual(Settings.model_fields["JWT_EXPIRE_MINUTES"].default, 1440)

    def test_prod_rejects_dev_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(APP_ENV="prod", JWT_SECRET=INSECURE_DEV_JWT_SECRET)

    def test_prod_accepts_real_secret(self) -> None:
        s = Settings(APP_ENV="prod", JWT_SECRET="a-long-random-production-secret")
        self.assertFalse(s.is_dev)

    def test_dev_allows_dev_secret(self) -> None:
        s = Settings(APP_ENV="dev", JWT_SECRET=INSECURE_DEV_JWT_SECRET)
        self.assertTrue(s.is_dev)

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="   ")

    def test_expiry_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=0)


class TestOtherSettings(unittest.TestCase):
    def test_bcrypt_rounds_below_ten_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=9)

    def test_database_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://root@localhost/db")
        self.assertEqual(Settings(DATABASE_URL="sqlite:///./dev.db").DATABASE_URL, "sqlite:///./dev.db")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")


if __name__ == "__main__":
    unittest.main()
