"""Test environment: must run before anything imports edu_registry."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["JWT_EXPIRE_MINUTES"] = "1440"
# Lowest accepted cost keeps the suite fast.
os.environ["BCRYPT_ROUNDS"] = "10"
