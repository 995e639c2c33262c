"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles. Add a member here before referencing a new role anywhere else."""

    USER = "user"
    ADMIN = "admin"
