"""Edu Registry API: accounts, authentication and role-based access."""

__version__ = "0.1.0"
