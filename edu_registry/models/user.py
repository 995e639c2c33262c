"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from edu_registry.models.base import Base
from edu_registry.models.enums import Role


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    password_hash maps to the legacy ``password`` column: it holds a bcrypt hash,
    or the plain password for accounts not yet migrated (see core.security).
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(255), nullable=False, index=True)
    password_hash = Column("password", String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    nombre_completo = Column(String(255), nullable=False, default="")
    telefono = Column(String(32), nullable=True)
    institucion = Column(String(255), nullable=True)
    avatar = Column(Text, nullable=True)
    numero_trabajador = Column(String(64), nullable=True, unique=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
