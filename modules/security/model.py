# modules/security/model.py
from __future__ import annotations
from enum import Enum

from sqlalchemy import Boolean, Column, Enum as SQLEnum, String

from database.base import Base, RecordMixin, enum_values


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class User(RecordMixin, Base):
    """Session principal. Its id is what database permission sets and created_by hold."""
    __tablename__ = "users"

    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    password_hash = Column(String, nullable=True)
    role = Column(
        SQLEnum(UserRole, values_callable=enum_values, native_enum=False, length=20),
        default=UserRole.USER,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)
