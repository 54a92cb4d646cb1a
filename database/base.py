# database/base.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # naive UTC, SQLite drops tzinfo anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RecordMixin:
    """id / created_date / updated_date assigned by the store"""
    id = Column(Integer, primary_key=True, index=True)
    created_date = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_date = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


def enum_values(enum_cls):
    """values_callable for SQLAlchemy Enum columns: store the member values"""
    return [m.value for m in enum_cls]
