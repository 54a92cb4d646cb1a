# database/store.py
"""
Generic entity store over SQLAlchemy models.

One ``EntityStore`` per entity type exposes list / filter / get / create /
update / delete. Sort specs are a column name, optionally prefixed with ``-``
for descending order; ties are broken by id in the same direction.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Mapping, Optional, Type, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import (
    ConflictError,
    HubError,
    NotFoundError,
    StoreUnavailableError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# columns the store fills in itself
_STORE_MANAGED = {"id", "created_date", "updated_date"}


class EntityStore(Generic[ModelT]):
    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model
        self.entity = model.__name__

    # ---------- helpers ----------
    @property
    def _columns(self):
        return self.model.__table__.columns

    def _column(self, name: str):
        if name not in self._columns:
            raise ValidationFailure(f"{self.entity} has no field '{name}'")
        return getattr(self.model, name)

    def _order_by(self, sort: Optional[str]):
        if not sort:
            return [self.model.id.asc()]
        descending = sort.startswith("-")
        col = self._column(sort.lstrip("-"))
        if descending:
            return [col.desc(), self.model.id.desc()]
        return [col.asc(), self.model.id.asc()]

    def _check_fields(self, fields: Mapping[str, Any]) -> None:
        for name in fields:
            if name in _STORE_MANAGED:
                raise ValidationFailure(f"{self.entity}.{name} is assigned by the store")
            self._column(name)

    def _check_required(self, fields: Mapping[str, Any]) -> None:
        missing = [
            c.name for c in self._columns
            if c.name not in _STORE_MANAGED
            and not c.nullable
            and c.default is None
            and c.server_default is None
            and fields.get(c.name) is None
        ]
        if missing:
            raise ValidationFailure(f"{self.entity} missing required field(s): {', '.join(missing)}")

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        """Map SQLAlchemy failures onto the error taxonomy and roll back."""
        try:
            yield
        except HubError:
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("%s %s violated a constraint: %s", self.entity, action, e.orig)
            raise ConflictError(f"{self.entity} {action} violates a unique or integrity constraint") from e
        except DBAPIError as e:
            self.db.rollback()
            logger.error("%s %s failed at the database: %s", self.entity, action, e)
            raise StoreUnavailableError(f"Store unavailable during {self.entity} {action}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("%s %s failed: %s", self.entity, action, e)
            raise StoreUnavailableError(f"Store error during {self.entity} {action}") from e

    def _finish(self, obj, commit: bool):
        if commit:
            self.db.commit()
            self.db.refresh(obj)
        else:
            self.db.flush()
        return obj

    # ---------- reads ----------
    def list(self, sort: Optional[str] = None) -> List[ModelT]:
        order = self._order_by(sort)
        with self._guard("list"):
            return self.db.query(self.model).order_by(*order).all()

    def filter(self, criteria: Mapping[str, Any], sort: Optional[str] = None) -> List[ModelT]:
        conditions = [self._column(k) == v for k, v in criteria.items()]
        order = self._order_by(sort)
        with self._guard("filter"):
            return self.db.query(self.model).filter(*conditions).order_by(*order).all()

    def find(self, record_id: Any) -> Optional[ModelT]:
        with self._guard("get"):
            return self.db.get(self.model, record_id)

    def get(self, record_id: Any) -> ModelT:
        obj = self.find(record_id)
        if obj is None:
            raise NotFoundError(self.entity, record_id)
        return obj

    def count(self, criteria: Optional[Mapping[str, Any]] = None) -> int:
        conditions = [self._column(k) == v for k, v in (criteria or {}).items()]
        with self._guard("count"):
            return self.db.query(self.model).filter(*conditions).count()

    # ---------- writes ----------
    def create(self, fields: Mapping[str, Any], commit: bool = True) -> ModelT:
        self._check_fields(fields)
        self._check_required(fields)
        obj = self.model(**fields)
        with self._guard("create"):
            self.db.add(obj)
            self._finish(obj, commit)
        logger.debug("%s %s created", self.entity, obj.id)
        return obj

    def update(self, record_id: Any, fields: Mapping[str, Any], commit: bool = True) -> ModelT:
        self._check_fields(fields)
        for key, value in fields.items():
            if value is None and not self._columns[key].nullable:
                raise ValidationFailure(f"{self.entity}.{key} cannot be empty")
        obj = self.get(record_id)
        for key, value in fields.items():
            setattr(obj, key, value)
        with self._guard("update"):
            self._finish(obj, commit)
        return obj

    def delete(self, record_id: Any, commit: bool = True) -> None:
        obj = self.get(record_id)
        with self._guard("delete"):
            self.db.delete(obj)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
        logger.debug("%s %s deleted", self.entity, record_id)

    def commit(self) -> None:
        with self._guard("commit"):
            self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
