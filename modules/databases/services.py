# modules/databases/services.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, MutableMapping, Optional

from sqlalchemy.orm import Session

from core.exceptions import CascadeDeleteError, HubError, NotFoundError, PermissionDenied, ValidationFailure
from database.store import EntityStore

from . import models, schemas
from .permissions import Capability, DatabasePermissions, has_permission, require_permission

logger = logging.getLogger(__name__)

# session key holding the database currently open in the client
OPEN_DATABASE_KEY = "open_database_id"


# ----------------------------- helpers -----------------------------
def database_store(db: Session) -> EntityStore:
    return EntityStore(db, models.Database)


def table_store(db: Session) -> EntityStore:
    return EntityStore(db, models.DatabaseTable)


def row_store(db: Session) -> EntityStore:
    return EntityStore(db, models.DatabaseRow)


def to_card(database: models.Database, user_id: int) -> schemas.DatabaseCard:
    card = schemas.DatabaseCard.model_validate(database)
    card.can_view = has_permission(database, Capability.VIEW, user_id)
    card.can_edit = has_permission(database, Capability.EDIT, user_id)
    card.can_delete = has_permission(database, Capability.DELETE, user_id)
    return card


def permission_stats(databases: List[Any], user_id: int) -> schemas.DatabaseStats:
    return schemas.DatabaseStats(
        total=len(databases),
        can_view=sum(1 for d in databases if has_permission(d, Capability.VIEW, user_id)),
        can_edit=sum(1 for d in databases if has_permission(d, Capability.EDIT, user_id)),
        can_delete=sum(1 for d in databases if has_permission(d, Capability.DELETE, user_id)),
    )


def get_database(
    db: Session, database_id: int, user_id: int, capability: Capability = Capability.VIEW
) -> models.Database:
    database = database_store(db).get(database_id)
    require_permission(database, capability, user_id)
    return database


def _get_table(db: Session, database_id: int, table_id: int) -> models.DatabaseTable:
    table = table_store(db).get(table_id)
    if table.database_id != database_id:
        raise NotFoundError("DatabaseTable", table_id)
    return table


def _get_row(db: Session, table_id: int, row_id: int) -> models.DatabaseRow:
    row = row_store(db).get(row_id)
    if row.table_id != table_id:
        raise NotFoundError("DatabaseRow", row_id)
    return row


def _check_row_data(table: models.DatabaseTable, data: Dict[str, Any]) -> None:
    known = {c.get("name") for c in (table.columns or [])}
    unknown = sorted(k for k in data if k not in known)
    if unknown:
        raise ValidationFailure(f"Table '{table.name}' has no column(s): {', '.join(unknown)}")


def _clear_if_open(session_state: Optional[MutableMapping], database_id: int) -> None:
    if session_state is not None and session_state.get(OPEN_DATABASE_KEY) == database_id:
        session_state.pop(OPEN_DATABASE_KEY, None)


# ----------------------------- databases -----------------------------
def create_database(db: Session, payload: schemas.DatabaseCreate, user_id: int) -> models.Database:
    fields = payload.model_dump()
    fields["created_by"] = user_id
    fields.update(models.Database.permission_columns(DatabasePermissions.owner_only(user_id)))
    database = database_store(db).create(fields)
    logger.info("Database %s '%s' created by user %s", database.id, database.name, user_id)
    return database


def update_permissions(
    db: Session, database_id: int, perms: DatabasePermissions, user_id: int
) -> models.Database:
    database = get_database(db, database_id, user_id, Capability.EDIT)
    if database.created_by != user_id:
        # editors may only hand out capabilities they hold themselves
        current = database.permissions
        for cap in Capability:
            changed = set(perms.ids_for(cap)) != set(current.ids_for(cap))
            if changed and not has_permission(database, cap, user_id):
                raise PermissionDenied(
                    f"User {user_id} may not change {cap.value} access on database {database_id}"
                )
    return database_store(db).update(database_id, models.Database.permission_columns(perms))


def database_list_view(
    db: Session, user_id: int, session_state: Optional[MutableMapping] = None
) -> schemas.DatabaseListView:
    databases = database_store(db).list("-created_date")
    open_id = (session_state or {}).get(OPEN_DATABASE_KEY)
    if open_id is not None and all(d.id != open_id for d in databases):
        # the open database was deleted elsewhere
        _clear_if_open(session_state, open_id)
        open_id = None
    return schemas.DatabaseListView(
        items=[to_card(d, user_id) for d in databases],
        stats=permission_stats(databases, user_id),
        open_database_id=open_id,
    )


def database_detail_view(db: Session, database_id: int, user_id: int) -> schemas.DatabaseDetailView:
    database = get_database(db, database_id, user_id, Capability.VIEW)
    return schemas.DatabaseDetailView(
        database=to_card(database, user_id),
        tables=list_tables(db, database_id, user_id),
    )


def open_database(
    db: Session, database_id: int, user_id: int, session_state: MutableMapping
) -> models.Database:
    database = get_database(db, database_id, user_id, Capability.VIEW)
    session_state[OPEN_DATABASE_KEY] = database.id
    return database


def close_database(database_id: int, session_state: MutableMapping) -> None:
    _clear_if_open(session_state, database_id)


def delete_database(
    db: Session, database_id: int, user_id: int, session_state: Optional[MutableMapping] = None
) -> None:
    """
    Delete rows, then tables, then the database, in one transaction.
    Any failing step rolls everything back and raises CascadeDeleteError(step).
    """
    databases = database_store(db)
    database = databases.get(database_id)
    require_permission(database, Capability.DELETE, user_id)

    tables, rows = table_store(db), row_store(db)
    step = "rows"
    row_count = 0
    try:
        owned = tables.filter({"database_id": database_id})
        for table in owned:
            for row in rows.filter({"table_id": table.id}):
                rows.delete(row.id, commit=False)
                row_count += 1

        step = "tables"
        for table in owned:
            tables.delete(table.id, commit=False)

        step = "database"
        databases.delete(database_id, commit=False)
        databases.commit()
    except HubError as e:
        databases.rollback()
        logger.error("Cascade delete of database %s failed at '%s': %s", database_id, step, e)
        raise CascadeDeleteError(database_id, step, e) from e

    _clear_if_open(session_state, database_id)
    logger.info(
        "Database %s deleted by user %s (%d tables, %d rows)",
        database_id, user_id, len(owned), row_count,
    )


# ----------------------------- tables -----------------------------
def _table_out(table: models.DatabaseTable, row_count: int) -> schemas.TableOut:
    out = schemas.TableOut.model_validate(table)
    out.row_count = row_count
    return out


def list_tables(db: Session, database_id: int, user_id: int) -> List[schemas.TableOut]:
    get_database(db, database_id, user_id, Capability.VIEW)
    rows = row_store(db)
    return [
        _table_out(t, rows.count({"table_id": t.id}))
        for t in table_store(db).filter({"database_id": database_id}, "created_date")
    ]


def create_table(
    db: Session, database_id: int, payload: schemas.TableCreate, user_id: int
) -> schemas.TableOut:
    get_database(db, database_id, user_id, Capability.EDIT)
    fields = payload.model_dump(mode="json")
    fields["database_id"] = database_id
    table = table_store(db).create(fields)
    logger.info("Table %s '%s' created in database %s", table.id, table.name, database_id)
    return _table_out(table, 0)


def update_table(
    db: Session, database_id: int, table_id: int, payload: schemas.TableUpdate, user_id: int
) -> schemas.TableOut:
    get_database(db, database_id, user_id, Capability.EDIT)
    current = _get_table(db, database_id, table_id)
    fields = payload.model_dump(mode="json", exclude_unset=True)
    tables, rows = table_store(db), row_store(db)

    dropped = set()
    if fields.get("columns") is not None:
        kept = {c["name"] for c in fields["columns"]}
        dropped = {c.get("name") for c in (current.columns or [])} - kept

    try:
        # rows may only hold keys that still name a column
        stale = rows.filter({"table_id": table_id}) if dropped else []
        for row in stale:
            data = row.data or {}
            if dropped.intersection(data):
                trimmed = {k: v for k, v in data.items() if k not in dropped}
                rows.update(row.id, {"data": trimmed}, commit=False)
        table = tables.update(table_id, fields, commit=False)
        tables.commit()
    except HubError:
        tables.rollback()
        raise
    if dropped:
        logger.info("Table %s dropped column(s) %s", table_id, ", ".join(sorted(dropped)))
    return _table_out(table, rows.count({"table_id": table_id}))


def delete_table(db: Session, database_id: int, table_id: int, user_id: int) -> None:
    get_database(db, database_id, user_id, Capability.EDIT)
    _get_table(db, database_id, table_id)
    tables, rows = table_store(db), row_store(db)
    try:
        for row in rows.filter({"table_id": table_id}):
            rows.delete(row.id, commit=False)
        tables.delete(table_id, commit=False)
        tables.commit()
    except HubError:
        tables.rollback()
        raise
    logger.info("Table %s deleted from database %s", table_id, database_id)


# ----------------------------- rows -----------------------------
def list_rows(db: Session, database_id: int, table_id: int, user_id: int) -> List[models.DatabaseRow]:
    get_database(db, database_id, user_id, Capability.VIEW)
    _get_table(db, database_id, table_id)
    return row_store(db).filter({"table_id": table_id}, "created_date")


def create_row(
    db: Session, database_id: int, table_id: int, payload: schemas.RowIn, user_id: int
) -> models.DatabaseRow:
    get_database(db, database_id, user_id, Capability.EDIT)
    table = _get_table(db, database_id, table_id)
    _check_row_data(table, payload.data)
    return row_store(db).create({"table_id": table_id, "data": dict(payload.data)})


def update_row(
    db: Session, database_id: int, table_id: int, row_id: int, payload: schemas.RowIn, user_id: int
) -> models.DatabaseRow:
    get_database(db, database_id, user_id, Capability.EDIT)
    table = _get_table(db, database_id, table_id)
    _get_row(db, table_id, row_id)
    _check_row_data(table, payload.data)
    return row_store(db).update(row_id, {"data": dict(payload.data)})


def delete_row(db: Session, database_id: int, table_id: int, row_id: int, user_id: int) -> None:
    get_database(db, database_id, user_id, Capability.EDIT)
    _get_table(db, database_id, table_id)
    _get_row(db, table_id, row_id)
    row_store(db).delete(row_id)
