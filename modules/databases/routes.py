# modules/databases/routes.py
from typing import List

from fastapi import APIRouter, Depends, Request, status as http_status
from sqlalchemy.orm import Session

from database.connection import get_db
from modules.databases import schemas, services
from modules.databases.permissions import DatabasePermissions
from modules.security.deps import get_current_user, get_current_user_id

api_router = APIRouter(prefix="/databases", dependencies=[Depends(get_current_user)])


# ---------- API : Databases ----------
@api_router.get("/", response_model=schemas.DatabaseListView)
def list_databases(
    request: Request, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)
):
    return services.database_list_view(db, uid, request.session)


@api_router.post("/", response_model=schemas.DatabaseCard, status_code=http_status.HTTP_201_CREATED)
def create_database(
    payload: schemas.DatabaseCreate, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)
):
    return services.to_card(services.create_database(db, payload, uid), uid)


@api_router.get("/{database_id}", response_model=schemas.DatabaseDetailView)
def read_database(database_id: int, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)):
    return services.database_detail_view(db, database_id, uid)


@api_router.put("/{database_id}/permissions", response_model=schemas.DatabaseCard)
def update_permissions(
    database_id: int,
    perms: DatabasePermissions,
    db: Session = Depends(get_db),
    uid: int = Depends(get_current_user_id),
):
    return services.to_card(services.update_permissions(db, database_id, perms, uid), uid)


@api_router.post("/{database_id}/open", response_model=schemas.DatabaseCard)
def open_database(
    database_id: int, request: Request, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)
):
    return services.to_card(services.open_database(db, database_id, uid, request.session), uid)


@api_router.post("/{database_id}/close")
def close_database(database_id: int, request: Request):
    services.close_database(database_id, request.session)
    return {"ok": True}


@api_router.delete("/{database_id}", status_code=200)
def delete_database(
    database_id: int, request: Request, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)
):
    services.delete_database(db, database_id, uid, request.session)
    return {"message": "Database deleted successfully"}


# ---------- API : Tables ----------
@api_router.get("/{database_id}/tables/", response_model=List[schemas.TableOut])
def list_tables(database_id: int, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)):
    return services.list_tables(db, database_id, uid)


@api_router.post(
    "/{database_id}/tables/", response_model=schemas.TableOut, status_code=http_status.HTTP_201_CREATED
)
def create_table(
    database_id: int,
    payload: schemas.TableCreate,
    db: Session = Depends(get_db),
    uid: int = Depends(get_current_user_id),
):
    return services.create_table(db, database_id, payload, uid)


@api_router.put("/{database_id}/tables/{table_id}", response_model=schemas.TableOut)
def update_table(
    database_id: int,
    table_id: int,
    payload: schemas.TableUpdate,
    db: Session = Depends(get_db),
    uid: int = Depends(get_current_user_id),
):
    return services.update_table(db, database_id, table_id, payload, uid)


@api_router.delete("/{database_id}/tables/{table_id}", status_code=200)
def delete_table(
    database_id: int, table_id: int, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)
):
    services.delete_table(db, database_id, table_id, uid)
    return {"message": "Table deleted successfully"}


# ---------- API : Rows ----------
@api_router.get("/{database_id}/tables/{table_id}/rows/", response_model=List[schemas.RowOut])
def list_rows(
    database_id: int, table_id: int, db: Session = Depends(get_db), uid: int = Depends(get_current_user_id)
):
    return services.list_rows(db, database_id, table_id, uid)


@api_router.post(
    "/{database_id}/tables/{table_id}/rows/",
    response_model=schemas.RowOut,
    status_code=http_status.HTTP_201_CREATED,
)
def create_row(
    database_id: int,
    table_id: int,
    payload: schemas.RowIn,
    db: Session = Depends(get_db),
    uid: int = Depends(get_current_user_id),
):
    return services.create_row(db, database_id, table_id, payload, uid)


@api_router.put("/{database_id}/tables/{table_id}/rows/{row_id}", response_model=schemas.RowOut)
def update_row(
    database_id: int,
    table_id: int,
    row_id: int,
    payload: schemas.RowIn,
    db: Session = Depends(get_db),
    uid: int = Depends(get_current_user_id),
):
    return services.update_row(db, database_id, table_id, row_id, payload, uid)


@api_router.delete("/{database_id}/tables/{table_id}/rows/{row_id}", status_code=200)
def delete_row(
    database_id: int,
    table_id: int,
    row_id: int,
    db: Session = Depends(get_db),
    uid: int = Depends(get_current_user_id),
):
    services.delete_row(db, database_id, table_id, row_id, uid)
    return {"message": "Row deleted successfully"}
