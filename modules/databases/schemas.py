# modules/databases/schemas.py
from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.databases.permissions import DatabasePermissions


# ---------- Databases ----------
class DatabaseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class DatabaseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    created_by: int
    permissions: DatabasePermissions
    created_date: Optional[datetime] = None


class DatabaseCard(DatabaseOut):
    can_view: bool = False
    can_edit: bool = False
    can_delete: bool = False


class DatabaseStats(BaseModel):
    total: int = 0
    can_view: int = 0
    can_edit: int = 0
    can_delete: int = 0


class DatabaseListView(BaseModel):
    items: List[DatabaseCard]
    stats: DatabaseStats
    open_database_id: Optional[int] = None


# ---------- Tables ----------
class ColumnType(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


class ColumnDef(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: ColumnType = ColumnType.TEXT


def _unique_column_names(columns: Optional[List[ColumnDef]]) -> Optional[List[ColumnDef]]:
    if columns is None:
        return None
    seen = set()
    for col in columns:
        if col.name in seen:
            raise ValueError(f"duplicate column name '{col.name}'")
        seen.add(col.name)
    return columns


class TableCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    columns: List[ColumnDef] = Field(default_factory=list)

    @field_validator("columns")
    @classmethod
    def check_columns(cls, v):
        return _unique_column_names(v)


class TableUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    columns: Optional[List[ColumnDef]] = None

    @field_validator("columns")
    @classmethod
    def check_columns(cls, v):
        return _unique_column_names(v)


class TableOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    database_id: int
    name: str
    description: Optional[str] = None
    columns: List[ColumnDef] = Field(default_factory=list)
    created_date: Optional[datetime] = None
    row_count: int = 0


# ---------- Rows ----------
class RowIn(BaseModel):
    data: Dict[str, Any] = Field(default_factory=dict)


class RowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    table_id: int
    data: Dict[str, Any] = Field(default_factory=dict)
    created_date: Optional[datetime] = None


class DatabaseDetailView(BaseModel):
    database: DatabaseCard
    tables: List[TableOut]
