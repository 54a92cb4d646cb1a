# modules/databases/permissions.py
"""
Per-database capabilities.

A user holds a capability on a database iff they created it or their id is in
that capability's set. Owner access is implicit and cannot be revoked through
the sets.
"""
from __future__ import annotations

import enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from core.exceptions import PermissionDenied
from core.filtering import field_value


class Capability(str, enum.Enum):
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"


class DatabasePermissions(BaseModel):
    """three ordered sets of user ids, one per capability"""
    view: List[int] = Field(default_factory=list)
    edit: List[int] = Field(default_factory=list)
    delete: List[int] = Field(default_factory=list)

    @field_validator("view", "edit", "delete", mode="before")
    @classmethod
    def unique_ids(cls, v):
        if v is None:
            return []
        out = []
        for uid in v:
            if uid not in out:
                out.append(uid)
        return out

    def ids_for(self, capability: Union[Capability, str]) -> List[int]:
        return getattr(self, Capability(capability).value)

    @classmethod
    def owner_only(cls, user_id: int) -> "DatabasePermissions":
        return cls(view=[user_id], edit=[user_id], delete=[user_id])


def has_permission(database: Any, capability: Union[Capability, str], user_id: Optional[int]) -> bool:
    """works on ORM records, pydantic models and plain dicts"""
    if user_id is None:
        return False
    if field_value(database, "created_by") == user_id:
        return True
    perms = field_value(database, "permissions")
    if perms is None:
        return False
    if not isinstance(perms, DatabasePermissions):
        perms = DatabasePermissions.model_validate(perms)
    return user_id in perms.ids_for(capability)


def require_permission(database: Any, capability: Union[Capability, str], user_id: Optional[int]) -> None:
    if not has_permission(database, capability, user_id):
        cap = Capability(capability).value
        raise PermissionDenied(f"User {user_id} may not {cap} database {field_value(database, 'id')}")
