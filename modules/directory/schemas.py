# modules/directory/schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.directory.models import DepartmentStatus, StaffStatus

# -------------------------------------------------
# Role Schemas
# -------------------------------------------------


def _unique_permissions(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    out: List[str] = []
    for v in values:
        code = (v or "").strip()
        if code and code not in out:
            out.append(code)
    return out


class RoleBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = None
    level: int = Field(1, ge=1, description="hierarchy rank")
    permissions: List[str] = Field(default_factory=list)

    @field_validator("permissions")
    @classmethod
    def dedupe_permissions(cls, v):
        return _unique_permissions(v)


class RoleCreate(RoleBase):
    pass


class RoleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = None
    level: Optional[int] = Field(None, ge=1)
    permissions: Optional[List[str]] = None

    @field_validator("permissions")
    @classmethod
    def dedupe_permissions(cls, v):
        return _unique_permissions(v)


class RoleOut(RoleBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_date: Optional[datetime] = None


class RoleListView(BaseModel):
    items: List[RoleOut]
    total: int
    total_permissions: int
    max_level: int


# -------------------------------------------------
# Staff Schemas
# -------------------------------------------------

class StaffBase(BaseModel):
    employee_id: str = Field(..., min_length=1, max_length=50)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, pattern=r'^\+?[0-9\- ()]{7,20}$')
    position: Optional[str] = None
    department: Optional[str] = Field(None, description="department name")
    role_id: Optional[int] = Field(None, gt=0)
    status: StaffStatus = StaffStatus.ACTIVE
    hire_date: Optional[date] = None


class StaffCreate(StaffBase):
    pass


class StaffUpdate(BaseModel):
    employee_id: Optional[str] = Field(None, min_length=1, max_length=50)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=r'^\+?[0-9\- ()]{7,20}$')
    position: Optional[str] = None
    department: Optional[str] = None
    role_id: Optional[int] = Field(None, gt=0)
    status: Optional[StaffStatus] = None
    hire_date: Optional[date] = None


class StaffOut(BaseModel):
    """
    Read model, lenient on purpose: stored email is a plain str and
    department / role_id may point at records that no longer exist.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: str
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    email: str
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    role_id: Optional[int] = None
    status: StaffStatus
    hire_date: Optional[date] = None
    created_date: Optional[datetime] = None


class StaffListView(BaseModel):
    items: List[StaffOut]
    total: int
    filtered: int
    search: Optional[str] = None
    department: Optional[str] = None
    status: Optional[str] = None
    role: Optional[int] = None
    department_options: List[str] = Field(default_factory=list)
    roles: List[RoleOut] = Field(default_factory=list)


# -------------------------------------------------
# Department Schemas
# -------------------------------------------------

class DepartmentBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = None
    location: Optional[str] = None
    status: DepartmentStatus = DepartmentStatus.ACTIVE
    budget: Optional[float] = Field(None, ge=0)
    head_of_department: Optional[int] = Field(None, gt=0, description="Staff id")


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = None
    location: Optional[str] = None
    status: Optional[DepartmentStatus] = None
    budget: Optional[float] = Field(None, ge=0)
    head_of_department: Optional[int] = Field(None, gt=0)


class DepartmentOut(DepartmentBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_date: Optional[datetime] = None


class DepartmentUpdateOut(DepartmentOut):
    # staff still carrying the old name after a rename
    stale_staff_count: int = 0


class DepartmentStats(BaseModel):
    total_staff: int = 0
    active_staff: int = 0
    head_of_department: Optional[StaffOut] = None


class DepartmentCard(BaseModel):
    department: DepartmentOut
    stats: DepartmentStats


class DepartmentSummary(BaseModel):
    total: int = 0
    active: int = 0
    total_staff: int = 0
    total_budget: float = 0.0


class DepartmentListView(BaseModel):
    items: List[DepartmentCard]
    summary: DepartmentSummary
    search: Optional[str] = None


class DepartmentDetailView(BaseModel):
    department: DepartmentOut
    stats: DepartmentStats
    staff: List[StaffOut]
