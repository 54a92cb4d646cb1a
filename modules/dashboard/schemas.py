# modules/dashboard/schemas.py
from typing import List

from pydantic import BaseModel, Field

from modules.directory.schemas import StaffOut
from modules.time_off.schemas import TimeOffOut


class DashboardStats(BaseModel):
    total_staff: int = 0
    active_staff: int = 0
    pending_requests: int = 0
    recent_hires: int = 0


class DepartmentShare(BaseModel):
    name: str
    count: int
    percentage: float


class DashboardView(BaseModel):
    stats: DashboardStats
    recent_hires: List[StaffOut] = Field(default_factory=list)
    pending_time_off: List[TimeOffOut] = Field(default_factory=list)
    departments: List[DepartmentShare] = Field(default_factory=list)
