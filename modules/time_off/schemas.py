# modules/time_off/schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from modules.time_off.models import TimeOffStatus


class TimeOffBase(BaseModel):
    staff_id: int = Field(..., gt=0)
    type: str = Field(..., min_length=1, max_length=50, description="e.g. Vacation, Sick Leave")
    start_date: date
    end_date: date
    reason: Optional[str] = None
    status: TimeOffStatus = TimeOffStatus.PENDING

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class TimeOffCreate(TimeOffBase):
    pass


class TimeOffUpdate(BaseModel):
    staff_id: Optional[int] = Field(None, gt=0)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None
    status: Optional[TimeOffStatus] = None


class TimeOffOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    staff_id: int
    type: str
    status: TimeOffStatus
    start_date: date
    end_date: date
    days: int = 0
    reason: Optional[str] = None
    created_date: Optional[datetime] = None
    # filled in by the list view when the staff record still exists
    staff_name: Optional[str] = None


class TimeOffStats(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    denied: int = 0


class TimeOffListView(BaseModel):
    items: List[TimeOffOut]
    stats: TimeOffStats
    filtered: int
    status: Optional[str] = None
    type: Optional[str] = None
    staff: Optional[int] = None
    type_options: List[str] = Field(default_factory=list)
