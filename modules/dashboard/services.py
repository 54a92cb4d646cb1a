# modules/dashboard/services.py
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from config.settings import settings
from core import aggregates
from modules.directory.schemas import StaffOut
from modules.directory.services import staff_store
from modules.time_off.models import TimeOffStatus
from modules.time_off.services import time_off_store, to_out

from . import schemas


def dashboard_view(db: Session, today: Optional[date] = None) -> schemas.DashboardView:
    """
    Home page numbers, recomputed from the store on every load.
    """
    today = today or date.today()
    days, limit = settings.RECENT_HIRE_DAYS, settings.RECENT_LIST_LIMIT

    staff = staff_store(db).list("-created_date")
    pending = time_off_store(db).filter({"status": TimeOffStatus.PENDING}, "-created_date")
    names = {s.id: s.full_name for s in staff}

    return schemas.DashboardView(
        stats=schemas.DashboardStats(
            total_staff=len(staff),
            active_staff=aggregates.active_count(staff),
            pending_requests=len(pending),
            recent_hires=aggregates.recent_hire_count(staff, today, days),
        ),
        recent_hires=[
            StaffOut.model_validate(s)
            for s in aggregates.recent_hires(staff, today, days, limit)
        ],
        pending_time_off=[to_out(r, names) for r in pending[:limit]],
        departments=[
            schemas.DepartmentShare(**d) for d in aggregates.department_distribution(staff)
        ],
    )
