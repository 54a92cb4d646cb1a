# modules/time_off/routes.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status as http_status
from sqlalchemy.orm import Session

from core.filtering import ALL, parse_filter, parse_id_filter
from database.connection import get_db
from modules.security.deps import get_current_user
from modules.time_off import schemas, services
from modules.time_off.models import TimeOffStatus

api_router = APIRouter(prefix="/time-off", dependencies=[Depends(get_current_user)])


@api_router.get("/", response_model=schemas.TimeOffListView)
def list_requests(
    status: Optional[str] = ALL,
    type: Optional[str] = ALL,
    staff: Optional[str] = ALL,
    db: Session = Depends(get_db),
):
    return services.time_off_list_view(
        db,
        status=parse_filter(status),
        type_=parse_filter(type),
        staff=parse_id_filter(staff, "staff"),
    )


@api_router.post("/", response_model=schemas.TimeOffOut, status_code=http_status.HTTP_201_CREATED)
def create_request(payload: schemas.TimeOffCreate, db: Session = Depends(get_db)):
    return services.to_out(services.create_request(db, payload))


@api_router.get("/{request_id}", response_model=schemas.TimeOffOut)
def get_request(request_id: int, db: Session = Depends(get_db)):
    return services.to_out(services.get_request(db, request_id))


@api_router.put("/{request_id}", response_model=schemas.TimeOffOut)
def update_request(request_id: int, payload: schemas.TimeOffUpdate, db: Session = Depends(get_db)):
    return services.to_out(services.update_request(db, request_id, payload))


@api_router.post("/{request_id}/approve", response_model=schemas.TimeOffOut)
def approve_request(request_id: int, db: Session = Depends(get_db)):
    return services.to_out(services.set_status(db, request_id, TimeOffStatus.APPROVED))


@api_router.post("/{request_id}/deny", response_model=schemas.TimeOffOut)
def deny_request(request_id: int, db: Session = Depends(get_db)):
    return services.to_out(services.set_status(db, request_id, TimeOffStatus.DENIED))


@api_router.delete("/{request_id}", status_code=200)
def delete_request(request_id: int, db: Session = Depends(get_db)):
    services.delete_request(db, request_id)
    return {"message": "Time off request deleted successfully"}
