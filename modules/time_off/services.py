# modules/time_off/services.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from core import aggregates
from core.exceptions import ValidationFailure
from core.filtering import apply_filters, distinct_values
from database.store import EntityStore
from modules.directory.models import Staff

from . import models, schemas

logger = logging.getLogger(__name__)

TIME_OFF_FILTER_FIELDS = {"status": "status", "type": "type", "staff": "staff_id"}


def time_off_store(db: Session) -> EntityStore:
    return EntityStore(db, models.TimeOffRequest)


def _staff_names(staff: Iterable[Staff]) -> Dict[int, str]:
    return {s.id: s.full_name for s in staff}


def to_out(request: models.TimeOffRequest, names: Optional[Dict[int, str]] = None) -> schemas.TimeOffOut:
    out = schemas.TimeOffOut.model_validate(request)
    if names:
        out.staff_name = names.get(request.staff_id)
    return out


def stats_for(requests: List[models.TimeOffRequest]) -> schemas.TimeOffStats:
    counts = aggregates.time_off_status_counts(requests)
    return schemas.TimeOffStats(
        total=counts["total"],
        pending=counts["Pending"],
        approved=counts["Approved"],
        denied=counts["Denied"],
    )


# ----------------------------- CRUD -----------------------------
def create_request(db: Session, payload: schemas.TimeOffCreate) -> models.TimeOffRequest:
    obj = time_off_store(db).create(payload.model_dump())
    logger.info("Time off %s created for staff %s (%s)", obj.id, obj.staff_id, obj.type)
    return obj


def update_request(db: Session, request_id: int, payload: schemas.TimeOffUpdate) -> models.TimeOffRequest:
    store = time_off_store(db)
    current = store.get(request_id)
    data = payload.model_dump(exclude_unset=True)

    start = data.get("start_date", current.start_date)
    end = data.get("end_date", current.end_date)
    if start and end and end < start:
        raise ValidationFailure("end_date must be on or after start_date")

    obj = store.update(request_id, data)
    if "status" in data:
        logger.info("Time off %s status -> %s", request_id, obj.status.value)
    return obj


def set_status(db: Session, request_id: int, status: models.TimeOffStatus) -> models.TimeOffRequest:
    return update_request(db, request_id, schemas.TimeOffUpdate(status=status))


def get_request(db: Session, request_id: int) -> models.TimeOffRequest:
    return time_off_store(db).get(request_id)


def delete_request(db: Session, request_id: int) -> None:
    time_off_store(db).delete(request_id)


# ----------------------------- view -----------------------------
def time_off_list_view(
    db: Session,
    status: Optional[str] = None,
    type_: Optional[str] = None,
    staff: Optional[int] = None,
) -> schemas.TimeOffListView:
    requests = time_off_store(db).list("-created_date")
    names = _staff_names(EntityStore(db, Staff).list())
    filters = {"status": status, "type": type_, "staff": staff}
    items = apply_filters(requests, filters, TIME_OFF_FILTER_FIELDS)
    return schemas.TimeOffListView(
        items=[to_out(r, names) for r in items],
        stats=stats_for(requests),
        filtered=len(items),
        status=status,
        type=type_,
        staff=staff,
        type_options=distinct_values(requests, "type"),
    )
