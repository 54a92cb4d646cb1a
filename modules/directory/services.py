# modules/directory/services.py
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from core import aggregates
from core.exceptions import ConflictError
from core.filtering import distinct_values, filter_and_search, search
from database.store import EntityStore

from . import models, schemas

logger = logging.getLogger(__name__)

STAFF_SEARCH_FIELDS = ("first_name", "last_name", "email", "department", "employee_id")
STAFF_FILTER_FIELDS = {"department": "department", "status": "status", "role": "role_id"}
DEPARTMENT_SEARCH_FIELDS = ("name", "description", "location")

# -------------------------------------------------
# Helpers
# -------------------------------------------------

def staff_store(db: Session) -> EntityStore:
    return EntityStore(db, models.Staff)


def department_store(db: Session) -> EntityStore:
    return EntityStore(db, models.Department)


def role_store(db: Session) -> EntityStore:
    return EntityStore(db, models.Role)


def _ensure_unique(store: EntityStore, field: str, value: Any, exclude_id: Optional[int] = None):
    if value is None:
        return
    for obj in store.filter({field: value}):
        if obj.id != exclude_id:
            raise ConflictError(f"{store.entity} {field} '{value}' already exists")

# -------------------------------------------------
# Staff Services
# -------------------------------------------------

def create_staff(db: Session, staff: schemas.StaffCreate) -> models.Staff:
    store = staff_store(db)
    _ensure_unique(store, "employee_id", staff.employee_id)
    _ensure_unique(store, "email", staff.email)
    obj = store.create(staff.model_dump())
    logger.info("Staff %s (%s) created", obj.id, obj.employee_id)
    return obj


def update_staff(db: Session, staff_id: int, staff_update: schemas.StaffUpdate) -> models.Staff:
    store = staff_store(db)
    store.get(staff_id)
    data = staff_update.model_dump(exclude_unset=True)
    if "employee_id" in data:
        _ensure_unique(store, "employee_id", data["employee_id"], exclude_id=staff_id)
    if "email" in data:
        _ensure_unique(store, "email", data["email"], exclude_id=staff_id)
    return store.update(staff_id, data)


def delete_staff(db: Session, staff_id: int) -> None:
    # time-off requests and department heads pointing here are left dangling
    staff_store(db).delete(staff_id)
    logger.info("Staff %s deleted", staff_id)


def get_staff(db: Session, staff_id: int) -> models.Staff:
    return staff_store(db).get(staff_id)


def staff_list_view(
    db: Session,
    search_term: Optional[str] = None,
    department: Optional[str] = None,
    status: Optional[str] = None,
    role: Optional[int] = None,
) -> schemas.StaffListView:
    staff = staff_store(db).list("-created_date")
    roles = role_store(db).list("level")
    filters = {"department": department, "status": status, "role": role}
    items = filter_and_search(staff, search_term, STAFF_SEARCH_FIELDS, filters, STAFF_FILTER_FIELDS)
    return schemas.StaffListView(
        items=[schemas.StaffOut.model_validate(s) for s in items],
        total=len(staff),
        filtered=len(items),
        search=search_term,
        department=department,
        status=status,
        role=role,
        department_options=distinct_values(staff, "department"),
        roles=[schemas.RoleOut.model_validate(r) for r in roles],
    )

# -------------------------------------------------
# Department Services
# -------------------------------------------------

def create_department(db: Session, department: schemas.DepartmentCreate) -> models.Department:
    store = department_store(db)
    _ensure_unique(store, "name", department.name)
    return store.create(department.model_dump())


def update_department(
    db: Session, department_id: int, department_update: schemas.DepartmentUpdate
) -> schemas.DepartmentUpdateOut:
    store = department_store(db)
    current = store.get(department_id)
    old_name = current.name
    data = department_update.model_dump(exclude_unset=True)

    if data.get("name") and data["name"] != old_name:
        _ensure_unique(store, "name", data["name"], exclude_id=department_id)

    obj = store.update(department_id, data)

    stale = 0
    if obj.name != old_name:
        # staff link to departments by name, a rename leaves them behind
        stale = staff_store(db).count({"department": old_name})
        if stale:
            logger.warning(
                "Department %s renamed %r -> %r; %d staff still reference the old name",
                department_id, old_name, obj.name, stale,
            )
    out = schemas.DepartmentUpdateOut.model_validate(obj)
    out.stale_staff_count = stale
    return out


def delete_department(db: Session, department_id: int) -> None:
    # no cascade: staff keep the department name
    department_store(db).delete(department_id)
    logger.info("Department %s deleted", department_id)


def _department_stats(department, staff) -> schemas.DepartmentStats:
    return schemas.DepartmentStats.model_validate(
        aggregates.department_stats(department, staff), from_attributes=True
    )


def department_list_view(db: Session, search_term: Optional[str] = None) -> schemas.DepartmentListView:
    departments = department_store(db).list("-created_date")
    staff = staff_store(db).list()
    shown = search(departments, search_term, DEPARTMENT_SEARCH_FIELDS)
    return schemas.DepartmentListView(
        items=[
            schemas.DepartmentCard(
                department=schemas.DepartmentOut.model_validate(d),
                stats=_department_stats(d, staff),
            )
            for d in shown
        ],
        summary=schemas.DepartmentSummary(**aggregates.department_summary(departments, staff)),
        search=search_term,
    )


def department_detail_view(db: Session, department_id: int) -> schemas.DepartmentDetailView:
    department = department_store(db).get(department_id)
    staff = staff_store(db).list()
    members = aggregates.department_members(department, staff)
    return schemas.DepartmentDetailView(
        department=schemas.DepartmentOut.model_validate(department),
        stats=_department_stats(department, staff),
        staff=[schemas.StaffOut.model_validate(s) for s in members],
    )

# -------------------------------------------------
# Role Services
# -------------------------------------------------

def create_role(db: Session, role: schemas.RoleCreate) -> models.Role:
    store = role_store(db)
    _ensure_unique(store, "name", role.name)
    return store.create(role.model_dump())


def update_role(db: Session, role_id: int, role_update: schemas.RoleUpdate) -> models.Role:
    store = role_store(db)
    store.get(role_id)
    data = role_update.model_dump(exclude_unset=True)
    if data.get("name"):
        _ensure_unique(store, "name", data["name"], exclude_id=role_id)
    return store.update(role_id, data)


def delete_role(db: Session, role_id: int) -> None:
    # staff.role_id is left as-is
    role_store(db).delete(role_id)
    logger.info("Role %s deleted", role_id)


def role_list_view(db: Session) -> schemas.RoleListView:
    roles = role_store(db).list("level")
    return schemas.RoleListView(
        items=[schemas.RoleOut.model_validate(r) for r in roles],
        total=len(roles),
        total_permissions=aggregates.total_permissions(roles),
        max_level=aggregates.max_role_level(roles),
    )

