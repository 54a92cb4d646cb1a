from datetime import date

import pytest

from core.exceptions import ConflictError, NotFoundError, ValidationFailure
from database.store import EntityStore
from modules.directory.models import Role, Staff


def _staff(n, **extra):
    fields = {
        "employee_id": f"EMP{n:03d}",
        "first_name": f"First{n}",
        "last_name": f"Last{n}",
        "email": f"staff{n}@company.com",
    }
    fields.update(extra)
    return fields


def test_create_assigns_id_and_dates(db):
    store = EntityStore(db, Staff)
    obj = store.create(_staff(1))
    assert obj.id is not None
    assert obj.created_date is not None
    assert obj.status == "Active"


def test_list_sorting(db):
    store = EntityStore(db, Role)
    store.create({"name": "Lead", "level": 3})
    store.create({"name": "Junior", "level": 1})
    store.create({"name": "Senior", "level": 2})
    assert [r.name for r in store.list("level")] == ["Junior", "Senior", "Lead"]
    assert [r.name for r in store.list("-level")] == ["Lead", "Senior", "Junior"]
    assert [r.name for r in store.list()] == ["Lead", "Junior", "Senior"]


def test_filter_by_equality(db):
    store = EntityStore(db, Staff)
    store.create(_staff(1, department="Sales"))
    store.create(_staff(2, department="Engineering"))
    store.create(_staff(3, department="Sales", hire_date=date(2026, 1, 5)))
    assert [s.employee_id for s in store.filter({"department": "Sales"})] == ["EMP001", "EMP003"]
    assert store.count({"department": "Sales"}) == 2


def test_unknown_fields_are_rejected(db):
    store = EntityStore(db, Staff)
    with pytest.raises(ValidationFailure):
        store.list("salary")
    with pytest.raises(ValidationFailure):
        store.filter({"salary": 1})
    with pytest.raises(ValidationFailure):
        store.create(_staff(1, salary=100))
    with pytest.raises(ValidationFailure):
        store.create(_staff(1, id=55))


def test_missing_required_field(db):
    with pytest.raises(ValidationFailure):
        EntityStore(db, Staff).create({"employee_id": "EMP001", "first_name": "A"})


def test_update_and_delete(db):
    store = EntityStore(db, Staff)
    obj = store.create(_staff(1))
    store.update(obj.id, {"position": "Engineer"})
    assert store.get(obj.id).position == "Engineer"
    with pytest.raises(ValidationFailure):
        store.update(obj.id, {"email": None})

    store.delete(obj.id)
    assert store.find(obj.id) is None
    with pytest.raises(NotFoundError):
        store.delete(obj.id)
    with pytest.raises(NotFoundError):
        store.update(obj.id, {"position": "x"})


def test_rejected_update_leaves_record_untouched(db):
    store = EntityStore(db, Staff)
    obj = store.create(_staff(1))
    with pytest.raises(ValidationFailure):
        store.update(obj.id, {"position": "Engineer", "email": None})
    assert obj not in db.dirty
    assert store.get(obj.id).position is None


def test_unique_violation_maps_to_conflict(db):
    store = EntityStore(db, Staff)
    store.create(_staff(1))
    with pytest.raises(ConflictError):
        store.create(_staff(2, email="staff1@company.com"))
    # session is usable after the rollback
    assert store.count() == 1
