import pytest

from core.exceptions import ValidationFailure
from core.filtering import (
    apply_filters,
    distinct_values,
    filter_and_search,
    parse_filter,
    parse_id_filter,
    search,
)
from modules.directory.models import StaffStatus
from modules.directory.services import STAFF_FILTER_FIELDS, STAFF_SEARCH_FIELDS


def _ten_staff():
    rows = [
        ("Alice", "Smith", "Engineering", StaffStatus.ACTIVE, 1),
        ("Bob", "Jones", "Sales", StaffStatus.ACTIVE, 2),
        ("Carol", "Smithers", "Engineering", StaffStatus.INACTIVE, 1),
        ("Dan", "Brown", "Marketing", StaffStatus.ACTIVE, 3),
        ("Eve", "Smith", "Sales", StaffStatus.ACTIVE, 2),
        ("Frank", "White", "Engineering", StaffStatus.ON_LEAVE, 1),
        ("Grace", "Green", "Sales", StaffStatus.TERMINATED, 2),
        ("Heidi", "Black", "Marketing", StaffStatus.ACTIVE, 3),
        ("Ivan", "Smith", "Marketing", StaffStatus.INACTIVE, 3),
        ("Judy", "Gray", "Engineering", StaffStatus.ACTIVE, 1),
    ]
    return [
        {
            "id": i,
            "employee_id": f"EMP{i:03d}",
            "first_name": first,
            "last_name": last,
            "email": f"{first.lower()}@company.com",
            "department": dept,
            "status": status,
            "role_id": role,
        }
        for i, (first, last, dept, status, role) in enumerate(rows, start=1)
    ]


def test_active_filter_with_search_returns_matches_in_order():
    staff = _ten_staff()
    result = filter_and_search(
        staff, "smith", STAFF_SEARCH_FIELDS, {"status": "Active"}, STAFF_FILTER_FIELDS
    )
    assert [s["first_name"] for s in result] == ["Alice", "Eve"]


def test_all_and_none_mean_no_constraint():
    staff = _ten_staff()
    assert apply_filters(staff, {"department": "all", "status": None}) == staff
    assert apply_filters(staff, {}) == staff


def test_mapped_filter_field():
    staff = _ten_staff()
    result = apply_filters(staff, {"role": 3}, STAFF_FILTER_FIELDS)
    assert [s["id"] for s in result] == [4, 8, 9]


def test_enum_filter_value_compares_by_value():
    staff = _ten_staff()
    assert len(apply_filters(staff, {"status": StaffStatus.ON_LEAVE})) == 1
    assert len(apply_filters(staff, {"status": "On Leave"})) == 1


def test_blank_search_short_circuits():
    staff = _ten_staff()
    assert search(staff, "   ", STAFF_SEARCH_FIELDS) == staff
    assert search(staff, None, STAFF_SEARCH_FIELDS) == staff


def test_search_is_case_insensitive_over_fields():
    staff = _ten_staff()
    assert [s["id"] for s in search(staff, "MARKET", STAFF_SEARCH_FIELDS)] == [4, 8, 9]
    assert [s["id"] for s in search(staff, "emp010", STAFF_SEARCH_FIELDS)] == [10]


def test_distinct_values():
    assert distinct_values(_ten_staff(), "department") == ["Engineering", "Marketing", "Sales"]


def test_parse_filters():
    assert parse_filter(None) is None
    assert parse_filter("  ") is None
    assert parse_filter("all") is None
    assert parse_filter(" Sales ") == "Sales"
    assert parse_id_filter("all", "role") is None
    assert parse_id_filter("12", "role") == 12
    with pytest.raises(ValidationFailure):
        parse_id_filter("abc", "role")
