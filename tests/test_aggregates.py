from datetime import date, timedelta

from core import aggregates

TODAY = date(2026, 3, 31)


def _staff(i, department="Engineering", status="Active", hired=None):
    return {"id": i, "department": department, "status": status, "hire_date": hired}


def test_active_count():
    staff = [_staff(1), _staff(2, status="Inactive"), _staff(3, status="On Leave"), _staff(4)]
    assert aggregates.active_count(staff) == 2


def test_recent_hires_window_and_order():
    staff = [
        _staff(1, hired=TODAY - timedelta(days=40)),
        _staff(2, hired=TODAY - timedelta(days=3)),
        _staff(3, hired=TODAY - timedelta(days=30)),  # on the cutoff, excluded
        _staff(4, hired=TODAY - timedelta(days=10)),
        _staff(5),
        _staff(6, hired=TODAY - timedelta(days=1)),
    ]
    hires = aggregates.recent_hires(staff, TODAY, days=30, limit=5)
    assert [s["id"] for s in hires] == [6, 2, 4]
    assert aggregates.recent_hire_count(staff, TODAY, days=30) == 3


def test_recent_hires_limit():
    staff = [_staff(i, hired=TODAY - timedelta(days=i)) for i in range(1, 9)]
    hires = aggregates.recent_hires(staff, TODAY, days=30, limit=5)
    assert [s["id"] for s in hires] == [1, 2, 3, 4, 5]
    assert aggregates.recent_hire_count(staff, TODAY, days=30) == 8


def test_department_distribution():
    staff = [
        _staff(1, "Engineering"),
        _staff(2, "Sales"),
        _staff(3, "Engineering"),
        _staff(4, None),
        _staff(5, "Sales"),
        _staff(6, "Engineering"),
    ]
    dist = aggregates.department_distribution(staff)
    assert dist == [
        {"name": "Engineering", "count": 3, "percentage": 50.0},
        {"name": "Sales", "count": 2, "percentage": 33.3},
        {"name": "Unassigned", "count": 1, "percentage": 16.7},
    ]
    assert abs(sum(d["percentage"] for d in dist) - 100.0) < 0.2


def test_department_distribution_empty():
    assert aggregates.department_distribution([]) == []


def test_time_off_status_counts():
    requests = [{"status": s} for s in ("Pending", "Approved", "Pending", "Denied", "Pending")]
    assert aggregates.time_off_status_counts(requests) == {
        "total": 5, "Pending": 3, "Approved": 1, "Denied": 1,
    }
    assert aggregates.time_off_status_counts([]) == {
        "total": 0, "Pending": 0, "Approved": 0, "Denied": 0,
    }


def test_role_aggregates():
    assert aggregates.max_role_level([]) == 0
    roles = [
        {"level": 2, "permissions": ["a", "b"]},
        {"level": 5, "permissions": ["c"]},
        {"level": None, "permissions": None},
    ]
    assert aggregates.max_role_level(roles) == 5
    assert aggregates.max_role_level([{"level": None}]) == 1
    assert aggregates.total_permissions(roles) == 3


def test_department_stats_and_summary():
    departments = [
        {"id": 1, "name": "Engineering", "status": "Active", "budget": 1000.0, "head_of_department": 3},
        {"id": 2, "name": "Sales", "status": "Inactive", "budget": None, "head_of_department": 99},
    ]
    staff = [
        _staff(1, "Engineering"),
        _staff(2, "Engineering", status="Terminated"),
        _staff(3, "Engineering"),
        _staff(4, "Sales"),
    ]
    stats = aggregates.department_stats(departments[0], staff)
    assert stats["total_staff"] == 3
    assert stats["active_staff"] == 2
    assert stats["head_of_department"]["id"] == 3

    # dangling head reference
    assert aggregates.department_stats(departments[1], staff)["head_of_department"] is None

    assert aggregates.department_summary(departments, staff) == {
        "total": 2, "active": 1, "total_staff": 4, "total_budget": 1000.0,
    }
