# core/aggregates.py
"""Pure reductions behind the dashboard and page statistics.

Everything here takes already-fetched collections (ORM rows, pydantic models
or dicts) and recomputes from scratch; nothing is cached between loads.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core.filtering import plain_value, field_value

ACTIVE = "Active"
UNASSIGNED_DEPARTMENT = "Unassigned"
TIME_OFF_STATUSES = ("Pending", "Approved", "Denied")


def _as_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def count_where(items: Iterable[Any], name: str, value: Any) -> int:
    return sum(1 for i in items if plain_value(field_value(i, name)) == value)


def active_count(items: Iterable[Any]) -> int:
    return count_where(items, "status", ACTIVE)


# ---------- staff ----------
def _recent_cutoff(today: Optional[date], days: int) -> date:
    return (today or date.today()) - timedelta(days=days)


def recent_hire_count(staff: Iterable[Any], today: Optional[date] = None, days: int = 30) -> int:
    cutoff = _recent_cutoff(today, days)
    return sum(
        1 for s in staff
        if (hired := _as_date(field_value(s, "hire_date"))) is not None and hired > cutoff
    )


def recent_hires(
    staff: Iterable[Any],
    today: Optional[date] = None,
    days: int = 30,
    limit: int = 5,
) -> List[Any]:
    """staff hired within the last ``days`` days, newest hire first, at most ``limit``"""
    cutoff = _recent_cutoff(today, days)
    hired = [
        (d, s) for s in staff
        if (d := _as_date(field_value(s, "hire_date"))) is not None and d > cutoff
    ]
    # sort is stable, equal hire dates keep their fetch order
    hired.sort(key=lambda pair: pair[0], reverse=True)
    return [s for _, s in hired[:limit]]


def department_distribution(staff: Sequence[Any]) -> List[Dict[str, Any]]:
    """
    Group staff by department name, in first-seen order.
    percentage = count / total * 100, one decimal; empty input -> [].
    """
    total = len(staff)
    if total == 0:
        return []
    counts: Dict[str, int] = {}
    for s in staff:
        name = field_value(s, "department") or UNASSIGNED_DEPARTMENT
        counts[name] = counts.get(name, 0) + 1
    return [
        {"name": name, "count": count, "percentage": round(count / total * 100, 1)}
        for name, count in counts.items()
    ]


# ---------- time off ----------
def time_off_status_counts(requests: Sequence[Any]) -> Dict[str, int]:
    counts = {"total": len(requests)}
    for status in TIME_OFF_STATUSES:
        counts[status] = count_where(requests, "status", status)
    return counts


# ---------- roles ----------
def max_role_level(roles: Iterable[Any]) -> int:
    # a role without a level counts as level 1
    return max((field_value(r, "level") or 1 for r in roles), default=0)


def total_permissions(roles: Iterable[Any]) -> int:
    return sum(len(field_value(r, "permissions") or []) for r in roles)


# ---------- departments ----------
def department_members(department: Any, staff: Iterable[Any]) -> List[Any]:
    name = field_value(department, "name")
    return [s for s in staff if field_value(s, "department") == name]


def department_stats(department: Any, staff: Sequence[Any]) -> Dict[str, Any]:
    members = department_members(department, staff)
    head_id = field_value(department, "head_of_department")
    head = None
    if head_id is not None:
        head = next((s for s in staff if field_value(s, "id") == head_id), None)
    return {
        "total_staff": len(members),
        "active_staff": active_count(members),
        "head_of_department": head,
    }


def department_summary(departments: Sequence[Any], staff: Sequence[Any]) -> Dict[str, Any]:
    return {
        "total": len(departments),
        "active": active_count(departments),
        "total_staff": len(staff),
        "total_budget": float(sum(field_value(d, "budget") or 0 for d in departments)),
    }
