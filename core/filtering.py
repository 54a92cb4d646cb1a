# core/filtering.py
"""
Client-side narrowing of fetched collections.

Filters hold either ``"all"`` (or ``None``) meaning no constraint, or an exact
value. Search is a case-insensitive substring match over a fixed field list.
Both keep the input order and compose with AND.
"""
from __future__ import annotations

import enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, TypeVar

from core.exceptions import ValidationFailure

T = TypeVar("T")

ALL = "all"


def field_value(item: Any, name: str) -> Any:
    """read a field from an ORM object, a pydantic model or a plain dict"""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def plain_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    return value


def is_unconstrained(value: Any) -> bool:
    return value is None or value == ALL


def apply_filters(
    items: Iterable[T],
    filters: Optional[Mapping[str, Any]],
    field_map: Optional[Mapping[str, str]] = None,
) -> List[T]:
    """
    Keep items where every constrained filter's field equals the filter value.
    ``field_map`` translates filter names to record fields (e.g. role -> role_id).
    """
    field_map = field_map or {}
    active = [
        (field_map.get(name, name), plain_value(value))
        for name, value in (filters or {}).items()
        if not is_unconstrained(value)
    ]
    if not active:
        return list(items)
    return [
        item for item in items
        if all(plain_value(field_value(item, field)) == value for field, value in active)
    ]


def search(items: Iterable[T], term: Optional[str], fields: Sequence[str]) -> List[T]:
    needle = (term or "").strip().lower()
    if not needle:
        return list(items)

    def _matches(item) -> bool:
        for name in fields:
            value = field_value(item, name)
            if value is None:
                continue
            if needle in str(plain_value(value)).lower():
                return True
        return False

    return [item for item in items if _matches(item)]


def filter_and_search(
    items: Iterable[T],
    term: Optional[str] = None,
    search_fields: Sequence[str] = (),
    filters: Optional[Mapping[str, Any]] = None,
    field_map: Optional[Mapping[str, str]] = None,
) -> List[T]:
    return apply_filters(search(items, term, search_fields), filters, field_map)


def distinct_values(items: Iterable[Any], name: str) -> List[Any]:
    """sorted distinct non-empty values of a field (filter dropdown options)"""
    seen = {plain_value(field_value(i, name)) for i in items}
    return sorted(v for v in seen if v not in (None, ""))


def parse_filter(value: Optional[str]) -> Optional[str]:
    """query-string filter -> None when blank or "all" """
    if value is None:
        return None
    s = value.strip()
    return None if not s or is_unconstrained(s) else s


def parse_id_filter(value: Optional[str], name: str) -> Optional[int]:
    s = parse_filter(value)
    if s is None:
        return None
    try:
        return int(s)
    except ValueError:
        raise ValidationFailure(f"filter '{name}' must be an id or '{ALL}'") from None
