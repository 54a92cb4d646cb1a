from types import SimpleNamespace

import pytest

from core.exceptions import PermissionDenied
from modules.databases.permissions import (
    Capability,
    DatabasePermissions,
    has_permission,
    require_permission,
)


def _db(created_by=1, view=(), edit=(), delete=()):
    return SimpleNamespace(
        id=7,
        created_by=created_by,
        permissions=DatabasePermissions(view=list(view), edit=list(edit), delete=list(delete)),
    )


@pytest.mark.parametrize("cap", list(Capability))
def test_owner_has_every_capability(cap):
    assert has_permission(_db(created_by=1), cap, 1)


@pytest.mark.parametrize("cap", list(Capability))
def test_non_owner_without_grant_is_denied(cap):
    assert not has_permission(_db(created_by=1, view=[3], edit=[3], delete=[3]), cap, 2)


def test_grants_are_per_capability():
    database = _db(created_by=1, view=[2], edit=[], delete=[])
    assert has_permission(database, Capability.VIEW, 2)
    assert not has_permission(database, Capability.EDIT, 2)
    assert not has_permission(database, "delete", 2)


def test_string_capability_is_accepted():
    assert has_permission(_db(edit=[5]), "edit", 5)


def test_missing_permissions_record_grants_only_ownership():
    database = SimpleNamespace(id=1, created_by=1, permissions=None)
    assert has_permission(database, Capability.VIEW, 1)
    assert not has_permission(database, Capability.VIEW, 2)


def test_no_user_has_no_capability():
    assert not has_permission(_db(view=[1]), Capability.VIEW, None)


def test_require_permission_raises():
    with pytest.raises(PermissionDenied):
        require_permission(_db(created_by=1), Capability.DELETE, 9)
    require_permission(_db(created_by=1), Capability.DELETE, 1)


def test_permission_sets_are_deduplicated_in_order():
    perms = DatabasePermissions(view=[3, 1, 3, 2, 1], edit=None)
    assert perms.view == [3, 1, 2]
    assert perms.edit == []
    assert DatabasePermissions.owner_only(4).ids_for("delete") == [4]


def test_plain_dict_records():
    record = {"id": 3, "created_by": 1, "permissions": {"view": [2], "edit": [], "delete": []}}
    assert has_permission(record, Capability.DELETE, 1)
    assert has_permission(record, Capability.VIEW, 2)
    assert not has_permission(record, Capability.EDIT, 2)
    assert not has_permission({"id": 4, "created_by": 1}, Capability.VIEW, 2)
    with pytest.raises(PermissionDenied):
        require_permission(record, "edit", 2)
