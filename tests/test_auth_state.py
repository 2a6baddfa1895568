from __future__ import annotations

import pytest

from movemax.shared.core.exceptions import PermissionDeniedError
from movemax.shared.domain.models import Permission, Role, StaffMember, StaffStatus


def test_login_with_unknown_id_keeps_state(auth):
    assert auth.login("404") is False
    assert auth.current_user is None
    assert not auth.is_authenticated


def test_login_and_logout(auth):
    assert auth.login("2") is True
    assert auth.current_user.name == "David Chen"
    auth.logout()
    assert auth.current_user is None


def test_no_user_has_no_permissions(auth):
    assert auth.has_permission("projects", "view") is False


def test_admin_passes_every_check(auth):
    auth.login("1")
    assert auth.has_permission("settings", "delete") is True
    assert auth.has_permission("anything", "edit") is True


def test_matrix_lookup_for_non_admin(auth):
    auth.login("3")
    assert auth.has_permission("projects", "edit") is True
    assert auth.has_permission("dispatch", "edit") is False
    assert auth.has_permission("settings", "view") is False
    assert auth.has_permission("unknown-area", "view") is False


def test_permission_changes_apply_immediately(domain, auth):
    domain.add_staff(StaffMember(id="7", name="New Mover", role=Role.MOVER))
    auth.login("7")
    assert auth.has_permission("projects", "edit") is False

    domain.update_staff(domain.get_staff("7").model_copy(update={"role": Role.ADMIN}))
    assert auth.has_permission("projects", "edit") is True


def test_deleted_user_is_signed_out_implicitly(domain, auth):
    auth.login("4")
    domain.delete_staff("4")
    assert auth.current_user is None
    assert auth.has_permission("projects", "view") is False


def test_require_raises_permission_denied(auth):
    auth.login("4")
    with pytest.raises(PermissionDeniedError) as exc_info:
        auth.require("dispatch", "edit")
    assert exc_info.value.area == "dispatch"
    assert exc_info.value.action == "edit"
    assert auth.require("projects", "edit").id == "4"


def test_available_users_excludes_inactive(domain, auth):
    domain.update_staff(domain.get_staff("2").model_copy(update={"status": StaffStatus.INACTIVE}))
    assert [s.id for s in auth.available_users] == ["1", "3", "4"]


def test_only_view_edit_delete_are_actions(domain, auth):
    domain.add_staff(StaffMember(id="8", name="Limited Mover", role=Role.MOVER,
                                 permissions={"projects": Permission(view=True)}))
    auth.login("8")
    assert auth.has_permission("projects", "view") is True
    for action in ("copy", "model_dump", "__init__", "to_json_dict"):
        assert auth.has_permission("projects", action) is False
