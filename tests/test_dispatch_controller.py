from __future__ import annotations

from datetime import date

import pytest

from movemax.app.controllers import DispatchController
from movemax.shared.core.exceptions import PermissionDeniedError


@pytest.fixture
def dispatch(domain, auth) -> DispatchController:
    return DispatchController(domain, auth)


def test_week_days_starts_on_given_day(dispatch):
    days = dispatch.week_days(date(2024, 6, 10))
    assert len(days) == 7
    assert days[-1] == date(2024, 6, 16)


def test_board_queries(dispatch):
    assert [p.id for p in dispatch.dispatchable_projects()] == ["P-2024-001", "P-2024-002", "P-2024-004"]
    assert [p.id for p in dispatch.unassigned_projects()] == ["P-2024-004"]
    assert dispatch.assignment_for("3", "2024-06-11").id == "P-2024-002"
    assert dispatch.assignment_for("4", "2024-06-11") is None


def test_assign_requires_dispatch_edit(dispatch, auth):
    auth.login("4")
    assert not dispatch.can_edit
    with pytest.raises(PermissionDeniedError):
        dispatch.assign("4", "2024-06-10", "P-2024-001")


def test_assign_adds_crew_member(dispatch, auth, domain):
    auth.login("1")
    dispatch.assign("4", "2024-06-10", "P-2024-001")
    assert domain.get_project("P-2024-001").assigned_crew_ids == ["2", "3", "4"]


def test_assign_moves_member_off_their_other_project_that_day(dispatch, auth, domain):
    auth.login("2")
    dispatch.assign("3", "2024-06-11", "P-2024-004")
    assert domain.get_project("P-2024-002").assigned_crew_ids == []
    assert domain.get_project("P-2024-004").assigned_crew_ids == ["3"]
    assert dispatch.assignment_for("3", "2024-06-11").id == "P-2024-004"


def test_assign_same_project_twice_does_not_duplicate(dispatch, auth, domain):
    auth.login("1")
    dispatch.assign("3", "2024-06-11", "P-2024-002")
    assert domain.get_project("P-2024-002").assigned_crew_ids == ["3"]


def test_unassign(dispatch, auth, domain):
    auth.login("1")
    dispatch.unassign("2", "P-2024-001")
    assert domain.get_project("P-2024-001").assigned_crew_ids == ["3"]
