"""Tests for session role parsing and the authorization gate."""

import pytest

from flywheel.application.services.authorization_service import (
    may_access,
    may_manage,
    require_access,
    require_manage,
    visible_projects,
)
from flywheel.domain.exceptions import ForbiddenException
from flywheel.domain.value_objects.session import Identity, ProjectRole, SessionContext


@pytest.mark.parametrize(
    "value, expected",
    [
        ("manager_42", ProjectRole("manager", 42)),
        ("member_1", ProjectRole("member", 1)),
        ("project_owner_5", ProjectRole("project_owner", 5)),
        ("admin", None),
        ("manager_", None),
        ("_5", None),
        ("manager_abc", None),
        ("manager_0", None),
    ],
)
def test_project_role_parse(value: str, expected: ProjectRole | None) -> None:
    assert ProjectRole.parse(value) == expected


def test_project_role_rejects_invalid_values() -> None:
    with pytest.raises(ValueError):
        ProjectRole("", 1)
    with pytest.raises(ValueError):
        ProjectRole("manager", 0)


def test_session_from_role_strings_keeps_project_roles_only() -> None:
    session = SessionContext.from_role_strings(
        Identity(1, "alice"), ["manager_1", "member_2", "manager_1", "system_admin"]
    )
    assert session.roles == (ProjectRole("manager", 1), ProjectRole("member", 2))
    assert session.project_ids() == frozenset({1, 2})


def test_has_project_role_matches_whole_project_id() -> None:
    session = SessionContext.from_role_strings(Identity(1), ["member_11"])
    assert session.has_project_role(11)
    assert not session.has_project_role(1)
    assert not session.has_project_role(11, "manager")


def test_may_access_any_role_on_project() -> None:
    session = SessionContext.from_role_strings(Identity(1), ["guest_3"])
    assert may_access(session, 3)
    assert not may_access(session, 4)
    assert not may_access(None, 3)


def test_may_manage_requires_manager_role() -> None:
    member = SessionContext.from_role_strings(Identity(1), ["member_3"])
    manager = SessionContext.from_role_strings(Identity(2), ["manager_3"])
    assert not may_manage(member, 3)
    assert may_manage(manager, 3)
    assert not may_manage(manager, 4)
    assert not may_manage(None, 3)


def test_visible_projects() -> None:
    session = SessionContext.from_role_strings(Identity(1), ["member_3", "manager_5", "x"])
    assert visible_projects(session) == frozenset({3, 5})
    assert visible_projects(None) == frozenset()
    assert visible_projects(SessionContext(identity=Identity(1))) == frozenset()


def test_require_access_and_manage_raise_forbidden() -> None:
    member = SessionContext.from_role_strings(Identity(1), ["member_3"])
    require_access(member, 3)
    with pytest.raises(ForbiddenException) as exc_info:
        require_manage(member, 3)
    assert exc_info.value.error_code == "FORBIDDEN"
    assert exc_info.value.details == {"project_id": "3", "action": "manage"}
    with pytest.raises(ForbiddenException):
        require_access(member, 4)
