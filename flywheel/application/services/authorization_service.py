"""Authorization gate: decides whether a session's project roles authorize an action.

Pure functions over (session, project_id); no I/O and no side effects.
"""

from __future__ import annotations

from flywheel.domain.exceptions import ForbiddenException
from flywheel.domain.value_objects.session import SessionContext
from flywheel.shared.enums import ProjectRoleName


def may_access(session: SessionContext | None, project_id: int) -> bool:
    """Return True if the session carries any role on the project."""
    return session is not None and session.has_project_role(project_id)


def may_manage(session: SessionContext | None, project_id: int) -> bool:
    """Return True if the session carries the manager role on the project."""
    return session is not None and session.has_project_role(
        project_id, ProjectRoleName.MANAGER.value
    )


def visible_projects(session: SessionContext | None) -> frozenset[int]:
    """Return the ids of the projects the session holds any role on."""
    if session is None:
        return frozenset()
    return session.project_ids()


def require_access(session: SessionContext | None, project_id: int) -> None:
    """Raise ForbiddenException unless the session has any role on the project."""
    if not may_access(session, project_id):
        raise ForbiddenException(project_id=project_id, action="access")


def require_manage(session: SessionContext | None, project_id: int) -> None:
    """Raise ForbiddenException unless the session manages the project."""
    if not may_manage(session, project_id):
        raise ForbiddenException(project_id=project_id, action="manage")
