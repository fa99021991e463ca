"""Session value objects: caller identity and project roles.

Role strings arrive at the boundary as "<role>_<projectId>" (e.g.
"manager_42"). They are parsed once into ProjectRole pairs; strings that do
not carry a project suffix grant nothing and are dropped.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Authenticated caller."""

    id: int
    nickname: str = ""


@dataclass(frozen=True)
class ProjectRole:
    """A role held on one project."""

    role: str
    project_id: int

    def __post_init__(self) -> None:
        if not self.role:
            raise ValueError("role must be a non-empty string")
        if self.project_id <= 0:
            raise ValueError("project_id must be a positive integer")

    @classmethod
    def parse(cls, value: str) -> ProjectRole | None:
        """Parse "<role>_<projectId>"; return None when the string has no project suffix."""
        role, sep, project = value.rpartition("_")
        if not sep or not role or not project.isdigit():
            return None
        project_id = int(project)
        if project_id <= 0:
            return None
        return cls(role=role, project_id=project_id)


@dataclass(frozen=True)
class SessionContext:
    """Caller context: identity and project roles."""

    identity: Identity
    roles: tuple[ProjectRole, ...] = ()

    @classmethod
    def from_role_strings(
        cls, identity: Identity, role_strings: Iterable[str]
    ) -> SessionContext:
        """Build a session from boundary role strings."""
        roles: list[ProjectRole] = []
        for value in role_strings:
            parsed = ProjectRole.parse(value)
            if parsed is not None and parsed not in roles:
                roles.append(parsed)
        return cls(identity=identity, roles=tuple(roles))

    def has_project_role(self, project_id: int, role: str | None = None) -> bool:
        """Return True if any role (or the given role) is held on the project."""
        return any(
            r.project_id == project_id and (role is None or r.role == role)
            for r in self.roles
        )

    def project_ids(self) -> frozenset[int]:
        return frozenset(r.project_id for r in self.roles)
