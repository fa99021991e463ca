"""Shared enumerations for the flywheel engine.

Cross-cutting enums used by domain, application and infrastructure
(state categories, project roles, outbox event types).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class StateCategory(_ValuesMixin, str, Enum):
    """Category of a workflow state; drives the derived timing fields of a work."""

    IN_BACKLOG = "IN_BACKLOG"
    IN_PROCESS = "IN_PROCESS"
    DONE = "DONE"


class ProjectRoleName(_ValuesMixin, str, Enum):
    """Role tokens carried by a session for a project (e.g. manager_42)."""

    MANAGER = "manager"
    MEMBER = "member"
    GUEST = "guest"


class OutboxEventType(_ValuesMixin, str, Enum):
    """Event types written to the event outbox."""

    WORK_PROPERTY_UPDATED = "work.property_updated"
