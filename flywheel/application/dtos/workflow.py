"""DTOs for workflow definition operations (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from flywheel.domain.entities.workflow import StateMachine, Transition
from flywheel.shared.enums import StateCategory


@dataclass(frozen=True)
class WorkflowQuery:
    """Filter for listing workflows: project and case-insensitive name substring."""

    project_id: int | None = None
    name: str = ""


@dataclass(frozen=True)
class WorkflowCreation:
    """Input of WorkflowManager.create."""

    name: str
    project_id: int
    theme_color: str
    theme_icon: str
    state_machine: StateMachine = field(default_factory=StateMachine)


@dataclass(frozen=True)
class WorkflowBaseUpdate:
    """Replacement values for the three base fields of a workflow."""

    name: str
    theme_color: str
    theme_icon: str


@dataclass(frozen=True)
class StateCreating:
    """A new state plus transitions to insert alongside it."""

    name: str
    category: StateCategory
    order: int
    transitions: list[Transition] = field(default_factory=list)


@dataclass(frozen=True)
class StateUpdating:
    """Rename and/or reorder of an existing state."""

    origin_name: str
    name: str
    order: int = 0


@dataclass(frozen=True)
class StateOrderUpdating:
    """New display order for one named state (old_order is informational)."""

    state: str
    new_order: int
    old_order: int = 0


@dataclass(frozen=True)
class WorkflowStateResult:
    """State row read-model."""

    workflow_id: int
    name: str
    category: StateCategory
    order: int
    create_time: datetime


@dataclass(frozen=True)
class WorkflowTransitionResult:
    """Transition row read-model."""

    workflow_id: int
    name: str
    from_state: str
    to_state: str
    create_time: datetime
