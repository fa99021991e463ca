"""Workflow domain entities.

A workflow is a project-scoped bundle of a state machine (states and
directed transitions between them) plus display metadata. Works move
through the states of exactly one workflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from flywheel.domain.exceptions import UnknownStateException
from flywheel.shared.enums import StateCategory


@dataclass(frozen=True)
class State:
    """A named state of a workflow. `order` is used only for display ordering."""

    name: str
    category: StateCategory
    order: int = 0


@dataclass(frozen=True)
class Transition:
    """Directed edge between two states. Identified by (from_state, to_state); name is a label."""

    from_state: str
    to_state: str
    name: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.from_state, self.to_state)


@dataclass
class StateMachine:
    """Ordered states plus transitions, with membership and transition queries."""

    states: list[State] = field(default_factory=list)
    transitions: list[Transition] = field(default_factory=list)

    def find_state(self, name: str) -> State | None:
        """Return the state with exactly this name (case-sensitive), or None."""
        for state in self.states:
            if state.name == name:
                return state
        return None

    def has_state(self, name: str) -> bool:
        return self.find_state(name) is not None

    def available_transitions(self, from_state: str, to_state: str) -> list[Transition]:
        """Return the transitions whose endpoints equal the given names."""
        return [
            t
            for t in self.transitions
            if t.from_state == from_state and t.to_state == to_state
        ]

    def validate(self) -> None:
        """Raise UnknownStateException if a transition endpoint is not a known state."""
        names = {s.name for s in self.states}
        for t in self.transitions:
            if t.from_state not in names:
                raise UnknownStateException(t.from_state)
            if t.to_state not in names:
                raise UnknownStateException(t.to_state)

    def with_stamped_orders(self, base: int) -> StateMachine:
        """Return a copy whose states carry order = base + index + 1, by position."""
        return StateMachine(
            states=[replace(s, order=base + idx + 1) for idx, s in enumerate(self.states)],
            transitions=list(self.transitions),
        )


@dataclass
class WorkflowEntity:
    """Workflow base fields (no state machine)."""

    id: int
    project_id: int
    name: str
    theme_color: str
    theme_icon: str
    create_time: datetime


@dataclass
class WorkflowDetail:
    """A workflow with its materialized state machine."""

    workflow: WorkflowEntity
    state_machine: StateMachine

    @property
    def id(self) -> int:
        return self.workflow.id

    @property
    def project_id(self) -> int:
        return self.workflow.project_id

    def find_state(self, name: str) -> State | None:
        return self.state_machine.find_state(name)


STATE_PENDING = State(name="PENDING", category=StateCategory.IN_BACKLOG)
STATE_DOING = State(name="DOING", category=StateCategory.IN_PROCESS)
STATE_DONE = State(name="DONE", category=StateCategory.DONE)

GENERIC_STATES = (STATE_PENDING, STATE_DOING, STATE_DONE)
GENERIC_TRANSITIONS = (
    Transition(from_state="PENDING", to_state="DOING", name="begin"),
    Transition(from_state="PENDING", to_state="DONE", name="close"),
    Transition(from_state="DOING", to_state="PENDING", name="cancel"),
    Transition(from_state="DOING", to_state="DONE", name="finish"),
    Transition(from_state="DONE", to_state="PENDING", name="reopen"),
    Transition(from_state="DONE", to_state="DOING", name="reopen"),
)


def generic_state_machine() -> StateMachine:
    """Return a fresh copy of the default PENDING/DOING/DONE machine."""
    return StateMachine(states=list(GENERIC_STATES), transitions=list(GENERIC_TRANSITIONS))
