"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from flywheel.domain.entities.workflow import (
    GENERIC_STATES,
    GENERIC_TRANSITIONS,
    STATE_DOING,
    STATE_DONE,
    STATE_PENDING,
    State,
    StateMachine,
    Transition,
    WorkflowDetail,
    WorkflowEntity,
    generic_state_machine,
)

__all__ = [
    "GENERIC_STATES",
    "GENERIC_TRANSITIONS",
    "STATE_DOING",
    "STATE_DONE",
    "STATE_PENDING",
    "State",
    "StateMachine",
    "Transition",
    "WorkflowDetail",
    "WorkflowEntity",
    "generic_state_machine",
]
