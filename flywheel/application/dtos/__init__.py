"""Application DTOs (no ORM dependency)."""

from flywheel.application.dtos.event import OutboxEventResult
from flywheel.application.dtos.work import (
    ProcessStepResult,
    PropertyUpdated,
    WorkPropertyUpdatedEvent,
    WorkResult,
    WorkStateTransitionBrief,
    WorkStateTransitionResult,
)
from flywheel.application.dtos.workflow import (
    StateCreating,
    StateOrderUpdating,
    StateUpdating,
    WorkflowBaseUpdate,
    WorkflowCreation,
    WorkflowQuery,
    WorkflowStateResult,
    WorkflowTransitionResult,
)

__all__ = [
    "OutboxEventResult",
    "ProcessStepResult",
    "PropertyUpdated",
    "StateCreating",
    "StateOrderUpdating",
    "StateUpdating",
    "WorkPropertyUpdatedEvent",
    "WorkResult",
    "WorkStateTransitionBrief",
    "WorkStateTransitionResult",
    "WorkflowBaseUpdate",
    "WorkflowCreation",
    "WorkflowQuery",
    "WorkflowStateResult",
    "WorkflowTransitionResult",
]
