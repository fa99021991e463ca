"""Persistence repositories. Re-exports for dependency injection."""

from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.infrastructure.persistence.repositories.event_outbox_repo import (
    EventOutboxRepository,
)
from flywheel.infrastructure.persistence.repositories.process_step_repo import (
    WorkProcessStepRepository,
)
from flywheel.infrastructure.persistence.repositories.work_repo import WorkRepository
from flywheel.infrastructure.persistence.repositories.work_state_transition_repo import (
    WorkStateTransitionRepository,
)
from flywheel.infrastructure.persistence.repositories.workflow_repo import WorkflowRepository
from flywheel.infrastructure.persistence.repositories.workflow_state_repo import (
    WorkflowStateRepository,
)
from flywheel.infrastructure.persistence.repositories.workflow_transition_repo import (
    WorkflowTransitionRepository,
)

__all__ = [
    "BaseRepository",
    "EventOutboxRepository",
    "WorkProcessStepRepository",
    "WorkRepository",
    "WorkStateTransitionRepository",
    "WorkflowRepository",
    "WorkflowStateRepository",
    "WorkflowTransitionRepository",
]
