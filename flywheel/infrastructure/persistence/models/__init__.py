"""Persistence models: ORM entities and mixins."""

from flywheel.infrastructure.persistence.models.event_outbox import EventOutbox
from flywheel.infrastructure.persistence.models.mixins import (
    CreateTimeMixin,
    SnowflakeIdMixin,
    SurrogateIdMixin,
)
from flywheel.infrastructure.persistence.models.work import (
    Work,
    WorkProcessStep,
    WorkStateTransition,
)
from flywheel.infrastructure.persistence.models.workflow import (
    Workflow,
    WorkflowState,
    WorkflowStateTransition,
)

__all__ = [
    "CreateTimeMixin",
    "EventOutbox",
    "SnowflakeIdMixin",
    "SurrogateIdMixin",
    "Work",
    "WorkProcessStep",
    "WorkStateTransition",
    "Workflow",
    "WorkflowState",
    "WorkflowStateTransition",
]
