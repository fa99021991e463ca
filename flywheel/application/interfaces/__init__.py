"""Application ports: repository, store and service protocols."""

from flywheel.application.interfaces.repositories import (
    IEventOutboxRepository,
    IStore,
    IUnitOfWork,
    IWorkflowRepository,
    IWorkflowStateRepository,
    IWorkflowTransitionRepository,
    IWorkProcessStepRepository,
    IWorkRepository,
    IWorkStateTransitionRepository,
)
from flywheel.application.interfaces.services import IEventSink, IIdGenerator

__all__ = [
    "IEventOutboxRepository",
    "IEventSink",
    "IIdGenerator",
    "IStore",
    "IUnitOfWork",
    "IWorkProcessStepRepository",
    "IWorkRepository",
    "IWorkStateTransitionRepository",
    "IWorkflowRepository",
    "IWorkflowStateRepository",
    "IWorkflowTransitionRepository",
]
