"""Application use cases: one entry point per workflow."""

from flywheel.application.use_cases.workflows import WorkflowManager
from flywheel.application.use_cases.works import WorkProcessEngine

__all__ = [
    "WorkProcessEngine",
    "WorkflowManager",
]
