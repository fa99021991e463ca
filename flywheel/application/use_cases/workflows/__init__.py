"""Workflow use cases: workflow and state machine lifecycle."""

from flywheel.application.use_cases.workflows.workflow_manager import WorkflowManager

__all__ = ["WorkflowManager"]
