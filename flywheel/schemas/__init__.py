"""Pydantic request/response schemas for the API."""

from flywheel.schemas.health import HealthResponse
from flywheel.schemas.work import (
    ProcessStepListResponse,
    ProcessStepResponse,
    WorkStateTransitionRequest,
    WorkStateTransitionResponse,
)
from flywheel.schemas.workflow import (
    StateCreateRequest,
    StateMachineSchema,
    StateOrderUpdateRequest,
    StateSchema,
    StateUpdateRequest,
    TransitionSchema,
    WorkflowBaseUpdateRequest,
    WorkflowCreateRequest,
    WorkflowDetailResponse,
    WorkflowListResponse,
    WorkflowResponse,
)

__all__ = [
    "HealthResponse",
    "ProcessStepListResponse",
    "ProcessStepResponse",
    "StateCreateRequest",
    "StateMachineSchema",
    "StateOrderUpdateRequest",
    "StateSchema",
    "StateUpdateRequest",
    "TransitionSchema",
    "WorkStateTransitionRequest",
    "WorkStateTransitionResponse",
    "WorkflowBaseUpdateRequest",
    "WorkflowCreateRequest",
    "WorkflowDetailResponse",
    "WorkflowListResponse",
    "WorkflowResponse",
]
