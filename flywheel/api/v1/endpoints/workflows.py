"""Workflow API: thin routes delegating to WorkflowManager."""

from fastapi import APIRouter, Query, Response

from flywheel.api.v1.dependencies import SessionDep, WorkflowManagerDep
from flywheel.application.dtos.workflow import WorkflowQuery
from flywheel.schemas.common import IdStr
from flywheel.schemas.workflow import (
    StateCreateRequest,
    StateOrderUpdateRequest,
    StateUpdateRequest,
    TransitionSchema,
    WorkflowBaseUpdateRequest,
    WorkflowCreateRequest,
    WorkflowDetailResponse,
    WorkflowListResponse,
    WorkflowResponse,
)

router = APIRouter()


@router.get("", response_model=WorkflowListResponse)
async def query_workflows(
    session: SessionDep,
    manager: WorkflowManagerDep,
    project_id: IdStr | None = Query(default=None, alias="projectId"),
    name: str = Query(default="", max_length=255),
):
    """List workflows of the caller's projects, optionally filtered by project and name."""
    workflows = await manager.query(WorkflowQuery(project_id=project_id, name=name), session)
    return WorkflowListResponse(
        items=[WorkflowResponse.model_validate(w) for w in workflows],
        total=len(workflows),
    )


@router.post("", response_model=WorkflowDetailResponse, status_code=201)
async def create_workflow(
    body: WorkflowCreateRequest,
    session: SessionDep,
    manager: WorkflowManagerDep,
):
    """Create a workflow with its state machine."""
    detail = await manager.create(body.to_creation(), session)
    return WorkflowDetailResponse.from_detail(detail)


@router.get("/{workflow_id}", response_model=WorkflowDetailResponse)
async def get_workflow(
    workflow_id: IdStr,
    session: SessionDep,
    manager: WorkflowManagerDep,
):
    """Get a workflow with its ordered states and transitions."""
    detail = await manager.detail(workflow_id, session)
    return WorkflowDetailResponse.from_detail(detail)


@router.put("/{workflow_id}", response_model=WorkflowResponse)
async def update_workflow_base(
    workflow_id: IdStr,
    body: WorkflowBaseUpdateRequest,
    session: SessionDep,
    manager: WorkflowManagerDep,
):
    """Replace name, theme color and theme icon (manager role)."""
    workflow = await manager.update_base(workflow_id, body.to_update(), session)
    return WorkflowResponse.model_validate(workflow)


@router.delete("/{workflow_id}", status_code=204)
async def delete_workflow(
    workflow_id: IdStr,
    session: SessionDep,
    manager: WorkflowManagerDep,
) -> Response:
    """Delete a workflow no work or process step references (manager role)."""
    await manager.delete(workflow_id, session)
    return Response(status_code=204)


@router.post("/{workflow_id}/transitions", status_code=204)
async def add_transitions(
    workflow_id: IdStr,
    body: list[TransitionSchema],
    session: SessionDep,
    manager: WorkflowManagerDep,
) -> Response:
    """Add transitions between existing states (manager role)."""
    await manager.add_transitions(workflow_id, [t.to_domain() for t in body], session)
    return Response(status_code=204)


@router.delete("/{workflow_id}/transitions", status_code=204)
async def remove_transitions(
    workflow_id: IdStr,
    body: list[TransitionSchema],
    session: SessionDep,
    manager: WorkflowManagerDep,
) -> Response:
    """Remove transitions by (from, to) (manager role)."""
    await manager.remove_transitions(workflow_id, [t.to_domain() for t in body], session)
    return Response(status_code=204)


@router.post("/{workflow_id}/states", status_code=204)
async def create_state(
    workflow_id: IdStr,
    body: StateCreateRequest,
    session: SessionDep,
    manager: WorkflowManagerDep,
) -> Response:
    """Add a state and the transitions that come with it."""
    await manager.create_state(workflow_id, body.to_creating(), session)
    return Response(status_code=204)


@router.put("/{workflow_id}/states", status_code=204)
async def update_state(
    workflow_id: IdStr,
    body: StateUpdateRequest,
    session: SessionDep,
    manager: WorkflowManagerDep,
) -> Response:
    """Rename and/or reorder a state; a rename cascades to works and history (manager role)."""
    await manager.update_state(workflow_id, body.to_updating(), session)
    return Response(status_code=204)


@router.put("/{workflow_id}/state-orders", status_code=204)
async def update_state_orders(
    workflow_id: IdStr,
    body: list[StateOrderUpdateRequest],
    session: SessionDep,
    manager: WorkflowManagerDep,
) -> Response:
    """Set the display order of several states."""
    await manager.update_state_range_orders(
        workflow_id, [o.to_updating() for o in body], session
    )
    return Response(status_code=204)
