"""Work state transition API: moves a work between states of its workflow."""

from fastapi import APIRouter

from flywheel.api.v1.dependencies import SessionDep, WorkProcessEngineDep
from flywheel.schemas.work import WorkStateTransitionRequest, WorkStateTransitionResponse

router = APIRouter()


@router.post("", response_model=WorkStateTransitionResponse, status_code=201)
async def create_work_state_transition(
    body: WorkStateTransitionRequest,
    session: SessionDep,
    engine: WorkProcessEngineDep,
):
    """Apply a transition; 409 AFFECTED_ROW_MISMATCH when the work moved concurrently."""
    log = await engine.transition(body.to_brief(), session)
    return WorkStateTransitionResponse.model_validate(log)
