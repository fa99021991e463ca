"""Work process step API: state history of a work."""

from fastapi import APIRouter, Query

from flywheel.api.v1.dependencies import SessionDep, WorkProcessEngineDep
from flywheel.schemas.common import IdStr
from flywheel.schemas.work import ProcessStepListResponse, ProcessStepResponse

router = APIRouter()


@router.get("", response_model=ProcessStepListResponse)
async def query_process_steps(
    session: SessionDep,
    engine: WorkProcessEngineDep,
    work_id: IdStr = Query(..., alias="workId"),
):
    """List the process steps of a work by begin time; empty when not visible."""
    steps = await engine.query_process_steps(work_id, session)
    return ProcessStepListResponse(
        items=[ProcessStepResponse.model_validate(s) for s in steps],
        total=len(steps),
    )
