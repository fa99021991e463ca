"""Work state transition and process step API schemas."""

from datetime import datetime

from pydantic import Field

from flywheel.application.dtos.work import WorkStateTransitionBrief
from flywheel.schemas.common import CamelModel, IdStr
from flywheel.shared.enums import StateCategory


class WorkStateTransitionRequest(CamelModel):
    """Request body for moving a work between two states."""

    flow_id: IdStr
    work_id: IdStr
    from_state: str = Field(..., min_length=1, max_length=255)
    to_state: str = Field(..., min_length=1, max_length=255)

    def to_brief(self) -> WorkStateTransitionBrief:
        return WorkStateTransitionBrief(
            flow_id=self.flow_id,
            work_id=self.work_id,
            from_state=self.from_state,
            to_state=self.to_state,
        )


class WorkStateTransitionResponse(CamelModel):
    """Applied transition."""

    id: IdStr
    create_time: datetime
    creator_id: IdStr
    flow_id: IdStr
    work_id: IdStr
    from_state: str
    to_state: str


class ProcessStepResponse(CamelModel):
    """Interval a work spent in one state. endTime null means the step is open."""

    work_id: IdStr
    flow_id: IdStr
    state_name: str
    state_category: StateCategory
    begin_time: datetime
    end_time: datetime | None
    next_state_name: str | None
    next_state_category: StateCategory | None
    creator_id: int
    creator_name: str


class ProcessStepListResponse(CamelModel):
    """Process steps of a work with total."""

    items: list[ProcessStepResponse] = Field(..., alias="list")
    total: int
