"""Workflow API schemas."""

from datetime import datetime

from pydantic import Field

from flywheel.application.dtos.workflow import (
    StateCreating,
    StateOrderUpdating,
    StateUpdating,
    WorkflowBaseUpdate,
    WorkflowCreation,
)
from flywheel.domain.entities.workflow import (
    State,
    StateMachine,
    Transition,
    WorkflowDetail,
    generic_state_machine,
)
from flywheel.schemas.common import CamelModel, IdStr
from flywheel.shared.enums import StateCategory


class StateSchema(CamelModel):
    """A state of a workflow."""

    name: str = Field(..., min_length=1, max_length=255)
    category: StateCategory
    order: int = 0

    def to_domain(self) -> State:
        return State(name=self.name, category=self.category, order=self.order)


class TransitionSchema(CamelModel):
    """Directed edge; serialized as {"name", "from", "to"}."""

    name: str = Field(default="", max_length=255)
    from_state: str = Field(..., min_length=1, max_length=255, alias="from")
    to_state: str = Field(..., min_length=1, max_length=255, alias="to")

    def to_domain(self) -> Transition:
        return Transition(from_state=self.from_state, to_state=self.to_state, name=self.name)


class StateMachineSchema(CamelModel):
    """States in display order plus transitions."""

    states: list[StateSchema] = Field(default_factory=list)
    transitions: list[TransitionSchema] = Field(default_factory=list)

    def to_domain(self) -> StateMachine:
        return StateMachine(
            states=[s.to_domain() for s in self.states],
            transitions=[t.to_domain() for t in self.transitions],
        )

    @classmethod
    def from_domain(cls, machine: StateMachine) -> "StateMachineSchema":
        return cls(
            states=[
                StateSchema(name=s.name, category=s.category, order=s.order)
                for s in machine.states
            ],
            transitions=[
                TransitionSchema(name=t.name, from_state=t.from_state, to_state=t.to_state)
                for t in machine.transitions
            ],
        )


class WorkflowCreateRequest(CamelModel):
    """Request body for creating a workflow. Omitting stateMachine uses the generic one."""

    name: str = Field(..., min_length=1, max_length=255)
    project_id: IdStr
    theme_color: str = Field(..., min_length=1, max_length=64)
    theme_icon: str = Field(..., min_length=1, max_length=255)
    state_machine: StateMachineSchema | None = None

    def to_creation(self) -> WorkflowCreation:
        machine = (
            self.state_machine.to_domain()
            if self.state_machine is not None
            else generic_state_machine()
        )
        return WorkflowCreation(
            name=self.name,
            project_id=self.project_id,
            theme_color=self.theme_color,
            theme_icon=self.theme_icon,
            state_machine=machine,
        )


class WorkflowBaseUpdateRequest(CamelModel):
    """Request body for replacing the base fields of a workflow."""

    name: str = Field(..., min_length=1, max_length=255)
    theme_color: str = Field(..., min_length=1, max_length=64)
    theme_icon: str = Field(..., min_length=1, max_length=255)

    def to_update(self) -> WorkflowBaseUpdate:
        return WorkflowBaseUpdate(
            name=self.name, theme_color=self.theme_color, theme_icon=self.theme_icon
        )


class StateCreateRequest(CamelModel):
    """Request body for adding a state (with optional transitions)."""

    name: str = Field(..., min_length=1, max_length=255)
    category: StateCategory
    order: int = 0
    transitions: list[TransitionSchema] = Field(default_factory=list)

    def to_creating(self) -> StateCreating:
        return StateCreating(
            name=self.name,
            category=self.category,
            order=self.order,
            transitions=[t.to_domain() for t in self.transitions],
        )


class StateUpdateRequest(CamelModel):
    """Request body for renaming and/or reordering a state."""

    origin_name: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    order: int = 0

    def to_updating(self) -> StateUpdating:
        return StateUpdating(origin_name=self.origin_name, name=self.name, order=self.order)


class StateOrderUpdateRequest(CamelModel):
    """One entry of a bulk order update."""

    state: str = Field(..., min_length=1, max_length=255)
    new_order: int
    old_order: int = 0

    def to_updating(self) -> StateOrderUpdating:
        return StateOrderUpdating(
            state=self.state, new_order=self.new_order, old_order=self.old_order
        )


class WorkflowResponse(CamelModel):
    """Workflow base fields."""

    id: IdStr
    project_id: IdStr
    name: str
    theme_color: str
    theme_icon: str
    create_time: datetime


class WorkflowListResponse(CamelModel):
    """Workflow list with total."""

    items: list[WorkflowResponse] = Field(..., alias="list")
    total: int


class WorkflowDetailResponse(WorkflowResponse):
    """Workflow with its state machine."""

    state_machine: StateMachineSchema

    @classmethod
    def from_detail(cls, detail: WorkflowDetail) -> "WorkflowDetailResponse":
        wf = detail.workflow
        return cls(
            id=wf.id,
            project_id=wf.project_id,
            name=wf.name,
            theme_color=wf.theme_color,
            theme_icon=wf.theme_icon,
            create_time=wf.create_time,
            state_machine=StateMachineSchema.from_domain(detail.state_machine),
        )
