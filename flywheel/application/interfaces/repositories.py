"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Collection
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, TypeVar

from flywheel.shared.enums import StateCategory

if TYPE_CHECKING:
    from flywheel.application.dtos.event import OutboxEventResult
    from flywheel.application.dtos.work import (
        ProcessStepResult,
        WorkResult,
        WorkStateTransitionResult,
    )
    from flywheel.application.dtos.workflow import (
        WorkflowStateResult,
        WorkflowTransitionResult,
    )
    from flywheel.domain.entities.workflow import WorkflowEntity

T = TypeVar("T")


# Workflow repository interface
class IWorkflowRepository(Protocol):
    """Protocol for workflow base rows (DIP)."""

    async def get_by_id(self, workflow_id: int) -> WorkflowEntity | None:
        """Return workflow by id."""

    async def query(
        self,
        project_ids: Collection[int],
        project_id: int | None = None,
        name: str = "",
    ) -> list[WorkflowEntity]:
        """Return workflows within project_ids, optionally filtered by project and name substring."""

    async def create_workflow(self, workflow: WorkflowEntity) -> WorkflowEntity:
        """Insert a workflow row."""

    async def update_base(
        self, workflow_id: int, name: str, theme_color: str, theme_icon: str
    ) -> int:
        """Replace name, theme color and icon; return affected rows."""

    async def delete_workflow(self, workflow_id: int) -> int:
        """Delete the workflow row; return affected rows."""


# Workflow state repository interface
class IWorkflowStateRepository(Protocol):
    """Protocol for workflow_states rows."""

    async def list_by_workflow(self, workflow_id: int) -> list[WorkflowStateResult]:
        """Return states ordered by order ascending, ties in insertion order."""

    async def get(self, workflow_id: int, name: str) -> WorkflowStateResult | None:
        """Return one state by exact name."""

    async def create_state(
        self,
        workflow_id: int,
        name: str,
        category: StateCategory,
        order: int,
        create_time: datetime,
    ) -> WorkflowStateResult:
        """Insert a state row."""

    async def update_state(
        self, workflow_id: int, origin_name: str, name: str, order: int
    ) -> int:
        """Rename and reorder a state in place; return affected rows."""

    async def update_order(self, workflow_id: int, name: str, order: int) -> int:
        """Set the order of one state; return affected rows."""

    async def delete_by_workflow(self, workflow_id: int) -> int:
        """Delete all states of a workflow."""


# Workflow transition repository interface
class IWorkflowTransitionRepository(Protocol):
    """Protocol for workflow_state_transitions rows."""

    async def list_by_workflow(self, workflow_id: int) -> list[WorkflowTransitionResult]:
        """Return transitions in insertion order."""

    async def exists(self, workflow_id: int, from_state: str, to_state: str) -> bool:
        """Return True if the (from_state, to_state) edge is stored."""

    async def create_transition(
        self,
        workflow_id: int,
        name: str,
        from_state: str,
        to_state: str,
        create_time: datetime,
    ) -> WorkflowTransitionResult:
        """Insert a transition row."""

    async def delete_transition(
        self, workflow_id: int, from_state: str, to_state: str
    ) -> int:
        """Delete the (from_state, to_state) edge; return affected rows."""

    async def rename_state(self, workflow_id: int, origin_name: str, name: str) -> int:
        """Rewrite from_state and to_state equal to origin_name; return affected rows."""

    async def delete_by_workflow(self, workflow_id: int) -> int:
        """Delete all transitions of a workflow."""


# Work repository interface
class IWorkRepository(Protocol):
    """Protocol for work rows (only the columns the engine maintains)."""

    async def get_by_id(self, work_id: int) -> WorkResult | None:
        """Return work by id."""

    async def create_work(
        self,
        work_id: int,
        name: str,
        project_id: int,
        flow_id: int,
        state_name: str,
        state_category: StateCategory,
        create_time: datetime,
        creator_id: int,
    ) -> WorkResult:
        """Insert a work row positioned at the given state."""

    async def transit_state(
        self,
        work_id: int,
        from_state: str,
        to_state: str,
        to_category: StateCategory,
        state_begin_time: datetime,
    ) -> int:
        """Move the work to to_state only if it is at from_state; return affected rows."""

    async def set_process_begin_time(self, work_id: int, value: datetime | None) -> int:
        """Set or clear process_begin_time."""

    async def set_process_end_time(self, work_id: int, value: datetime | None) -> int:
        """Set or clear process_end_time."""

    async def set_archive_time(self, work_id: int, value: datetime | None) -> int:
        """Archive (or restore) a work."""

    async def rename_state(
        self, flow_id: int, origin_name: str, name: str, category: StateCategory
    ) -> int:
        """Rewrite state_name/state_category of works at origin_name in the workflow."""

    async def is_workflow_referenced(self, flow_id: int) -> bool:
        """Return True if any work or process step has flow_id."""


# Work process step repository interface
class IWorkProcessStepRepository(Protocol):
    """Protocol for work_process_steps rows (append-only history)."""

    async def create_step(
        self,
        work_id: int,
        flow_id: int,
        state_name: str,
        state_category: StateCategory,
        begin_time: datetime,
        creator_id: int,
        creator_name: str,
    ) -> ProcessStepResult:
        """Append an open step."""

    async def close_open_step(
        self,
        work_id: int,
        flow_id: int,
        state_name: str,
        end_time: datetime,
        next_state_name: str,
        next_state_category: StateCategory,
    ) -> int:
        """Close the open step of the work at state_name; return affected rows."""

    async def list_by_work(self, work_id: int) -> list[ProcessStepResult]:
        """Return steps of a work ordered by begin_time ascending."""

    async def rename_state(
        self, flow_id: int, origin_name: str, name: str, category: StateCategory
    ) -> int:
        """Rewrite state_name/state_category equal to origin_name."""

    async def rename_next_state(
        self, flow_id: int, origin_name: str, name: str, category: StateCategory
    ) -> int:
        """Rewrite next_state_name/next_state_category equal to origin_name."""


# Work state transition log repository interface
class IWorkStateTransitionRepository(Protocol):
    """Protocol for the append-only transition log."""

    async def create_log(
        self, log: WorkStateTransitionResult
    ) -> WorkStateTransitionResult:
        """Append a transition log row."""

    async def list_by_work(self, work_id: int) -> list[WorkStateTransitionResult]:
        """Return logs of a work in creation order."""


# Event outbox repository interface
class IEventOutboxRepository(Protocol):
    """Protocol for the transactional event outbox."""

    async def append(
        self,
        event_type: str,
        source_type: str,
        source_id: int,
        payload: dict,
        creator_id: int,
        creator_name: str,
        create_time: datetime,
    ) -> OutboxEventResult:
        """Store an event in the current transaction."""

    async def list_pending(self, limit: int = 100) -> list[OutboxEventResult]:
        """Return undispatched events, oldest first."""

    async def mark_dispatched(self, event_ids: Collection[int], at: datetime) -> int:
        """Stamp dispatched_at on the given events."""


class IUnitOfWork(Protocol):
    """Repositories bound to one database transaction."""

    workflows: IWorkflowRepository
    states: IWorkflowStateRepository
    transitions: IWorkflowTransitionRepository
    works: IWorkRepository
    process_steps: IWorkProcessStepRepository
    transition_logs: IWorkStateTransitionRepository
    outbox: IEventOutboxRepository


class IStore(Protocol):
    """Transactional persistence: one unit of work per call, commit or roll back."""

    async def run(self, fn: Callable[[IUnitOfWork], Awaitable[T]]) -> T:
        """Run fn in a transaction; commit on return, roll back on error."""

    def transaction(self) -> AbstractAsyncContextManager[IUnitOfWork]:
        """Async context manager yielding a unit of work inside a transaction."""
