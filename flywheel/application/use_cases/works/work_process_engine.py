"""Work process engine: applies state transitions to work items.

A transition is validated against the work's workflow state machine and then
applied in one transaction: the work row moves with a compare-and-set on its
current state, derived process timestamps are maintained, the transition is
logged, the process-step history is advanced and a property-changed event is
published through the event sink.
"""

from __future__ import annotations

from datetime import datetime

from flywheel.application.dtos.work import (
    ProcessStepResult,
    PropertyUpdated,
    WorkPropertyUpdatedEvent,
    WorkResult,
    WorkStateTransitionBrief,
    WorkStateTransitionResult,
)
from flywheel.application.interfaces.repositories import IStore, IUnitOfWork
from flywheel.application.interfaces.services import IEventSink, IIdGenerator
from flywheel.application.services.authorization_service import (
    may_access,
    require_access,
)
from flywheel.application.use_cases.workflows.workflow_manager import WorkflowManager
from flywheel.domain.entities.workflow import State
from flywheel.domain.exceptions import (
    AffectedRowMismatchException,
    ArchiveStatusInvalidException,
    InvalidStateException,
    InvalidTransitionException,
    ResourceNotFoundException,
)
from flywheel.domain.value_objects.session import SessionContext
from flywheel.shared.enums import StateCategory
from flywheel.shared.telemetry.logging import get_logger
from flywheel.shared.utils.datetime import Clock

logger = get_logger(__name__)

STATE_NAME_PROPERTY = "StateName"


class WorkProcessEngine:
    """Validates and executes work state transitions (IWorkProcessEngine)."""

    def __init__(
        self,
        store: IStore,
        workflow_manager: WorkflowManager,
        event_sink: IEventSink,
        clock: Clock,
        id_generator: IIdGenerator,
    ) -> None:
        self._store = store
        self._workflow_manager = workflow_manager
        self._event_sink = event_sink
        self._clock = clock
        self._id_generator = id_generator

    async def transition(
        self, brief: WorkStateTransitionBrief, session: SessionContext | None
    ) -> WorkStateTransitionResult:
        """Move a work from brief.from_state to brief.to_state.

        Returns:
            The appended transition log entry.

        Raises:
            ResourceNotFoundException: Workflow or work is missing.
            ForbiddenException: Caller has no role on the workflow's or work's project.
            InvalidTransitionException: The state machine does not admit the move,
                or the work belongs to another workflow.
            InvalidStateException: An endpoint does not resolve to a state.
            ArchiveStatusInvalidException: The work is archived.
            AffectedRowMismatchException: The work is no longer at from_state.
        """
        now = self._clock.now()
        async with self._store.transaction() as uow:
            detail = await self._workflow_manager.load_detail(uow, brief.flow_id, session)
            assert session is not None
            machine = detail.state_machine
            if len(machine.available_transitions(brief.from_state, brief.to_state)) != 1:
                logger.warning(
                    "Rejected work transition",
                    extra={
                        "work_id": brief.work_id,
                        "flow_id": brief.flow_id,
                        "from_state": brief.from_state,
                        "to_state": brief.to_state,
                    },
                )
                raise InvalidTransitionException(brief.from_state, brief.to_state)
            from_state = _resolve_state(detail.find_state(brief.from_state), brief.from_state)
            to_state = _resolve_state(detail.find_state(brief.to_state), brief.to_state)

            work = await uow.works.get_by_id(brief.work_id)
            if work is None:
                raise ResourceNotFoundException("work", brief.work_id)
            require_access(session, work.project_id)
            if work.flow_id != detail.id:
                logger.warning(
                    "Rejected work transition outside its workflow",
                    extra={
                        "work_id": work.id,
                        "work_flow_id": work.flow_id,
                        "flow_id": detail.id,
                    },
                )
                raise InvalidTransitionException(brief.from_state, brief.to_state)
            if work.is_archived:
                raise ArchiveStatusInvalidException(work.id)

            affected = await uow.works.transit_state(
                work.id, from_state.name, to_state.name, to_state.category, now
            )
            if affected != 1:
                raise AffectedRowMismatchException(1, affected)

            await self._publish_state_changed(uow, work, to_state, session, now)
            await self._update_process_times(uow, work, to_state, now)

            log = await uow.transition_logs.create_log(
                WorkStateTransitionResult(
                    id=self._id_generator.next_id(),
                    create_time=now,
                    creator_id=session.identity.id,
                    flow_id=work.flow_id,
                    work_id=work.id,
                    from_state=brief.from_state,
                    to_state=brief.to_state,
                )
            )
            await self._advance_process_steps(uow, work, from_state, to_state, session, now)
        logger.info(
            "Work transitioned",
            extra={
                "work_id": log.work_id,
                "flow_id": log.flow_id,
                "from_state": log.from_state,
                "to_state": log.to_state,
            },
        )
        return log

    async def query_process_steps(
        self, work_id: int, session: SessionContext | None
    ) -> list[ProcessStepResult]:
        """Return the process steps of a work ordered by begin time.

        An unknown work or a caller without a role on its project yields an
        empty list rather than an error.
        """
        async with self._store.transaction() as uow:
            work = await uow.works.get_by_id(work_id)
            if work is None or not may_access(session, work.project_id):
                return []
            return await uow.process_steps.list_by_work(work_id)

    async def _publish_state_changed(
        self,
        uow: IUnitOfWork,
        work: WorkResult,
        to_state: State,
        session: SessionContext,
        now: datetime,
    ) -> None:
        event = WorkPropertyUpdatedEvent(
            work_id=work.id,
            project_id=work.project_id,
            flow_id=work.flow_id,
            updates=[
                PropertyUpdated(
                    property_name=STATE_NAME_PROPERTY,
                    property_desc=STATE_NAME_PROPERTY,
                    old_value=work.state_name,
                    old_value_desc=work.state_name,
                    new_value=to_state.name,
                    new_value_desc=to_state.name,
                )
            ],
            creator_id=session.identity.id,
            creator_name=session.identity.nickname,
            create_time=now,
        )
        await self._event_sink.publish(uow, event)

    async def _update_process_times(
        self, uow: IUnitOfWork, work: WorkResult, to_state: State, now: datetime
    ) -> None:
        if work.process_begin_time is None and to_state.category != StateCategory.IN_BACKLOG:
            await uow.works.set_process_begin_time(work.id, now)
        if work.process_end_time is None and to_state.category == StateCategory.DONE:
            await uow.works.set_process_end_time(work.id, now)
        elif work.process_end_time is not None and to_state.category != StateCategory.DONE:
            await uow.works.set_process_end_time(work.id, None)

    async def _advance_process_steps(
        self,
        uow: IUnitOfWork,
        work: WorkResult,
        from_state: State,
        to_state: State,
        session: SessionContext,
        now: datetime,
    ) -> None:
        # DONE keeps no open step, so there is nothing to close or open for it.
        if from_state.category != StateCategory.DONE:
            await uow.process_steps.close_open_step(
                work.id,
                work.flow_id,
                from_state.name,
                end_time=now,
                next_state_name=to_state.name,
                next_state_category=to_state.category,
            )
        if to_state.category != StateCategory.DONE:
            await uow.process_steps.create_step(
                work.id,
                work.flow_id,
                to_state.name,
                to_state.category,
                begin_time=now,
                creator_id=session.identity.id,
                creator_name=session.identity.nickname,
            )


def _resolve_state(state: State | None, name: str) -> State:
    if state is None:
        raise InvalidStateException(name)
    return state
