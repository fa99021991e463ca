"""Workflow manager: lifecycle of workflows and their state machines.

Every public operation runs in one Store transaction and checks the caller's
project roles before writing. Renaming a state cascades the new name through
transitions, works and process steps of the same workflow.
"""

from __future__ import annotations

from collections.abc import Sequence

from flywheel.application.dtos.workflow import (
    StateCreating,
    StateOrderUpdating,
    StateUpdating,
    WorkflowBaseUpdate,
    WorkflowCreation,
    WorkflowQuery,
)
from flywheel.application.interfaces.repositories import IStore, IUnitOfWork
from flywheel.application.interfaces.services import IIdGenerator
from flywheel.application.services.authorization_service import (
    require_access,
    require_manage,
    visible_projects,
)
from flywheel.domain.entities.workflow import (
    State,
    StateMachine,
    Transition,
    WorkflowDetail,
    WorkflowEntity,
)
from flywheel.domain.exceptions import (
    AffectedRowMismatchException,
    ResourceNotFoundException,
    StateExistedException,
    StateInvalidException,
    TransitionExistedException,
    UnknownStateException,
    WorkflowReferencedException,
)
from flywheel.domain.value_objects.session import SessionContext
from flywheel.shared.enums import StateCategory
from flywheel.shared.telemetry.logging import get_logger
from flywheel.shared.utils.datetime import Clock

logger = get_logger(__name__)

DEFAULT_ORDER_BASE = 10000


class WorkflowManager:
    """Creates, reads and mutates workflows (IWorkflowManager)."""

    def __init__(
        self,
        store: IStore,
        clock: Clock,
        id_generator: IIdGenerator,
        *,
        order_base: int = DEFAULT_ORDER_BASE,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_generator = id_generator
        self._order_base = order_base

    async def query(
        self, query: WorkflowQuery, session: SessionContext | None
    ) -> list[WorkflowEntity]:
        """List workflows of the caller's visible projects.

        Returns an empty list without touching storage when the session sees
        no project.
        """
        projects = visible_projects(session)
        if not projects:
            return []
        async with self._store.transaction() as uow:
            return await uow.workflows.query(
                projects, project_id=query.project_id, name=query.name
            )

    async def create(
        self, creation: WorkflowCreation, session: SessionContext | None
    ) -> WorkflowDetail:
        """Create a workflow with all its states and transitions.

        State orders are re-stamped by input position (base + index + 1).

        Raises:
            ForbiddenException: Caller has no role on the project.
            UnknownStateException: A transition endpoint is not among the states.
            StateExistedException: Two states share a name.
            TransitionExistedException: The same (from, to) edge is given twice.
        """
        require_access(session, creation.project_id)
        machine = creation.state_machine.with_stamped_orders(self._order_base)
        machine.validate()
        _reject_duplicates(machine.states, machine.transitions)

        now = self._clock.now()
        workflow = WorkflowEntity(
            id=self._id_generator.next_id(),
            project_id=creation.project_id,
            name=creation.name,
            theme_color=creation.theme_color,
            theme_icon=creation.theme_icon,
            create_time=now,
        )
        async with self._store.transaction() as uow:
            created = await uow.workflows.create_workflow(workflow)
            for state in machine.states:
                await uow.states.create_state(
                    created.id, state.name, state.category, state.order, now
                )
            for t in machine.transitions:
                await uow.transitions.create_transition(
                    created.id, t.name, t.from_state, t.to_state, now
                )
        logger.info(
            "Workflow created",
            extra={
                "workflow_id": created.id,
                "project_id": created.project_id,
                "states": len(machine.states),
                "transitions": len(machine.transitions),
            },
        )
        return WorkflowDetail(workflow=created, state_machine=machine)

    async def detail(
        self, workflow_id: int, session: SessionContext | None
    ) -> WorkflowDetail:
        """Return the workflow with its ordered states and transitions."""
        async with self._store.transaction() as uow:
            return await self.load_detail(uow, workflow_id, session)

    async def load_detail(
        self, uow: IUnitOfWork, workflow_id: int, session: SessionContext | None
    ) -> WorkflowDetail:
        """Materialize a workflow inside an open unit of work.

        Raises:
            ResourceNotFoundException: Workflow is missing.
            ForbiddenException: Caller has no role on the workflow's project.
            StateInvalidException: A stored transition references a missing state.
        """
        workflow = await self._get_workflow(uow, workflow_id)
        require_access(session, workflow.project_id)

        records = await uow.states.list_by_workflow(workflow.id)
        machine = StateMachine(
            states=[State(name=r.name, category=r.category, order=r.order) for r in records]
        )
        for record in await uow.transitions.list_by_workflow(workflow.id):
            if not machine.has_state(record.from_state) or not machine.has_state(
                record.to_state
            ):
                raise StateInvalidException(
                    workflow.id, record.from_state, record.to_state
                )
            machine.transitions.append(
                Transition(
                    from_state=record.from_state,
                    to_state=record.to_state,
                    name=record.name,
                )
            )
        return WorkflowDetail(workflow=workflow, state_machine=machine)

    async def update_base(
        self,
        workflow_id: int,
        update: WorkflowBaseUpdate,
        session: SessionContext | None,
    ) -> WorkflowEntity:
        """Replace name, theme color and theme icon; return the updated workflow."""
        async with self._store.transaction() as uow:
            workflow = await self._get_workflow(uow, workflow_id)
            require_manage(session, workflow.project_id)
            await uow.workflows.update_base(
                workflow.id, update.name, update.theme_color, update.theme_icon
            )
            updated = await self._get_workflow(uow, workflow.id)
        logger.info("Workflow base updated", extra={"workflow_id": workflow_id})
        return updated

    async def delete(self, workflow_id: int, session: SessionContext | None) -> None:
        """Delete a workflow with its states and transitions.

        Raises:
            WorkflowReferencedException: A work or process step still uses it.
        """
        async with self._store.transaction() as uow:
            workflow = await self._get_workflow(uow, workflow_id)
            require_manage(session, workflow.project_id)
            if await uow.works.is_workflow_referenced(workflow.id):
                logger.warning(
                    "Workflow delete blocked by references",
                    extra={"workflow_id": workflow.id},
                )
                raise WorkflowReferencedException(workflow.id)
            await uow.workflows.delete_workflow(workflow.id)
            await uow.states.delete_by_workflow(workflow.id)
            await uow.transitions.delete_by_workflow(workflow.id)
        logger.info("Workflow deleted", extra={"workflow_id": workflow_id})

    async def add_transitions(
        self,
        workflow_id: int,
        transitions: Sequence[Transition],
        session: SessionContext | None,
    ) -> None:
        """Insert transitions whose endpoints are existing states of the workflow."""
        async with self._store.transaction() as uow:
            workflow = await self._get_workflow(uow, workflow_id)
            require_manage(session, workflow.project_id)
            names = {s.name for s in await uow.states.list_by_workflow(workflow.id)}
            await self._insert_transitions(uow, workflow.id, names, transitions)
        logger.info(
            "Workflow transitions added",
            extra={"workflow_id": workflow_id, "count": len(transitions)},
        )

    async def remove_transitions(
        self,
        workflow_id: int,
        transitions: Sequence[Transition],
        session: SessionContext | None,
    ) -> None:
        """Delete the (from, to) edges given; edges that do not exist are ignored."""
        async with self._store.transaction() as uow:
            workflow = await self._get_workflow(uow, workflow_id)
            require_manage(session, workflow.project_id)
            removed = 0
            for t in transitions:
                removed += await uow.transitions.delete_transition(
                    workflow.id, t.from_state, t.to_state
                )
        logger.info(
            "Workflow transitions removed",
            extra={"workflow_id": workflow_id, "count": removed},
        )

    async def create_state(
        self,
        workflow_id: int,
        creating: StateCreating,
        session: SessionContext | None,
    ) -> None:
        """Insert a state and the transitions that come with it.

        Transition endpoints may name the new state or any existing one.
        """
        now = self._clock.now()
        async with self._store.transaction() as uow:
            workflow = await self._get_workflow(uow, workflow_id)
            require_access(session, workflow.project_id)
            names = {s.name for s in await uow.states.list_by_workflow(workflow.id)}
            if creating.name in names:
                raise StateExistedException(creating.name)
            await uow.states.create_state(
                workflow.id, creating.name, creating.category, creating.order, now
            )
            names.add(creating.name)
            await self._insert_transitions(uow, workflow.id, names, creating.transitions)
        logger.info(
            "Workflow state created",
            extra={"workflow_id": workflow_id, "state": creating.name},
        )

    async def update_state(
        self,
        workflow_id: int,
        updating: StateUpdating,
        session: SessionContext | None,
    ) -> None:
        """Rename and/or reorder a state, cascading a rename to dependent rows.

        The category stays the origin state's. Renaming to the same name only
        updates the order.

        Raises:
            ResourceNotFoundException: Origin state is missing.
            StateExistedException: The new name is already taken.
        """
        async with self._store.transaction() as uow:
            workflow = await self._get_workflow(uow, workflow_id)
            require_manage(session, workflow.project_id)
            origin = await uow.states.get(workflow.id, updating.origin_name)
            if origin is None:
                raise ResourceNotFoundException("workflow_state", updating.origin_name)
            renamed = updating.origin_name != updating.name
            if renamed and await uow.states.get(workflow.id, updating.name) is not None:
                raise StateExistedException(updating.name)

            await uow.states.update_state(
                workflow.id, origin.name, updating.name, updating.order
            )
            if renamed:
                await self._cascade_rename(
                    uow, workflow.id, origin.name, updating.name, origin.category
                )
        logger.info(
            "Workflow state updated",
            extra={
                "workflow_id": workflow_id,
                "origin_name": updating.origin_name,
                "name": updating.name,
                "order": updating.order,
            },
        )

    async def update_state_range_orders(
        self,
        workflow_id: int,
        orders: Sequence[StateOrderUpdating],
        session: SessionContext | None,
    ) -> None:
        """Set the display order of several states at once.

        Raises:
            AffectedRowMismatchException: An entry did not match exactly one state.
        """
        if not orders:
            return
        async with self._store.transaction() as uow:
            workflow = await self._get_workflow(uow, workflow_id)
            require_access(session, workflow.project_id)
            for entry in orders:
                affected = await uow.states.update_order(
                    workflow.id, entry.state, entry.new_order
                )
                if affected != 1:
                    raise AffectedRowMismatchException(1, affected)
        logger.info(
            "Workflow state orders updated",
            extra={"workflow_id": workflow_id, "count": len(orders)},
        )

    async def _get_workflow(self, uow: IUnitOfWork, workflow_id: int) -> WorkflowEntity:
        workflow = await uow.workflows.get_by_id(workflow_id)
        if workflow is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow

    async def _insert_transitions(
        self,
        uow: IUnitOfWork,
        workflow_id: int,
        state_names: set[str],
        transitions: Sequence[Transition],
    ) -> None:
        now = self._clock.now()
        seen: set[tuple[str, str]] = set()
        for t in transitions:
            if t.from_state not in state_names:
                raise UnknownStateException(t.from_state)
            if t.to_state not in state_names:
                raise UnknownStateException(t.to_state)
            if t.key in seen or await uow.transitions.exists(
                workflow_id, t.from_state, t.to_state
            ):
                raise TransitionExistedException(t.from_state, t.to_state)
            seen.add(t.key)
            await uow.transitions.create_transition(
                workflow_id, t.name, t.from_state, t.to_state, now
            )

    async def _cascade_rename(
        self,
        uow: IUnitOfWork,
        workflow_id: int,
        origin_name: str,
        name: str,
        category: StateCategory,
    ) -> None:
        transitions = await uow.transitions.rename_state(workflow_id, origin_name, name)
        works = await uow.works.rename_state(workflow_id, origin_name, name, category)
        steps = await uow.process_steps.rename_state(workflow_id, origin_name, name, category)
        next_steps = await uow.process_steps.rename_next_state(
            workflow_id, origin_name, name, category
        )
        logger.debug(
            "State rename cascaded",
            extra={
                "workflow_id": workflow_id,
                "transitions": transitions,
                "works": works,
                "process_steps": steps + next_steps,
            },
        )


def _reject_duplicates(states: Sequence[State], transitions: Sequence[Transition]) -> None:
    names: set[str] = set()
    for state in states:
        if state.name in names:
            raise StateExistedException(state.name)
        names.add(state.name)
    edges: set[tuple[str, str]] = set()
    for t in transitions:
        if t.key in edges:
            raise TransitionExistedException(t.from_state, t.to_state)
        edges.add(t.key)
