"""Workflow transition repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.application.dtos.workflow import WorkflowTransitionResult
from flywheel.infrastructure.persistence.models.workflow import WorkflowStateTransition
from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.shared.utils.datetime import ensure_utc


class WorkflowTransitionRepository(BaseRepository[WorkflowStateTransition]):
    """Directed edges of workflows, addressed by (workflow_id, from_state, to_state)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowStateTransition)

    @staticmethod
    def _to_result(row: WorkflowStateTransition) -> WorkflowTransitionResult:
        return WorkflowTransitionResult(
            workflow_id=row.workflow_id,
            name=row.name,
            from_state=row.from_state,
            to_state=row.to_state,
            create_time=ensure_utc(row.create_time),
        )

    def _edge(
        self, workflow_id: int, from_state: str, to_state: str
    ) -> tuple[ColumnElement[bool], ...]:
        return (
            WorkflowStateTransition.workflow_id == workflow_id,
            WorkflowStateTransition.from_state == from_state,
            WorkflowStateTransition.to_state == to_state,
        )

    async def list_by_workflow(self, workflow_id: int) -> list[WorkflowTransitionResult]:
        result = await self.db.execute(
            select(WorkflowStateTransition)
            .where(WorkflowStateTransition.workflow_id == workflow_id)
            .order_by(WorkflowStateTransition.id.asc())
        )
        return [self._to_result(row) for row in result.scalars().all()]

    async def exists(self, workflow_id: int, from_state: str, to_state: str) -> bool:
        result = await self.db.execute(
            select(WorkflowStateTransition.id).where(
                *self._edge(workflow_id, from_state, to_state)
            )
        )
        return result.first() is not None

    async def create_transition(
        self,
        workflow_id: int,
        name: str,
        from_state: str,
        to_state: str,
        create_time: datetime,
    ) -> WorkflowTransitionResult:
        row = WorkflowStateTransition(
            workflow_id=workflow_id,
            name=name,
            from_state=from_state,
            to_state=to_state,
            create_time=create_time,
        )
        await self.add(row)
        return self._to_result(row)

    async def delete_transition(
        self, workflow_id: int, from_state: str, to_state: str
    ) -> int:
        return await self.execute_write(
            delete(WorkflowStateTransition).where(
                *self._edge(workflow_id, from_state, to_state)
            )
        )

    async def rename_state(self, workflow_id: int, origin_name: str, name: str) -> int:
        """Rewrite both endpoints equal to origin_name (exact match, no patterns)."""
        renamed_from = await self.execute_write(
            update(WorkflowStateTransition)
            .where(
                WorkflowStateTransition.workflow_id == workflow_id,
                WorkflowStateTransition.from_state == origin_name,
            )
            .values(from_state=name)
        )
        renamed_to = await self.execute_write(
            update(WorkflowStateTransition)
            .where(
                WorkflowStateTransition.workflow_id == workflow_id,
                WorkflowStateTransition.to_state == origin_name,
            )
            .values(to_state=name)
        )
        return renamed_from + renamed_to

    async def delete_by_workflow(self, workflow_id: int) -> int:
        return await self.execute_write(
            delete(WorkflowStateTransition).where(
                WorkflowStateTransition.workflow_id == workflow_id
            )
        )
