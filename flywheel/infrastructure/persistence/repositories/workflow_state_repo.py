"""Workflow state repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.application.dtos.workflow import WorkflowStateResult
from flywheel.infrastructure.persistence.models.workflow import WorkflowState
from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.shared.enums import StateCategory
from flywheel.shared.utils.datetime import ensure_utc


class WorkflowStateRepository(BaseRepository[WorkflowState]):
    """States of workflows, addressed by (workflow_id, name)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowState)

    @staticmethod
    def _to_result(row: WorkflowState) -> WorkflowStateResult:
        return WorkflowStateResult(
            workflow_id=row.workflow_id,
            name=row.name,
            category=StateCategory(row.category),
            order=row.order,
            create_time=ensure_utc(row.create_time),
        )

    async def list_by_workflow(self, workflow_id: int) -> list[WorkflowStateResult]:
        result = await self.db.execute(
            select(WorkflowState)
            .where(WorkflowState.workflow_id == workflow_id)
            .order_by(WorkflowState.order.asc(), WorkflowState.id.asc())
        )
        return [self._to_result(row) for row in result.scalars().all()]

    async def get(self, workflow_id: int, name: str) -> WorkflowStateResult | None:
        result = await self.db.execute(
            select(WorkflowState).where(
                WorkflowState.workflow_id == workflow_id,
                WorkflowState.name == name,
            )
        )
        row = result.scalar_one_or_none()
        return self._to_result(row) if row else None

    async def create_state(
        self,
        workflow_id: int,
        name: str,
        category: StateCategory,
        order: int,
        create_time: datetime,
    ) -> WorkflowStateResult:
        row = WorkflowState(
            workflow_id=workflow_id,
            name=name,
            category=StateCategory(category).value,
            order=order,
            create_time=create_time,
        )
        await self.add(row)
        return self._to_result(row)

    async def update_state(
        self, workflow_id: int, origin_name: str, name: str, order: int
    ) -> int:
        """Rename and reorder in place; the row keeps its id and insertion position."""
        return await self.execute_write(
            update(WorkflowState)
            .where(
                WorkflowState.workflow_id == workflow_id,
                WorkflowState.name == origin_name,
            )
            .values(name=name, order=order)
        )

    async def update_order(self, workflow_id: int, name: str, order: int) -> int:
        return await self.execute_write(
            update(WorkflowState)
            .where(
                WorkflowState.workflow_id == workflow_id,
                WorkflowState.name == name,
            )
            .values(order=order)
        )

    async def delete_by_workflow(self, workflow_id: int) -> int:
        return await self.execute_write(
            delete(WorkflowState).where(WorkflowState.workflow_id == workflow_id)
        )
