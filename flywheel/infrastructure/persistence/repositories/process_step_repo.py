"""Work process step repository (append-only history, closed in place)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.application.dtos.work import ProcessStepResult
from flywheel.infrastructure.persistence.models.work import WorkProcessStep
from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.shared.enums import StateCategory
from flywheel.shared.utils.datetime import ensure_utc


class WorkProcessStepRepository(BaseRepository[WorkProcessStep]):
    """Process steps of works."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkProcessStep)

    @staticmethod
    def _to_result(row: WorkProcessStep) -> ProcessStepResult:
        return ProcessStepResult(
            work_id=row.work_id,
            flow_id=row.flow_id,
            state_name=row.state_name,
            state_category=StateCategory(row.state_category),
            begin_time=ensure_utc(row.begin_time),
            end_time=ensure_utc(row.end_time),
            next_state_name=row.next_state_name,
            next_state_category=(
                StateCategory(row.next_state_category) if row.next_state_category else None
            ),
            creator_id=row.creator_id,
            creator_name=row.creator_name,
        )

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
        row = WorkProcessStep(
            work_id=work_id,
            flow_id=flow_id,
            state_name=state_name,
            state_category=StateCategory(state_category).value,
            begin_time=begin_time,
            creator_id=creator_id,
            creator_name=creator_name,
        )
        await self.add(row)
        return self._to_result(row)

    async def close_open_step(
        self,
        work_id: int,
        flow_id: int,
        state_name: str,
        end_time: datetime,
        next_state_name: str,
        next_state_category: StateCategory,
    ) -> int:
        return await self.execute_write(
            update(WorkProcessStep)
            .where(
                WorkProcessStep.work_id == work_id,
                WorkProcessStep.flow_id == flow_id,
                WorkProcessStep.state_name == state_name,
                WorkProcessStep.end_time.is_(None),
            )
            .values(
                end_time=end_time,
                next_state_name=next_state_name,
                next_state_category=StateCategory(next_state_category).value,
            )
        )

    async def list_by_work(self, work_id: int) -> list[ProcessStepResult]:
        result = await self.db.execute(
            select(WorkProcessStep)
            .where(WorkProcessStep.work_id == work_id)
            .order_by(WorkProcessStep.begin_time.asc(), WorkProcessStep.id.asc())
        )
        return [self._to_result(row) for row in result.scalars().all()]

    async def rename_state(
        self, flow_id: int, origin_name: str, name: str, category: StateCategory
    ) -> int:
        return await self.execute_write(
            update(WorkProcessStep)
            .where(
                WorkProcessStep.flow_id == flow_id,
                WorkProcessStep.state_name == origin_name,
            )
            .values(state_name=name, state_category=StateCategory(category).value)
        )

    async def rename_next_state(
        self, flow_id: int, origin_name: str, name: str, category: StateCategory
    ) -> int:
        return await self.execute_write(
            update(WorkProcessStep)
            .where(
                WorkProcessStep.flow_id == flow_id,
                WorkProcessStep.next_state_name == origin_name,
            )
            .values(
                next_state_name=name,
                next_state_category=StateCategory(category).value,
            )
        )
