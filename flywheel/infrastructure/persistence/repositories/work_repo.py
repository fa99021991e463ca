"""Work repository: the columns the process engine maintains."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.application.dtos.work import WorkResult
from flywheel.infrastructure.persistence.models.work import Work, WorkProcessStep
from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.shared.enums import StateCategory
from flywheel.shared.utils.datetime import ensure_utc


class WorkRepository(BaseRepository[Work]):
    """Work repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Work)

    @staticmethod
    def _to_result(row: Work) -> WorkResult:
        return WorkResult(
            id=row.id,
            name=row.name,
            project_id=row.project_id,
            flow_id=row.flow_id,
            state_name=row.state_name,
            state_category=StateCategory(row.state_category),
            state_begin_time=ensure_utc(row.state_begin_time),
            process_begin_time=ensure_utc(row.process_begin_time),
            process_end_time=ensure_utc(row.process_end_time),
            archive_time=ensure_utc(row.archive_time),
            create_time=ensure_utc(row.create_time),
            creator_id=row.creator_id,
        )

    async def get_by_id(self, work_id: int) -> WorkResult | None:
        row = await self.get_by_pk(work_id)
        return self._to_result(row) if row else None

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
        row = Work(
            id=work_id,
            name=name,
            project_id=project_id,
            flow_id=flow_id,
            state_name=state_name,
            state_category=StateCategory(state_category).value,
            state_begin_time=create_time,
            create_time=create_time,
            creator_id=creator_id,
        )
        await self.add(row)
        return self._to_result(row)

    async def transit_state(
        self,
        work_id: int,
        from_state: str,
        to_state: str,
        to_category: StateCategory,
        state_begin_time: datetime,
    ) -> int:
        """Compare-and-set on state_name; 0 rows means the work moved concurrently."""
        return await self.execute_write(
            update(Work)
            .where(Work.id == work_id, Work.state_name == from_state)
            .values(
                state_name=to_state,
                state_category=StateCategory(to_category).value,
                state_begin_time=state_begin_time,
            )
        )

    async def set_process_begin_time(self, work_id: int, value: datetime | None) -> int:
        return await self.execute_write(
            update(Work).where(Work.id == work_id).values(process_begin_time=value)
        )

    async def set_process_end_time(self, work_id: int, value: datetime | None) -> int:
        return await self.execute_write(
            update(Work).where(Work.id == work_id).values(process_end_time=value)
        )

    async def set_archive_time(self, work_id: int, value: datetime | None) -> int:
        return await self.execute_write(
            update(Work).where(Work.id == work_id).values(archive_time=value)
        )

    async def rename_state(
        self, flow_id: int, origin_name: str, name: str, category: StateCategory
    ) -> int:
        return await self.execute_write(
            update(Work)
            .where(Work.flow_id == flow_id, Work.state_name == origin_name)
            .values(state_name=name, state_category=StateCategory(category).value)
        )

    async def is_workflow_referenced(self, flow_id: int) -> bool:
        work = await self.db.execute(select(Work.id).where(Work.flow_id == flow_id).limit(1))
        if work.first() is not None:
            return True
        step = await self.db.execute(
            select(WorkProcessStep.id).where(WorkProcessStep.flow_id == flow_id).limit(1)
        )
        return step.first() is not None
