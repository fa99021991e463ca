"""Work state transition log repository (insert and read only)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.application.dtos.work import WorkStateTransitionResult
from flywheel.infrastructure.persistence.models.work import WorkStateTransition
from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.shared.utils.datetime import ensure_utc


class WorkStateTransitionRepository(BaseRepository[WorkStateTransition]):
    """Append-only log of applied transitions."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkStateTransition)

    @staticmethod
    def _to_result(row: WorkStateTransition) -> WorkStateTransitionResult:
        return WorkStateTransitionResult(
            id=row.id,
            create_time=ensure_utc(row.create_time),
            creator_id=row.creator_id,
            flow_id=row.flow_id,
            work_id=row.work_id,
            from_state=row.from_state,
            to_state=row.to_state,
        )

    async def create_log(
        self, log: WorkStateTransitionResult
    ) -> WorkStateTransitionResult:
        row = WorkStateTransition(
            id=log.id,
            create_time=log.create_time,
            creator_id=log.creator_id,
            flow_id=log.flow_id,
            work_id=log.work_id,
            from_state=log.from_state,
            to_state=log.to_state,
        )
        await self.add(row)
        return self._to_result(row)

    async def list_by_work(self, work_id: int) -> list[WorkStateTransitionResult]:
        result = await self.db.execute(
            select(WorkStateTransition)
            .where(WorkStateTransition.work_id == work_id)
            .order_by(WorkStateTransition.create_time.asc(), WorkStateTransition.id.asc())
        )
        return [self._to_result(row) for row in result.scalars().all()]
