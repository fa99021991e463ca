"""Workflow repository (base rows only; states and transitions live apart)."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.domain.entities.workflow import WorkflowEntity
from flywheel.infrastructure.persistence.models.workflow import Workflow
from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.shared.utils.datetime import ensure_utc


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    @staticmethod
    def _to_result(row: Workflow) -> WorkflowEntity:
        return WorkflowEntity(
            id=row.id,
            project_id=row.project_id,
            name=row.name,
            theme_color=row.theme_color,
            theme_icon=row.theme_icon,
            create_time=ensure_utc(row.create_time),
        )

    async def get_by_id(self, workflow_id: int) -> WorkflowEntity | None:
        row = await self.get_by_pk(workflow_id)
        return self._to_result(row) if row else None

    async def query(
        self,
        project_ids: Collection[int],
        project_id: int | None = None,
        name: str = "",
    ) -> list[WorkflowEntity]:
        """List workflows in project_ids; name matches case-insensitively as a substring."""
        if not project_ids:
            return []
        q = select(Workflow).where(Workflow.project_id.in_(list(project_ids)))
        if project_id is not None:
            q = q.where(Workflow.project_id == project_id)
        if name:
            pattern = name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            q = q.where(Workflow.name.ilike(f"%{pattern}%", escape="\\"))
        q = q.order_by(Workflow.create_time.asc(), Workflow.id.asc())
        result = await self.db.execute(q)
        return [self._to_result(row) for row in result.scalars().all()]

    async def create_workflow(self, workflow: WorkflowEntity) -> WorkflowEntity:
        row = Workflow(
            id=workflow.id,
            project_id=workflow.project_id,
            name=workflow.name,
            theme_color=workflow.theme_color,
            theme_icon=workflow.theme_icon,
            create_time=workflow.create_time,
        )
        await self.add(row)
        return self._to_result(row)

    async def update_base(
        self, workflow_id: int, name: str, theme_color: str, theme_icon: str
    ) -> int:
        return await self.execute_write(
            update(Workflow)
            .where(Workflow.id == workflow_id)
            .values(name=name, theme_color=theme_color, theme_icon=theme_icon)
        )

    async def delete_workflow(self, workflow_id: int) -> int:
        return await self.execute_write(delete(Workflow).where(Workflow.id == workflow_id))
