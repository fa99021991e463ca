"""Base repository: primary-key lookup, insert and conditional bulk update."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Delete, Update, select
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_pk, add and row-count returning writes.

    Repositories return application DTOs, never ORM instances; subclasses
    convert rows in _to_result.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_pk(self, pk: int) -> ModelType | None:
        """Return a single record by primary key, or None (always re-read from the database)."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == pk)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new record and flush so generated columns are populated."""
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def execute_write(self, stmt: Update | Delete) -> int:
        """Run a bulk UPDATE/DELETE and return the number of affected rows.

        Identity-map synchronization is skipped; repositories never hand out
        ORM instances and reads that may follow a write in the same unit of
        work use populate_existing.
        """
        result = await self.db.execute(
            stmt.execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined]
