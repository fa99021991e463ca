"""Event outbox repository."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flywheel.application.dtos.event import OutboxEventResult
from flywheel.infrastructure.persistence.models.event_outbox import EventOutbox
from flywheel.infrastructure.persistence.repositories.base import BaseRepository
from flywheel.shared.utils.datetime import ensure_utc


class EventOutboxRepository(BaseRepository[EventOutbox]):
    """Events stored alongside the state change that produced them."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EventOutbox)

    @staticmethod
    def _to_result(row: EventOutbox) -> OutboxEventResult:
        return OutboxEventResult(
            id=row.id,
            create_time=ensure_utc(row.create_time),
            event_type=row.event_type,
            source_type=row.source_type,
            source_id=row.source_id,
            creator_id=row.creator_id,
            creator_name=row.creator_name,
            payload=dict(row.payload or {}),
            dispatched_at=ensure_utc(row.dispatched_at),
        )

    async def append(
        self,
        event_type: str,
        source_type: str,
        source_id: int,
        payload: dict[str, Any],
        creator_id: int,
        creator_name: str,
        create_time: datetime,
    ) -> OutboxEventResult:
        row = EventOutbox(
            event_type=event_type,
            source_type=source_type,
            source_id=source_id,
            payload=payload,
            creator_id=creator_id,
            creator_name=creator_name,
            create_time=create_time,
        )
        await self.add(row)
        return self._to_result(row)

    async def list_pending(self, limit: int = 100) -> list[OutboxEventResult]:
        result = await self.db.execute(
            select(EventOutbox)
            .where(EventOutbox.dispatched_at.is_(None))
            .order_by(EventOutbox.id.asc())
            .limit(limit)
        )
        return [self._to_result(row) for row in result.scalars().all()]

    async def mark_dispatched(self, event_ids: Collection[int], at: datetime) -> int:
        if not event_ids:
            return 0
        return await self.execute_write(
            update(EventOutbox)
            .where(EventOutbox.id.in_(list(event_ids)), EventOutbox.dispatched_at.is_(None))
            .values(dispatched_at=at)
        )
