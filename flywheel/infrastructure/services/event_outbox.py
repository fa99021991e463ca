"""Event outbox: transactional event sink plus the dispatcher that drains it.

OutboxEventSink writes events through the caller's unit of work, so an event
exists exactly when the state change that produced it was committed.
OutboxDispatcher later hands pending events to a delivery handler and stamps
them as dispatched.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from flywheel.application.dtos.event import OutboxEventResult
from flywheel.application.dtos.work import WorkPropertyUpdatedEvent
from flywheel.application.interfaces.repositories import IStore, IUnitOfWork
from flywheel.shared.enums import OutboxEventType
from flywheel.shared.telemetry.logging import get_logger
from flywheel.shared.utils.datetime import Clock, SystemClock

logger = get_logger(__name__)

EventHandler = Callable[[OutboxEventResult], Awaitable[None]]

SOURCE_TYPE_WORK = "work"


class OutboxEventSink:
    """IEventSink writing to the event_outbox table."""

    async def publish(self, uow: IUnitOfWork, event: WorkPropertyUpdatedEvent) -> None:
        stored = await uow.outbox.append(
            event_type=OutboxEventType.WORK_PROPERTY_UPDATED.value,
            source_type=SOURCE_TYPE_WORK,
            source_id=event.work_id,
            payload=event.to_payload(),
            creator_id=event.creator_id,
            creator_name=event.creator_name,
            create_time=event.create_time,
        )
        logger.debug(
            "Outbox event stored",
            extra={"event_id": stored.id, "work_id": event.work_id},
        )


class OutboxDispatcher:
    """Delivers pending outbox events to a handler, oldest first.

    Each batch runs in its own transaction. A handler failure stops the drain
    after marking the events delivered so far; the failed event stays pending
    and is retried by the next drain.
    """

    def __init__(
        self,
        store: IStore,
        handler: EventHandler,
        clock: Clock | None = None,
        batch_size: int = 100,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._handler = handler
        self._clock = clock or SystemClock()
        self._batch_size = batch_size

    async def drain(self) -> int:
        """Dispatch pending events until none remain or a handler fails; return the count."""
        total = 0
        while True:
            delivered, failed, fetched = await self._dispatch_batch()
            total += delivered
            if failed or fetched < self._batch_size:
                break
        if total:
            logger.info("Outbox drained", extra={"dispatched": total})
        return total

    async def _dispatch_batch(self) -> tuple[int, bool, int]:
        async with self._store.transaction() as uow:
            pending = await uow.outbox.list_pending(self._batch_size)
            delivered: list[int] = []
            failed = False
            for event in pending:
                try:
                    await self._handler(event)
                except Exception:
                    logger.exception(
                        "Outbox handler failed",
                        extra={"event_id": event.id, "event_type": event.event_type},
                    )
                    failed = True
                    break
                delivered.append(event.id)
            await uow.outbox.mark_dispatched(delivered, self._clock.now())
            return len(delivered), failed, len(pending)
