"""Transactional store: one AsyncSession transaction per unit of work.

Every manager operation runs inside Store.transaction(); the transaction
commits when the block exits normally and rolls back when it raises, so a
failing step (including an event sink) leaves no partial writes behind.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from flywheel.infrastructure.persistence.repositories import (
    EventOutboxRepository,
    WorkflowRepository,
    WorkflowStateRepository,
    WorkflowTransitionRepository,
    WorkProcessStepRepository,
    WorkRepository,
    WorkStateTransitionRepository,
)
from flywheel.shared.telemetry.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class UnitOfWork:
    """Repositories sharing one session (and therefore one transaction)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.workflows = WorkflowRepository(session)
        self.states = WorkflowStateRepository(session)
        self.transitions = WorkflowTransitionRepository(session)
        self.works = WorkRepository(session)
        self.process_steps = WorkProcessStepRepository(session)
        self.transition_logs = WorkStateTransitionRepository(session)
        self.outbox = EventOutboxRepository(session)


class Store:
    """Opens transactions on a session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[UnitOfWork]:
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield UnitOfWork(session)
            except Exception:
                logger.debug("Transaction rolled back", exc_info=True)
                raise

    async def run(self, fn: Callable[[UnitOfWork], Awaitable[T]]) -> T:
        """Run fn in a transaction; commit on return, roll back on error."""
        async with self.transaction() as uow:
            return await fn(uow)
