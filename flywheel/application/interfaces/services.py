"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators injected into the managers (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from flywheel.application.dtos.work import WorkPropertyUpdatedEvent
    from flywheel.application.interfaces.repositories import IUnitOfWork


# Event sink interface
class IEventSink(Protocol):
    """Receives work property-changed notifications inside the caller's transaction.

    Raising aborts (rolls back) the surrounding operation.
    """

    async def publish(self, uow: IUnitOfWork, event: WorkPropertyUpdatedEvent) -> None:
        """Record or deliver the event."""


# Id generator interface
class IIdGenerator(Protocol):
    """Source of process-unique 64-bit ids."""

    def next_id(self) -> int:
        """Return the next id."""
