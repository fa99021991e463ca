"""Infrastructure implementations of application service interfaces."""

from flywheel.infrastructure.services.event_outbox import OutboxDispatcher, OutboxEventSink

__all__ = ["OutboxDispatcher", "OutboxEventSink"]
