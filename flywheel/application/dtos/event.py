"""DTOs for the event outbox."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class OutboxEventResult:
    """Event stored in the outbox, waiting for (or past) dispatch."""

    id: int
    create_time: datetime
    event_type: str
    source_type: str
    source_id: int
    creator_id: int
    creator_name: str
    payload: dict[str, Any] = field(default_factory=dict)
    dispatched_at: datetime | None = None
