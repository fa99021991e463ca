"""Shared utilities: enums, logging, clock and id generation.

Used by domain, application, and infrastructure. No business logic.
"""

from flywheel.shared.enums import OutboxEventType, ProjectRoleName, StateCategory
from flywheel.shared.utils import (
    Clock,
    FixedClock,
    IdGenerator,
    SystemClock,
    ensure_utc,
    next_id,
    truncate_ms,
    utc_now,
)

__all__ = [
    "Clock",
    "FixedClock",
    "IdGenerator",
    "OutboxEventType",
    "ProjectRoleName",
    "StateCategory",
    "SystemClock",
    "ensure_utc",
    "next_id",
    "truncate_ms",
    "utc_now",
]
