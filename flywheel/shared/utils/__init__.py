"""Shared utilities: datetime/clock and id generation."""

from flywheel.shared.utils.datetime import (
    Clock,
    FixedClock,
    SystemClock,
    ensure_utc,
    from_timestamp_ms_utc,
    truncate_ms,
    utc_now,
)
from flywheel.shared.utils.generators import IdGenerator, get_id_generator, next_id

__all__ = [
    "Clock",
    "FixedClock",
    "IdGenerator",
    "SystemClock",
    "ensure_utc",
    "from_timestamp_ms_utc",
    "get_id_generator",
    "next_id",
    "truncate_ms",
    "utc_now",
]
