"""
UTC datetime utilities and the injectable clock.

All datetime values in the system are timezone-aware UTC truncated to
millisecond precision. Managers receive a Clock at construction and never
call datetime.now() directly.
"""

from datetime import UTC, datetime
from typing import Protocol


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def truncate_ms(dt: datetime) -> datetime:
    """Drop sub-millisecond precision (microseconds rounded down to ms)."""
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes
    (SQLite hands back naive values).

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def from_timestamp_ms_utc(timestamp_ms: int) -> datetime:
    """
    Create a UTC-aware datetime from a millisecond Unix timestamp.

    Args:
        timestamp_ms: Unix timestamp in milliseconds

    Returns:
        UTC-aware datetime
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return a UTC-aware datetime truncated to milliseconds."""


class SystemClock:
    """Wall clock. Millisecond-truncated UTC."""

    def now(self) -> datetime:
        return truncate_ms(utc_now())


class FixedClock:
    """Clock frozen at a given instant until advanced; for tests and replay."""

    def __init__(self, instant: datetime) -> None:
        self._instant = truncate_ms(ensure_utc(instant))

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = truncate_ms(ensure_utc(instant))
