"""Tests for the id generator and clocks."""

import threading
from datetime import UTC, datetime, timedelta, timezone

import pytest

from flywheel.shared.utils.datetime import (
    FixedClock,
    SystemClock,
    ensure_utc,
    from_timestamp_ms_utc,
    truncate_ms,
)
from flywheel.shared.utils.generators import IdGenerator


def test_ids_strictly_increase_and_stay_positive() -> None:
    gen = IdGenerator(machine_id=3)
    values = [gen.next_id() for _ in range(1000)]
    assert all(v > 0 for v in values)
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_ids_carry_machine_id() -> None:
    gen = IdGenerator(machine_id=0xABCD)
    assert gen() & 0xFFFF == 0xABCD


def test_ids_are_unique_across_threads() -> None:
    gen = IdGenerator(machine_id=1)
    results: list[int] = []
    lock = threading.Lock()

    def worker() -> None:
        local = [gen.next_id() for _ in range(200)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(set(results)) == 800


@pytest.mark.parametrize("machine_id", [-1, 0x10000])
def test_machine_id_out_of_range(machine_id: int) -> None:
    with pytest.raises(ValueError):
        IdGenerator(machine_id=machine_id)


def test_truncate_ms() -> None:
    dt = datetime(2024, 1, 1, 0, 0, 0, 123456, tzinfo=UTC)
    assert truncate_ms(dt).microsecond == 123000


def test_ensure_utc_normalizes() -> None:
    naive = datetime(2024, 1, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    plus_two = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(plus_two) == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    assert ensure_utc(None) is None


def test_from_timestamp_ms_utc() -> None:
    assert from_timestamp_ms_utc(0) == datetime(1970, 1, 1, tzinfo=UTC)


def test_system_clock_is_ms_precision_utc() -> None:
    now = SystemClock().now()
    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0


def test_fixed_clock_set() -> None:
    clock = FixedClock(datetime(2024, 1, 1, 0, 0, 0, 999999, tzinfo=UTC))
    assert clock.now().microsecond == 999000
    clock.set(datetime(2024, 2, 1))
    assert clock.now() == datetime(2024, 2, 1, tzinfo=UTC)
