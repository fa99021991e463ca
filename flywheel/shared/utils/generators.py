"""ID generators (sonyflake 64-bit ids)."""

import threading
from datetime import UTC, datetime

from sonyflake import SonyFlake

EPOCH = datetime(2014, 9, 1, tzinfo=UTC)
MAX_MACHINE_ID = 0xFFFF


class IdGenerator:
    """Process-unique, monotonic id source backed by SonyFlake.

    The machine id fills the low 16 bits, so generators with distinct machine
    ids never collide.
    """

    def __init__(self, machine_id: int = 0) -> None:
        if not 0 <= machine_id <= MAX_MACHINE_ID:
            raise ValueError(f"machine_id must be within 0..{MAX_MACHINE_ID}")
        self.machine_id = machine_id
        self._flake = SonyFlake(start_time=EPOCH, machine_id=lambda: machine_id)

    def next_id(self) -> int:
        """Generate the next identifier.

        Returns:
            A new positive 63-bit integer id.
        """
        result = self._flake.next_id()
        if not isinstance(result, int):
            raise TypeError(
                f"Expected int from SonyFlake.next_id, got {type(result).__name__}"
            )
        return result

    def __call__(self) -> int:
        return self.next_id()


_default_generator: IdGenerator | None = None
_default_lock = threading.Lock()


def get_id_generator() -> IdGenerator:
    """Return the process-wide generator, created from settings on first use."""
    global _default_generator
    if _default_generator is None:
        with _default_lock:
            if _default_generator is None:
                from flywheel.core.config import get_settings

                _default_generator = IdGenerator(get_settings().id_machine_id)
    return _default_generator


def next_id() -> int:
    """Generate an id from the process-wide generator."""
    return get_id_generator().next_id()
