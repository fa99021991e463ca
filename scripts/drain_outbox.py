"""Drain the event outbox once, logging each pending event.

Usage:
    python -m scripts.drain_outbox

Intended to run periodically (cron or a scheduler) until a real consumer is
wired in; events are marked dispatched after they are logged.
"""

import asyncio
import json
import logging

from dotenv import load_dotenv

from flywheel.application.dtos.event import OutboxEventResult
from flywheel.core.config import get_settings
from flywheel.infrastructure.persistence import database
from flywheel.infrastructure.services import OutboxDispatcher
from flywheel.shared.telemetry.logging import setup_logging

logger = logging.getLogger("flywheel.outbox")


async def log_event(event: OutboxEventResult) -> None:
    logger.info(
        "%s %s/%s %s",
        event.event_type,
        event.source_type,
        event.source_id,
        json.dumps(event.payload, sort_keys=True),
    )


async def main() -> None:
    setup_logging()
    dispatcher = OutboxDispatcher(
        database.get_store(),
        log_event,
        batch_size=get_settings().outbox_dispatch_batch_size,
    )
    count = await dispatcher.drain()
    print(f"Dispatched {count} events")
    await database.dispose_engine()


if __name__ == "__main__":
    load_dotenv(override=True)
    asyncio.run(main())
