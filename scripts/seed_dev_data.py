"""Seed a development database with a generic workflow and a few works.

Creates missing tables, a workflow using the generic PENDING/DOING/DONE state
machine for the given project, and works positioned at its first state, each
with its initial open process step.

Usage:
    python -m scripts.seed_dev_data [project_id] [work_count]

Defaults: project 1, 3 works. Reads DATABASE_URL from the environment or .env.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from flywheel.application.dtos.workflow import WorkflowCreation
from flywheel.application.use_cases import WorkflowManager
from flywheel.core.config import get_settings
from flywheel.domain.entities.workflow import generic_state_machine
from flywheel.domain.value_objects.session import Identity, ProjectRole, SessionContext
from flywheel.infrastructure.persistence import database
from flywheel.shared.enums import ProjectRoleName
from flywheel.shared.telemetry.logging import setup_logging
from flywheel.shared.utils.datetime import SystemClock
from flywheel.shared.utils.generators import get_id_generator

SEED_IDENTITY = Identity(id=1, nickname="seed")


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_* when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


async def main(project_id: int, work_count: int) -> None:
    setup_logging()
    await database.create_schema()
    store = database.get_store()
    clock = SystemClock()
    ids = get_id_generator()
    session = SessionContext(
        identity=SEED_IDENTITY,
        roles=(ProjectRole(ProjectRoleName.MANAGER.value, project_id),),
    )

    manager = WorkflowManager(
        store, clock, ids, order_base=get_settings().initial_state_order_base
    )
    detail = await manager.create(
        WorkflowCreation(
            name="Generic",
            project_id=project_id,
            theme_color="#3b82f6",
            theme_icon="flow",
            state_machine=generic_state_machine(),
        ),
        session,
    )
    initial = detail.state_machine.states[0]

    async with store.transaction() as uow:
        for index in range(work_count):
            now = clock.now()
            work = await uow.works.create_work(
                work_id=ids.next_id(),
                name=f"Work {index + 1}",
                project_id=project_id,
                flow_id=detail.id,
                state_name=initial.name,
                state_category=initial.category,
                create_time=now,
                creator_id=SEED_IDENTITY.id,
            )
            await uow.process_steps.create_step(
                work_id=work.id,
                flow_id=detail.id,
                state_name=initial.name,
                state_category=initial.category,
                begin_time=now,
                creator_id=SEED_IDENTITY.id,
                creator_name=SEED_IDENTITY.nickname,
            )
    print(f"Seeded workflow {detail.id} with {work_count} works in project {project_id}")
    await database.dispose_engine()


if __name__ == "__main__":
    _load_env()
    project = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    count = int(sys.argv[2]) if len(sys.argv) > 2 else 3
    asyncio.run(main(project, count))
