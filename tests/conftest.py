"""Pytest configuration and fixtures for flywheel.

Store-backed tests run against an in-memory SQLite database (aiosqlite,
StaticPool) created fresh for every test. HTTP tests use flywheel.main's
create_app() with the store, clock and id generator overridden, and pass the
caller's session through the gateway identity headers.
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from flywheel.api.v1 import dependencies as deps
from flywheel.application.dtos.work import WorkResult
from flywheel.application.dtos.workflow import WorkflowCreation
from flywheel.application.use_cases import WorkflowManager, WorkProcessEngine
from flywheel.domain.entities.workflow import (
    State,
    StateMachine,
    Transition,
    WorkflowDetail,
)
from flywheel.domain.value_objects.session import Identity, SessionContext
from flywheel.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from flywheel.infrastructure.persistence.store import Store
from flywheel.infrastructure.services import OutboxEventSink
from flywheel.main import create_app
from flywheel.middleware import SessionContextMiddleware
from flywheel.shared.enums import StateCategory
from flywheel.shared.utils.datetime import FixedClock
from flywheel.shared.utils.generators import IdGenerator

T0 = datetime(2024, 1, 1, 9, 0, 0, tzinfo=UTC)
PROJECT_ID = 1
OTHER_PROJECT_ID = 2


def make_session(user_id: int, *roles: str, nickname: str = "") -> SessionContext:
    return SessionContext.from_role_strings(
        Identity(id=user_id, nickname=nickname or f"user{user_id}"), roles
    )


def basic_creation(project_id: int = PROJECT_ID, name: str = "wf1") -> WorkflowCreation:
    """PENDING -> DOING -> DONE, without a PENDING -> DONE shortcut."""
    return WorkflowCreation(
        name=name,
        project_id=project_id,
        theme_color="#fff",
        theme_icon="i",
        state_machine=StateMachine(
            states=[
                State("PENDING", StateCategory.IN_BACKLOG),
                State("DOING", StateCategory.IN_PROCESS),
                State("DONE", StateCategory.DONE),
            ],
            transitions=[
                Transition("PENDING", "DOING"),
                Transition("DOING", "DONE"),
            ],
        ),
    )


def auth_headers(user_id: int, *roles: str, nickname: str = "") -> dict[str, str]:
    """Gateway identity headers for API tests."""
    return {
        "X-Identity-Id": str(user_id),
        "X-Identity-Nickname": nickname or f"user{user_id}",
        "X-Identity-Roles": ",".join(roles),
    }


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database with all tables."""
    eng = build_engine("sqlite+aiosqlite://")
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def store(engine: AsyncEngine) -> Store:
    return Store(build_session_factory(engine))


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(T0)


@pytest.fixture
def ids() -> IdGenerator:
    return IdGenerator(machine_id=1)


@pytest.fixture
def advance(clock: FixedClock):
    """Move the fixed clock forward by the given number of minutes."""

    def _advance(minutes: int = 1) -> datetime:
        clock.set(clock.now() + timedelta(minutes=minutes))
        return clock.now()

    return _advance


@pytest.fixture
def manager_session() -> SessionContext:
    """Manager of project 1."""
    return make_session(7, f"manager_{PROJECT_ID}", nickname="alice")


@pytest.fixture
def member_session() -> SessionContext:
    """Plain member of project 1."""
    return make_session(8, f"member_{PROJECT_ID}", nickname="bob")


@pytest.fixture
def outsider_session() -> SessionContext:
    """Manager of another project only."""
    return make_session(9, f"manager_{OTHER_PROJECT_ID}", nickname="carol")


@pytest.fixture
def workflow_manager(store: Store, clock: FixedClock, ids: IdGenerator) -> WorkflowManager:
    return WorkflowManager(store, clock, ids)


@pytest.fixture
def process_engine(
    store: Store,
    workflow_manager: WorkflowManager,
    clock: FixedClock,
    ids: IdGenerator,
) -> WorkProcessEngine:
    return WorkProcessEngine(store, workflow_manager, OutboxEventSink(), clock, ids)


@pytest.fixture
async def workflow(
    workflow_manager: WorkflowManager, manager_session: SessionContext
) -> WorkflowDetail:
    """The basic PENDING/DOING/DONE workflow in project 1."""
    return await workflow_manager.create(basic_creation(), manager_session)


@pytest.fixture
def seed_work(store: Store, clock: FixedClock, ids: IdGenerator):
    """Factory creating a work at a state plus its initial open process step."""

    async def _seed(
        detail: WorkflowDetail,
        state_name: str = "PENDING",
        *,
        archived: bool = False,
        creator_id: int = 7,
    ) -> WorkResult:
        state = detail.find_state(state_name)
        assert state is not None
        now = clock.now()
        async with store.transaction() as uow:
            work = await uow.works.create_work(
                work_id=ids.next_id(),
                name="w",
                project_id=detail.project_id,
                flow_id=detail.id,
                state_name=state.name,
                state_category=state.category,
                create_time=now,
                creator_id=creator_id,
            )
            if state.category != StateCategory.DONE:
                await uow.process_steps.create_step(
                    work_id=work.id,
                    flow_id=detail.id,
                    state_name=state.name,
                    state_category=state.category,
                    begin_time=now,
                    creator_id=creator_id,
                    creator_name="alice",
                )
            if archived:
                await uow.works.set_archive_time(work.id, now)
        return work

    return _seed


@pytest.fixture
async def client(
    store: Store, clock: FixedClock, ids: IdGenerator
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh app bound to the test store."""
    app = create_app()
    app.add_middleware(SessionContextMiddleware)
    app.dependency_overrides[deps.get_store] = lambda: store
    app.dependency_overrides[deps.get_clock] = lambda: clock
    app.dependency_overrides[deps.get_ids] = lambda: ids
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
