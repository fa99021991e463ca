"""Event outbox: events written with transitions, drained by the dispatcher."""

import pytest

from flywheel.application.dtos.event import OutboxEventResult
from flywheel.application.dtos.work import WorkStateTransitionBrief
from flywheel.application.use_cases import WorkProcessEngine
from flywheel.domain.entities.workflow import WorkflowDetail
from flywheel.domain.value_objects.session import SessionContext
from flywheel.infrastructure.persistence.store import Store
from flywheel.infrastructure.services import OutboxDispatcher
from flywheel.shared.enums import OutboxEventType
from tests.conftest import T0


async def _move(engine: WorkProcessEngine, detail: WorkflowDetail, work_id: int, session) -> None:
    await engine.transition(
        WorkStateTransitionBrief(detail.id, work_id, "PENDING", "DOING"), session
    )


async def test_transition_stores_property_updated_event(
    process_engine: WorkProcessEngine,
    workflow: WorkflowDetail,
    seed_work,
    store: Store,
    member_session: SessionContext,
) -> None:
    """The StateName change is written to the outbox in the same transaction."""
    work = await seed_work(workflow)
    await _move(process_engine, workflow, work.id, member_session)

    async with store.transaction() as uow:
        pending = await uow.outbox.list_pending()
    assert len(pending) == 1
    event = pending[0]
    assert event.event_type == OutboxEventType.WORK_PROPERTY_UPDATED.value
    assert (event.source_type, event.source_id) == ("work", work.id)
    assert (event.creator_id, event.creator_name) == (8, "bob")
    assert event.create_time == T0
    assert event.dispatched_at is None
    assert event.payload == {
        "work_id": str(work.id),
        "project_id": "1",
        "flow_id": str(workflow.id),
        "updates": [
            {
                "property_name": "StateName",
                "property_desc": "StateName",
                "old_value": "PENDING",
                "old_value_desc": "PENDING",
                "new_value": "DOING",
                "new_value_desc": "DOING",
            }
        ],
    }


async def test_dispatcher_delivers_in_order_and_marks_dispatched(
    process_engine: WorkProcessEngine,
    workflow: WorkflowDetail,
    seed_work,
    store: Store,
    clock,
    member_session: SessionContext,
) -> None:
    first = await seed_work(workflow)
    second = await seed_work(workflow)
    third = await seed_work(workflow)
    for work in (first, second, third):
        await _move(process_engine, workflow, work.id, member_session)

    delivered: list[OutboxEventResult] = []

    async def handler(event: OutboxEventResult) -> None:
        delivered.append(event)

    dispatcher = OutboxDispatcher(store, handler, clock=clock, batch_size=2)
    assert await dispatcher.drain() == 3
    assert [e.source_id for e in delivered] == [first.id, second.id, third.id]

    async with store.transaction() as uow:
        assert await uow.outbox.list_pending() == []
    assert await dispatcher.drain() == 0
    assert len(delivered) == 3


async def test_dispatcher_stops_at_failing_handler(
    process_engine: WorkProcessEngine,
    workflow: WorkflowDetail,
    seed_work,
    store: Store,
    clock,
    member_session: SessionContext,
) -> None:
    """A handler failure keeps that event and everything after it pending."""
    works = [await seed_work(workflow) for _ in range(3)]
    for work in works:
        await _move(process_engine, workflow, work.id, member_session)

    calls: list[int] = []

    async def flaky(event: OutboxEventResult) -> None:
        calls.append(event.source_id)
        if event.source_id == works[1].id:
            raise ConnectionError("broker unavailable")

    dispatcher = OutboxDispatcher(store, flaky, clock=clock)
    assert await dispatcher.drain() == 1
    assert calls == [works[0].id, works[1].id]

    async with store.transaction() as uow:
        pending = await uow.outbox.list_pending()
    assert [e.source_id for e in pending] == [works[1].id, works[2].id]


async def test_dispatcher_rejects_non_positive_batch(store: Store) -> None:
    async def handler(event: OutboxEventResult) -> None:
        return None

    with pytest.raises(ValueError):
        OutboxDispatcher(store, handler, batch_size=0)
