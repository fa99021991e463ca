"""Store transactions: commit on success, roll back on error."""

import pytest

from flywheel.infrastructure.persistence.store import Store, UnitOfWork
from flywheel.shared.enums import StateCategory
from tests.conftest import PROJECT_ID, T0


async def _create_work(uow: UnitOfWork, work_id: int) -> int:
    work = await uow.works.create_work(
        work_id=work_id,
        name="w",
        project_id=PROJECT_ID,
        flow_id=1,
        state_name="PENDING",
        state_category=StateCategory.IN_BACKLOG,
        create_time=T0,
        creator_id=7,
    )
    return work.id


async def test_run_commits_and_returns_result(store: Store) -> None:
    result = await store.run(lambda uow: _create_work(uow, 1001))
    assert result == 1001

    async with store.transaction() as uow:
        work = await uow.works.get_by_id(1001)
    assert work is not None
    assert work.state_name == "PENDING"


async def test_run_rolls_back_on_error(store: Store) -> None:
    """Writes made before the failure are discarded."""

    async def create_then_fail(uow: UnitOfWork) -> None:
        await _create_work(uow, 1002)
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await store.run(create_then_fail)

    async with store.transaction() as uow:
        assert await uow.works.get_by_id(1002) is None


async def test_transaction_rolls_back_on_error(store: Store) -> None:
    with pytest.raises(ValueError):
        async with store.transaction() as uow:
            await _create_work(uow, 1003)
            raise ValueError("abort")

    async with store.transaction() as uow:
        assert await uow.works.get_by_id(1003) is None
