"""Work state transition and process step endpoints."""

from httpx import AsyncClient

from flywheel.application.use_cases import WorkflowManager
from flywheel.domain.value_objects.session import SessionContext
from tests.conftest import auth_headers, basic_creation

MEMBER = auth_headers(8, "member_1", nickname="bob")
OUTSIDER = auth_headers(9, "manager_2", nickname="carol")


async def _setup(workflow_manager: WorkflowManager, manager_session: SessionContext, seed_work):
    detail = await workflow_manager.create(basic_creation(), manager_session)
    work = await seed_work(detail)
    return detail, work


def _body(detail, work, from_state: str, to_state: str) -> dict:
    return {
        "flowId": str(detail.id),
        "workId": str(work.id),
        "fromState": from_state,
        "toState": to_state,
    }


async def test_transition_and_process_steps(
    client: AsyncClient,
    workflow_manager: WorkflowManager,
    manager_session: SessionContext,
    seed_work,
    advance,
) -> None:
    """POST a transition, then read the rolled process steps back."""
    detail, work = await _setup(workflow_manager, manager_session, seed_work)
    advance()

    response = await client.post(
        "/api/v1/work-state-transitions",
        json=_body(detail, work, "PENDING", "DOING"),
        headers=MEMBER,
    )
    assert response.status_code == 201, response.text
    log = response.json()
    assert log["workId"] == str(work.id)
    assert log["creatorId"] == "8"
    assert (log["fromState"], log["toState"]) == ("PENDING", "DOING")

    response = await client.get(
        "/api/v1/work-process-steps", params={"workId": str(work.id)}, headers=MEMBER
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    closed, opened = data["list"]
    assert closed["stateName"] == "PENDING"
    assert closed["nextStateName"] == "DOING"
    assert closed["endTime"] is not None
    assert opened["stateName"] == "DOING"
    assert opened["endTime"] is None
    assert opened["creatorName"] == "bob"


async def test_invalid_transition_returns_400(
    client: AsyncClient,
    workflow_manager: WorkflowManager,
    manager_session: SessionContext,
    seed_work,
) -> None:
    detail, work = await _setup(workflow_manager, manager_session, seed_work)
    response = await client.post(
        "/api/v1/work-state-transitions",
        json=_body(detail, work, "PENDING", "DONE"),
        headers=MEMBER,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_TRANSITION"


async def test_stale_transition_returns_409(
    client: AsyncClient,
    workflow_manager: WorkflowManager,
    manager_session: SessionContext,
    seed_work,
) -> None:
    """Repeating a transition from a state the work already left is a conflict."""
    detail, work = await _setup(workflow_manager, manager_session, seed_work)
    body = _body(detail, work, "PENDING", "DOING")
    first = await client.post("/api/v1/work-state-transitions", json=body, headers=MEMBER)
    assert first.status_code == 201
    second = await client.post("/api/v1/work-state-transitions", json=body, headers=MEMBER)
    assert second.status_code == 409
    assert second.json() == {
        "error": "AFFECTED_ROW_MISMATCH",
        "message": "expected affected row is 1, but actual is 0",
        "details": {"expected": 1, "actual": 0},
    }


async def test_archived_work_returns_409(
    client: AsyncClient,
    workflow_manager: WorkflowManager,
    manager_session: SessionContext,
    seed_work,
) -> None:
    detail = await workflow_manager.create(basic_creation(), manager_session)
    work = await seed_work(detail, archived=True)
    response = await client.post(
        "/api/v1/work-state-transitions",
        json=_body(detail, work, "PENDING", "DOING"),
        headers=MEMBER,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "ARCHIVE_STATUS_INVALID"


async def test_outsider_cannot_transition_or_see_steps(
    client: AsyncClient,
    workflow_manager: WorkflowManager,
    manager_session: SessionContext,
    seed_work,
) -> None:
    detail, work = await _setup(workflow_manager, manager_session, seed_work)
    response = await client.post(
        "/api/v1/work-state-transitions",
        json=_body(detail, work, "PENDING", "DOING"),
        headers=OUTSIDER,
    )
    assert response.status_code == 403

    response = await client.get(
        "/api/v1/work-process-steps", params={"workId": str(work.id)}, headers=OUTSIDER
    )
    assert response.status_code == 200
    assert response.json() == {"list": [], "total": 0}


async def test_process_steps_requires_work_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/work-process-steps", headers=MEMBER)
    assert response.status_code == 422
