"""Tests for the StateMachine value type and workflow entities."""

import pytest

from flywheel.domain.entities.workflow import (
    State,
    StateMachine,
    Transition,
    WorkflowDetail,
    WorkflowEntity,
    generic_state_machine,
)
from flywheel.domain.exceptions import UnknownStateException
from flywheel.shared.enums import StateCategory
from tests.conftest import T0


def _machine() -> StateMachine:
    return StateMachine(
        states=[
            State("PENDING", StateCategory.IN_BACKLOG),
            State("DOING", StateCategory.IN_PROCESS),
            State("DONE", StateCategory.DONE),
        ],
        transitions=[
            Transition("PENDING", "DOING", "begin"),
            Transition("DOING", "DONE", "finish"),
        ],
    )


def test_find_state_is_exact_and_case_sensitive() -> None:
    machine = _machine()
    assert machine.find_state("DOING") == State("DOING", StateCategory.IN_PROCESS)
    assert machine.find_state("doing") is None
    assert machine.find_state("DOIN") is None
    assert machine.has_state("DONE")


def test_available_transitions_matches_both_endpoints() -> None:
    machine = _machine()
    assert machine.available_transitions("PENDING", "DOING") == [
        Transition("PENDING", "DOING", "begin")
    ]
    assert machine.available_transitions("PENDING", "DONE") == []
    assert machine.available_transitions("DOING", "PENDING") == []


def test_validate_accepts_known_endpoints() -> None:
    _machine().validate()
    generic_state_machine().validate()


@pytest.mark.parametrize(
    "transition, unknown",
    [
        (Transition("PENDING", "REVIEW"), "REVIEW"),
        (Transition("BLOCKED", "DONE"), "BLOCKED"),
    ],
)
def test_validate_rejects_unknown_endpoint(transition: Transition, unknown: str) -> None:
    machine = _machine()
    machine.transitions.append(transition)
    with pytest.raises(UnknownStateException) as exc_info:
        machine.validate()
    assert exc_info.value.details == {"state": unknown}


def test_with_stamped_orders_uses_input_position() -> None:
    machine = StateMachine(
        states=[
            State("A", StateCategory.IN_BACKLOG, order=7),
            State("B", StateCategory.IN_PROCESS, order=-3),
            State("C", StateCategory.DONE),
        ],
        transitions=[Transition("A", "B")],
    )
    stamped = machine.with_stamped_orders(10000)
    assert [(s.name, s.order) for s in stamped.states] == [
        ("A", 10001),
        ("B", 10002),
        ("C", 10003),
    ]
    assert stamped.transitions == machine.transitions
    # original untouched
    assert machine.states[0].order == 7


def test_transition_key_ignores_name() -> None:
    assert Transition("A", "B", "x").key == Transition("A", "B", "y").key == ("A", "B")


def test_generic_state_machine_shape() -> None:
    machine = generic_state_machine()
    assert [s.name for s in machine.states] == ["PENDING", "DOING", "DONE"]
    assert len(machine.transitions) == 6
    assert machine.available_transitions("PENDING", "DONE")
    assert machine.available_transitions("DONE", "DOING")


def test_generic_state_machine_copies_are_independent() -> None:
    """Mutating one default machine does not leak into the next."""
    first = generic_state_machine()
    first.states.append(State("REVIEW", StateCategory.IN_PROCESS))
    first.transitions.clear()

    second = generic_state_machine()
    assert [s.name for s in second.states] == ["PENDING", "DOING", "DONE"]
    assert len(second.transitions) == 6


def test_workflow_detail_delegates_to_workflow() -> None:
    wf = WorkflowEntity(
        id=11, project_id=3, name="wf", theme_color="#000", theme_icon="i", create_time=T0
    )
    detail = WorkflowDetail(workflow=wf, state_machine=_machine())
    assert detail.id == 11
    assert detail.project_id == 3
    assert detail.find_state("DONE").category == StateCategory.DONE
