"""Tests for domain exceptions (error_code, message, details)."""

import pytest

from flywheel.domain.exceptions import (
    AffectedRowMismatchException,
    ArchiveStatusInvalidException,
    AuthenticationException,
    FlywheelException,
    ForbiddenException,
    InvalidStateException,
    InvalidTransitionException,
    ResourceNotFoundException,
    StateExistedException,
    StateInvalidException,
    TransitionExistedException,
    UnknownStateException,
    ValidationException,
    WorkflowReferencedException,
)


def test_flywheel_exception_default_error_code() -> None:
    """Base FlywheelException uses class name as error_code when not provided."""
    exc = FlywheelException("Something failed")
    assert exc.error_code == "FlywheelException"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "FlywheelException",
        "message": "Something failed",
        "details": {},
    }


def test_affected_row_mismatch_message() -> None:
    """The message states expected and actual affected rows."""
    exc = AffectedRowMismatchException(1, 0)
    assert exc.message == "expected affected row is 1, but actual is 0"
    assert exc.error_code == "AFFECTED_ROW_MISMATCH"
    assert exc.details == {"expected": 1, "actual": 0}


def test_invalid_transition_message() -> None:
    exc = InvalidTransitionException("PENDING", "DONE")
    assert exc.message == "transition from PENDING to DONE is invalid"
    assert exc.details == {"from_state": "PENDING", "to_state": "DONE"}


def test_resource_not_found_stringifies_id() -> None:
    exc = ResourceNotFoundException("workflow", 42)
    assert exc.message == "workflow not found: 42"
    assert exc.details == {"resource_type": "workflow", "resource_id": "42"}


def test_forbidden_without_project() -> None:
    exc = ForbiddenException()
    assert exc.error_code == "FORBIDDEN"
    assert exc.details == {}


@pytest.mark.parametrize(
    "exc, code",
    [
        (ValidationException("bad"), "VALIDATION_ERROR"),
        (AuthenticationException(), "AUTHENTICATION_ERROR"),
        (WorkflowReferencedException(1), "WORKFLOW_REFERENCED"),
        (UnknownStateException("X"), "UNKNOWN_STATE"),
        (StateExistedException("X"), "STATE_EXISTED"),
        (StateInvalidException(1, "A", "B"), "STATE_INVALID"),
        (InvalidStateException("X"), "INVALID_STATE"),
        (ArchiveStatusInvalidException(1), "ARCHIVE_STATUS_INVALID"),
        (TransitionExistedException("A", "B"), "TRANSITION_EXISTED"),
    ],
)
def test_error_codes(exc: FlywheelException, code: str) -> None:
    """Each exception carries its stable boundary error code."""
    assert exc.error_code == code
    assert isinstance(exc, FlywheelException)
