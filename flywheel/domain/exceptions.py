"""Domain exceptions for the flywheel engine.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class FlywheelException(Exception):
    """Base exception for all flywheel errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable, stable error code.
        details: Additional error context (the boundary "data" payload).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the boundary representation (error code, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FlywheelException):
    """Raised when input validation fails (bad parameter)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(FlywheelException):
    """Raised when no authenticated session is available."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ForbiddenException(FlywheelException):
    """Raised when the caller's roles do not authorize the action on a project."""

    def __init__(
        self,
        project_id: int | None = None,
        action: str | None = None,
        message: str = "access forbidden",
    ) -> None:
        """Initialize with optional project and action.

        Args:
            project_id: Project the caller tried to act on.
            action: Action that was attempted (e.g. 'manage', 'access').
            message: Human-readable message.
        """
        details: dict[str, Any] = {}
        if project_id is not None:
            details["project_id"] = str(project_id)
        if action:
            details["action"] = action
        super().__init__(message, "FORBIDDEN", details)


class ResourceNotFoundException(FlywheelException):
    """Raised when a requested row is missing."""

    def __init__(self, resource_type: str, resource_id: Any) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow', 'work').
            resource_id: The id (or key) that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class WorkflowReferencedException(FlywheelException):
    """Raised when deleting a workflow that works or process steps still reference."""

    def __init__(self, workflow_id: int) -> None:
        super().__init__(
            "workflow is referenced by works or process steps",
            "WORKFLOW_REFERENCED",
            {"workflow_id": str(workflow_id)},
        )


class UnknownStateException(FlywheelException):
    """Raised when a transition endpoint is not among the workflow's states."""

    def __init__(self, state_name: str) -> None:
        super().__init__(
            f"unknown state: {state_name}",
            "UNKNOWN_STATE",
            {"state": state_name},
        )


class StateExistedException(FlywheelException):
    """Raised when renaming a state to a name that already exists."""

    def __init__(self, state_name: str) -> None:
        super().__init__(
            f"state already exists: {state_name}",
            "STATE_EXISTED",
            {"state": state_name},
        )


class StateInvalidException(FlywheelException):
    """Raised when a stored transition references a missing state."""

    def __init__(self, workflow_id: int, from_state: str, to_state: str) -> None:
        super().__init__(
            f"stored transition {from_state} -> {to_state} references a missing state",
            "STATE_INVALID",
            {
                "workflow_id": str(workflow_id),
                "from_state": from_state,
                "to_state": to_state,
            },
        )


class InvalidTransitionException(FlywheelException):
    """Raised when the state machine does not admit (from_state, to_state)."""

    def __init__(self, from_state: str, to_state: str) -> None:
        super().__init__(
            f"transition from {from_state} to {to_state} is invalid",
            "INVALID_TRANSITION",
            {"from_state": from_state, "to_state": to_state},
        )


class InvalidStateException(FlywheelException):
    """Raised when a transition endpoint cannot be resolved to a state."""

    def __init__(self, state_name: str) -> None:
        super().__init__(
            f"invalid state {state_name}",
            "INVALID_STATE",
            {"state": state_name},
        )


class ArchiveStatusInvalidException(FlywheelException):
    """Raised when a transition is attempted on an archived work."""

    def __init__(self, work_id: int) -> None:
        super().__init__(
            "work is archived",
            "ARCHIVE_STATUS_INVALID",
            {"work_id": str(work_id)},
        )


class AffectedRowMismatchException(FlywheelException):
    """Raised when a conditional update touched an unexpected number of rows.

    Usually a concurrent modification or a stale input; callers may retry.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"expected affected row is {expected}, but actual is {actual}",
            "AFFECTED_ROW_MISMATCH",
            {"expected": expected, "actual": actual},
        )


class TransitionExistedException(FlywheelException):
    """Raised when adding a (from_state, to_state) transition that is already defined."""

    def __init__(self, from_state: str, to_state: str) -> None:
        super().__init__(
            f"transition from {from_state} to {to_state} already exists",
            "TRANSITION_EXISTED",
            {"from_state": from_state, "to_state": to_state},
        )
