"""Domain layer: entities, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from flywheel.domain.entities import (
    GENERIC_STATES,
    GENERIC_TRANSITIONS,
    State,
    StateMachine,
    Transition,
    WorkflowDetail,
    WorkflowEntity,
    generic_state_machine,
)
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
from flywheel.domain.value_objects import Identity, ProjectRole, SessionContext

__all__ = [
    # Entities
    "GENERIC_STATES",
    "GENERIC_TRANSITIONS",
    "State",
    "StateMachine",
    "Transition",
    "WorkflowDetail",
    "WorkflowEntity",
    "generic_state_machine",
    # Exceptions
    "AffectedRowMismatchException",
    "ArchiveStatusInvalidException",
    "AuthenticationException",
    "FlywheelException",
    "ForbiddenException",
    "InvalidStateException",
    "InvalidTransitionException",
    "ResourceNotFoundException",
    "StateExistedException",
    "StateInvalidException",
    "TransitionExistedException",
    "UnknownStateException",
    "ValidationException",
    "WorkflowReferencedException",
    # Value objects
    "Identity",
    "ProjectRole",
    "SessionContext",
]
