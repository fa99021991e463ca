"""Domain value objects and shared value types."""

from flywheel.domain.value_objects.session import Identity, ProjectRole, SessionContext

__all__ = [
    "Identity",
    "ProjectRole",
    "SessionContext",
]
