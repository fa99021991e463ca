"""Application services: authorization gate."""

from flywheel.application.services.authorization_service import (
    may_access,
    may_manage,
    require_access,
    require_manage,
    visible_projects,
)

__all__ = [
    "may_access",
    "may_manage",
    "require_access",
    "require_manage",
    "visible_projects",
]
