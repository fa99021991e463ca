"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from flywheel.api.v1.dependencies (no manual manager construction).
"""

from fastapi import APIRouter

from flywheel.api.v1.endpoints import (
    health,
    work_process_steps,
    work_state_transitions,
    workflows,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(workflows.router, prefix="/workflows", tags=["workflows"])
api_router.include_router(
    work_state_transitions.router,
    prefix="/work-state-transitions",
    tags=["work-state-transitions"],
)
api_router.include_router(
    work_process_steps.router, prefix="/work-process-steps", tags=["work-process-steps"]
)
