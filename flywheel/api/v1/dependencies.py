"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the store, the caller's session and the
application managers. Managers are built from infrastructure implementations
here; routes depend only on these dependencies, not on infra directly.
Tests substitute any of them through app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from flywheel.application.interfaces import IEventSink, IIdGenerator, IStore
from flywheel.application.use_cases import WorkflowManager, WorkProcessEngine
from flywheel.core.config import get_settings
from flywheel.domain.exceptions import AuthenticationException
from flywheel.domain.value_objects.session import SessionContext
from flywheel.infrastructure.persistence.database import get_store as _build_store
from flywheel.infrastructure.services import OutboxEventSink
from flywheel.shared.utils.datetime import Clock, SystemClock
from flywheel.shared.utils.generators import get_id_generator


def get_store() -> IStore:
    """Store bound to the process-wide session factory."""
    return _build_store()


def get_clock() -> Clock:
    return SystemClock()


def get_ids() -> IIdGenerator:
    return get_id_generator()


def get_event_sink() -> IEventSink:
    """Event sink writing to the transactional outbox."""
    return OutboxEventSink()


def get_session_context(request: Request) -> SessionContext:
    """Return the caller's session set by SessionContextMiddleware (or an upstream layer).

    Raises:
        AuthenticationException: No session is attached to the request.
    """
    session = getattr(request.state, "session", None)
    if session is None:
        raise AuthenticationException()
    return session


def get_workflow_manager(
    store: Annotated[IStore, Depends(get_store)],
    clock: Annotated[Clock, Depends(get_clock)],
    ids: Annotated[IIdGenerator, Depends(get_ids)],
) -> WorkflowManager:
    return WorkflowManager(
        store, clock, ids, order_base=get_settings().initial_state_order_base
    )


def get_work_process_engine(
    store: Annotated[IStore, Depends(get_store)],
    workflow_manager: Annotated[WorkflowManager, Depends(get_workflow_manager)],
    event_sink: Annotated[IEventSink, Depends(get_event_sink)],
    clock: Annotated[Clock, Depends(get_clock)],
    ids: Annotated[IIdGenerator, Depends(get_ids)],
) -> WorkProcessEngine:
    return WorkProcessEngine(store, workflow_manager, event_sink, clock, ids)


SessionDep = Annotated[SessionContext, Depends(get_session_context)]
WorkflowManagerDep = Annotated[WorkflowManager, Depends(get_workflow_manager)]
WorkProcessEngineDep = Annotated[WorkProcessEngine, Depends(get_work_process_engine)]
