"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (store, repositories, event sink).
"""

from flywheel.application.interfaces import IEventSink, IIdGenerator, IStore, IUnitOfWork
from flywheel.application.use_cases import WorkflowManager, WorkProcessEngine

__all__ = [
    "IEventSink",
    "IIdGenerator",
    "IStore",
    "IUnitOfWork",
    "WorkProcessEngine",
    "WorkflowManager",
]
