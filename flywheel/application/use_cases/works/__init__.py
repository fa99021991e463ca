"""Work use cases: state transitions and process-step history."""

from flywheel.application.use_cases.works.work_process_engine import WorkProcessEngine

__all__ = ["WorkProcessEngine"]
