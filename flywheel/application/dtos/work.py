"""DTOs for works, process steps, transition logs and work events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from flywheel.shared.enums import StateCategory


@dataclass(frozen=True)
class WorkResult:
    """Work item read-model. Unset timestamps are None."""

    id: int
    name: str
    project_id: int
    flow_id: int
    state_name: str
    state_category: StateCategory
    state_begin_time: datetime
    process_begin_time: datetime | None
    process_end_time: datetime | None
    archive_time: datetime | None
    create_time: datetime
    creator_id: int

    @property
    def is_archived(self) -> bool:
        return self.archive_time is not None


@dataclass(frozen=True)
class ProcessStepResult:
    """Half-open interval [begin_time, end_time) a work spent in one state."""

    work_id: int
    flow_id: int
    state_name: str
    state_category: StateCategory
    begin_time: datetime
    end_time: datetime | None
    next_state_name: str | None
    next_state_category: StateCategory | None
    creator_id: int
    creator_name: str

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class WorkStateTransitionBrief:
    """Requested transition of one work."""

    flow_id: int
    work_id: int
    from_state: str
    to_state: str


@dataclass(frozen=True)
class WorkStateTransitionResult:
    """Applied transition (append-only log row)."""

    id: int
    create_time: datetime
    creator_id: int
    flow_id: int
    work_id: int
    from_state: str
    to_state: str


@dataclass(frozen=True)
class PropertyUpdated:
    """One changed property of a work, with raw and display values."""

    property_name: str
    property_desc: str
    old_value: str
    old_value_desc: str
    new_value: str
    new_value_desc: str


@dataclass(frozen=True)
class WorkPropertyUpdatedEvent:
    """Notification that properties of a work changed."""

    work_id: int
    project_id: int
    flow_id: int
    updates: list[PropertyUpdated]
    creator_id: int
    creator_name: str
    create_time: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "work_id": str(self.work_id),
            "project_id": str(self.project_id),
            "flow_id": str(self.flow_id),
            "updates": [
                {
                    "property_name": u.property_name,
                    "property_desc": u.property_desc,
                    "old_value": u.old_value,
                    "old_value_desc": u.old_value_desc,
                    "new_value": u.new_value,
                    "new_value_desc": u.new_value_desc,
                }
                for u in self.updates
            ],
        }

