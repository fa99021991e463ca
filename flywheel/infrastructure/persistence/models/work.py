"""Work, WorkProcessStep and WorkStateTransition ORM models.

A work holds a snapshot (state_name, state_category) of its current
position in its workflow. Process steps and transition logs are append-only
history owned by the work.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from flywheel.infrastructure.persistence.database import Base
from flywheel.infrastructure.persistence.models.mixins import (
    CreateTimeMixin,
    SnowflakeIdMixin,
    SurrogateIdMixin,
    state_category_check,
)


class Work(SnowflakeIdMixin, CreateTimeMixin, Base):
    """Work item. Table: works."""

    __tablename__ = "works"

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    project_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    flow_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    creator_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    state_name: Mapped[str] = mapped_column(String(255), nullable=False)
    state_category: Mapped[str] = mapped_column(String(32), nullable=False)
    state_begin_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    process_begin_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    process_end_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    archive_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_works_flow_state", "flow_id", "state_name"),
        state_category_check("state_category", "works_state_category_check"),
    )


class WorkProcessStep(SurrogateIdMixin, Base):
    """Interval a work spent in one state. Table: work_process_steps.

    end_time NULL marks the open step.
    """

    __tablename__ = "work_process_steps"

    work_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    flow_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    state_name: Mapped[str] = mapped_column(String(255), nullable=False)
    state_category: Mapped[str] = mapped_column(String(32), nullable=False)
    begin_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    next_state_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    next_state_category: Mapped[str | None] = mapped_column(String(32), nullable=True)
    creator_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    creator_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    __table_args__ = (
        Index("ix_work_process_steps_work_begin", "work_id", "begin_time"),
        Index("ix_work_process_steps_flow_state", "flow_id", "state_name"),
        Index("ix_work_process_steps_flow_next_state", "flow_id", "next_state_name"),
        state_category_check("state_category", "work_process_steps_state_category_check"),
        state_category_check(
            "next_state_category",
            "work_process_steps_next_state_category_check",
            nullable=True,
        ),
    )


class WorkStateTransition(SnowflakeIdMixin, CreateTimeMixin, Base):
    """Applied transition log. Table: work_state_transitions. Never updated."""

    __tablename__ = "work_state_transitions"

    creator_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    work_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    flow_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    from_state: Mapped[str] = mapped_column(String(255), nullable=False)
    to_state: Mapped[str] = mapped_column(String(255), nullable=False)
