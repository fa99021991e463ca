"""Workflow, WorkflowState and WorkflowStateTransition ORM models.

States and transitions reference their workflow and each other by value
(workflow_id, state name); integrity is enforced by the managers.
"""

from sqlalchemy import BigInteger, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from flywheel.infrastructure.persistence.database import Base
from flywheel.infrastructure.persistence.models.mixins import (
    CreateTimeMixin,
    SnowflakeIdMixin,
    SurrogateIdMixin,
    state_category_check,
)


class Workflow(SnowflakeIdMixin, CreateTimeMixin, Base):
    """Workflow base row. Table: workflows."""

    __tablename__ = "workflows"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    project_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    theme_color: Mapped[str] = mapped_column(String(64), nullable=False)
    theme_icon: Mapped[str] = mapped_column(String(255), nullable=False)


class WorkflowState(SurrogateIdMixin, CreateTimeMixin, Base):
    """State of a workflow. Table: workflow_states; unique (workflow_id, name)."""

    __tablename__ = "workflow_states"

    workflow_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("workflow_id", "name", name="uq_workflow_states_workflow_name"),
        state_category_check("category", "workflow_states_category_check"),
    )


class WorkflowStateTransition(SurrogateIdMixin, CreateTimeMixin, Base):
    """Directed edge between two states. Table: workflow_state_transitions."""

    __tablename__ = "workflow_state_transitions"

    workflow_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    from_state: Mapped[str] = mapped_column(String(255), nullable=False)
    to_state: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "workflow_id",
            "from_state",
            "to_state",
            name="uq_workflow_state_transitions_edge",
        ),
        Index("ix_workflow_state_transitions_to", "workflow_id", "to_state"),
    )
