"""EventOutbox ORM model: events written in the producer's transaction."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from flywheel.infrastructure.persistence.database import Base
from flywheel.infrastructure.persistence.models.mixins import (
    CreateTimeMixin,
    SurrogateIdMixin,
)


class EventOutbox(SurrogateIdMixin, CreateTimeMixin, Base):
    """Pending or dispatched event. Table: event_outbox."""

    __tablename__ = "event_outbox"

    event_type: Mapped[str] = mapped_column(String(128), nullable=False)
    source_type: Mapped[str] = mapped_column(String(64), nullable=False)
    source_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    creator_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    creator_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    dispatched_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
