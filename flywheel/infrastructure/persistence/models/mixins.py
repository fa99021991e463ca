"""SQLAlchemy mixins for common model patterns (DRY).

Provides: SnowflakeIdMixin (generated 64-bit ids), SurrogateIdMixin
(autoincrement row ids, also used as insertion-order tie-breaker) and
CreateTimeMixin, plus the state_category_check constraint helper.
"""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Integer
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from flywheel.shared.enums import StateCategory
from flywheel.shared.utils.generators import next_id

# SQLite only autoincrements INTEGER PRIMARY KEY columns
BigIntId = BigInteger().with_variant(Integer, "sqlite")


class SnowflakeIdMixin:
    """Mixin for models keyed by a generated 64-bit id (default next_id)."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(
            BigInteger, primary_key=True, autoincrement=False, default=next_id
        )


class SurrogateIdMixin:
    """Mixin for child rows with a database-assigned id (insertion order)."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(BigIntId, primary_key=True, autoincrement=True)


class CreateTimeMixin:
    """Mixin for create_time (timezone-aware, set by the caller's clock)."""

    @declared_attr
    def create_time(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), nullable=False)


def state_category_check(column: str, name: str, nullable: bool = False) -> CheckConstraint:
    """CHECK constraint restricting a column to StateCategory values."""
    allowed = ", ".join(f"'{v}'" for v in StateCategory.values())
    expr = f"{column} IN ({allowed})"
    if nullable:
        expr = f"{column} IS NULL OR {expr}"
    return CheckConstraint(expr, name=name)
