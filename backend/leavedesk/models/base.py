from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Timezone-aware current time, used for every stored timestamp."""
    return datetime.now(UTC)


class IntIdBase(SQLModel):
    """Auto-incrementing integer primary key; ``None`` until flushed."""

    id: int | None = Field(default=None, primary_key=True)

    @property
    def pk(self) -> int:
        """Primary key of a flushed or loaded row."""
        if self.id is None:
            msg = f"{type(self).__name__} has no id until it is flushed"
            raise RuntimeError(msg)
        return self.id


class TimestampMixin(SQLModel):
    """Row creation time, set by the application and defaulted by the database."""

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )


class UpdatedAtMixin(SQLModel):
    """Last-modified time, refreshed by the database on every UPDATE."""

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now(), "onupdate": sa.func.now()},
    )
