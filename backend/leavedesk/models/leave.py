# ruff: noqa: TC003
from __future__ import annotations

from datetime import date, datetime

import sqlalchemy as sa
from sqlmodel import Field

from leavedesk.models.base import IntIdBase, TimestampMixin
from leavedesk.models.enums import LeaveStatus


class LeaveRequest(IntIdBase, TimestampMixin, table=True):
    """A leave or work-from-home request and its approval state."""

    __tablename__ = "leave_requests"
    __table_args__ = (sa.Index("ix_leave_requests_user_created", "user_id", "created_at"),)

    user_id: int = Field(
        sa_column=sa.Column(sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    username: str = Field(max_length=150)
    leave_wfh: str = Field(max_length=10)
    type: str | None = Field(default=None, max_length=50)
    duration: str | None = Field(default=None, max_length=20)
    from_date: date
    to_date: date
    reason: str
    status: str = Field(
        default=LeaveStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "Pending"}
    )
    decided_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    decided_by: int | None = None
