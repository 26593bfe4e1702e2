# ruff: noqa: TC003
from __future__ import annotations

from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from leavedesk.models.base import UpdatedAtMixin


class LeaveBalance(UpdatedAtMixin, table=True):
    """Per-employee leave balance.

    ``fy_*`` columns hold the fiscal-year allotment and are never decremented.
    ``pending_*`` columns hold what is left to request against; only an
    accepted leave decision lowers them.
    """

    __tablename__ = "leave_master"
    __table_args__ = (
        sa.CheckConstraint("pending_casual >= 0", name="ck_leave_master_pending_casual"),
        sa.CheckConstraint("pending_sick >= 0", name="ck_leave_master_pending_sick"),
        sa.CheckConstraint("pending_earned >= 0", name="ck_leave_master_pending_earned"),
    )

    user_id: int = Field(
        sa_column=sa.Column(sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    )
    fy_casual: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=1)
    fy_sick: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=1)
    fy_earned: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=1)
    pending_casual: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=1)
    pending_sick: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=1)
    pending_earned: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=1)
