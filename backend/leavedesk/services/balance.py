"""Balance store access for leave accounting.

The pending column charged for a leave type comes from a closed mapping,
resolved before any statement is built.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlmodel import col

from leavedesk.exceptions import InvalidStateError, NotFoundError
from leavedesk.models.balance import LeaveBalance
from leavedesk.models.enums import LeaveDuration, LeaveType

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

_PENDING_COLUMNS: dict[LeaveType, InstrumentedAttribute[Decimal]] = {
    LeaveType.SICK: col(LeaveBalance.pending_sick),
    LeaveType.CASUAL: col(LeaveBalance.pending_casual),
    LeaveType.EARNED: col(LeaveBalance.pending_earned),
}

_DAY_FRACTIONS: dict[LeaveDuration, Decimal] = {
    LeaveDuration.FULL_DAY: Decimal("1.0"),
    LeaveDuration.HALF_DAY: Decimal("0.5"),
}


# ---------------------------------------------------------------------------
# Mapping helpers
# ---------------------------------------------------------------------------


def parse_leave_type(value: str | None) -> LeaveType:
    """Map a stored leave type to the enum. Raises InvalidStateError if unknown."""
    try:
        return LeaveType(value)
    except ValueError:
        raise InvalidStateError("Invalid leave type") from None


def pending_column_for(leave_type: LeaveType) -> InstrumentedAttribute[Decimal]:
    """Return the pending-balance column charged for a leave type."""
    return _PENDING_COLUMNS[leave_type]


def decrement_for(duration: str | None) -> Decimal:
    """Days charged for one leave request: 0.5 for Half Day, 1.0 for Full Day."""
    try:
        return _DAY_FRACTIONS[LeaveDuration(duration)]
    except ValueError:
        raise InvalidStateError("Leave duration not found") from None


# ---------------------------------------------------------------------------
# Store access
# ---------------------------------------------------------------------------


async def get_balance(session: AsyncSession, user_id: int) -> LeaveBalance | None:
    """Fetch the balance record of an employee, or None."""
    result = await session.execute(select(LeaveBalance).where(col(LeaveBalance.user_id) == user_id))
    return result.scalar_one_or_none()


async def read_pending_for_update(session: AsyncSession, user_id: int, leave_type: LeaveType) -> Decimal:
    """Read and lock the pending count for one leave type.

    Raises NotFoundError if the employee has no balance record.
    """
    column = pending_column_for(leave_type)
    result = await session.execute(
        select(column).where(col(LeaveBalance.user_id) == user_id).with_for_update()
    )
    pending = result.scalar_one_or_none()
    if pending is None:
        raise NotFoundError("Leave master not found")
    return Decimal(pending)


async def consume_pending(session: AsyncSession, user_id: int, leave_type: LeaveType, amount: Decimal) -> bool:
    """Decrement a pending count by ``amount`` if at least that much remains.

    Returns False when the guard rejected the update (nothing was changed).
    """
    column = pending_column_for(leave_type)
    result = await session.execute(
        update(LeaveBalance)
        .where(col(LeaveBalance.user_id) == user_id, column >= amount)
        .values({column: column - amount})
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1  # type: ignore[attr-defined]
