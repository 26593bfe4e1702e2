# ruff: noqa: TC003
from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlmodel import col

from leavedesk.exceptions import NotFoundError
from leavedesk.models.enums import AuditAction, AuditEntityType, LeaveKind, LeaveStatus
from leavedesk.models.leave import LeaveRequest
from leavedesk.models.user import User
from leavedesk.schemas.leave import ApplyLeaveResponse, LeaveRequestResponse, LeaveSummaryResponse
from leavedesk.services.audit import model_to_audit_dict, write_audit_log
from leavedesk.services.balance import get_balance
from leavedesk.services.directory import get_user_by_username

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavedesk.schemas.leave import ApplyLeavePayload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Ledger access
# ---------------------------------------------------------------------------


def _build_leave_response(leave_request: LeaveRequest) -> LeaveRequestResponse:
    """Map a leave request model to its response schema."""
    return LeaveRequestResponse(
        id=leave_request.pk,
        leave_wfh=LeaveKind(leave_request.leave_wfh),
        from_date=leave_request.from_date,
        to_date=leave_request.to_date,
        duration=leave_request.duration,
        type=leave_request.type,
        reason=leave_request.reason,
        status=LeaveStatus(leave_request.status),
        created_at=leave_request.created_at,
        decided_at=leave_request.decided_at,
    )


async def get_request_for_update(session: AsyncSession, request_id: int) -> tuple[LeaveRequest, int]:
    """Fetch and lock a leave request with its owner's org. Raises 404 if not found."""
    result = await session.execute(
        select(LeaveRequest, User.org_id)
        .join(User, col(User.id) == col(LeaveRequest.user_id))
        .where(col(LeaveRequest.id) == request_id)
        .with_for_update(of=LeaveRequest)
    )
    row = result.one_or_none()
    if row is None:
        raise NotFoundError("Leave not found")
    leave_request, org_id = row
    return leave_request, org_id


async def transition_status(
    session: AsyncSession,
    request_id: int,
    new_status: LeaveStatus,
    decided_at: datetime,
    decided_by: int | None,
) -> bool:
    """Move a request out of Pending.

    Returns False if the request was no longer Pending, which means another
    decision got there first.
    """
    result = await session.execute(
        update(LeaveRequest)
        .where(col(LeaveRequest.id) == request_id, col(LeaveRequest.status) == LeaveStatus.PENDING.value)
        .values(status=new_status.value, decided_at=decided_at, decided_by=decided_by)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def submit_leave(session: AsyncSession, payload: ApplyLeavePayload) -> ApplyLeaveResponse:
    """Record a new Pending leave or WFH request for the named user."""
    user = await get_user_by_username(session, payload.username)
    user_id = user.pk

    leave_request = LeaveRequest(
        user_id=user_id,
        username=user.username,
        leave_wfh=payload.leave_wfh.value,
        type=payload.leave_type.value if payload.leave_type else None,
        duration=payload.duration.value if payload.duration else None,
        from_date=payload.from_date,
        to_date=payload.to_date,
        reason=payload.reason,
        status=LeaveStatus.PENDING.value,
    )
    session.add(leave_request)
    await session.flush()
    request_id = leave_request.pk

    await write_audit_log(
        session,
        org_id=user.org_id,
        actor_id=user_id,
        entity_type=AuditEntityType.LEAVE_REQUEST,
        entity_id=request_id,
        action=AuditAction.SUBMIT,
        after_json=model_to_audit_dict(leave_request),
    )

    await session.commit()
    logger.info(
        "Submitted %s request id=%s user_id=%s", payload.leave_wfh.value, request_id, user_id
    )
    return ApplyLeaveResponse(
        message=f"{payload.leave_wfh.value} request submitted successfully",
        request_id=request_id,
    )


async def get_leave_summary(session: AsyncSession, user_id: int) -> LeaveSummaryResponse:
    """Return balances and request history (newest first) for an employee."""
    balance = await get_balance(session, user_id)
    if balance is None:
        raise NotFoundError("Leave balance not found")

    result = await session.execute(
        select(LeaveRequest)
        .where(col(LeaveRequest.user_id) == user_id)
        .order_by(col(LeaveRequest.created_at).desc(), col(LeaveRequest.id).desc())
    )
    history = [_build_leave_response(r) for r in result.scalars().all()]

    return LeaveSummaryResponse(
        remaining_cl=float(balance.pending_casual),
        remaining_sl=float(balance.pending_sick),
        remaining_el=float(balance.pending_earned),
        fy_cl=float(balance.fy_casual),
        fy_sl=float(balance.fy_sick),
        fy_el=float(balance.fy_earned),
        history=history,
    )
