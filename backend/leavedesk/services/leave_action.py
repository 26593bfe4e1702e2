"""Accept/reject processing for leave and WFH requests.

A decision moves a request out of ``Pending`` exactly once. Accepting a
Leave-kind request also charges the owner's pending balance; the status
change, the balance decrement and the audit entries commit as a single
transaction or not at all.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from leavedesk.exceptions import AppError, ConflictError, PersistenceError
from leavedesk.models.base import utc_now
from leavedesk.models.enums import AuditAction, AuditEntityType, LeaveAction, LeaveKind, LeaveStatus
from leavedesk.schemas.leave import LeaveActionResponse
from leavedesk.services.audit import model_to_audit_dict, write_audit_log
from leavedesk.services.balance import (
    consume_pending,
    decrement_for,
    parse_leave_type,
    pending_column_for,
    read_pending_for_update,
)
from leavedesk.services.leave import get_request_for_update, transition_status

if TYPE_CHECKING:
    from decimal import Decimal

    from sqlalchemy.ext.asyncio import AsyncSession

    from leavedesk.models.enums import LeaveType

logger = logging.getLogger(__name__)

MSG_REJECTED = "Rejected successfully"
MSG_WFH_ACCEPTED = "WFH accepted successfully"
MSG_LEAVE_ACCEPTED = "Leave accepted and balance updated"
MSG_ALREADY_PROCESSED = "Leave already processed"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


async def _rollback(session: AsyncSession, request_id: int) -> None:
    """Roll back the decision transaction. A failing rollback is only logged."""
    try:
        await session.rollback()
    except SQLAlchemyError:
        logger.exception("Rollback failed for leave action on request_id=%s", request_id)


async def _resolve_charge(
    session: AsyncSession,
    user_id: int,
    leave_type_value: str | None,
    duration: str | None,
) -> tuple[LeaveType, Decimal, Decimal]:
    """Validate an acceptance against the balance store.

    Returns (leave type, pending before, amount to charge).
    """
    leave_type = parse_leave_type(leave_type_value)
    pending = await read_pending_for_update(session, user_id, leave_type)
    if pending <= 0:
        raise ConflictError(f"No pending {leave_type.value}")

    amount = decrement_for(duration)
    if pending < amount:
        raise ConflictError(f"Insufficient pending {leave_type.value}: {pending} left, {amount} requested")
    return leave_type, pending, amount


async def _apply_decision(
    session: AsyncSession,
    request_id: int,
    action: LeaveAction,
    actor_id: int | None,
) -> LeaveActionResponse:
    leave_request, org_id = await get_request_for_update(session, request_id)

    if leave_request.status != LeaveStatus.PENDING.value:
        raise ConflictError(MSG_ALREADY_PROCESSED)

    before_dict = model_to_audit_dict(leave_request)
    charge: tuple[LeaveType, Decimal, Decimal] | None = None

    if action == LeaveAction.REJECTED:
        new_status, message, audit_action = LeaveStatus.REJECTED, MSG_REJECTED, AuditAction.REJECT
    elif leave_request.leave_wfh == LeaveKind.WFH.value:
        new_status, message, audit_action = LeaveStatus.ACCEPTED, MSG_WFH_ACCEPTED, AuditAction.ACCEPT
    else:
        charge = await _resolve_charge(session, leave_request.user_id, leave_request.type, leave_request.duration)
        new_status, message, audit_action = LeaveStatus.ACCEPTED, MSG_LEAVE_ACCEPTED, AuditAction.ACCEPT

    now = utc_now()
    if not await transition_status(session, request_id, new_status, now, actor_id):
        raise ConflictError(MSG_ALREADY_PROCESSED)

    if charge is not None:
        leave_type, pending, amount = charge
        if not await consume_pending(session, leave_request.user_id, leave_type, amount):
            raise ConflictError(f"No pending {leave_type.value}")
        await write_audit_log(
            session,
            org_id=org_id,
            actor_id=actor_id,
            entity_type=AuditEntityType.LEAVE_BALANCE,
            entity_id=leave_request.user_id,
            action=AuditAction.ACCEPT,
            before_json={"column": pending_column_for(leave_type).key, "value": str(pending)},
            after_json={"column": pending_column_for(leave_type).key, "value": str(pending - amount)},
        )

    await session.refresh(leave_request)
    await write_audit_log(
        session,
        org_id=org_id,
        actor_id=actor_id,
        entity_type=AuditEntityType.LEAVE_REQUEST,
        entity_id=request_id,
        action=audit_action,
        before_json=before_dict,
        after_json=model_to_audit_dict(leave_request),
    )
    await session.flush()

    return LeaveActionResponse(message=message, request_id=request_id, status=new_status)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def decide(
    session: AsyncSession,
    request_id: int,
    action: LeaveAction,
    actor_id: int | None = None,
) -> LeaveActionResponse:
    """Accept or reject a pending leave/WFH request.

    Flow:
    1. Lock the request (404 if missing, 400 if no longer Pending).
    2. Reject, or accept WFH: status change only.
    3. Accept Leave: map type to its pending column, lock the balance
       (404 if missing), refuse an empty or insufficient balance, compute
       the 0.5/1.0 charge.
    4. Compare-and-set the status, apply the guarded decrement, audit.
    5. Commit. Any failure rolls everything back.
    """
    try:
        outcome = await _apply_decision(session, request_id, action, actor_id)
        await session.commit()
    except AppError:
        await _rollback(session, request_id)
        raise
    except SQLAlchemyError as exc:
        logger.exception("Leave action failed for request_id=%s", request_id)
        await _rollback(session, request_id)
        raise PersistenceError("Failed to process leave action") from exc

    logger.info("Leave request id=%s action=%s -> %s", request_id, action.value, outcome.status.value)
    return outcome
