# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter, status

from leavedesk.api.deps import ActorDep
from leavedesk.db import SessionDep
from leavedesk.schemas.leave import (
    ApplyLeavePayload,
    ApplyLeaveResponse,
    LeaveActionPayload,
    LeaveActionResponse,
    LeaveSummaryResponse,
)
from leavedesk.services import leave as leave_service
from leavedesk.services import leave_action

leave_router = APIRouter(prefix="/leave", tags=["leave"])


@leave_router.post("/apply", response_model=ApplyLeaveResponse, status_code=status.HTTP_201_CREATED)
async def apply_leave(payload: ApplyLeavePayload, session: SessionDep) -> ApplyLeaveResponse:
    """Submit a leave or WFH request."""
    return await leave_service.submit_leave(session, payload)


@leave_router.post("/action", response_model=LeaveActionResponse)
async def leave_decision(
    payload: LeaveActionPayload,
    session: SessionDep,
    actor_id: ActorDep,
) -> LeaveActionResponse:
    """Accept or reject a pending request."""
    return await leave_action.decide(session, payload.request_id, payload.action, actor_id)


@leave_router.get("/{user_id}", response_model=LeaveSummaryResponse)
async def get_leave_summary(user_id: int, session: SessionDep) -> LeaveSummaryResponse:
    """Balances and leave/WFH history of an employee."""
    return await leave_service.get_leave_summary(session, user_id)
