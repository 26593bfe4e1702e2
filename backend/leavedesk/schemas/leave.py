# ruff: noqa: TC003
from __future__ import annotations

from datetime import date, datetime
from typing import Self

from pydantic import AliasChoices, BaseModel, Field, model_validator

from leavedesk.models.enums import LeaveAction, LeaveDuration, LeaveKind, LeaveStatus, LeaveType

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class ApplyLeavePayload(BaseModel):
    """Request body for submitting a leave or WFH request."""

    username: str = Field(min_length=1, max_length=150)
    leave_wfh: LeaveKind
    from_date: date
    to_date: date
    reason: str = Field(min_length=1, max_length=2000)
    leave_type: LeaveType | None = None
    duration: LeaveDuration | None = None

    @model_validator(mode="after")
    def _validate_kind_fields(self) -> Self:
        if self.to_date < self.from_date:
            msg = "to_date must not be before from_date"
            raise ValueError(msg)
        if self.leave_wfh == LeaveKind.LEAVE:
            if self.leave_type is None:
                msg = "Invalid or missing leave type"
                raise ValueError(msg)
            if self.duration is None:
                msg = "Invalid or missing duration"
                raise ValueError(msg)
        else:
            self.leave_type = None
            self.duration = None
        return self


class LeaveActionPayload(BaseModel):
    """Request body for accepting or rejecting a pending request."""

    request_id: int = Field(validation_alias=AliasChoices("request_id", "leave_id"))
    action: LeaveAction


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ApplyLeaveResponse(BaseModel):
    """Response after a request is submitted."""

    message: str
    request_id: int


class LeaveActionResponse(BaseModel):
    """Outcome of a leave decision."""

    message: str
    request_id: int
    status: LeaveStatus


class LeaveRequestResponse(BaseModel):
    """A single entry of an employee's leave/WFH history.

    ``type`` and ``duration`` are echoed as stored, including values the
    approval workflow would refuse.
    """

    id: int
    leave_wfh: LeaveKind
    from_date: date
    to_date: date
    duration: str | None
    type: str | None
    reason: str
    status: LeaveStatus
    created_at: datetime
    decided_at: datetime | None


class LeaveSummaryResponse(BaseModel):
    """Balances plus request history for one employee."""

    remaining_cl: float
    remaining_sl: float
    remaining_el: float
    fy_cl: float
    fy_sl: float
    fy_el: float
    history: list[LeaveRequestResponse]
