"""Tests for accepting and rejecting leave/WFH requests: status transitions,
balance charging, guards against double processing, and rollback on failure.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlmodel import col

from leavedesk.exceptions import ConflictError, InvalidStateError, NotFoundError, PersistenceError
from leavedesk.models import AuditLog, LeaveBalance, LeaveRequest
from leavedesk.models.enums import AuditAction, AuditEntityType, LeaveAction, LeaveDuration, LeaveKind, LeaveStatus, LeaveType
from leavedesk.services import leave_action
from leavedesk.services.leave import transition_status

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavedesk.models import User

    from conftest import Seeder

ACTION_URL = "/api/leave/action"


# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


async def _employee_with_balance(seed: Seeder, sick: str = "2", casual: str = "3", earned: str = "4") -> User:
    user = await seed.user()
    await seed.balance(user, sick=sick, casual=casual, earned=earned)
    return user


async def _pending(seed: Seeder, user: User) -> tuple[Decimal, Decimal, Decimal]:
    balance = await seed.reload(LeaveBalance, user.id)
    assert balance is not None
    return balance.pending_sick, balance.pending_casual, balance.pending_earned


async def _status(seed: Seeder, request_id: int | None) -> str:
    leave_request = await seed.reload(LeaveRequest, request_id)
    assert leave_request is not None
    return leave_request.status


async def _act(client: AsyncClient, request_id: int | None, action: str, **headers: str) -> Any:
    return await client.post(ACTION_URL, json={"request_id": request_id, "action": action}, headers=headers)


# ---------------------------------------------------------------------------
# Reject
# ---------------------------------------------------------------------------


async def test_reject_sets_status(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user)

    resp = await _act(async_client, leave_request.id, "Rejected")

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Rejected successfully"
    assert body["status"] == "Rejected"
    assert body["request_id"] == leave_request.id
    assert await _status(seed, leave_request.id) == LeaveStatus.REJECTED


@pytest.mark.parametrize(
    ("kind", "leave_type"),
    [
        (LeaveKind.LEAVE, LeaveType.SICK),
        (LeaveKind.LEAVE, LeaveType.CASUAL),
        (LeaveKind.LEAVE, LeaveType.EARNED),
        (LeaveKind.WFH, None),
    ],
)
async def test_reject_never_touches_balance(
    async_client: AsyncClient,
    seed: Seeder,
    kind: LeaveKind,
    leave_type: LeaveType | None,
) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user, kind=kind, leave_type=leave_type)

    resp = await _act(async_client, leave_request.id, "Rejected")

    assert resp.status_code == 200
    assert await _pending(seed, user) == (Decimal("2"), Decimal("3"), Decimal("4"))


async def test_reject_without_balance_record_succeeds(async_client: AsyncClient, seed: Seeder) -> None:
    user = await seed.user()
    leave_request = await seed.leave_request(user)

    resp = await _act(async_client, leave_request.id, "Rejected")
    assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Accept WFH
# ---------------------------------------------------------------------------


async def test_accept_wfh_sets_status_without_balance(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user, kind=LeaveKind.WFH)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 200
    assert resp.json()["message"] == "WFH accepted successfully"
    assert await _status(seed, leave_request.id) == LeaveStatus.ACCEPTED
    assert await _pending(seed, user) == (Decimal("2"), Decimal("3"), Decimal("4"))


async def test_accept_wfh_needs_no_balance_record(async_client: AsyncClient, seed: Seeder) -> None:
    user = await seed.user()
    leave_request = await seed.leave_request(user, kind=LeaveKind.WFH)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 200
    assert await seed.reload(LeaveBalance, user.id) is None


# ---------------------------------------------------------------------------
# Accept Leave
# ---------------------------------------------------------------------------


async def test_accept_half_day_sick_leave(async_client: AsyncClient, seed: Seeder) -> None:
    """pending_sick 2 -> 1.5 for a Half Day sick leave."""
    user = await _employee_with_balance(seed, sick="2")
    leave_request = await seed.leave_request(user, leave_type=LeaveType.SICK, duration=LeaveDuration.HALF_DAY)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 200
    assert resp.json()["message"] == "Leave accepted and balance updated"
    assert await _status(seed, leave_request.id) == LeaveStatus.ACCEPTED
    sick, casual, earned = await _pending(seed, user)
    assert sick == Decimal("1.5")
    assert casual == Decimal("3")
    assert earned == Decimal("4")


@pytest.mark.parametrize(
    ("leave_type", "duration", "expected"),
    [
        (LeaveType.SICK, LeaveDuration.FULL_DAY, (Decimal("1"), Decimal("3"), Decimal("4"))),
        (LeaveType.CASUAL, LeaveDuration.FULL_DAY, (Decimal("2"), Decimal("2"), Decimal("4"))),
        (LeaveType.CASUAL, LeaveDuration.HALF_DAY, (Decimal("2"), Decimal("2.5"), Decimal("4"))),
        (LeaveType.EARNED, LeaveDuration.FULL_DAY, (Decimal("2"), Decimal("3"), Decimal("3"))),
        (LeaveType.EARNED, LeaveDuration.HALF_DAY, (Decimal("2"), Decimal("3"), Decimal("3.5"))),
    ],
)
async def test_accept_charges_only_matching_bucket(
    async_client: AsyncClient,
    seed: Seeder,
    leave_type: LeaveType,
    duration: LeaveDuration,
    expected: tuple[Decimal, Decimal, Decimal],
) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user, leave_type=leave_type, duration=duration)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 200
    assert await _pending(seed, user) == expected


async def test_accept_with_zero_pending_fails(async_client: AsyncClient, seed: Seeder) -> None:
    """pending_sick 0 -> 400 and nothing changes."""
    user = await _employee_with_balance(seed, sick="0")
    leave_request = await seed.leave_request(user, leave_type=LeaveType.SICK, duration=LeaveDuration.HALF_DAY)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "ConflictError"
    assert body["detail"] == "No pending Sick Leave"
    assert await _status(seed, leave_request.id) == LeaveStatus.PENDING
    sick, _, _ = await _pending(seed, user)
    assert sick == Decimal("0")


async def test_accept_full_day_with_half_day_left_fails(async_client: AsyncClient, seed: Seeder) -> None:
    """A Full Day cannot be charged against 0.5 remaining; the balance never goes negative."""
    user = await _employee_with_balance(seed, casual="0.5")
    leave_request = await seed.leave_request(user, leave_type=LeaveType.CASUAL, duration=LeaveDuration.FULL_DAY)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 400
    assert "Insufficient pending Casual Leave" in resp.json()["detail"]
    assert await _status(seed, leave_request.id) == LeaveStatus.PENDING
    _, casual, _ = await _pending(seed, user)
    assert casual == Decimal("0.5")


async def test_accept_half_day_uses_last_half(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed, earned="0.5")
    leave_request = await seed.leave_request(user, leave_type=LeaveType.EARNED, duration=LeaveDuration.HALF_DAY)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 200
    _, _, earned = await _pending(seed, user)
    assert earned == Decimal("0")


async def test_accept_without_balance_record_is_not_found(async_client: AsyncClient, seed: Seeder) -> None:
    user = await seed.user()
    leave_request = await seed.leave_request(user)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Leave master not found"
    assert await _status(seed, leave_request.id) == LeaveStatus.PENDING


async def test_accept_unknown_leave_type_is_invalid(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user, leave_type="Maternity Leave")

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidStateError"
    assert await _status(seed, leave_request.id) == LeaveStatus.PENDING


async def test_accept_missing_duration_is_invalid(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user, duration=None)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Leave duration not found"
    assert await _pending(seed, user) == (Decimal("2"), Decimal("3"), Decimal("4"))


# ---------------------------------------------------------------------------
# Validation and terminal states
# ---------------------------------------------------------------------------


async def test_unknown_request_is_not_found(async_client: AsyncClient) -> None:
    resp = await _act(async_client, 9999, "Accepted")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Leave not found"


@pytest.mark.parametrize("action", ["Approve", "accepted", "", "Pending"])
async def test_invalid_action_is_rejected(async_client: AsyncClient, seed: Seeder, action: str) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user)

    resp = await _act(async_client, leave_request.id, action)

    assert resp.status_code == 400
    assert resp.json()["error"] == "ValidationError"
    assert await _status(seed, leave_request.id) == LeaveStatus.PENDING


async def test_missing_request_id_is_rejected(async_client: AsyncClient) -> None:
    resp = await async_client.post(ACTION_URL, json={"action": "Accepted"})
    assert resp.status_code == 400


async def test_legacy_leave_id_field_is_accepted(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user)

    resp = await async_client.post(ACTION_URL, json={"leave_id": leave_request.id, "action": "Rejected"})
    assert resp.status_code == 200


@pytest.mark.parametrize("terminal", [LeaveStatus.ACCEPTED, LeaveStatus.REJECTED])
@pytest.mark.parametrize("action", ["Accepted", "Rejected"])
async def test_terminal_request_is_already_processed(
    async_client: AsyncClient,
    seed: Seeder,
    terminal: LeaveStatus,
    action: str,
) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user, status=terminal)

    resp = await _act(async_client, leave_request.id, action)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Leave already processed"
    assert await _status(seed, leave_request.id) == terminal
    assert await _pending(seed, user) == (Decimal("2"), Decimal("3"), Decimal("4"))


async def test_second_accept_does_not_charge_twice(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed, sick="2")
    leave_request = await seed.leave_request(user, duration=LeaveDuration.FULL_DAY)

    first = await _act(async_client, leave_request.id, "Accepted")
    second = await _act(async_client, leave_request.id, "Accepted")

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["detail"] == "Leave already processed"
    sick, _, _ = await _pending(seed, user)
    assert sick == Decimal("1")


async def test_reject_after_accept_keeps_charge(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed, sick="2")
    leave_request = await seed.leave_request(user, duration=LeaveDuration.HALF_DAY)

    await _act(async_client, leave_request.id, "Accepted")
    resp = await _act(async_client, leave_request.id, "Rejected")

    assert resp.status_code == 400
    assert await _status(seed, leave_request.id) == LeaveStatus.ACCEPTED
    sick, _, _ = await _pending(seed, user)
    assert sick == Decimal("1.5")


async def test_separate_requests_each_charge_once(async_client: AsyncClient, seed: Seeder) -> None:
    user = await _employee_with_balance(seed, sick="2", casual="1")
    sick_request = await seed.leave_request(user, leave_type=LeaveType.SICK, duration=LeaveDuration.HALF_DAY)
    casual_request = await seed.leave_request(user, leave_type=LeaveType.CASUAL, duration=LeaveDuration.FULL_DAY)

    assert (await _act(async_client, sick_request.id, "Accepted")).status_code == 200
    assert (await _act(async_client, casual_request.id, "Accepted")).status_code == 200

    sick, casual, earned = await _pending(seed, user)
    assert (sick, casual, earned) == (Decimal("1.5"), Decimal("0"), Decimal("4"))


# ---------------------------------------------------------------------------
# Audit and actor
# ---------------------------------------------------------------------------


async def test_actor_header_recorded(async_client: AsyncClient, seed: Seeder) -> None:
    manager = await seed.user(username="boss")
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user)

    resp = await _act(async_client, leave_request.id, "Accepted", **{"X-User-Id": str(manager.id)})
    assert resp.status_code == 200

    stored = await seed.reload(LeaveRequest, leave_request.id)
    assert stored is not None
    assert stored.decided_by == manager.id
    assert stored.decided_at is not None


async def test_accept_leave_writes_audit_entries(
    async_client: AsyncClient,
    seed: Seeder,
    db_session: AsyncSession,
) -> None:
    user = await _employee_with_balance(seed, sick="2")
    leave_request = await seed.leave_request(user, duration=LeaveDuration.HALF_DAY)

    await _act(async_client, leave_request.id, "Accepted")

    result = await db_session.execute(select(AuditLog).order_by(col(AuditLog.id)))
    entries = list(result.scalars().all())
    assert [e.entity_type for e in entries] == [AuditEntityType.LEAVE_BALANCE, AuditEntityType.LEAVE_REQUEST]

    balance_entry, request_entry = entries
    assert balance_entry.entity_id == user.id
    assert balance_entry.before_json is not None and balance_entry.after_json is not None
    assert balance_entry.before_json["column"] == "pending_sick"
    assert Decimal(balance_entry.before_json["value"]) == Decimal("2")
    assert Decimal(balance_entry.after_json["value"]) == Decimal("1.5")
    assert request_entry.action == AuditAction.ACCEPT
    assert request_entry.org_id == user.org_id
    assert request_entry.before_json is not None and request_entry.before_json["status"] == "Pending"
    assert request_entry.after_json is not None and request_entry.after_json["status"] == "Accepted"


async def test_failed_decision_writes_no_audit(
    async_client: AsyncClient,
    seed: Seeder,
    db_session: AsyncSession,
) -> None:
    user = await _employee_with_balance(seed, sick="0")
    leave_request = await seed.leave_request(user)

    await _act(async_client, leave_request.id, "Accepted")

    result = await db_session.execute(select(AuditLog))
    assert result.scalars().all() == []


# ---------------------------------------------------------------------------
# Service-level: atomicity and races
# ---------------------------------------------------------------------------


async def test_decide_service_returns_outcome(db_session: AsyncSession, seed: Seeder) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user, kind=LeaveKind.WFH)
    assert leave_request.id is not None

    outcome = await leave_action.decide(db_session, leave_request.id, LeaveAction.ACCEPTED)

    assert outcome.status == LeaveStatus.ACCEPTED
    assert outcome.message == leave_action.MSG_WFH_ACCEPTED


async def test_decide_service_raises_taxonomy(db_session: AsyncSession, seed: Seeder) -> None:
    user = await seed.user()
    unknown_type = await seed.leave_request(user, leave_type="Comp Off")
    no_balance = await seed.leave_request(user)
    unknown_type_id, no_balance_id = unknown_type.id, no_balance.id
    assert unknown_type_id is not None and no_balance_id is not None

    with pytest.raises(NotFoundError):
        await leave_action.decide(db_session, 424242, LeaveAction.ACCEPTED)
    with pytest.raises(InvalidStateError):
        await leave_action.decide(db_session, unknown_type_id, LeaveAction.ACCEPTED)
    with pytest.raises(NotFoundError, match="Leave master not found"):
        await leave_action.decide(db_session, no_balance_id, LeaveAction.ACCEPTED)

    await leave_action.decide(db_session, no_balance_id, LeaveAction.REJECTED)
    with pytest.raises(ConflictError, match="already processed"):
        await leave_action.decide(db_session, no_balance_id, LeaveAction.ACCEPTED)


async def test_persistence_failure_rolls_back_status(
    async_client: AsyncClient,
    seed: Seeder,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A database error after the status update leaves both rows untouched."""
    user = await _employee_with_balance(seed, sick="2")
    leave_request = await seed.leave_request(user)

    async def _broken_consume(*args: object, **kwargs: object) -> bool:
        raise OperationalError("UPDATE leave_master", {}, Exception("disk I/O error"))

    monkeypatch.setattr(leave_action, "consume_pending", _broken_consume)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 500
    assert resp.json()["error"] == "PersistenceError"
    assert await _status(seed, leave_request.id) == LeaveStatus.PENDING
    sick, _, _ = await _pending(seed, user)
    assert sick == Decimal("2")


async def test_persistence_failure_raises_from_service(
    db_session: AsyncSession,
    seed: Seeder,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    user = await _employee_with_balance(seed)
    leave_request = await seed.leave_request(user)
    assert leave_request.id is not None

    async def _broken_consume(*args: object, **kwargs: object) -> bool:
        raise OperationalError("UPDATE leave_master", {}, Exception("connection reset"))

    monkeypatch.setattr(leave_action, "consume_pending", _broken_consume)

    with pytest.raises(PersistenceError):
        await leave_action.decide(db_session, leave_request.id, LeaveAction.ACCEPTED)


async def test_lost_balance_race_rolls_back_status(
    async_client: AsyncClient,
    seed: Seeder,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """If the guarded decrement matches no row, the status change is undone."""
    user = await _employee_with_balance(seed, sick="2")
    leave_request = await seed.leave_request(user)

    async def _guard_rejects(*args: object, **kwargs: object) -> bool:
        return False

    monkeypatch.setattr(leave_action, "consume_pending", _guard_rejects)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 400
    assert await _status(seed, leave_request.id) == LeaveStatus.PENDING


async def test_lost_status_race_is_conflict(
    async_client: AsyncClient,
    seed: Seeder,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A concurrent decision that flipped the status first wins; no balance is charged."""
    user = await _employee_with_balance(seed, sick="2")
    leave_request = await seed.leave_request(user)

    async def _already_moved(*args: object, **kwargs: object) -> bool:
        return False

    monkeypatch.setattr(leave_action, "transition_status", _already_moved)

    resp = await _act(async_client, leave_request.id, "Accepted")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Leave already processed"
    sick, _, _ = await _pending(seed, user)
    assert sick == Decimal("2")


async def test_transition_status_is_compare_and_set(db_session: AsyncSession, seed: Seeder) -> None:
    from datetime import UTC, datetime

    user = await seed.user()
    leave_request = await seed.leave_request(user)
    assert leave_request.id is not None
    now = datetime.now(UTC)

    first = await transition_status(db_session, leave_request.id, LeaveStatus.ACCEPTED, now, None)
    second = await transition_status(db_session, leave_request.id, LeaveStatus.REJECTED, now, None)
    await db_session.commit()

    assert first is True
    assert second is False
    assert await _status(seed, leave_request.id) == LeaveStatus.ACCEPTED
