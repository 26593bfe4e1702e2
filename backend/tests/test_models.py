from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from leavedesk.models import (
    AuditLog,
    Employee,
    JobApplication,
    JobPosting,
    LeaveBalance,
    LeaveRequest,
    SQLModel,
    User,
)
from leavedesk.models.enums import ApplicationStatus, JobStatus, LeaveStatus, UserType

EXPECTED_TABLES = {
    "audit_log",
    "employee",
    "employee_manager",
    "job_applications",
    "job_postings",
    "leave_master",
    "leave_requests",
    "users",
}


def test_all_tables_registered() -> None:
    table_names = set(SQLModel.metadata.tables.keys())
    assert EXPECTED_TABLES.issubset(table_names)


def test_user_defaults() -> None:
    user = User(org_id=1, username="alice", fullname="Alice", password_hash="x")
    assert user.user_type == UserType.EMPLOYEE
    assert user.id is None


def test_pk_requires_flushed_row() -> None:
    user = User(org_id=1, username="alice", fullname="Alice", password_hash="x")
    with pytest.raises(RuntimeError, match="User has no id"):
        _ = user.pk


def test_pk_returns_assigned_id() -> None:
    user = User(id=5, org_id=1, username="alice", fullname="Alice", password_hash="x")
    assert user.pk == 5


def test_employee_optional_profile_fields() -> None:
    employee = Employee(user_id=1, org_id=1, fullname="Alice")
    assert employee.dob is None
    assert employee.reporting_manager is None


def test_leave_request_defaults() -> None:
    request = LeaveRequest(
        user_id=1,
        username="alice",
        leave_wfh="Leave",
        type="Sick Leave",
        duration="Half Day",
        from_date=date(2025, 3, 10),
        to_date=date(2025, 3, 10),
        reason="Dentist",
    )
    assert request.status == LeaveStatus.PENDING
    assert request.decided_at is None
    assert request.decided_by is None
    assert request.created_at is not None


def test_leave_balance_defaults() -> None:
    balance = LeaveBalance(user_id=1)
    assert balance.pending_sick == Decimal(0)
    assert balance.fy_earned == Decimal(0)


def test_leave_balance_has_non_negative_checks() -> None:
    constraints = {c.name for c in LeaveBalance.__table__.constraints}  # type: ignore[attr-defined]
    assert {
        "ck_leave_master_pending_casual",
        "ck_leave_master_pending_sick",
        "ck_leave_master_pending_earned",
    }.issubset(constraints)


def test_job_posting_defaults() -> None:
    job = JobPosting(org_id=1, title="Backend Engineer")
    assert job.status == JobStatus.ACTIVE
    assert job.applications == 0


def test_job_application_defaults() -> None:
    application = JobApplication(
        job_id=1,
        org_id=1,
        full_name="Frank",
        email="frank@example.com",
        phone="555-0100",
        resume_link="/uploads/cv.pdf",
    )
    assert application.status == ApplicationStatus.APPLIED
    assert application.cover_letter is None


def test_audit_log_instantiation() -> None:
    log = AuditLog(
        org_id=1,
        actor_id=2,
        entity_type="LEAVE_REQUEST",
        entity_id=3,
        action="ACCEPT",
    )
    assert log.before_json is None
    assert log.after_json is None
