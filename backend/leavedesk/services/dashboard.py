from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import extract, select
from sqlmodel import col

from leavedesk.models.employee import Employee
from leavedesk.models.enums import JobStatus, LeaveKind, LeaveStatus
from leavedesk.models.job import JobPosting
from leavedesk.models.leave import LeaveRequest
from leavedesk.schemas.dashboard import EmployeeBrief, HomeSummaryResponse, JobBrief
from leavedesk.services.balance import get_balance
from leavedesk.services.directory import get_employee_for_user, get_user_by_username

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

RECENT_JOBS_LIMIT = 5


async def _on_leave(session: AsyncSession, org_id: int, day: date) -> list[EmployeeBrief]:
    """Colleagues with an accepted leave covering ``day``."""
    result = await session.execute(
        select(Employee.fullname, Employee.department)
        .join(LeaveRequest, col(LeaveRequest.user_id) == col(Employee.user_id))
        .where(
            col(Employee.org_id) == org_id,
            col(LeaveRequest.from_date) <= day,
            col(LeaveRequest.to_date) >= day,
            col(LeaveRequest.status) == LeaveStatus.ACCEPTED.value,
            col(LeaveRequest.leave_wfh) == LeaveKind.LEAVE.value,
        )
        .distinct()
        .order_by(col(Employee.fullname))
    )
    return [EmployeeBrief(fullname=fullname, department=department) for fullname, department in result.all()]


async def _birthdays(session: AsyncSession, org_id: int, day: date) -> list[EmployeeBrief]:
    result = await session.execute(
        select(Employee.fullname, Employee.department)
        .where(
            col(Employee.org_id) == org_id,
            extract("month", col(Employee.dob)) == day.month,
            extract("day", col(Employee.dob)) == day.day,
        )
        .order_by(col(Employee.fullname))
    )
    return [EmployeeBrief(fullname=fullname, department=department) for fullname, department in result.all()]


async def _recent_jobs(session: AsyncSession, org_id: int) -> list[JobBrief]:
    result = await session.execute(
        select(JobPosting.title, JobPosting.department)
        .where(col(JobPosting.org_id) == org_id, col(JobPosting.status) == JobStatus.ACTIVE.value)
        .order_by(col(JobPosting.created_at).desc(), col(JobPosting.id).desc())
        .limit(RECENT_JOBS_LIMIT)
    )
    return [JobBrief(title=title, department=department) for title, department in result.all()]


async def get_home_summary(
    session: AsyncSession,
    username: str,
    today: date | None = None,
) -> HomeSummaryResponse:
    """Build the dashboard for one user.

    Remaining balances fall back to 0 when the user has no balance record.
    """
    today = today or date.today()
    tomorrow = today + timedelta(days=1)

    user = await get_user_by_username(session, username)
    employee = await get_employee_for_user(session, user.pk)
    balance = await get_balance(session, user.pk)

    return HomeSummaryResponse(
        fullname=employee.fullname,
        position=employee.position,
        reporting_manager=employee.reporting_manager,
        joining_date=employee.joining_date,
        email=employee.email,
        remaining_cl=float(balance.pending_casual) if balance else 0.0,
        remaining_sl=float(balance.pending_sick) if balance else 0.0,
        remaining_el=float(balance.pending_earned) if balance else 0.0,
        leave_today=await _on_leave(session, employee.org_id, today),
        leave_tomorrow=await _on_leave(session, employee.org_id, tomorrow),
        birthdays=await _birthdays(session, employee.org_id, today),
        jobs=await _recent_jobs(session, employee.org_id),
    )
