# ruff: noqa: TC003
from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from leavedesk.exceptions import ConflictError, NotFoundError
from leavedesk.models.balance import LeaveBalance
from leavedesk.models.employee import Employee, EmployeeManager
from leavedesk.models.user import User
from leavedesk.schemas.employee import (
    CreateEmployeeResponse,
    DirectReportsResponse,
    EmployeeListResponse,
    EmployeeResponse,
    SuccessResponse,
)
from leavedesk.services.auth import hash_password

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavedesk.schemas.employee import CreateEmployeePayload, EmployeeUpdatePayload, ProfileUpdatePayload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


async def get_user_by_username(session: AsyncSession, username: str) -> User:
    """Resolve a username to its account. Raises 404 if not found."""
    result = await session.execute(select(User).where(col(User.username) == username))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")
    return user


async def get_employee_for_user(session: AsyncSession, user_id: int) -> Employee:
    """Fetch the employee profile of an account. Raises 404 if missing."""
    result = await session.execute(select(Employee).where(col(Employee.user_id) == user_id))
    employee = result.scalar_one_or_none()
    if employee is None:
        raise NotFoundError("Employee details not found")
    return employee


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def create_employee(session: AsyncSession, payload: CreateEmployeePayload) -> CreateEmployeeResponse:
    """Create the account, the profile and (optionally) the leave balance together."""
    existing = await session.execute(select(User.id).where(col(User.username) == payload.username))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("Username already exists")

    user = User(
        org_id=payload.org_id,
        username=payload.username,
        fullname=payload.fullname,
        user_type=payload.user_type.value,
        password_hash=hash_password(payload.password),
    )
    session.add(user)
    try:
        await session.flush()
        user_id = user.pk

        employee = Employee(
            user_id=user_id,
            org_id=payload.org_id,
            fullname=payload.fullname,
            emp_code=payload.emp_code,
            position=payload.position,
            department=payload.department,
        )
        session.add(employee)

        allotments = (payload.fy_casual, payload.fy_sick, payload.fy_earned)
        if any(value is not None for value in allotments):
            casual, sick, earned = (value or Decimal(0) for value in allotments)
            session.add(
                LeaveBalance(
                    user_id=user_id,
                    fy_casual=casual,
                    fy_sick=sick,
                    fy_earned=earned,
                    pending_casual=casual,
                    pending_sick=sick,
                    pending_earned=earned,
                )
            )

        await session.flush()
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError("Username already exists") from None

    logger.info("Created employee user_id=%s org_id=%s", user_id, payload.org_id)
    return CreateEmployeeResponse(
        message="Employee and user created successfully",
        user_id=user_id,
        employee_id=employee.pk,
    )


async def list_org_employees(session: AsyncSession, org_id: int) -> EmployeeListResponse:
    """List every employee profile of an organisation."""
    result = await session.execute(
        select(Employee).where(col(Employee.org_id) == org_id).order_by(col(Employee.fullname))
    )
    return EmployeeListResponse(
        data=[EmployeeResponse.model_validate(e) for e in result.scalars().all()],
    )


async def get_employee(session: AsyncSession, user_id: int) -> EmployeeResponse:
    """Get the employee profile of an account."""
    employee = await get_employee_for_user(session, user_id)
    return EmployeeResponse.model_validate(employee)


async def update_employee(
    session: AsyncSession,
    user_id: int,
    payload: EmployeeUpdatePayload,
) -> SuccessResponse:
    """Apply an admin update to an employee profile."""
    result = await session.execute(select(Employee).where(col(Employee.user_id) == user_id))
    employee = result.scalar_one_or_none()
    if employee is None:
        raise NotFoundError("Employee not found or no changes made")

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(employee, field, value)

    await session.commit()
    return SuccessResponse(message="Employee updated successfully")


async def update_profile(
    session: AsyncSession,
    user_id: int,
    payload: ProfileUpdatePayload,
) -> SuccessResponse:
    """Apply a self-service profile update."""
    employee = await get_employee_for_user(session, user_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(employee, field, value)

    await session.commit()
    return SuccessResponse()


async def list_direct_reports(session: AsyncSession, manager_username: str) -> DirectReportsResponse:
    """List the employee profiles of a manager's direct reports."""
    result = await session.execute(select(User).where(col(User.username) == manager_username))
    manager = result.scalar_one_or_none()
    if manager is None:
        raise NotFoundError("Manager not found")

    reports = await session.execute(
        select(Employee)
        .join(EmployeeManager, col(EmployeeManager.employee_id) == col(Employee.user_id))
        .where(col(EmployeeManager.manager_id) == manager.id)
        .order_by(col(Employee.fullname))
    )
    return DirectReportsResponse(
        employees=[EmployeeResponse.model_validate(e) for e in reports.scalars().all()],
    )
