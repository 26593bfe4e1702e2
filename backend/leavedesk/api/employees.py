# ruff: noqa: B008, TC001
from __future__ import annotations

from fastapi import APIRouter, Query, status

from leavedesk.db import SessionDep
from leavedesk.schemas.employee import (
    CreateEmployeePayload,
    CreateEmployeeResponse,
    DirectReportsResponse,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdatePayload,
    ProfileUpdatePayload,
    SuccessResponse,
)
from leavedesk.services import directory as directory_service

employees_router = APIRouter(prefix="/employees", tags=["employees"])

managers_router = APIRouter(prefix="/managers", tags=["employees"])


@employees_router.post("", response_model=CreateEmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(payload: CreateEmployeePayload, session: SessionDep) -> CreateEmployeeResponse:
    """Create a user account with its employee profile."""
    return await directory_service.create_employee(session, payload)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(
    session: SessionDep,
    org_id: int = Query(gt=0),
) -> EmployeeListResponse:
    """List employees of an organisation."""
    return await directory_service.list_org_employees(session, org_id)


@employees_router.get("/{user_id}", response_model=EmployeeResponse)
async def get_employee(user_id: int, session: SessionDep) -> EmployeeResponse:
    """Get the employee profile of an account."""
    return await directory_service.get_employee(session, user_id)


@employees_router.put("/{user_id}", response_model=SuccessResponse)
async def update_employee(
    user_id: int,
    payload: EmployeeUpdatePayload,
    session: SessionDep,
) -> SuccessResponse:
    """Update an employee profile."""
    return await directory_service.update_employee(session, user_id, payload)


@employees_router.patch("/{user_id}/profile", response_model=SuccessResponse)
async def update_profile(
    user_id: int,
    payload: ProfileUpdatePayload,
    session: SessionDep,
) -> SuccessResponse:
    """Update the self-editable part of a profile."""
    return await directory_service.update_profile(session, user_id, payload)


@managers_router.get("/{username}/employees", response_model=DirectReportsResponse)
async def list_direct_reports(username: str, session: SessionDep) -> DirectReportsResponse:
    """List a manager's direct reports."""
    return await directory_service.list_direct_reports(session, username)
