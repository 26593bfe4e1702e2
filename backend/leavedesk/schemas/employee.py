# ruff: noqa: TC003
from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from leavedesk.models.enums import UserType


class CreateEmployeePayload(BaseModel):
    """Request body for creating a user account with an employee profile."""

    org_id: int
    fullname: str = Field(min_length=1, max_length=255)
    user_type: UserType = UserType.EMPLOYEE
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=6, max_length=255)
    emp_code: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    fy_casual: Decimal | None = Field(default=None, ge=0, multiple_of=Decimal("0.5"))
    fy_sick: Decimal | None = Field(default=None, ge=0, multiple_of=Decimal("0.5"))
    fy_earned: Decimal | None = Field(default=None, ge=0, multiple_of=Decimal("0.5"))


class CreateEmployeeResponse(BaseModel):
    """Identifiers of the created account and profile."""

    message: str
    user_id: int
    employee_id: int


class EmployeeUpdatePayload(BaseModel):
    """Admin update of an employee profile. Only provided fields change."""

    org_id: int | None = None
    fullname: str | None = Field(default=None, min_length=1, max_length=255)
    gender: str | None = Field(default=None, max_length=20)
    dob: date | None = None
    email: str | None = Field(default=None, max_length=255)
    mobile: str | None = Field(default=None, max_length=30)
    joining_date: date | None = None
    emp_code: str | None = Field(default=None, max_length=50)
    department: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)
    address: str | None = None
    blood_group: str | None = Field(default=None, max_length=10)
    marital_status: str | None = Field(default=None, max_length=20)
    reporting_manager: str | None = Field(default=None, max_length=255)
    cityfrom: str | None = Field(default=None, max_length=100)
    profile_photo: str | None = None
    about: str | None = None
    hobbies: str | None = None
    linkedin: str | None = Field(default=None, max_length=255)


class ProfileUpdatePayload(BaseModel):
    """Fields an employee may edit on their own profile."""

    email: str | None = Field(default=None, max_length=255)
    address: str | None = None
    dob: date | None = None
    marital_status: str | None = Field(default=None, max_length=20)
    blood_group: str | None = Field(default=None, max_length=10)


class EmployeeResponse(BaseModel):
    """Response schema for an employee profile."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    org_id: int
    fullname: str
    gender: str | None
    dob: date | None
    email: str | None
    mobile: str | None
    joining_date: date | None
    emp_code: str | None
    department: str | None
    position: str | None
    address: str | None
    blood_group: str | None
    marital_status: str | None
    reporting_manager: str | None
    cityfrom: str | None
    profile_photo: str | None
    about: str | None
    hobbies: str | None
    linkedin: str | None


class EmployeeListResponse(BaseModel):
    """Employees of an organisation."""

    data: list[EmployeeResponse]


class DirectReportsResponse(BaseModel):
    """Employees reporting to a manager."""

    employees: list[EmployeeResponse]


class SuccessResponse(BaseModel):
    """Acknowledgement for updates."""

    success: bool = True
    message: str | None = None
