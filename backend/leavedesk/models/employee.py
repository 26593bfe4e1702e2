# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from leavedesk.models.base import IntIdBase


class Employee(IntIdBase, table=True):
    """HR profile attached to a user account."""

    __tablename__ = "employee"

    user_id: int = Field(
        sa_column=sa.Column(
            sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
        ),
    )
    org_id: int = Field(index=True)
    fullname: str = Field(max_length=255)
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


class EmployeeManager(SQLModel, table=True):
    """Direct-report link between two user accounts."""

    __tablename__ = "employee_manager"
    __table_args__ = (sa.PrimaryKeyConstraint("manager_id", "employee_id"),)

    manager_id: int = Field(
        sa_column=sa.Column(sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    employee_id: int = Field(
        sa_column=sa.Column(sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    )
