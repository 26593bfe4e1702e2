# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class EmployeeBrief(BaseModel):
    """Name and department of a colleague."""

    fullname: str
    department: str | None


class JobBrief(BaseModel):
    """Title and department of an open posting."""

    title: str
    department: str | None


class HomeSummaryResponse(BaseModel):
    """Per-user dashboard."""

    fullname: str
    position: str | None
    reporting_manager: str | None
    joining_date: date | None
    email: str | None
    remaining_cl: float
    remaining_sl: float
    remaining_el: float
    leave_today: list[EmployeeBrief]
    leave_tomorrow: list[EmployeeBrief]
    birthdays: list[EmployeeBrief]
    jobs: list[JobBrief]
