# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Self

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from leavedesk.models.enums import ApplicationStatus, JobStatus

# ---------------------------------------------------------------------------
# Job postings
# ---------------------------------------------------------------------------


class CreateJobPostingPayload(BaseModel):
    """Request body for creating a job posting on behalf of a user's org."""

    username: str = Field(min_length=1, max_length=150)
    title: str = Field(min_length=1, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    department: str | None = Field(default=None, max_length=100)
    work_type: str | None = Field(default=None, max_length=50)
    job_mode: str | None = Field(default=None, max_length=50)
    salary_min: Decimal | None = Field(default=None, ge=0)
    salary_max: Decimal | None = Field(default=None, ge=0)
    job_summary: str | None = None
    about_team: str | None = Field(default=None, validation_alias=AliasChoices("about_team", "team_info"))
    reporting_to: str | None = Field(default=None, max_length=255)
    responsibilities: str | None = None
    skills: str | None = None
    education_experience: str | None = Field(
        default=None, validation_alias=AliasChoices("education_experience", "education")
    )
    about_us: str | None = None

    @model_validator(mode="after")
    def _validate_salary_range(self) -> Self:
        if self.salary_min is not None and self.salary_max is not None and self.salary_max < self.salary_min:
            msg = "salary_max must not be below salary_min"
            raise ValueError(msg)
        return self


class CreateJobPostingResponse(BaseModel):
    """Identifier of the created posting."""

    status: int = 1
    job_id: int
    message: str


class JobPostingResponse(BaseModel):
    """Response schema for a job posting."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    org_id: int
    title: str
    location: str | None
    department: str | None
    work_type: str | None
    job_mode: str | None
    salary_min: float | None
    salary_max: float | None
    job_summary: str | None
    about_team: str | None
    reporting_to: str | None
    responsibilities: str | None
    skills: str | None
    education_experience: str | None
    about_us: str | None
    status: JobStatus
    applications: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------


class SubmitApplicationResponse(BaseModel):
    """Response after an application is stored."""

    message: str
    application_id: int
    resume_link: str


class ApplicationResponse(BaseModel):
    """Response schema for a single job application."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: int
    org_id: int
    full_name: str
    email: str
    phone: str
    current_location: str | None
    current_company: str | None
    linkedin: str | None
    portfolio: str | None
    cover_letter: str | None
    additional_info: str | None
    resume_link: str
    status: ApplicationStatus
    created_at: datetime


class OrgApplicationResponse(ApplicationResponse):
    """Application with the posting's title and department."""

    title: str
    department: str | None


class ApplicationStatusPayload(BaseModel):
    """Request body for moving an application through the pipeline."""

    status: ApplicationStatus


class SubmitApplicationForm(BaseModel):
    """Text fields of a multipart job application."""

    job_id: int
    full_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    phone: str = Field(min_length=1, max_length=30)
    current_location: str | None = Field(default=None, max_length=255)
    current_company: str | None = Field(default=None, max_length=255)
    linkedin: str | None = Field(default=None, max_length=255)
    portfolio: str | None = Field(default=None, max_length=255)
    cover_letter: str | None = None
    additional_info: str | None = None
