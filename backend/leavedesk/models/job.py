# ruff: noqa: TC003
from __future__ import annotations

from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from leavedesk.models.base import IntIdBase, TimestampMixin
from leavedesk.models.enums import ApplicationStatus, JobStatus


class JobPosting(IntIdBase, TimestampMixin, table=True):
    """An open or closed position advertised by an organisation."""

    __tablename__ = "job_postings"
    __table_args__ = (sa.Index("ix_job_postings_org_created", "org_id", "created_at"),)

    org_id: int = Field(index=True)
    title: str = Field(max_length=255)
    location: str | None = Field(default=None, max_length=255)
    department: str | None = Field(default=None, max_length=100)
    work_type: str | None = Field(default=None, max_length=50)
    job_mode: str | None = Field(default=None, max_length=50)
    salary_min: Decimal | None = Field(default=None, max_digits=12, decimal_places=2)
    salary_max: Decimal | None = Field(default=None, max_digits=12, decimal_places=2)
    job_summary: str | None = None
    about_team: str | None = None
    reporting_to: str | None = Field(default=None, max_length=255)
    responsibilities: str | None = None
    skills: str | None = None
    education_experience: str | None = None
    about_us: str | None = None
    status: str = Field(default=JobStatus.ACTIVE, max_length=20, sa_column_kwargs={"server_default": "Active"})
    applications: int = Field(default=0, sa_column_kwargs={"server_default": "0"})


class JobApplication(IntIdBase, TimestampMixin, table=True):
    """A candidate's application to a job posting."""

    __tablename__ = "job_applications"

    job_id: int = Field(
        sa_column=sa.Column(
            sa.Integer, sa.ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    org_id: int = Field(index=True)
    full_name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    phone: str = Field(max_length=30)
    current_location: str | None = Field(default=None, max_length=255)
    current_company: str | None = Field(default=None, max_length=255)
    linkedin: str | None = Field(default=None, max_length=255)
    portfolio: str | None = Field(default=None, max_length=255)
    cover_letter: str | None = None
    additional_info: str | None = None
    resume_link: str = Field(max_length=500)
    status: str = Field(
        default=ApplicationStatus.APPLIED, max_length=20, sa_column_kwargs={"server_default": "Applied"}
    )
