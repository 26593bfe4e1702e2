from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leavedesk.exceptions import NotFoundError
from leavedesk.models.job import JobPosting
from leavedesk.schemas.job import CreateJobPostingResponse, JobPostingResponse
from leavedesk.services.directory import get_user_by_username

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavedesk.schemas.job import CreateJobPostingPayload


async def get_job_or_404(session: AsyncSession, job_id: int) -> JobPosting:
    """Fetch a job posting by ID. Raises 404 if not found."""
    job = await session.get(JobPosting, job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return job


async def create_job_posting(session: AsyncSession, payload: CreateJobPostingPayload) -> CreateJobPostingResponse:
    """Create a posting in the org of the requesting user."""
    user = await get_user_by_username(session, payload.username)

    job = JobPosting(org_id=user.org_id, **payload.model_dump(exclude={"username"}))
    session.add(job)
    await session.commit()

    return CreateJobPostingResponse(job_id=job.pk, message="Job created successfully")


async def list_jobs_for_user(session: AsyncSession, username: str) -> list[JobPostingResponse]:
    """List postings of the user's org, newest first."""
    user = await get_user_by_username(session, username)
    result = await session.execute(
        select(JobPosting)
        .where(col(JobPosting.org_id) == user.org_id)
        .order_by(col(JobPosting.created_at).desc(), col(JobPosting.id).desc())
    )
    return [JobPostingResponse.model_validate(j) for j in result.scalars().all()]


async def get_job_posting(session: AsyncSession, job_id: int) -> JobPostingResponse:
    """Get a single posting."""
    return JobPostingResponse.model_validate(await get_job_or_404(session, job_id))
