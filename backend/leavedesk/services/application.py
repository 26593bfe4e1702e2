from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col

from leavedesk.exceptions import NotFoundError
from leavedesk.models.job import JobApplication, JobPosting
from leavedesk.schemas.employee import SuccessResponse
from leavedesk.schemas.job import (
    ApplicationResponse,
    OrgApplicationResponse,
    SubmitApplicationResponse,
)
from leavedesk.services.job import get_job_or_404
from leavedesk.services.storage import discard_upload

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavedesk.schemas.job import ApplicationStatusPayload, SubmitApplicationForm

logger = logging.getLogger(__name__)


async def submit_application(
    session: AsyncSession,
    form: SubmitApplicationForm,
    resume_link: str,
) -> SubmitApplicationResponse:
    """Store an application and bump the posting's counter in one transaction.

    The stored resume is removed again if the job is unknown or the write fails.
    """
    try:
        job = await get_job_or_404(session, form.job_id)

        application = JobApplication(org_id=job.org_id, resume_link=resume_link, **form.model_dump())
        session.add(application)
        await session.execute(
            update(JobPosting)
            .where(col(JobPosting.id) == form.job_id)
            .values(applications=col(JobPosting.applications) + 1)
            .execution_options(synchronize_session=False)
        )
        await session.commit()
    except (NotFoundError, SQLAlchemyError):
        await session.rollback()
        await discard_upload(resume_link)
        raise

    logger.info("Application id=%s received for job_id=%s", application.pk, form.job_id)
    return SubmitApplicationResponse(
        message="Application submitted successfully",
        application_id=application.pk,
        resume_link=resume_link,
    )


async def list_org_applications(session: AsyncSession, org_id: int) -> list[OrgApplicationResponse]:
    """Applications of an org joined with posting title/department, newest first."""
    result = await session.execute(
        select(JobApplication, JobPosting.title, JobPosting.department)
        .join(JobPosting, col(JobPosting.id) == col(JobApplication.job_id))
        .where(col(JobApplication.org_id) == org_id)
        .order_by(col(JobApplication.created_at).desc(), col(JobApplication.id).desc())
    )
    return [
        OrgApplicationResponse(
            **ApplicationResponse.model_validate(application).model_dump(),
            title=title,
            department=department,
        )
        for application, title, department in result.all()
    ]


async def _get_application_or_404(session: AsyncSession, application_id: int) -> JobApplication:
    application = await session.get(JobApplication, application_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


async def get_application(session: AsyncSession, application_id: int) -> ApplicationResponse:
    """Get a single application."""
    return ApplicationResponse.model_validate(await _get_application_or_404(session, application_id))


async def update_application_status(
    session: AsyncSession,
    application_id: int,
    payload: ApplicationStatusPayload,
) -> SuccessResponse:
    """Move an application to a new pipeline stage."""
    application = await _get_application_or_404(session, application_id)
    application.status = payload.status.value
    await session.commit()
    return SuccessResponse()
