# ruff: noqa: B008, TC001
from __future__ import annotations

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from leavedesk.db import SessionDep
from leavedesk.schemas.employee import SuccessResponse
from leavedesk.schemas.job import (
    ApplicationResponse,
    ApplicationStatusPayload,
    CreateJobPostingPayload,
    CreateJobPostingResponse,
    JobPostingResponse,
    OrgApplicationResponse,
    SubmitApplicationForm,
    SubmitApplicationResponse,
)
from leavedesk.services import application as application_service
from leavedesk.services import job as job_service
from leavedesk.services.storage import save_resume

jobs_router = APIRouter(prefix="/job-postings", tags=["jobs"])

applications_router = APIRouter(tags=["applications"])


@jobs_router.post("", response_model=CreateJobPostingResponse, status_code=status.HTTP_201_CREATED)
async def create_job_posting(payload: CreateJobPostingPayload, session: SessionDep) -> CreateJobPostingResponse:
    """Create a job posting in the requesting user's org."""
    return await job_service.create_job_posting(session, payload)


@jobs_router.get("/user/{username}", response_model=list[JobPostingResponse])
async def list_jobs_for_user(username: str, session: SessionDep) -> list[JobPostingResponse]:
    """List job postings of a user's org."""
    return await job_service.list_jobs_for_user(session, username)


@jobs_router.get("/{job_id}", response_model=JobPostingResponse)
async def get_job_posting(job_id: int, session: SessionDep) -> JobPostingResponse:
    """Get a single job posting."""
    return await job_service.get_job_posting(session, job_id)


@applications_router.post("/apply", response_model=SubmitApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_application(
    session: SessionDep,
    job_id: int = Form(),
    full_name: str = Form(),
    email: str = Form(),
    phone: str = Form(),
    resume: UploadFile = File(),
    current_location: str | None = Form(default=None),
    current_company: str | None = Form(default=None),
    linkedin: str | None = Form(default=None),
    portfolio: str | None = Form(default=None),
    cover_letter: str | None = Form(default=None),
    additional_info: str | None = Form(default=None),
) -> SubmitApplicationResponse:
    """Apply to a job with a resume upload."""
    try:
        form = SubmitApplicationForm(
            job_id=job_id,
            full_name=full_name,
            email=email,
            phone=phone,
            current_location=current_location,
            current_company=current_company,
            linkedin=linkedin,
            portfolio=portfolio,
            cover_letter=cover_letter,
            additional_info=additional_info,
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    resume_link = await save_resume(resume)
    return await application_service.submit_application(session, form, resume_link)


@applications_router.get("/applications/org/{org_id}", response_model=list[OrgApplicationResponse])
async def list_org_applications(org_id: int, session: SessionDep) -> list[OrgApplicationResponse]:
    """List applications received by an org."""
    return await application_service.list_org_applications(session, org_id)


@applications_router.get("/applications/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: int, session: SessionDep) -> ApplicationResponse:
    """Get a single application."""
    return await application_service.get_application(session, application_id)


@applications_router.put("/applications/{application_id}/status", response_model=SuccessResponse)
async def update_application_status(
    application_id: int,
    payload: ApplicationStatusPayload,
    session: SessionDep,
) -> SuccessResponse:
    """Move an application to a new stage."""
    return await application_service.update_application_status(session, application_id, payload)
