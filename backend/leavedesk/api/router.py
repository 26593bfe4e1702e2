from fastapi import APIRouter

from leavedesk.api.auth import auth_router
from leavedesk.api.dashboard import dashboard_router
from leavedesk.api.employees import employees_router, managers_router
from leavedesk.api.jobs import applications_router, jobs_router
from leavedesk.api.leave import leave_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(leave_router)
api_router.include_router(employees_router)
api_router.include_router(managers_router)
api_router.include_router(jobs_router)
api_router.include_router(applications_router)
api_router.include_router(dashboard_router)
