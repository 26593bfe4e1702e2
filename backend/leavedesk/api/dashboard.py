# ruff: noqa: B008
from __future__ import annotations

from fastapi import APIRouter, Query

from leavedesk.db import SessionDep
from leavedesk.schemas.dashboard import HomeSummaryResponse
from leavedesk.services import dashboard as dashboard_service

dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get("/home-summary", response_model=HomeSummaryResponse)
async def home_summary(
    session: SessionDep,
    username: str = Query(min_length=1),
) -> HomeSummaryResponse:
    """Dashboard summary for a user."""
    return await dashboard_service.get_home_summary(session, username)
