from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from leavedesk.config import get_settings
from leavedesk.db import SessionDep, ping

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness plus database reachability."""

    status: Literal["ok", "degraded"]
    app: str
    version: str
    environment: str
    database: Literal["ok", "unreachable"]


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Always 200; ``status`` drops to degraded when the database is unreachable."""
    settings = get_settings()
    reachable = await ping(session)
    return HealthResponse(
        status="ok" if reachable else "degraded",
        app=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        database="ok" if reachable else "unreachable",
    )
