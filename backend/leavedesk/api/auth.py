# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter

from leavedesk.db import SessionDep
from leavedesk.schemas.auth import LoginPayload, LoginResponse
from leavedesk.services import auth as auth_service

auth_router = APIRouter(tags=["auth"])


@auth_router.post("/login", response_model=LoginResponse)
async def login(payload: LoginPayload, session: SessionDep) -> LoginResponse:
    """Check a username/password pair."""
    return await auth_service.authenticate(session, payload)
