from __future__ import annotations

from pydantic import BaseModel, Field


class LoginPayload(BaseModel):
    """Request body for username/password login."""

    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)


class LoginUser(BaseModel):
    """Public view of an authenticated account."""

    id: int
    username: str
    fullname: str
    org_id: int
    user_type: str


class LoginResponse(BaseModel):
    """Successful login."""

    status: int = 1
    user: LoginUser
