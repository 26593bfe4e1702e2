from __future__ import annotations

from sqlmodel import Field

from leavedesk.models.base import IntIdBase
from leavedesk.models.enums import UserType


class User(IntIdBase, table=True):
    """Login account. Every employee, manager and admin has one."""

    __tablename__ = "users"

    org_id: int = Field(index=True)
    username: str = Field(max_length=150, unique=True, index=True)
    fullname: str = Field(max_length=255)
    user_type: str = Field(default=UserType.EMPLOYEE, max_length=50)
    password_hash: str = Field(max_length=255)
