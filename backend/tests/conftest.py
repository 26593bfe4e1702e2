# ruff: noqa: E402
"""Shared test fixtures: in-memory SQLite database, HTTP client and a seeder.

Uses SQLite + aiosqlite so the suite runs without PostgreSQL.
"""

from __future__ import annotations

import os
import tempfile

# Scratch upload dir and cheap password hashing, set before the app module is imported.
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="leavedesk-uploads-"))
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, TypeVar

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from leavedesk.db import get_session
from leavedesk.main import app
from leavedesk.models import (
    Employee,
    EmployeeManager,
    JobPosting,
    LeaveBalance,
    LeaveRequest,
    SQLModel,
    User,
)
from leavedesk.models.enums import JobStatus, LeaveDuration, LeaveKind, LeaveStatus, LeaveType, UserType
from leavedesk.services.auth import hash_password

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

T = TypeVar("T", bound=SQLModel)

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "s3cret-pass"


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database per test."""
    _engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    await _engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """Session for direct database operations in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


class Seeder:
    """Inserts committed rows for tests and reloads them from the database."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _save(self, obj: T) -> T:
        self.session.add(obj)
        await self.session.commit()
        return obj

    async def reload(self, model: type[T], pk: Any) -> T | None:
        """Read a row straight from the database, bypassing the identity map."""
        obj = await self.session.get(model, pk, populate_existing=True)
        await self.session.commit()
        return obj

    async def user(
        self,
        username: str = "alice",
        org_id: int = 1,
        fullname: str | None = None,
        user_type: UserType = UserType.EMPLOYEE,
        password: str = TEST_PASSWORD,
    ) -> User:
        return await self._save(
            User(
                org_id=org_id,
                username=username,
                fullname=fullname or username.title(),
                user_type=user_type.value,
                password_hash=hash_password(password, iterations=1_000),
            )
        )

    async def employee(self, user: User, **fields: Any) -> Employee:
        assert user.id is not None
        fields.setdefault("fullname", user.fullname)
        return await self._save(Employee(user_id=user.id, org_id=user.org_id, **fields))

    async def balance(
        self,
        user: User,
        casual: str = "10",
        sick: str = "8",
        earned: str = "15",
    ) -> LeaveBalance:
        assert user.id is not None
        return await self._save(
            LeaveBalance(
                user_id=user.id,
                fy_casual=Decimal(casual),
                fy_sick=Decimal(sick),
                fy_earned=Decimal(earned),
                pending_casual=Decimal(casual),
                pending_sick=Decimal(sick),
                pending_earned=Decimal(earned),
            )
        )

    async def leave_request(
        self,
        user: User,
        kind: LeaveKind = LeaveKind.LEAVE,
        leave_type: LeaveType | str | None = LeaveType.SICK,
        duration: LeaveDuration | str | None = LeaveDuration.FULL_DAY,
        status: LeaveStatus = LeaveStatus.PENDING,
        from_date: date = date(2025, 3, 10),
        to_date: date = date(2025, 3, 10),
        reason: str = "Feeling unwell",
    ) -> LeaveRequest:
        assert user.id is not None
        if kind == LeaveKind.WFH:
            leave_type = duration = None
        return await self._save(
            LeaveRequest(
                user_id=user.id,
                username=user.username,
                leave_wfh=kind.value,
                type=str(leave_type) if leave_type is not None else None,
                duration=str(duration) if duration is not None else None,
                from_date=from_date,
                to_date=to_date,
                reason=reason,
                status=status.value,
            )
        )

    async def manager_link(self, manager: User, report: User) -> EmployeeManager:
        assert manager.id is not None and report.id is not None
        return await self._save(EmployeeManager(manager_id=manager.id, employee_id=report.id))

    async def job(
        self,
        org_id: int = 1,
        title: str = "Backend Engineer",
        department: str | None = "Engineering",
        status: JobStatus = JobStatus.ACTIVE,
    ) -> JobPosting:
        return await self._save(JobPosting(org_id=org_id, title=title, department=department, status=status.value))


@pytest.fixture
def seed(db_session: AsyncSession) -> Seeder:
    return Seeder(db_session)
