from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from passlib.context import CryptContext
from sqlalchemy import select
from sqlmodel import col

from leavedesk.config import get_settings
from leavedesk.exceptions import AuthenticationError
from leavedesk.models.user import User
from leavedesk.schemas.auth import LoginResponse, LoginUser

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leavedesk.schemas.auth import LoginPayload

logger = logging.getLogger(__name__)

_SCHEME = "pbkdf2_sha256"


@lru_cache
def _password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=[_SCHEME], pbkdf2_sha256__default_rounds=rounds)


def hash_password(password: str, iterations: int | None = None) -> str:
    """Return a salted PBKDF2-SHA256 hash in passlib's modular crypt format."""
    rounds = iterations or get_settings().password_hash_iterations
    return _password_context(rounds).hash(password)


def verify_password(password: str, encoded: str) -> bool:
    """Check a password against a hash produced by :func:`hash_password`.

    Unrecognised or malformed hashes never verify.
    """
    try:
        return _password_context(get_settings().password_hash_iterations).verify(password, encoded)
    except ValueError:
        return False


async def authenticate(session: AsyncSession, payload: LoginPayload) -> LoginResponse:
    """Verify credentials and return the public account view."""
    result = await session.execute(select(User).where(col(User.username) == payload.username))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for username=%s", payload.username)
        raise AuthenticationError

    return LoginResponse(
        user=LoginUser(
            id=user.pk,
            username=user.username,
            fullname=user.fullname,
            org_id=user.org_id,
            user_type=user.user_type,
        )
    )
