# ruff: noqa: B008
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header


async def get_actor_id(x_user_id: int | None = Header(default=None)) -> int | None:
    """User id of the caller from the ``X-User-Id`` header, if sent."""
    return x_user_id


ActorDep = Annotated[int | None, Depends(get_actor_id)]
