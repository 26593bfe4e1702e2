from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import status
from starlette.concurrency import run_in_threadpool

from leavedesk.config import get_settings
from leavedesk.exceptions import AppError

if TYPE_CHECKING:
    from fastapi import UploadFile

logger = logging.getLogger(__name__)

RESUME_EXTENSIONS = frozenset({".pdf", ".doc", ".docx", ".rtf", ".txt"})


def _unique_name(original: str | None) -> str:
    """Timestamp plus random hex, keeping the original extension."""
    suffix = Path(original or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{suffix}"


async def save_resume(upload: UploadFile) -> str:
    """Store an uploaded resume and return its public link (``/uploads/<name>``)."""
    settings = get_settings()

    suffix = Path(upload.filename or "").suffix.lower()
    if suffix not in RESUME_EXTENSIONS:
        raise AppError(f"Unsupported resume file type '{suffix or 'none'}'", status_code=status.HTTP_400_BAD_REQUEST)

    limit = settings.max_upload_bytes
    if upload.size is not None and upload.size > limit:
        raise AppError("Resume file too large", status_code=status.HTTP_400_BAD_REQUEST)

    # Read at most one byte past the limit.
    contents = await upload.read(limit + 1)
    if not contents:
        raise AppError("Resume file is empty", status_code=status.HTTP_400_BAD_REQUEST)
    if len(contents) > limit:
        raise AppError("Resume file too large", status_code=status.HTTP_400_BAD_REQUEST)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = _unique_name(upload.filename)
    await run_in_threadpool((upload_dir / filename).write_bytes, contents)

    logger.info("Stored resume %s (%d bytes)", filename, len(contents))
    return f"/uploads/{filename}"


async def discard_upload(link: str) -> None:
    """Remove a stored upload given its public link. Missing files are ignored."""
    path = Path(get_settings().upload_dir) / Path(link).name
    await run_in_threadpool(path.unlink, missing_ok=True)
