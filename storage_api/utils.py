"""Utility helper functions for the Storage API."""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from common.constants import TEMP_FILE_SUFFIX


def get_current_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        Timestamp with millisecond precision and 'Z' suffix
        (e.g. "2025-01-31T12:00:00.000Z")
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _write_temp(path: Path, data: bytes) -> str:
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=TEMP_FILE_SUFFIX,
        dir=str(path.parent),
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
    except BaseException:
        os.unlink(temp_name)
        raise
    return temp_name


def atomic_write(path: Path, data: bytes) -> None:
    """
    Write data to path so readers see either the old or the new content.

    Args:
        path: Destination file
        data: Full file content

    Raises:
        OSError: If the write or rename fails
    """
    temp_name = _write_temp(path, data)
    try:
        os.replace(temp_name, path)
    except BaseException:
        os.unlink(temp_name)
        raise


def atomic_create(path: Path, data: bytes) -> None:
    """
    Write data to path only if path does not exist yet.

    The content is written to a temporary file first and then hard-linked
    into place, so the destination never holds a partial document.

    Raises:
        FileExistsError: If path already exists
        OSError: If the write or link fails
    """
    temp_name = _write_temp(path, data)
    try:
        os.link(temp_name, path)
    finally:
        os.unlink(temp_name)


def get_base_url(request, public_base_url: Optional[str] = None) -> str:
    """
    Get the base URL used in links returned to callers.

    Args:
        request: Incoming request
        public_base_url: Configured external base URL, if any

    Returns:
        Base URL without trailing slash (e.g. "http://storage:3000")
    """
    if public_base_url:
        return public_base_url.rstrip("/")
    return str(request.base_url).rstrip("/")
