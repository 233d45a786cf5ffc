"""Safe identifier and filename resolution for on-disk storage."""

import re
import secrets
import uuid
from pathlib import Path
from typing import Optional

from common.constants import (
    MAX_EXTENSION_LENGTH,
    MAX_RECORD_ID_LENGTH,
    RECORD_FILE_SUFFIX,
    RECORD_ID_BYTES,
)
from storage_api.exceptions import InvalidIdentifierError

_RECORD_ID_PATTERN = re.compile(
    r"^[A-Za-z0-9_-][A-Za-z0-9._-]{0,%d}$" % (MAX_RECORD_ID_LENGTH - 1)
)
_EXTENSION_PATTERN = re.compile(r"^\.[A-Za-z0-9]{1,%d}$" % MAX_EXTENSION_LENGTH)


def generate_record_id() -> str:
    """
    Generate a new record identifier.

    Returns:
        24 lowercase hex characters (12 random bytes)
    """
    return secrets.token_hex(RECORD_ID_BYTES)


def is_valid_record_id(record_id) -> bool:
    return isinstance(record_id, str) and bool(_RECORD_ID_PATTERN.match(record_id))


def validate_record_id(record_id) -> str:
    """
    Ensure a record identifier can be used as a single filename component.

    Args:
        record_id: Caller-supplied identifier

    Returns:
        The identifier, unchanged

    Raises:
        InvalidIdentifierError: If the identifier contains path separators,
            starts with a dot, is empty or too long
    """
    if not is_valid_record_id(record_id):
        raise InvalidIdentifierError(f"Invalid question id: {record_id!r}")
    return record_id


def _is_contained(path: Path, directory: Path) -> bool:
    return path.resolve().parent == directory.resolve()


def record_path(directory: Path, record_id: str) -> Path:
    """
    Get the file path for a record.

    Args:
        directory: Records directory
        record_id: Record identifier

    Returns:
        Path of <directory>/<record_id>.json

    Raises:
        InvalidIdentifierError: If the identifier is unsafe
    """
    validate_record_id(record_id)
    path = directory / f"{record_id}{RECORD_FILE_SUFFIX}"
    if not _is_contained(path, directory):
        raise InvalidIdentifierError(f"Invalid question id: {record_id!r}")
    return path


def safe_blob_name(name: str) -> Optional[str]:
    """
    Reduce a caller-supplied filename to its last path segment.

    Args:
        name: Filename as supplied in a request

    Returns:
        Sanitized filename, or None if nothing usable remains
    """
    if not name:
        return None
    base = re.split(r"[\\/]", name)[-1]
    if not base or base in (".", "..") or base.startswith(".") or "\x00" in base:
        return None
    return base


def blob_path(directory: Path, name: str) -> Optional[Path]:
    """
    Resolve a caller-supplied filename inside a bucket directory.

    Returns:
        Path inside the directory, or None if the name is unusable
    """
    base = safe_blob_name(name)
    if base is None:
        return None
    path = directory / base
    if not _is_contained(path, directory):
        return None
    return path


def sanitize_extension(original_filename: Optional[str]) -> str:
    """
    Extract a safe lowercase extension from an uploaded file's name.

    Returns:
        Extension including the leading dot, or '' if it is missing or unsafe
    """
    base = safe_blob_name(original_filename or "") or ""
    suffix = Path(base).suffix
    if not _EXTENSION_PATTERN.match(suffix):
        return ""
    return suffix.lower()


def generate_blob_name(original_filename: Optional[str]) -> str:
    """
    Generate a fresh stored name for an upload.

    The stem is always random; only the original extension is kept.
    """
    return f"{uuid.uuid4().hex}{sanitize_extension(original_filename)}"
