"""Storage API data type definitions."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class BlobEntry:
    """
    A stored file as seen on disk.
    """
    filename: str
    size: int


@dataclass(frozen=True)
class StoredFile:
    """
    Result of a successful upload.
    """
    filename: str
    folder: str
    size: int
    mimetype: str


@dataclass
class BulkImportResult:
    """
    Outcome counters of a bulk import.

    skipped counts records left alone on purpose (missing or existing id);
    failed counts records that could not be stored, with one error per record.
    """
    created: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)
