"""Repository layer for on-disk data access."""

from storage_api.repositories.blob_repository import BlobRepository
from storage_api.repositories.record_repository import RecordRepository

__all__ = [
    "BlobRepository",
    "RecordRepository",
]
