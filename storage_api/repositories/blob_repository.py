"""Blob repository: raw file I/O inside per-bucket directories."""

from pathlib import Path
from typing import Dict, Iterable, List

from common.constants import TEMP_FILE_SUFFIX
from common.logging_config import get_logger
from storage_api.exceptions import BlobNotFoundError, InvalidBucketError, StorageError
from storage_api.paths import blob_path
from storage_api.types import BlobEntry
from storage_api.utils import atomic_write

logger = get_logger(__name__)


class BlobRepository:
    """
    Stores opaque files in one directory per bucket.

    Filenames passed in by callers are reduced to their last path segment
    before use, so no operation can reach outside a bucket directory.
    """

    def __init__(self, root: Path, buckets: Iterable[str]):
        self.root = Path(root)
        self._dirs: Dict[str, Path] = {}
        for bucket in buckets:
            directory = self.root / bucket
            directory.mkdir(parents=True, exist_ok=True)
            self._dirs[bucket] = directory

    def bucket_dir(self, bucket: str) -> Path:
        """
        Get the directory of a bucket.

        Raises:
            InvalidBucketError: If the bucket is unknown
        """
        directory = self._dirs.get(bucket)
        if directory is None:
            raise InvalidBucketError(f"Folder '{bucket}' is not allowed")
        return directory

    def _existing_path(self, bucket: str, name: str) -> Path:
        path = blob_path(self.bucket_dir(bucket), name)
        if path is None or not path.is_file():
            raise BlobNotFoundError(f"File '{name}' not found in '{bucket}'")
        return path

    def write(self, bucket: str, name: str, content: bytes) -> int:
        """
        Write a blob.

        Args:
            bucket: Target bucket
            name: Generated filename (never caller-controlled)
            content: Raw file bytes

        Returns:
            Number of bytes written

        Raises:
            StorageError: If the write fails
        """
        path = blob_path(self.bucket_dir(bucket), name)
        if path is None:
            raise StorageError(f"Refusing to write blob with unsafe name {name!r}")
        try:
            atomic_write(path, content)
        except OSError as e:
            raise StorageError(f"Failed to write {bucket}/{name}: {e}") from e
        return len(content)

    def open_path(self, bucket: str, name: str) -> Path:
        """
        Get the path of an existing blob for streaming.

        Raises:
            InvalidBucketError: If the bucket is unknown
            BlobNotFoundError: If the blob does not exist
        """
        return self._existing_path(bucket, name)

    def delete(self, bucket: str, name: str) -> str:
        """
        Delete a blob.

        Returns:
            The sanitized filename that was removed

        Raises:
            InvalidBucketError: If the bucket is unknown
            BlobNotFoundError: If the blob does not exist
        """
        path = self._existing_path(bucket, name)
        try:
            path.unlink()
        except FileNotFoundError:
            raise BlobNotFoundError(f"File '{name}' not found in '{bucket}'")
        except OSError as e:
            raise StorageError(f"Failed to delete {bucket}/{path.name}: {e}") from e
        return path.name

    def list_entries(self, bucket: str) -> List[BlobEntry]:
        """
        List stored blobs of a bucket.

        Returns:
            Entries sorted by filename; temporary files are excluded
        """
        directory = self.bucket_dir(bucket)
        entries = []
        for path in sorted(directory.iterdir()):
            if path.name.startswith("."):
                continue
            try:
                if not path.is_file():
                    continue
                entries.append(BlobEntry(filename=path.name, size=path.stat().st_size))
            except FileNotFoundError:
                continue
        return entries

    def cleanup_temp_files(self) -> int:
        """
        Remove temporary files left behind by an interrupted upload.

        Returns:
            Number of files removed
        """
        removed = 0
        for bucket, directory in self._dirs.items():
            for path in directory.glob(f".*{TEMP_FILE_SUFFIX}"):
                try:
                    path.unlink()
                    removed += 1
                except OSError as e:
                    logger.warning(f"Failed to remove temp file {bucket}/{path.name}: {e}")
        if removed:
            logger.info(f"Removed {removed} stale temp files from upload folders")
        return removed
