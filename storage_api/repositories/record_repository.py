"""Record repository: one JSON document per identifier in a directory."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from common.constants import RECORD_FILE_SUFFIX, TEMP_FILE_SUFFIX
from common.logging_config import get_logger
from storage_api.exceptions import (
    CorruptRecordError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    StorageError,
)
from storage_api.locking import KeyedLock
from storage_api.paths import record_path
from storage_api.utils import atomic_create, atomic_write

logger = get_logger(__name__)


def _serialize(document: Dict[str, Any]) -> bytes:
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")


class RecordRepository:
    """
    File-backed store of JSON records.

    Each record lives in <directory>/<id>.json; the file is the only
    representation. Writes for one identifier are serialized through a
    KeyedLock and always land through a temporary file, so readers never
    observe a partially written document.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._locks = KeyedLock()

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise
        except OSError as e:
            raise StorageError(f"Failed to read {path.name}: {e}") from e

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptRecordError(f"Record file {path.name} is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise CorruptRecordError(f"Record file {path.name} does not contain a JSON object")
        return document

    def _record_files(self) -> List[Path]:
        try:
            return sorted(
                p for p in self.directory.glob(f"*{RECORD_FILE_SUFFIX}")
                if not p.name.startswith(".")
            )
        except OSError as e:
            raise StorageError(f"Failed to scan {self.directory}: {e}") from e

    def list_records(self) -> List[Dict[str, Any]]:
        """
        Read every record in the directory.

        Files that cannot be read or parsed are skipped and logged so one
        bad file never hides the rest.

        Returns:
            List of records ordered by filename
        """
        records = []
        for path in self._record_files():
            try:
                records.append(self._read(path))
            except FileNotFoundError:
                # deleted between the scan and the read
                continue
            except (CorruptRecordError, StorageError) as e:
                logger.error(f"Skipping unreadable record {path.name}: {e}")
        return records

    def count(self) -> int:
        return len(self._record_files())

    def exists(self, record_id: str) -> bool:
        return record_path(self.directory, record_id).exists()

    def get(self, record_id: str) -> Dict[str, Any]:
        """
        Get a record by identifier.

        Raises:
            InvalidIdentifierError: If the identifier is unsafe
            RecordNotFoundError: If no record exists for the identifier
            CorruptRecordError: If the stored file cannot be parsed
        """
        path = record_path(self.directory, record_id)
        try:
            return self._read(path)
        except FileNotFoundError:
            raise RecordNotFoundError(f"Question '{record_id}' not found")

    def create(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store a new record.

        Args:
            record_id: Identifier of the new record
            data: Full document to store

        Returns:
            The stored document

        Raises:
            RecordAlreadyExistsError: If a record already exists for the identifier
            StorageError: If the write fails
        """
        path = record_path(self.directory, record_id)
        payload = _serialize(data)

        with self._locks.hold(record_id):
            if path.exists():
                raise RecordAlreadyExistsError(f"Question with id '{record_id}' already exists")
            try:
                atomic_create(path, payload)
            except FileExistsError:
                raise RecordAlreadyExistsError(f"Question with id '{record_id}' already exists")
            except OSError as e:
                raise StorageError(f"Failed to write question '{record_id}': {e}") from e

        logger.debug(f"Wrote record {record_id} ({len(payload)} bytes)")
        return data

    def update(self, record_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Shallow-merge patch into an existing record.

        Fields in patch overwrite existing ones, fields absent from patch
        are kept. '_id' is forced back to record_id and 'createdAt' keeps
        its stored value whatever the patch contains.

        Returns:
            The merged document

        Raises:
            RecordNotFoundError: If no record exists for the identifier
            StorageError: If the write fails
        """
        path = record_path(self.directory, record_id)

        with self._locks.hold(record_id):
            try:
                existing = self._read(path)
            except FileNotFoundError:
                raise RecordNotFoundError(f"Question '{record_id}' not found")

            merged = {**existing, **patch, "_id": record_id}
            if "createdAt" in existing:
                merged["createdAt"] = existing["createdAt"]
            else:
                merged.pop("createdAt", None)

            try:
                atomic_write(path, _serialize(merged))
            except OSError as e:
                raise StorageError(f"Failed to write question '{record_id}': {e}") from e

        return merged

    def delete(self, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Delete a record.

        Returns:
            The deleted document, or None if its content was unreadable

        Raises:
            RecordNotFoundError: If no record exists for the identifier
        """
        path = record_path(self.directory, record_id)

        with self._locks.hold(record_id):
            try:
                document = self._read(path)
            except FileNotFoundError:
                raise RecordNotFoundError(f"Question '{record_id}' not found")
            except (CorruptRecordError, StorageError) as e:
                logger.warning(f"Deleting unreadable record {record_id}: {e}")
                document = None

            try:
                path.unlink()
            except FileNotFoundError:
                raise RecordNotFoundError(f"Question '{record_id}' not found")
            except OSError as e:
                raise StorageError(f"Failed to delete question '{record_id}': {e}") from e

        return document

    def cleanup_temp_files(self) -> int:
        """
        Remove temporary files left behind by an interrupted write.

        Returns:
            Number of files removed
        """
        removed = 0
        for path in self.directory.glob(f".*{TEMP_FILE_SUFFIX}"):
            try:
                path.unlink()
                removed += 1
            except OSError as e:
                logger.warning(f"Failed to remove temp file {path.name}: {e}")
        if removed:
            logger.info(f"Removed {removed} stale temp files from {self.directory}")
        return removed
