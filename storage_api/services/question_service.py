"""Question service for business logic."""

from typing import Any, Dict, Iterable, List

from common.logging_config import get_logger
from storage_api.exceptions import (
    BadRequestError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    StorageAPIException,
)
from storage_api.models import Question, summarize
from storage_api.paths import generate_record_id, validate_record_id
from storage_api.repositories.record_repository import RecordRepository
from storage_api.types import BulkImportResult
from storage_api.utils import get_current_timestamp

logger = get_logger(__name__)


class QuestionService:
    def __init__(self, record_repo: RecordRepository):
        self.record_repo = record_repo

    def count(self) -> int:
        return self.record_repo.count()

    def list_summaries(self) -> List[Dict[str, Any]]:
        """
        List every question without its test cases.

        Returns:
            One metadata projection per stored record
        """
        return [summarize(record) for record in self.record_repo.list_records()]

    def get_by_id(self, question_id: str) -> Dict[str, Any]:
        return self.record_repo.get(question_id)

    def get_by_slug(self, slug: str) -> Dict[str, Any]:
        """
        Find a question by slug.

        Slugs are not unique; the first record in directory order wins.

        Raises:
            RecordNotFoundError: If no record has this slug
        """
        for record in self.record_repo.list_records():
            if record.get("slug") == slug:
                return record
        raise RecordNotFoundError(f"Question with slug '{slug}' not found")

    def get_test_cases(self, question_id: str) -> Dict[str, Any]:
        record = self.record_repo.get(question_id)
        return {
            "testCases": record.get("testCases") or [],
            "timeLimit": record.get("timeLimit"),
            "memoryLimit": record.get("memoryLimit"),
        }

    def create(self, data: Any) -> Dict[str, Any]:
        """
        Create a question.

        Args:
            data: Question document; '_id' and 'createdAt' are optional

        Returns:
            The stored document

        Raises:
            BadRequestError: If the document or its id is invalid
            RecordAlreadyExistsError: If a question with the same id exists
        """
        document = Question.from_payload(data).to_document()

        question_id = document.get("_id") or generate_record_id()
        validate_record_id(question_id)

        now = get_current_timestamp()
        document["_id"] = question_id
        document["createdAt"] = document.get("createdAt") or now
        document["updatedAt"] = now

        self.record_repo.create(question_id, document)
        logger.info(f"[CREATE] Question saved: {question_id} - {document.get('title')}")
        return document

    def update(self, question_id: str, patch: Any) -> Dict[str, Any]:
        """
        Merge patch into an existing question.

        '_id' and 'createdAt' in the patch are ignored; 'updatedAt' is
        always refreshed.

        Raises:
            BadRequestError: If the patch is invalid
            RecordNotFoundError: If the question does not exist
        """
        validate_record_id(question_id)
        changes = Question.from_payload(patch).to_document()
        changes["updatedAt"] = get_current_timestamp()

        updated = self.record_repo.update(question_id, changes)
        logger.info(f"[UPDATE] Question updated: {question_id} - {updated.get('title')}")
        return updated

    def delete(self, question_id: str) -> None:
        deleted = self.record_repo.delete(question_id)
        title = deleted.get("title") if deleted else None
        logger.info(f"[DELETE] Question deleted: {question_id} - {title}")

    def bulk_import(self, records: Iterable[Any]) -> BulkImportResult:
        """
        Import questions, never overwriting existing ones.

        Records without an '_id' or whose id already exists are skipped.
        Records that are malformed or fail to be written are counted as
        failed and reported individually.

        Args:
            records: Sequence of question documents

        Returns:
            BulkImportResult with created/skipped/failed counters
        """
        if isinstance(records, (str, bytes, dict)):
            raise BadRequestError("questions must be an array")

        result = BulkImportResult()

        for index, data in enumerate(records):
            raw_id = data.get("_id") if isinstance(data, dict) else None
            try:
                document = Question.from_payload(data).to_document()
                question_id = document.get("_id")
                if not question_id:
                    result.skipped += 1
                    continue

                validate_record_id(question_id)
                if self.record_repo.exists(question_id):
                    result.skipped += 1
                    continue

                document["updatedAt"] = get_current_timestamp()
                self.record_repo.create(question_id, document)
                result.created += 1
            except RecordAlreadyExistsError:
                result.skipped += 1
            except StorageAPIException as e:
                logger.error(f"[BULK] Failed to import record #{index} ({raw_id}): {e}")
                result.failed += 1
                result.errors.append({
                    "index": index,
                    "_id": str(raw_id) if raw_id is not None else None,
                    "error": str(e),
                })

        logger.info(
            f"[BULK] Imported {result.created} questions, skipped {result.skipped}, "
            f"failed {result.failed}"
        )
        return result
