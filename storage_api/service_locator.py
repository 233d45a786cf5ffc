"""Service locator for the shared storage services."""

import time
from pathlib import Path
from typing import Optional

from common.constants import QUESTIONS_DIR_NAME
from common.logging_config import get_logger
from storage_api import config
from storage_api.repositories.blob_repository import BlobRepository
from storage_api.repositories.record_repository import RecordRepository
from storage_api.services.file_service import DEFAULT_POLICIES, FileService
from storage_api.services.question_service import QuestionService

logger = get_logger(__name__)

_question_service: Optional[QuestionService] = None
_file_service: Optional[FileService] = None
_started_at: float = time.monotonic()


def init_services(data_dir: Optional[str] = None) -> None:
    """
    Create the data directory layout and the services that own it.

    Args:
        data_dir: Data root (defaults to config.DATA_DIR)
    """
    global _question_service, _file_service, _started_at

    root = Path(data_dir or config.DATA_DIR)
    root.mkdir(parents=True, exist_ok=True)

    record_repo = RecordRepository(root / QUESTIONS_DIR_NAME)
    blob_repo = BlobRepository(root, DEFAULT_POLICIES.keys())
    record_repo.cleanup_temp_files()
    blob_repo.cleanup_temp_files()

    _question_service = QuestionService(record_repo)
    _file_service = FileService(blob_repo, DEFAULT_POLICIES, max_size=config.MAX_UPLOAD_BYTES)
    _started_at = time.monotonic()

    logger.info(f"Storage initialized at {root.resolve()}")


def get_question_service() -> QuestionService:
    """Get global question service instance"""
    if _question_service is None:
        init_services()
    return _question_service


def get_file_service() -> FileService:
    """Get global file service instance"""
    if _file_service is None:
        init_services()
    return _file_service


def get_uptime() -> float:
    """Seconds since the services were initialized"""
    return time.monotonic() - _started_at
