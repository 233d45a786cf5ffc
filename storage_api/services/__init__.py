"""Service layer for business logic."""

from storage_api.services.file_service import FileService
from storage_api.services.question_service import QuestionService

__all__ = [
    "FileService",
    "QuestionService",
]
