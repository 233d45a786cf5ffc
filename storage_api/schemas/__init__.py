"""Pydantic schemas for API requests and responses."""

from storage_api.schemas.common import ErrorResponse, HealthResponse, MessageResponse
from storage_api.schemas.files import (
    FileEntryResponse,
    ListFilesResponse,
    UploadedFile,
    UploadFileResponse,
)
from storage_api.schemas.questions import (
    BulkImportError,
    BulkImportResponse,
    CreatedQuestion,
    CreateQuestionResponse,
    QuestionListResponse,
    QuestionResponse,
    QuestionTestCases,
    QuestionTestCasesResponse,
    UpdateQuestionResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "FileEntryResponse",
    "ListFilesResponse",
    "UploadedFile",
    "UploadFileResponse",
    "BulkImportError",
    "BulkImportResponse",
    "CreatedQuestion",
    "CreateQuestionResponse",
    "QuestionListResponse",
    "QuestionResponse",
    "QuestionTestCases",
    "QuestionTestCasesResponse",
    "UpdateQuestionResponse",
]
