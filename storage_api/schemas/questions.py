"""Pydantic schemas for question endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storage_api.models import QuestionSummary


class QuestionListResponse(BaseModel):
    """Response model for question listing."""
    success: bool = True
    count: int
    data: List[QuestionSummary]


class QuestionResponse(BaseModel):
    """Response model for a single full question."""
    success: bool = True
    data: Dict[str, Any]


class QuestionTestCases(BaseModel):
    """Test cases and limits of a question."""
    testCases: Any
    timeLimit: Optional[Any] = None
    memoryLimit: Optional[Any] = None


class QuestionTestCasesResponse(BaseModel):
    """Response model for test case retrieval."""
    success: bool = True
    data: QuestionTestCases


class CreatedQuestion(BaseModel):
    """Identifier and location of a created question."""
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="_id")
    questionUrl: str


class CreateQuestionResponse(BaseModel):
    """Response model for question creation."""
    success: bool = True
    message: str
    data: CreatedQuestion


class UpdateQuestionResponse(BaseModel):
    """Response model for question update."""
    success: bool = True
    message: str
    data: Dict[str, Any]


class BulkImportError(BaseModel):
    """A record that could not be imported."""
    model_config = ConfigDict(populate_by_name=True)

    index: int
    question_id: Optional[str] = Field(default=None, alias="_id")
    error: str


class BulkImportResponse(BaseModel):
    """Response model for bulk import."""
    success: bool = True
    created: int
    skipped: int
    failed: int
    errors: List[BulkImportError]
