"""Question API routes."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status

from storage_api import config
from storage_api.auth import require_api_key
from storage_api.exceptions import BadRequestError
from storage_api.schemas.common import MessageResponse
from storage_api.schemas.questions import (
    BulkImportResponse,
    CreatedQuestion,
    CreateQuestionResponse,
    QuestionListResponse,
    QuestionResponse,
    QuestionTestCasesResponse,
    UpdateQuestionResponse,
)
from storage_api.service_locator import get_question_service
from storage_api.services.question_service import QuestionService
from storage_api.utils import get_base_url

router = APIRouter(prefix="/questions", tags=["Questions"])


@router.get("", response_model=QuestionListResponse)
def list_questions(service: QuestionService = Depends(get_question_service)):
    """
    List all questions (metadata only, no test cases).

    Returns:
        - count: Number of questions
        - data: One summary per question
    """
    summaries = service.list_summaries()
    return {"success": True, "count": len(summaries), "data": summaries}


@router.get("/slug/{slug}", response_model=QuestionResponse)
def get_question_by_slug(slug: str, service: QuestionService = Depends(get_question_service)):
    """
    Get the first question whose slug matches.

    Raises:
        - 404: No question has this slug
    """
    return {"success": True, "data": service.get_by_slug(slug)}


@router.get("/{question_id}", response_model=QuestionResponse)
def get_question(question_id: str, service: QuestionService = Depends(get_question_service)):
    """
    Get a full question, test cases included.

    Raises:
        - 400: Malformed question id
        - 404: Question not found
    """
    return {"success": True, "data": service.get_by_id(question_id)}


@router.get("/{question_id}/testcases", response_model=QuestionTestCasesResponse)
def get_test_cases(question_id: str, service: QuestionService = Depends(get_question_service)):
    """
    Get only the test cases and limits of a question (for code execution).

    Raises:
        - 404: Question not found
    """
    return {"success": True, "data": service.get_test_cases(question_id)}


@router.post(
    "",
    response_model=CreateQuestionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
def create_question(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    service: QuestionService = Depends(get_question_service),
):
    """
    Create a question.

    Parameters:
        - JSON body: question document; '_id' is generated when absent
        - X-API-Key header or apiKey query parameter (required)

    Raises:
        - 400: Malformed document or id
        - 401: Invalid or missing API key
        - 409: A question with this id already exists
    """
    document = service.create(payload)
    question_id = document["_id"]
    question_url = f"{get_base_url(request, config.PUBLIC_BASE_URL)}/questions/{question_id}"

    return CreateQuestionResponse(
        message="Question created",
        data=CreatedQuestion(_id=question_id, questionUrl=question_url),
    )


@router.post("/bulk", response_model=BulkImportResponse, dependencies=[Depends(require_api_key)])
def bulk_import(payload: Any = Body(...), service: QuestionService = Depends(get_question_service)):
    """
    Import many questions at once (for migration).

    Parameters:
        - JSON body: {"questions": [...]} or a bare array

    Returns:
        - created: Questions written
        - skipped: Questions without '_id' or whose id already exists
        - failed: Questions that were malformed or could not be written
        - errors: One entry per failed question

    Raises:
        - 400: questions is not an array
        - 401: Invalid or missing API key
    """
    records = payload.get("questions") if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise BadRequestError("questions must be an array")

    result = service.bulk_import(records)
    return {
        "success": True,
        "created": result.created,
        "skipped": result.skipped,
        "failed": result.failed,
        "errors": result.errors,
    }


@router.put("/{question_id}", response_model=UpdateQuestionResponse, dependencies=[Depends(require_api_key)])
def update_question(
    question_id: str,
    payload: Dict[str, Any] = Body(...),
    service: QuestionService = Depends(get_question_service),
):
    """
    Merge fields into an existing question.

    '_id' and 'createdAt' cannot be changed.

    Raises:
        - 400: Malformed patch
        - 401: Invalid or missing API key
        - 404: Question not found
    """
    updated = service.update(question_id, payload)
    return {"success": True, "message": "Question updated", "data": updated}


@router.delete("/{question_id}", response_model=MessageResponse, dependencies=[Depends(require_api_key)])
def delete_question(question_id: str, service: QuestionService = Depends(get_question_service)):
    """
    Delete a question.

    Raises:
        - 401: Invalid or missing API key
        - 404: Question not found
    """
    service.delete(question_id)
    return MessageResponse(message="Question deleted")
