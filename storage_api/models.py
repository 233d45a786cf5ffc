"""Domain model for question records."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from storage_api.exceptions import BadRequestError

SUMMARY_FIELDS = (
    "_id",
    "title",
    "slug",
    "difficulty",
    "tags",
    "companies",
    "createdAt",
    "updatedAt",
)


class Question(BaseModel):
    """
    A question record.

    Only "_id" (a filename component) and "testCases" (a list) are type
    checked. Descriptive fields are stored as given, and any other field
    supplied by the caller is kept in the model's extras and written back
    unchanged.
    """
    model_config = ConfigDict(extra="allow")

    question_id: Optional[str] = Field(default=None, alias="_id")
    title: Optional[Any] = None
    slug: Optional[Any] = None
    difficulty: Optional[Any] = None
    tags: Optional[Any] = None
    companies: Optional[Any] = None
    testCases: Optional[List[Any]] = None
    timeLimit: Optional[Any] = None
    memoryLimit: Optional[Any] = None
    createdAt: Optional[Any] = None
    updatedAt: Optional[Any] = None

    @classmethod
    def from_payload(cls, data: Any) -> "Question":
        """
        Validate a caller-supplied document.

        Raises:
            BadRequestError: If data is not an object, "_id" is not a string or
                "testCases" is not a list
        """
        if not isinstance(data, dict):
            raise BadRequestError("Question must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise BadRequestError(f"Invalid question: {errors}") from e

    def to_document(self) -> Dict[str, Any]:
        """Fields the caller supplied, reserved and extra, keyed as stored on disk."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class QuestionSummary(BaseModel):
    """Listing view of a question: metadata only, no test cases."""
    model_config = ConfigDict(populate_by_name=True)

    question_id: Optional[Any] = Field(default=None, alias="_id")
    title: Optional[Any] = None
    slug: Optional[Any] = None
    difficulty: Optional[Any] = None
    tags: Optional[Any] = None
    companies: Optional[Any] = None
    createdAt: Optional[Any] = None
    updatedAt: Optional[Any] = None


def summarize(record: Dict[str, Any]) -> Dict[str, Any]:
    return {name: record.get(name) for name in SUMMARY_FIELDS}
