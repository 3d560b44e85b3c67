"""Schemas package."""

from .question import Question, QuestionBatch, NonEmptyStr
from .requests import TopicRequest
from .responses import ErrorResponse, HealthResponse
from .validation import FieldIssue, ValidationFailure

__all__ = [
    # Questions
    "Question",
    "QuestionBatch",
    "NonEmptyStr",
    # Requests
    "TopicRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    # Validation
    "FieldIssue",
    "ValidationFailure",
]
