"""Endpoint for generating quiz questions from a topic."""

import asyncio
import logging
from typing import Awaitable, List, TypeVar

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from quizgen.core.constants import GENERATION_FAILED, VALIDATION_FAILED
from quizgen.core.exceptions import GenerationError
from quizgen.schemas import ErrorResponse, FieldIssue, Question, ValidationFailure
from quizgen.services.question_service import QuestionService
from quizgen.services.request_validator import validate_topic_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["questions"])

T = TypeVar("T")

# Non-standard status used when the client hung up before we answered
CLIENT_CLOSED_REQUEST = 499
DISCONNECT_POLL_SECONDS = 0.5


class ClientDisconnected(Exception):
    """The caller went away while the model call was pending."""


async def run_until_disconnect(request: Request, awaitable: Awaitable[T]) -> T:
    """Await `awaitable`, cancelling it if the client disconnects first."""
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnected()
    finally:
        if not task.done():
            task.cancel()


def _validation_error(issues: List[FieldIssue]) -> JSONResponse:
    body = ErrorResponse(error=VALIDATION_FAILED, details=issues)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def _generation_error(error: GenerationError) -> JSONResponse:
    body = ErrorResponse(error=GENERATION_FAILED, details=error.describe())
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())


def get_question_service(request: Request) -> QuestionService:
    return request.app.state.question_service


@router.post(
    "/questions",
    response_model=List[Question],
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid topic request"},
        500: {"model": ErrorResponse, "description": "Question generation failed"},
    },
    summary="Generate quiz questions for a topic",
)
async def create_questions(request: Request) -> Response:
    """
    Generate a batch of quiz questions about `topic`.

    The body is read raw so that every malformed request gets the same
    400 envelope instead of the framework's default 422.
    """
    try:
        payload = await request.json()
    except ValueError:
        return _validation_error([FieldIssue(field="body", reason="Request body must be valid JSON")])

    validated = validate_topic_request(payload)
    if isinstance(validated, ValidationFailure):
        return _validation_error(validated.issues)

    service = get_question_service(request)
    try:
        questions = await run_until_disconnect(request, service.generate_questions(validated))
    except ClientDisconnected:
        logger.info(f"Client disconnected, generation cancelled | Topic: {validated.topic[:80]}")
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except GenerationError as e:
        logger.error(
            f"Error generating questions: {e.describe()}",
            extra={"error_kind": e.kind.value},
        )
        return _generation_error(e)

    logger.info(f"✅ Generated {len(questions)} questions | Topic: {validated.topic[:80]}")
    return JSONResponse(content=[question.to_wire() for question in questions])
