"""
Request validation for POST /questions.

Runs before any model call. Never raises: the caller gets either a
TopicRequest or a ValidationFailure to turn into a 400.
"""

import logging
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from quizgen.schemas import TopicRequest, ValidationFailure
from quizgen.schemas.validation import issues_from_error

logger = logging.getLogger(__name__)


def validate_topic_request(payload: Any) -> Union[TopicRequest, ValidationFailure]:
    """
    Check a raw, already JSON-decoded payload against the topic contract.

    Args:
        payload: Anything the client sent (dict, list, scalar, None)

    Returns:
        TopicRequest with the topic trimmed, or ValidationFailure listing
        the offending fields
    """
    try:
        request = TopicRequest.model_validate(payload)
    except PydanticValidationError as e:
        failure = ValidationFailure(issues=issues_from_error(e))
        logger.info(f"Rejected topic request: {failure.summary()}")
        return failure

    return request
