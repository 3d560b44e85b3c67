"""
Validation of parsed model output against the question batch contract.

The model is only advised to follow the schema, so everything it sends
back is re-checked here. The result is tagged: a list of Question on
success, a ValidationFailure listing every problem otherwise.
"""

import logging
from typing import Any, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from quizgen.schemas import FieldIssue, Question, ValidationFailure
from quizgen.schemas.validation import issues_from_error

logger = logging.getLogger(__name__)


def _extract_records(data: Any) -> Union[List[Any], ValidationFailure]:
    """Accept {"questions": [...]} or a bare array."""
    if isinstance(data, list):
        return data

    if not isinstance(data, dict):
        return ValidationFailure(issues=[
            FieldIssue(field="body", reason=f"Expected an object with a 'questions' array, got {type(data).__name__}")
        ])

    if "questions" not in data:
        logger.error(f"Missing 'questions'. Available keys: {list(data.keys())}")
        return ValidationFailure(issues=[FieldIssue(field="questions", reason="Field required")])

    records = data["questions"]
    if not isinstance(records, list):
        return ValidationFailure(issues=[FieldIssue(field="questions", reason="Input should be a valid list")])
    return records


def _has_duplicate_options(question: Question) -> bool:
    if not question.options:
        return False
    return len(set(question.options)) != len(question.options)


def validate_question_batch(
    data: Any,
    expected_count: Optional[int] = None,
) -> Union[List[Question], ValidationFailure]:
    """
    Validate and lightly correct a parsed question batch.

    Corrections applied:
    - difficulty is trimmed and lower-cased before the enum check
    - text fields are trimmed, unknown keys are dropped
    - questions with duplicate options are dropped
    - ids are reassigned 1..n in order

    Any record that is missing a required field or carries a wrong type
    fails the whole batch, as does a batch with no usable questions.

    Args:
        data: Decoded JSON from the model
        expected_count: Number of questions requested (only used for logging)

    Returns:
        Validated questions, or ValidationFailure
    """
    records = _extract_records(data)
    if isinstance(records, ValidationFailure):
        return records

    issues: List[FieldIssue] = []
    accepted: List[Question] = []

    for index, record in enumerate(records):
        location = f"questions[{index}]"

        if not isinstance(record, dict):
            issues.append(FieldIssue(field=location, reason="Input should be a valid object"))
            continue

        try:
            # Placeholder id; the real one is assigned once the batch is final
            question = Question.model_validate({**record, "id": index + 1})
        except PydanticValidationError as e:
            issues.extend(issues_from_error(e, prefix=location))
            continue

        if _has_duplicate_options(question):
            logger.warning(f"Dropping {location}: duplicate options {question.options}")
            continue

        if question.options and question.correctAnswer is not None \
                and question.correctAnswer not in question.options:
            logger.warning(f"{location}: correctAnswer is not one of its options")

        accepted.append(question)

    if issues:
        return ValidationFailure(issues=issues)

    if not accepted:
        return ValidationFailure(issues=[
            FieldIssue(field="questions", reason="Model output contained no usable questions")
        ])

    if expected_count is not None and len(accepted) != expected_count:
        logger.warning(f"Requested {expected_count} questions, model produced {len(accepted)}")

    batch = [
        question.model_copy(update={"id": position})
        for position, question in enumerate(accepted, 1)
    ]
    logger.debug(f"✅ Validated {len(batch)} questions")
    return batch
