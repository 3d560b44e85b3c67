"""
Centralized constants and enums for the quiz generator.

Single source of truth for the difficulty tiers, the error envelope
messages and the structured-output schema handed to the model.
"""

from enum import Enum
from typing import Any, Dict, List


# ============================================================================
# Difficulty
# ============================================================================

class Difficulty(str, Enum):
    """Difficulty tiers a generated question may carry."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def get_difficulty_levels() -> List[str]:
    """Get all difficulty values."""
    return [level.value for level in Difficulty]


def normalize_difficulty(value: Any) -> Any:
    """
    Lower-case and trim a difficulty string.

    Anything that is not a string is returned untouched so the schema
    check can reject it with a proper type error.
    """
    if isinstance(value, str):
        return value.strip().lower()
    return value


# ============================================================================
# Error envelope
# ============================================================================

VALIDATION_FAILED = "Validation failed"
GENERATION_FAILED = "Failed to generate questions"


class ErrorKind(str, Enum):
    """Internal failure classification (collapsed on the wire)."""
    TRANSPORT = "transport"
    MALFORMED_OUTPUT = "malformed_output"
    SCHEMA_VIOLATION = "schema_violation"


ERROR_KIND_LABELS: Dict[ErrorKind, str] = {
    ErrorKind.TRANSPORT: "Transport error",
    ErrorKind.MALFORMED_OUTPUT: "Malformed model output",
    ErrorKind.SCHEMA_VIOLATION: "Schema violation",
}


# ============================================================================
# Structured output schema
# ============================================================================

QUESTION_BATCH_SCHEMA_NAME = "questions"


def get_question_batch_schema() -> Dict[str, Any]:
    """
    JSON schema describing the {"questions": [...]} payload.

    Strict structured outputs require every property to be listed as
    required, so the optional fields are expressed as nullable instead.
    """
    question = {
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "question": {"type": "string"},
            "difficulty": {"type": "string", "enum": get_difficulty_levels()},
            "category": {"type": "string"},
            "options": {
                "type": ["array", "null"],
                "items": {"type": "string"},
            },
            "correctAnswer": {"type": ["string", "null"]},
        },
        "required": ["id", "question", "difficulty", "category", "options", "correctAnswer"],
        "additionalProperties": False,
    }
    return {
        "type": "object",
        "properties": {
            "questions": {"type": "array", "items": question},
        },
        "required": ["questions"],
        "additionalProperties": False,
    }


def get_response_format() -> Dict[str, Any]:
    """OpenAI `response_format` descriptor for the question batch."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": QUESTION_BATCH_SCHEMA_NAME,
            "strict": True,
            "schema": get_question_batch_schema(),
        },
    }
