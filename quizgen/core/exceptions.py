"""
Custom exceptions for the quiz generator.

Gateway failures keep their kind internally (for logging) even though
the HTTP layer collapses them into one error envelope.
"""

from typing import List, Optional

from quizgen.core.constants import ERROR_KIND_LABELS, ErrorKind


class QuizGenError(Exception):
    """Base exception for all quiz generator errors."""
    pass


class GenerationError(QuizGenError):
    """Base for every failure of the question generation round trip."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def describe(self) -> str:
        """Message prefixed with the failure kind, used as the 500 `details`."""
        return f"{ERROR_KIND_LABELS[self.kind]}: {self}"


class TransportError(GenerationError):
    """Raised when the model call fails outright (network, status, timeout)."""

    kind = ErrorKind.TRANSPORT


class MalformedOutputError(GenerationError):
    """Raised when the model response is not parseable JSON."""

    kind = ErrorKind.MALFORMED_OUTPUT

    def __init__(self, message: str, raw_text: Optional[str] = None):
        self.raw_text = raw_text
        super().__init__(message)


class SchemaViolationError(GenerationError):
    """Raised when parsed output does not match the question batch shape."""

    kind = ErrorKind.SCHEMA_VIOLATION

    def __init__(self, message: str, issues: Optional[List] = None):
        self.issues = issues or []
        super().__init__(message)


class PromptTemplateError(QuizGenError):
    """Raised when prompt template loading fails."""
    pass
