"""Question-related Pydantic schemas."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator

from quizgen.core.constants import Difficulty, normalize_difficulty

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Question(BaseModel):
    """A single generated quiz question."""
    id: int = Field(..., ge=1, description="Position in the batch, starting at 1")
    question: NonEmptyStr
    difficulty: Difficulty
    category: NonEmptyStr = Field(..., description="Free-text label, no fixed vocabulary")
    options: Optional[List[NonEmptyStr]] = Field(
        None, description="Answer choices, absent for open-response questions"
    )
    correctAnswer: Optional[Annotated[str, StringConstraints(strip_whitespace=True)]] = Field(
        None, description="Expected answer, normally one of the options"
    )

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value):
        return normalize_difficulty(value)

    def to_wire(self) -> dict:
        """Serialize with absent optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


# One request's worth of questions, in generation order.
QuestionBatch = List[Question]
