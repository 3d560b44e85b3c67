"""Request schemas."""

from pydantic import BaseModel, Field

from .question import NonEmptyStr


class TopicRequest(BaseModel):
    """Validated body of POST /questions."""
    topic: NonEmptyStr = Field(..., description="Free-text subject to generate questions about")

    class Config:
        json_schema_extra = {
            "example": {"topic": "binary search trees"}
        }
