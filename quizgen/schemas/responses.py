"""Response schemas."""

from typing import List, Union

from pydantic import BaseModel, Field

from .validation import FieldIssue


class ErrorResponse(BaseModel):
    """Uniform error envelope for every 4xx/5xx the API returns."""
    error: str
    details: Union[List[FieldIssue], str] = Field(
        ..., description="Field issues for a 400, a description string for a 500"
    )


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str = Field(..., description="ISO-8601 time the check was served")
