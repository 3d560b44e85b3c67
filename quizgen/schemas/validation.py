"""Tagged validation results shared by the request and output validators."""

from typing import List, Sequence, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError


class FieldIssue(BaseModel):
    """One (field, reason) pair describing why a value was rejected."""
    field: str
    reason: str


class ValidationFailure(BaseModel):
    """Failure half of a validation result."""
    issues: List[FieldIssue]

    def summary(self) -> str:
        return "; ".join(f"{issue.field}: {issue.reason}" for issue in self.issues)


def format_location(loc: Sequence[Union[str, int]], root: str = "body") -> str:
    """Render a pydantic error location as `questions[2].difficulty`."""
    if not loc:
        return root
    parts: List[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)


def issues_from_error(
    error: PydanticValidationError,
    prefix: str = "",
    root: str = "body",
) -> List[FieldIssue]:
    """Convert a pydantic ValidationError into FieldIssues."""
    issues = []
    for err in error.errors():
        field = format_location(err.get("loc", ()), root=root)
        if prefix:
            field = f"{prefix}.{field}" if field != root else prefix
        issues.append(FieldIssue(field=field, reason=err.get("msg", "Invalid value")))
    return issues
