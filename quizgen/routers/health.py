"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from quizgen.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Basic liveness check")
async def health_check() -> HealthResponse:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return HealthResponse(status="OK", timestamp=timestamp.replace("+00:00", "Z"))
