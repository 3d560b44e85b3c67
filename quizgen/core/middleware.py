import time
import uuid
import logging
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from quizgen.schemas import ErrorResponse

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with timing, and turn stray exceptions into the error envelope."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        endpoint = f"{request.method} {request.url.path}"
        extra = {"request_id": request_id}

        start_time = time.time()
        logger.info(f"--> {endpoint}", extra=extra)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"💥 ERROR | {endpoint} | {type(e).__name__}: {e} | Duration: {duration_ms:.2f}ms",
                extra=extra,
                exc_info=True,
            )
            body = ErrorResponse(error="Internal server error", details=type(e).__name__)
            response = JSONResponse(status_code=500, content=body.model_dump())
            response.headers["X-Request-ID"] = request_id
            return response

        duration_ms = (time.time() - start_time) * 1000
        logger.info(f"<-- {endpoint} {response.status_code} {duration_ms:.2f}ms", extra=extra)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
