import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quizgen.core.config import settings
from quizgen.core.llm import LLMClient
from quizgen.core.logging_config import setup_logging
from quizgen.core.middleware import RequestLoggingMiddleware
from quizgen.routers import health, questions
from quizgen.schemas import ErrorResponse
from quizgen.services.question_gateway import QuestionGenerationGateway
from quizgen.services.question_service import QuestionService

logger = logging.getLogger(__name__)


def create_app(llm_client: Optional[LLMClient] = None, configure_logging: bool = True) -> FastAPI:
    """
    Build the API.

    Args:
        llm_client: Model client to use; a real one is created at startup when omitted
        configure_logging: Install the application's log handlers
    """
    if configure_logging:
        setup_logging(settings.ENVIRONMENT, settings.LOG_LEVEL, settings.LOG_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"🚀 Starting {settings.APP_NAME}...")
        owns_client = llm_client is None
        llm = llm_client or LLMClient()

        gateway = QuestionGenerationGateway(llm=llm)
        app.state.question_service = QuestionService(gateway)

        yield
        # Shutdown
        if owns_client:
            await llm.aclose()
        logger.info(f"🛑 Shutting down {settings.APP_NAME}...")

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    # Middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        body = ErrorResponse(error=str(exc.detail), details=f"{request.method} {request.url.path}")
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)

    app.include_router(health.router)
    app.include_router(questions.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    logger.info(f"Server is running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
