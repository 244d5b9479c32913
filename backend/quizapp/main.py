"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from quizapp.api.v1.router import api_router
from quizapp.common.request_id import RequestIDMiddleware
from quizapp.core.app_exceptions import QuizError
from quizapp.core.config import settings
from quizapp.core.errors import (
    general_exception_handler,
    http_exception_handler,
    quiz_exception_handler,
    validation_exception_handler,
)
from quizapp.core.logging import get_logger, setup_logging
from quizapp.core.redis_client import create_redis_client
from quizapp.store.kv import KeyValueStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and build the shared store client."""
    setup_logging()
    if app.state.store is None and settings.REDIS_URL:
        app.state.store = KeyValueStore(create_redis_client(settings))
    if app.state.store is None:
        logger.warning("store_not_configured", extra={"event": "store_not_configured"})
    yield


def create_app(store: KeyValueStore | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    ``store`` overrides the Redis-backed store built at startup.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Practice quiz API: tests, graded attempts and statistics",
        openapi_url="/openapi.json" if settings.ENV != "prod" else None,
        docs_url="/docs" if settings.ENV != "prod" else None,
        redoc_url="/redoc" if settings.ENV != "prod" else None,
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QuizError, quiz_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - API information."""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs_url": "/docs" if settings.ENV != "prod" else None,
        }

    return app


app = create_app()
