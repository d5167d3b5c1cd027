"""FastAPI application entrypoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studycompanion.config import Settings, configure_logging, get_settings
from studycompanion.database import create_tables, dispose_engine, initialize_database
from studycompanion.exceptions import StudyCompanionError
from studycompanion.routers import flashcards, quizzes, tasks, time_entries
from studycompanion.schemas import ErrorResponse

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)
    create_tables()
    logger.info("application_started", environment=settings.ENVIRONMENT)
    yield
    dispose_engine()
    logger.info("application_stopped")


async def study_companion_error_handler(
    _request: Request, exc: StudyCompanionError
) -> JSONResponse:
    """Render application errors with their own status code."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("application_error", error=exc.message, status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code, content=ErrorResponse(error=exc.message).model_dump()
    )


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 rather than FastAPI's default 422."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {errors[0].get('msg', '')}".strip()
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=ErrorResponse(error=message).model_dump()
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Flashcards, quizzes and study time tracking",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StudyCompanionError, study_companion_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(flashcards.router, prefix=settings.API_PREFIX)
    app.include_router(quizzes.router, prefix=settings.API_PREFIX)
    app.include_router(tasks.router, prefix=settings.API_PREFIX)
    app.include_router(time_entries.router, prefix=settings.API_PREFIX)

    @app.get("/")
    def read_root() -> dict[str, str]:
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run("studycompanion.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
