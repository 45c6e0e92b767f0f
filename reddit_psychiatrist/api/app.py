"""FastAPI application entry point with lifespan and structured logging.

This module initializes the FastAPI application with:
- Lifespan context manager that builds the shared analyzer
- Structured logging (JSON) to logs/psyche.log
- Exception handlers for consistent error responses
- The JSON analysis endpoint, the HTML form, and a health check

The analyzer is created on startup and stored in app.state.analyzer for access
by route handlers. If an analyzer is already assigned (e.g. by tests), the
lifespan leaves it alone.

Usage:
    uvicorn reddit_psychiatrist.api.app:app --port 8080
"""

from contextlib import asynccontextmanager
from typing import Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from reddit_psychiatrist.analyzer import create_analyzer
from reddit_psychiatrist.api.models import ErrorDetail, ErrorEnvelope
from reddit_psychiatrist.api.responses import (
    INTERNAL_ERROR,
    NOT_FOUND,
    VALIDATION_ERROR,
    status_for_code,
)
from reddit_psychiatrist.api.routes import analyze, ui
from reddit_psychiatrist.config import load_dotenv
from reddit_psychiatrist.utils.logging_config import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for the shared analyzer.

    Builds the analyzer (Reddit + OpenAI clients) on startup and closes its
    network clients on shutdown.

    Raises:
        ValueError: If OPENAI_API_KEY or the Reddit credentials are missing
    """
    logger = get_logger(__name__)
    owns_analyzer = False

    if getattr(app.state, "analyzer", None) is None:
        load_dotenv()
        app.state.analyzer = await create_analyzer()
        owns_analyzer = True
        logger.info(
            "analyzer_created",
            model=app.state.analyzer.config.model,
            timeout_seconds=app.state.analyzer.config.timeout_seconds
        )

    try:
        yield
    finally:
        if owns_analyzer:
            await app.state.analyzer.close()
            app.state.analyzer = None
            logger.info("analyzer_closed")


# Initialize logging before creating the app
setup_logging(log_dir="logs", log_filename="psyche.log")

app = FastAPI(
    title="Reddit Psychiatrist API",
    description="Infers interests and a personality summary from a Reddit user's comment history",
    version="1.0.0",
    lifespan=lifespan,
)

logger = get_logger(__name__)

app.include_router(analyze.router)
app.include_router(ui.router)


# Exception Handlers
# These handlers convert exceptions to the standard ErrorEnvelope format


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    error_envelope = ErrorEnvelope(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=error_envelope.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body validation errors (400).

    A missing or non-string username, or a body that is not JSON, is a bad
    request rather than an unprocessable entity.
    """
    logger.warning("validation_error", path=request.url.path, errors=exc.errors())
    return _error_response(
        status_for_code(VALIDATION_ERROR),
        VALIDATION_ERROR,
        "Missing or invalid 'username' in request body",
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTPException with error envelope format.

    Routes exceptions raised via raise_api_error() or raw HTTPException
    into the standard ErrorEnvelope structure.
    """
    logger.warning("http_exception", path=request.url.path, status=exc.status_code)

    if isinstance(exc.detail, dict) and "code" in exc.detail:
        code = exc.detail["code"]
        message = exc.detail["message"]
    else:
        code_map = {400: VALIDATION_ERROR, 404: NOT_FOUND}
        code = code_map.get(exc.status_code, INTERNAL_ERROR)
        message = str(exc.detail) if exc.detail else "An error occurred"

    return _error_response(exc.status_code, code, message)


@app.exception_handler(Exception)
async def internal_server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught server errors (500)."""
    logger.error(
        "internal_server_error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_response(500, INTERNAL_ERROR, "An internal server error occurred")


@app.get("/health")
async def health() -> Dict[str, str]:
    """Health check endpoint.

    Example:
        GET /health -> {"status": "healthy"}
    """
    return {"status": "healthy"}
