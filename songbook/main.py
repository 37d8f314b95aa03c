"""
Songbook - Main Application

FastAPI application that serves:
- REST API endpoints for songs CRUD, filtering/sorting and statistics
- An HTML collection page via Jinja2 templates
- Health check endpoint

Songs are persisted in a single JSON file (see ``songbook.store``).
"""

import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from songbook.config import (
    APP_ENV,
    APP_HOST,
    APP_PORT,
    APP_VERSION,
    DEBUG,
    LOG_LEVEL,
    SERVICE_NAME,
    TEMPLATES_DIR,
    ensure_directories,
)
from songbook.exceptions import SongbookError, ValidationFailure
from songbook.routes.api import router as api_router
from songbook.routes.pages import router as pages_router
from songbook.store import SongStore

# ---------------------------------------------------------------------------
# Logging setup — stdout only
# ---------------------------------------------------------------------------
logger.remove()

logger.add(
    sys.stdout,
    level="DEBUG" if DEBUG else LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True,
)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the data directory on startup and log the store location."""
    logger.info("🚀 Starting {} v{}", SERVICE_NAME, APP_VERSION)
    logger.info("📋 Environment: {} | Debug: {}", APP_ENV, DEBUG)

    ensure_directories()
    store: SongStore = app.state.store
    logger.info(
        "📁 Songs file: {} (fail-open reads: {})", store.path, store.fail_open
    )

    logger.success("✅ Application ready — listening on {}:{}", APP_HOST, APP_PORT)

    yield

    logger.info("🛑 Shutting down {}...", SERVICE_NAME)


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------
def _request_validation_messages(exc: RequestValidationError) -> list:
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SongbookError)
    async def songbook_error_handler(request: Request, exc: SongbookError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ):
        failure = ValidationFailure(_request_validation_messages(exc))
        return JSONResponse(status_code=failure.status_code, content=failure.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        error = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code, content={"success": False, "error": error}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            "❌ Unhandled error on {} {}: {}", request.method, request.url.path, exc
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error"},
        )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(store: Optional[SongStore] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` defaults to a ``SongStore`` on the configured ``SONGS_FILE``;
    tests pass one pointing at a temporary file.
    """

    app = FastAPI(
        title=SERVICE_NAME,
        description="Manage a personal collection of favourite songs.",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if DEBUG else None,
        redoc_url="/redoc" if DEBUG else None,
    )

    app.state.store = store or SongStore()
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    # ------------------------------------------------------------------
    # Request logging middleware
    # ------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every incoming HTTP request with timing information."""
        start = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round(time.time() - start, 3)
            logger.error(
                "❌ {method} {path} — unhandled error after {duration}s: {exc}",
                method=request.method,
                path=request.url.path,
                duration=duration,
                exc=exc,
            )
            raise

        duration = round(time.time() - start, 3)
        status = response.status_code
        client = request.client.host if request.client else "-"

        if status >= 500:
            log = logger.error
        elif status >= 400:
            log = logger.warning
        else:
            log = logger.info

        log(
            "📤 {method} {path} — {status} [{duration}s] ({client})",
            method=request.method,
            path=request.url.path,
            status=status,
            duration=duration,
            client=client,
        )
        return response

    _register_exception_handlers(app)

    # ------------------------------------------------------------------
    # Register routers
    # ------------------------------------------------------------------
    app.include_router(api_router)  # /api/* and /health — JSON endpoints
    app.include_router(pages_router)  # /      — HTML page

    return app


# ---------------------------------------------------------------------------
# Create the app instance (used by Uvicorn)
# ---------------------------------------------------------------------------
app = create_app()


# ---------------------------------------------------------------------------
# Direct execution (development)
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "songbook.main:app",
        host=APP_HOST,
        port=APP_PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info",
    )
