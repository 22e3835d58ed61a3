"""
NoteCache Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes store construction, middleware registration, route
       mounting, and lifecycle management in one place.
How:   Factory pattern: create_app(settings) returns a configured FastAPI instance.
Who:   Called by the CLI (notecache.cli) and by uvicorn (uvicorn notecache.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌─────────────┐ ┌──────────────┐  │
    │  │ /notes[/..]  │ │ POST /write │ │ /UploadForm  │  │
    │  └──────────────┘ └─────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Exists→400 │ NotFound→404 │ Storage→500      │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  app.state.note_store ─▶ NoteStore ─▶ FileSystemBackend
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Verify the cache directory exists (abort startup if not)
    3. Log startup complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from notecache import __version__
from notecache.config import Settings, settings as default_settings
from notecache.exceptions import (
    ConfigurationError,
    InvalidNoteContentError,
    InvalidNoteNameError,
    NoteAlreadyExistsError,
    NoteNotFoundError,
    StorageError,
)
from notecache.middleware.logging import RequestLoggingMiddleware
from notecache.middleware.request_id import RequestIDMiddleware, request_id_var
from notecache.routes import form, health, notes, write
from notecache.services.file_storage import FileSystemBackend
from notecache.services.note_service import NoteStore
from notecache.services.storage_base import NoteBackend

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] notecache.access: GET /notes 200 ...
    Called by the CLI before the cache check and again by the lifespan;
    force=True makes the second call replace the first.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Refuse to serve against a missing cache directory.

    The CLI checks before starting uvicorn; this covers the app being
    served directly (`uvicorn notecache.main:app`). Raising here makes
    uvicorn abort startup.
    """
    app_settings: Settings = app.state.settings
    store: NoteStore = app.state.note_store

    setup_logging(app_settings.log_level)

    try:
        store.check()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e.message)
        raise

    logger.info("Note cache: %s", store.backend.location)
    logger.info(
        "Server ready at http://%s:%d (docs at /docs)",
        app_settings.host,
        app_settings.port,
    )

    yield

    logger.info("NoteCache shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map store exceptions to HTTP status codes with short plain-text bodies.

    Handler table:
        NoteAlreadyExistsError   → 400
        InvalidNoteNameError     → 400
        InvalidNoteContentError  → 400
        RequestValidationError   → 400 (missing form field)
        NoteNotFoundError        → 404
        StorageError             → 500 (generic message; details logged)
        Exception (fallback)     → 500
    """

    @app.exception_handler(NoteAlreadyExistsError)
    async def handle_already_exists(request: Request, exc: NoteAlreadyExistsError):
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(InvalidNoteNameError)
    async def handle_invalid_name(request: Request, exc: InvalidNoteNameError):
        logger.warning("[%s] Rejected note name %r: %s", request_id_var.get(""), exc.name, exc.reason)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(InvalidNoteContentError)
    async def handle_invalid_content(request: Request, exc: InvalidNoteContentError):
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """FastAPI's default is a 422 JSON document; keep errors plain text."""
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        message = "Invalid request"
        if fields:
            message = f"Missing or invalid field: {', '.join(fields)}"
        return PlainTextResponse(message, status_code=400)

    @app.exception_handler(NoteNotFoundError)
    async def handle_not_found(request: Request, exc: NoteNotFoundError):
        return PlainTextResponse(exc.message, status_code=404)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        # Paths and OS errors go to the log only
        logger.error(
            "[%s] Storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return PlainTextResponse("Internal server error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    backend: Optional[NoteBackend] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Host, port and cache directory. Defaults to the
                      environment-driven module singleton.
        backend:      Storage backend override (tests pass InMemoryBackend).
                      Defaults to files in `app_settings.cache`.

    Returns: Fully configured FastAPI instance. The store is built eagerly so
    the app can serve requests even when the lifespan is not run (httpx's
    ASGITransport does not send lifespan events).
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Note Storage API",
        description="Create, read, update and delete text notes stored as files.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.note_store = NoteStore(backend or FileSystemBackend(app_settings.cache))

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(write.router)
    app.include_router(form.router)
    app.include_router(health.router)

    return app


# Module-level instance for `uvicorn notecache.main:app` (configured from NOTECACHE_* env vars)
app = create_app()
