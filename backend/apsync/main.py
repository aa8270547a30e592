"""
AP Exam Sync: FastAPI Application Factory
==========================================

What:  Creates and configures the sync server application.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with middleware, exception handlers, routes and a DocumentStore.
Who:   Served by uvicorn (`uvicorn apsync.main:app`) or `apsync-server`.
When:  Once at server startup; tests build their own app per test.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐             │
    │  │  Req ID  │→│ Logging  │→│   CORS   │             │
    │  └──────────┘ └──────────┘ └──────────┘             │
    │                                                     │
    │  Routes:                                            │
    │  /api/data  /api/courses  /api/notes  /api/auth     │
    │  /health                                            │
    │                                                     │
    │  Exception Handlers (body is always {"error": msg}):│
    │  Validation→400 │ Forbidden→403 │ NotFound→404      │
    │  Store→500      │ Unexpected→500                    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the document's parent directory
    3. Seed/write the document if missing or empty
    4. Log the listening URL
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apsync import __version__
from apsync.config import Settings, settings
from apsync.exceptions import (
    ApSyncError,
    ForbiddenError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from apsync.middleware.logging import RequestLoggingMiddleware
from apsync.middleware.request_id import RequestIDMiddleware, request_id_var
from apsync.routes import auth, courses, data, health, notes
from apsync.store import DocumentStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with one consistent line format.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # apsync.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, storage directory, document initialization.

    A document that cannot be read at startup is logged and left alone;
    requests will answer 500 until it is fixed.
    """
    app_settings: Settings = app.state.settings
    store: DocumentStore = app.state.store

    setup_logging(app_settings.log_level)

    Path(app_settings.db_file).parent.mkdir(parents=True, exist_ok=True)
    try:
        await store.initialize()
    except StoreError as e:
        logger.error("Document store could not be initialized: %s", e.context)

    logger.info("Document store: %s", Path(app_settings.db_file).resolve())
    logger.info("Sync server running on http://localhost:%d", app_settings.port)

    yield

    logger.info("Sync server shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to status codes with a `{"error": message}` body.

    Handler hierarchy:
        ValidationError         → 400
        RequestValidationError  → 400 "Invalid request body"
        ForbiddenError          → 403
        NotFoundError           → 404
        StoreError              → 500 (generic message, details logged)
        ApSyncError (base)      → 500
        Exception (fallback)    → 500 "Internal server error"
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON or wrong field types."""
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request body: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        rid = request_id_var.get("")
        logger.warning("[%s] Forbidden: %s %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=403, content={"error": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        """Path and OS error are logged server-side, never returned."""
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(ApSyncError)
    async def handle_apsync_error(request: Request, exc: ApSyncError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the sync server.

    Args:
        app_settings: Settings to use instead of the environment-loaded
                      defaults (tests pass one pointing at a temp file).

    Returns:
        FastAPI instance with `app.state.settings` and `app.state.store` set.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="AP Exam Sync API",
        description=(
            "Shared courses, community notes, ratings and demo accounts for "
            "the AP exam study app, persisted in one JSON document."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.store = DocumentStore(
        app_settings.db_file,
        seed_courses=app_settings.seed_courses,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(data.router)
    app.include_router(courses.router)
    app.include_router(notes.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()


def run() -> None:
    """Console entry point: `apsync-server`."""
    import uvicorn

    uvicorn.run(
        "apsync.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
