"""
NoteSync: FastAPI Application Factory
=====================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn notesync.main:app`) or `python -m notesync`.
When:  Once at server startup; the returned app handles all subsequent requests.
Why:   A factory lets tests build the same app the server runs, and keeps
       middleware and router ordering in one readable function.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────┐ ┌─────────┐ ┌──────┐         │
    │  │  Req ID  │→│ CORS │→│ Logging │→│ GZip │         │
    │  └──────────┘ └──────┘ └─────────┘ └──────┘         │
    │                                                     │
    │  Routes (in match order):                           │
    │  ┌─────────────────┐ ┌─────────────┐ ┌──────────┐   │
    │  │ {prefix}/notes… │ │ GET /health │ │ GET /*   │   │
    │  └─────────────────┘ └─────────────┘ └──────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ other→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notesync import __version__
from notesync.config import settings
from notesync.exceptions import NoteSyncError, NotFoundError, ValidationError
from notesync.middleware.logging import RequestLoggingMiddleware
from notesync.middleware.request_id import (
    RequestIDMiddleware,
    internal_error_response,
    request_id_var,
)
from notesync.routes import health, notes, spa
from notesync.services.note_store import note_store

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("NoteSync %s starting up with %d notes in memory", __version__, len(note_store))
    logger.info("Notes API at http://%s:%d%s/notes", settings.host, settings.port, settings.api_prefix)
    logger.info("Client entry document from %s", settings.static_root)
    logger.info("=" * 60)

    yield

    # In-memory notes are discarded with the process
    logger.info("NoteSync shutting down; %d notes discarded.", len(note_store))


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 {"error": <message>, ...}
        RequestValidationError  → 400 {"error": "malformed request", ...}
        NotFoundError           → 404 empty body
        NoteSyncError (base)    → 500 {"error": "Internal Server Error", ...}
        Exception (fallback)    → 500 {"error": "Internal Server Error", ...}

    Most unexpected exceptions never reach the `Exception` handler:
    RequestLoggingMiddleware converts them first, inside the CORS layer.
    The handler covers faults raised by the outer middleware themselves.

    Handlers never put stack traces or internal context in the response
    body; details are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_request(request: Request, exc: RequestValidationError):
        """Body or path parameters FastAPI could not parse (bad JSON, wrong types)."""
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request to %s", rid, request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "error": "malformed request",
                "details": {"errors": jsonable_encoder(exc.errors())},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("[%s] %s", request_id_var.get(""), exc.message)
        return Response(status_code=404)

    @app.exception_handler(NoteSyncError)
    async def handle_app_error(request: Request, exc: NoteSyncError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return internal_error_response(rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Last resort for faults raised outside RequestLoggingMiddleware."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return internal_error_response(rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="NoteSync API",
        description="In-memory notes service backing the NoteSync client.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → CORS → Logging → GZip
    # Logging converts escaped faults to a 500, which must pass back through CORS
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # The client fallback matches every GET path, so it must come last
    app.include_router(notes.router, prefix=settings.api_prefix)
    app.include_router(health.router)
    app.include_router(spa.router)

    return app


app = create_app()
