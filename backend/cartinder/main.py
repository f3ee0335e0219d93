"""
Car Tinder Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn cartinder.main:app) or the `cartinder`
       console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌─────────────────┐ ┌──────┐ ┌──────┐              │
    │  │ Request Context │→│ GZip │→│ CORS │              │
    │  └─────────────────┘ └──────┘ └──────┘              │
    │                                                     │
    │  Routes:                                            │
    │  /cars  /api/like  /api/resetLikes  /testdrive      │
    │  /liked/{userId}  /dealer/logs  /health  /          │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ DomainConflict→400 │ Store→500    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log bind address and static directory
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from cartinder import __version__
from cartinder.config import settings
from cartinder.database import dispose_engine
from cartinder.exceptions import (
    CarTinderError,
    DomainConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from cartinder.middleware.request_context import RequestContextMiddleware, RequestIDLogFilter
from cartinder.routes import bookings, cars, dealers, health, pages

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    The request ID is "-" for records logged outside a request.
    Called once during startup, before anything else logs.
    """
    handler = logging.StreamHandler(sys.stdout)  # Docker captures stdout
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiomysql").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Code before yield runs on startup, code after yield on shutdown."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Car Tinder backend %s starting up...", __version__)
    logger.info("Static files: %s", Path(settings.static_dir).resolve())
    logger.info("Server running at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Car Tinder backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Handler hierarchy:
        ValidationError      → 400 {"message": ...}
        DomainConflictError  → 400 {"message": ...}
        NotFoundError        → 404 {"message": ...}
        StoreError           → 500 {exc.body_field: ...}
        CarTinderError       → 500 {"message": ...}
        Exception (fallback) → 500 {"error": generic message}

    Context dicts are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s %s", exc.message, exc.context)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(DomainConflictError)
    async def handle_domain_conflict(request: Request, exc: DomainConflictError):
        logger.warning("Domain conflict: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("Store error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=500, content={exc.body_field: exc.message})

    @app.exception_handler(CarTinderError)
    async def handle_app_error(request: Request, exc: CarTinderError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace is logged server-side only."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Car Tinder API",
        description="Swipe through cars, like them, and book test drives.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestContext → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestContextMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(cars.router)
    app.include_router(bookings.router)
    app.include_router(dealers.router)
    app.include_router(health.router)
    app.include_router(pages.router)

    # Static assets answer only what no route matched. Installed as the
    # router default (not a mount at "/") so "/cars/" still redirects to "/cars".
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.router.default = StaticFiles(directory=str(static_dir))
    else:
        logger.warning("Static directory %s not found; serving API only", static_dir.resolve())

    return app


def run() -> None:
    """Console-script entry point: `cartinder`."""
    import uvicorn

    uvicorn.run("cartinder.main:app", host=settings.host, port=settings.port)


app = create_app()
