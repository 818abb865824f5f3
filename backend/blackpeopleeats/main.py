"""
BlackPeopleEats Backend — FastAPI Application Factory
=======================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn blackpeopleeats.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  Request context → GZip → CORS              │
    │                                                          │
    │  Routes:                                                 │
    │    /api/restaurants  /api/sponsors  /api/users/{id}      │
    │    /api/follow  /api/posts  /api/create-checkout-session │
    │    /api/highlights  /api/search  /health                 │
    │                                                          │
    │  Exception Handlers:                                     │
    │    Validation→400 │ Database→500 │ Payment→500 │ *→500   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → integration report → create schema → seed
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from blackpeopleeats import __version__
from blackpeopleeats.config import settings
from blackpeopleeats.database import async_session_factory, create_schema, dispose_engine
from blackpeopleeats.exceptions import (
    BlackPeopleEatsError,
    DatabaseError,
    PaymentServiceError,
    ValidationError,
)
from blackpeopleeats.middleware.logging import RequestContextMiddleware, request_id_var
from blackpeopleeats.routes import checkout, health, highlights, posts, restaurants, users
from blackpeopleeats.seed import seed_if_empty

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before any other initialization.

    Format: 2024-01-15T12:00:00 [INFO] blackpeopleeats.access: GET /api/posts 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every request/statement at INFO
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "httpcore", "httpx", "stripe"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def prepare_database() -> None:
    """Create missing tables and load the starter dataset, per settings."""
    if settings.auto_create_schema:
        await create_schema()

    if settings.seed_on_startup:
        async with async_session_factory() as session:
            try:
                seeded = await seed_if_empty(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
        if seeded:
            logger.info("Empty store seeded with the starter dataset")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("BlackPeopleEats Backend %s starting up...", __version__)

    # Missing keys only downgrade features, so they are reported, not fatal
    for warning in settings.validate_optional_integrations():
        logger.warning("Configuration: %s", warning)

    await prepare_database()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("BlackPeopleEats Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request_id_var.get("")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a single error body shape:
    {"error", "message", "details"?, "request_id"}.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        PaymentServiceError                      → 500 (provider message)
        DatabaseError                            → 500 (generic message)
        BlackPeopleEatsError (base)              → 500
        Exception (fallback)                     → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = _request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Schema failures (wrong types, missing fields) use the same 400 body."""
        rid = _request_id(request)
        errors = exc.errors()
        summary = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in errors
        )
        logger.warning("[%s] Request validation failed: %s", rid, summary)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": f"Invalid request: {summary}",
                "details": {"errors": jsonable_encoder(errors)},
                "request_id": rid,
            },
        )

    @app.exception_handler(PaymentServiceError)
    async def handle_payment_error(request: Request, exc: PaymentServiceError):
        rid = _request_id(request)
        logger.error("[%s] Payment error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "payment_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client; context is logged server-side only."""
        rid = _request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(BlackPeopleEatsError)
    async def handle_app_error(request: Request, exc: BlackPeopleEatsError):
        rid = _request_id(request)
        logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="BlackPeopleEats API",
        description=(
            "Discover Black-owned restaurants: listings with ratings, meal posts from "
            "the people you follow, sponsored spots and AI-curated city highlights."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # Request context → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    # Post bodies with inline images make feed responses large
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(restaurants.router)
    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(checkout.router)
    app.include_router(highlights.router)
    app.include_router(health.router)

    return app


app = create_app()
