"""
PURPOSE: Main FastAPI application factory and lifecycle management for Signal Sync.

Initializes the FastAPI application with:
- API routers (webhook, dashboard, health)
- Rate limiting and CORS middleware
- Exception handlers for common errors
- Startup events (migrations, database engine, Redis client, services)
- Shutdown events (resource cleanup)
- Metadata from version.json
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as redis
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api import api_router
from app.config.settings import Settings, get_settings
from app.core.exceptions import CacheError
from app.core.rate_limit import limiter
from app.db.engine import build_database
from app.services import (
    CachedDashboardService,
    DashboardService,
    ErrorLogger,
    IngestionService,
    RedisCacheGateway,
    SignalStore,
)
from app.utils.logger import setup_logging, get_logger
from app.version import get_version


logger = get_logger(__name__)


# ════════════════════════════════════════════════════════════════
# Lifecycle Events
# ════════════════════════════════════════════════════════════════


def _run_migrations(settings: Settings) -> None:
    """Upgrade the schema to head. Runs in a worker thread because env.py starts its own loop."""
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config(settings.ALEMBIC_INI_PATH)
    alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL.replace("%", "%%"))
    command.upgrade(alembic_cfg, "head")


def wire_services(app: FastAPI, session_factory, redis_client: redis.Redis) -> None:
    """
    PURPOSE: Build the service graph around the shared client handles.

    CALLED BY: lifespan startup; tests call it with SQLite and a fake Redis.

    Args:
        app: Application whose state receives the services
        session_factory: Async session factory for the signal store
        redis_client: Async Redis client (or a compatible stand-in)
    """
    settings: Settings = app.state.settings

    signal_store = SignalStore(session_factory)
    cache_gateway = RedisCacheGateway(redis_client)

    app.state.signal_store = signal_store
    app.state.cache_gateway = cache_gateway
    app.state.error_logger = ErrorLogger(session_factory)
    app.state.ingestion_service = IngestionService(signal_store)
    app.state.dashboard_reader = CachedDashboardService(
        DashboardService(signal_store),
        cache_gateway,
        cache_key=settings.DASHBOARD_CACHE_KEY,
        ttl_seconds=settings.DASHBOARD_CACHE_TTL_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    PURPOSE: Own the process-wide client handles for the application's lifetime.

    Startup creates the database engine and the Redis client once and wires
    the services onto app.state; shutdown closes both.

    CALLED BY: FastAPI during application startup and shutdown

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    settings: Settings = app.state.settings

    setup_logging(settings.LOG_LEVEL)
    logger.info(
        "application_startup_starting",
        version=get_version().get("version"),
        log_level=settings.LOG_LEVEL,
        env=settings.APP_ENV,
    )

    if settings.RUN_MIGRATIONS_ON_STARTUP:
        try:
            await asyncio.to_thread(_run_migrations, settings)
            logger.info("alembic_upgrade_complete")
        except Exception as e:
            logger.warning("alembic_upgrade_skipped", error=str(e))

    engine, session_factory = build_database(settings)
    redis_client = redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=3,
    )
    wire_services(app, session_factory, redis_client)

    # Redis being down is not fatal: dashboard reads fall back to the store
    try:
        await app.state.cache_gateway.ping()
        logger.info("redis_connected")
    except CacheError as e:
        logger.warning("redis_unavailable", error=str(e))

    logger.info("application_startup_complete")

    yield

    logger.info("application_shutdown_starting")
    try:
        await redis_client.aclose()
        logger.info("redis_disconnected")
    except Exception as e:
        logger.error("redis_disconnection_failed", error=str(e))
    await engine.dispose()
    logger.info("application_shutdown_complete")


# ════════════════════════════════════════════════════════════════
# Exception Handlers
# ════════════════════════════════════════════════════════════════


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    PURPOSE: Handle Pydantic validation errors with consistent JSON response.

    CALLED BY: FastAPI when request validation fails

    Args:
        request: HTTP request that failed validation
        exc: RequestValidationError with validation details

    Returns:
        JSONResponse: Formatted error response with validation details
    """
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        method=request.method,
        error_count=len(exc.errors())
    )

    safe_errors = jsonable_encoder(
        exc.errors(),
        custom_encoder={
            ValueError: lambda e: str(e),
            Exception: lambda e: str(e),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "status": "error",
            "detail": "Request validation failed",
            "errors": safe_errors,
        },
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    PURPOSE: Handle unexpected exceptions with logging and safe error response.

    CALLED BY: FastAPI exception handler middleware

    Args:
        request: HTTP request that raised exception
        exc: Exception that was raised

    Returns:
        JSONResponse: Safe error response without exposing internals
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exception_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "status": "error",
            "detail": "Internal server error",
        },
    )


# ════════════════════════════════════════════════════════════════
# FastAPI Application Factory
# ════════════════════════════════════════════════════════════════


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    PURPOSE: Create and configure FastAPI application with all routers, middleware, and handlers.

    CALLED BY: Application entrypoint (uvicorn, docker, etc), tests

    Args:
        settings: Explicit configuration; defaults to the environment-loaded Settings

    Returns:
        FastAPI: Configured FastAPI application ready to run
    """
    settings = settings or get_settings()

    try:
        version = get_version().get("version", "unknown")
    except Exception as e:
        logger.warning("version_data_unavailable", error=str(e))
        version = "unknown"

    app = FastAPI(
        title="Signal Sync",
        description="Indicator signal ingestion and correlated dashboard",
        version=version,
        lifespan=lifespan,
        docs_url=None if settings.is_production() else "/docs",
        redoc_url=None if settings.is_production() else "/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    # ────────────────────────────────────────────────────────────
    # Middleware
    # ────────────────────────────────────────────────────────────

    # Rate limiting (slowapi) — must be attached before CORS so the
    # limiter state is available on the app instance for all routes.
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Cache"],
    )

    # ────────────────────────────────────────────────────────────
    # Routes
    # ────────────────────────────────────────────────────────────

    app.include_router(api_router)

    @app.get("/", tags=["root"])
    async def root():
        """
        PURPOSE: Root endpoint for API availability check.

        CALLED BY: Load balancers, basic connectivity tests

        Returns:
            dict: Service information and version
        """
        return {
            "status": "ok",
            "service": "Signal Sync API",
            "version": version,
        }

    # ────────────────────────────────────────────────────────────
    # Exception Handlers
    # ────────────────────────────────────────────────────────────

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info(
        "fastapi_application_created",
        version=version,
        api_prefix="/api"
    )

    return app


# Create the application
app = create_app()


if __name__ == "__main__":
    """
    PURPOSE: Run FastAPI application with Uvicorn server.

    Usage:
        python -m app.main
        OR
        uvicorn app.main:app --host 0.0.0.0 --port 8000 --reload
    """
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=get_settings().LOG_LEVEL.lower(),
    )
