"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.

Run with ``uvicorn --factory platec.presentation.api.app:create_app``
or ``platec serve``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from platec.application.exceptions import StartupReconciliationError
from platec.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine,
    create_session_maker,
    create_tables,
    reconcile_baseline,
)
from platec.presentation.api.exception_handlers import setup_exception_handlers
from platec.presentation.api.routers import auth_router, teachers_router
from platec.presentation.api.schemas import HealthResponse
from platec_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    Console output with timestamps and module names, the configured level
    for platec modules and WARNING for noisy third-party libraries.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("platec").setLevel(log_level)
    logging.getLogger("platec_identity").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Login and session helpers.

- Login with email/password to obtain a JWT bearer token
- Accounts lock for a few minutes after repeated failed attempts
- Mutating requests need the anti-forgery token in `X-CSRF-Token`
""",
    },
    {
        "name": "Teachers",
        "description": """Teacher account management (Admin role required).

New teachers receive their login credentials by email. When the email
cannot be sent the credentials are returned to the administrator instead.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates missing tables and reconciles roles and the seed admin before
    the first request is served. A failed reconciliation aborts startup.
    """
    logger.info("Starting %s API v%s...", app.state.settings.app_name, API_VERSION)
    engine: AsyncEngine = app.state.engine

    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    try:
        report = await reconcile_baseline(app.state.session_maker, app.state.settings)
    except StartupReconciliationError as e:
        logger.critical("Startup reconciliation failed: %s", e.message)
        await engine.dispose()
        raise

    if report.changed:
        logger.info(
            "Baseline reconciled: roles=%s admin_created=%s backfilled=%d",
            [role.value for role in report.roles_created],
            report.admin_created,
            len(report.backfilled),
        )

    yield

    logger.info("Shutting down...")
    await engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(teachers_router, prefix="/teachers", tags=["Teachers"])

    return v1_router


def create_app(
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    engine
        Optional engine override; by default one is created from
        ``settings.database_url``.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description="School administration: accounts and roles.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.settings = settings
    app.state.engine = engine or create_engine(settings.database_url)
    app.state.session_maker = create_session_maker(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint, unversioned for load balancers."""
        return HealthResponse(status="healthy", version=API_VERSION, api_versions=["v1"])

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "teachers": f"{API_V1_PREFIX}/teachers",
            },
        }

    return app
