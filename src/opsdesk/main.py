"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from opsdesk import __version__
from opsdesk.core.logging import configure_logging, get_logger

configure_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    start_time = datetime.now()
    logger.info("app.startup", message="opsdesk starting up", timestamp=start_time.isoformat())

    from opsdesk.api.health import set_app_start_time
    from opsdesk.core.accounts import get_account_registry

    set_app_start_time(start_time)

    # Fail fast on malformed account configuration
    get_account_registry()

    yield

    logger.info("app.shutdown", message="opsdesk shutting down gracefully")


def _setup_middleware(app: FastAPI, environment: str, session_secret_key: str) -> None:
    """Configure all middleware in correct order."""
    # Last added = first executed: RequestID -> Session -> Sentry context
    from opsdesk.middleware.logging import RequestIDMiddleware
    from opsdesk.middleware.sentry import SentryContextMiddleware

    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret_key,
        max_age=14 * 24 * 60 * 60,
        https_only=environment == "production",
        same_site="lax",
    )
    app.add_middleware(RequestIDMiddleware)


def _mount_static(app: FastAPI) -> None:
    """Mount static files directory."""
    static_dir = Path(os.getenv("STATIC_DIR", "static")).resolve()
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    else:
        logger.debug("app.static_missing", static_dir=str(static_dir))


def _register_routers(app: FastAPI) -> None:
    """Register all API and frontend routers."""
    from opsdesk.api.auth import router as auth_router
    from opsdesk.api.health import router as health_router
    from opsdesk.api.routes.admin import router as admin_router
    from opsdesk.api.routes.dashboard import router as dashboard_router
    from opsdesk.api.routes.settings import router as settings_router

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(admin_router)
    app.include_router(settings_router)


def create_app() -> FastAPI:
    """Application factory for opsdesk."""
    app = FastAPI(
        title="opsdesk",
        description="Admin console with database health overview",
        version=__version__,
        lifespan=lifespan,
    )

    from opsdesk.core.exception_handlers import register_exception_handlers
    from opsdesk.core.sentry import init_sentry

    init_sentry()
    register_exception_handlers(app)

    session_secret_key = os.getenv("SESSION_SECRET_KEY", "dev-secret-key-change-in-production")
    environment = os.getenv("ENVIRONMENT", "development")

    if environment == "production" and session_secret_key.startswith("dev-"):
        logger.warning("app.insecure_session_key", message="SESSION_SECRET_KEY not set")

    _setup_middleware(app, environment, session_secret_key)
    _mount_static(app)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "opsdesk.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
