"""User Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory + module-level app: uvicorn target stays
      `user_service.main:app`, tests can still build isolated apps
    - Diagnostics router registered before users router: /test/* never reaches /{user_id}
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.api.error_handlers import register_error_handlers
from user_service.api.routes import circuit_breaker, health, users
from user_service.config import Settings, get_settings
from user_service.infrastructure.database import close_db, init_db
from user_service.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

API_DESCRIPTION = (
    "REST API for managing users, with hypermedia links and "
    "fallback responses on read paths."
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"{settings.service_name} started")
    yield
    await close_db()
    logger.info(f"{settings.service_name} shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application with routes, middleware and error handlers."""
    settings = settings or get_settings()
    app = FastAPI(
        title="User Service API",
        description=API_DESCRIPTION,
        version=settings.service_version,
        contact={
            "name": "User Service Support",
            "email": "support@example.com",
        },
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS — configured from settings, not hardcoded
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(circuit_breaker.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
