"""FarmInvest API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FarmInvestError → structured JSON responses
    - The database manager is created in the lifespan, stored on app.state.db
      and disposed on shutdown; nothing else holds the engine
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - create_app(settings) factory: tests build apps with their own settings
      (e.g. production mode) without touching the module-level app
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farminvest.api.error_handlers import register_error_handlers
from farminvest.api.routes import health, investments
from farminvest.config import Settings, get_settings
from farminvest.infrastructure.database import DatabaseSessionManager
from farminvest.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        app.state.db = DatabaseSessionManager.from_url(
            settings.resolved_database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        logger.info(
            f"FarmInvest API started (environment: {settings.environment.value})",
        )
        yield
        logger.info("FarmInvest API shutting down")
        await app.state.db.dispose()
        app.state.db = None

    app = FastAPI(title="FarmInvest API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(investments.router)

    register_error_handlers(app, expose_internal=settings.expose_internal_errors)
    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(
        "farminvest.main:app", host="0.0.0.0", port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
