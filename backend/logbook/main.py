import logging
import sys
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI

from logbook.api.deps import get_settings, get_store
from logbook.api.logs import router as logs_router
from logbook.api.webhook import router as webhook_router
from logbook.config import VERSION, Settings, load_settings
from logbook.error_handlers import register_error_handlers
from logbook.errors import LogbookError
from logbook.middleware_logging import configure_logging, register_request_logging
from logbook.schemas import HealthStatus
from logbook.store import LogStore

logger = logging.getLogger("logbook.main")


def create_app(settings: Settings, store: LogStore) -> FastAPI:
    """Build the application around an already opened store."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=VERSION,
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.store = store

    register_request_logging(app)
    register_error_handlers(app)

    app.include_router(logs_router)
    app.include_router(webhook_router)

    @app.get("/health", response_model=HealthStatus)
    def health(
        app_settings: Settings = Depends(get_settings),
        log_store: LogStore = Depends(get_store)
    ):
        return HealthStatus(
            status="ok",
            version=VERSION,
            entries=log_store.count(),
            timezone=app_settings.DISPLAY_TIMEZONE,
        )

    return app


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Load settings, open the store and serve until interrupted.

    Exits with status 1 on any startup failure.
    """
    configure_logging()
    try:
        settings = load_settings()
        configure_logging(settings.LOG_LEVEL)
        store = LogStore(settings.DATABASE_URL)
        store.ensure_schema()
    except LogbookError as e:
        logger.error("Startup failed: %s", e)
        sys.exit(1)

    app = create_app(settings, store)
    host = host or settings.HOST
    port = port or settings.PORT
    logger.info("Starting server on %s:%s", host, port)
    try:
        uvicorn.run(app, host=host, port=port, log_level=settings.LOG_LEVEL.lower())
    finally:
        store.dispose()


# ========== MAIN ENTRY POINT ==========

if __name__ == "__main__":
    run()
