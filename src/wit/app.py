"""FastAPI application factory for WIT."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wit import __version__
from wit.api import routes as api_routes
from wit.api import ui as ui_routes
from wit.auth.client import HttpAuthProvider
from wit.config import load_config, settings
from wit.db import close_db, create_engine, create_session_factory, init_db
from wit.errors import register_error_handlers
from wit.labels.service import LabelService
from wit.seeds import seed_all

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Loading configuration from {settings.config_file}")
    config = load_config(settings.config_file)

    logger.info("Connecting to database")
    engine = create_engine(config.database_url, echo=settings.debug)
    await init_db(engine)
    session_factory = create_session_factory(engine)

    if config.seed_on_startup:
        async with session_factory() as session:
            counts = await seed_all(session)
        logger.info(f"Seed complete: {counts['categories']} categories, {counts['location_types']} location types")

    label_service = LabelService(session_factory, app_url=config.app_url, max_batch_size=config.max_batch_size)
    auth_provider = HttpAuthProvider(config.auth_api_url) if config.auth_api_url else None
    if auth_provider is None:
        logger.info("No auth_api_url configured, password reset is disabled")

    # Set state for routes
    api_routes.set_app_state(
        label_service,
        session_factory=session_factory,
        qr_size=config.qr_size,
        max_batch_size=config.max_batch_size,
    )
    ui_routes.set_app_state(
        label_service,
        qr_size=config.qr_size,
        settle_delay_ms=config.print.settle_delay_ms,
        auth_provider=auth_provider,
    )

    logger.info("WIT startup complete")

    yield

    logger.info("WIT shutting down")
    await close_db(engine)
    logger.info("WIT shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="WIT",
        description="Where Is It? - inventory labels",
        version=__version__,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # The UI router ends with the SPA catch-all, so it goes last
    app.include_router(api_routes.router)
    app.include_router(ui_routes.router)

    return app


# Default app instance for uvicorn
app = create_app()
