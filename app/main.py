from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.db.init_db import init_db
from app.logging_config import configure_app_logging
from app.routers import users
from app.security.config import AuthorizationConfig, load_authorization_config
from app.settings import get_settings

logger = logging.getLogger(__name__)


def warn_if_demo_provider(config: AuthorizationConfig) -> None:
    if config.provider == "dummy":
        logger.warning(
            "Authorization provider is 'dummy': bearer tokens are trusted as user ids. "
            "Use provider 'jwt' outside local development."
        )


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        settings = get_settings()
        configure_app_logging(settings.log_level)
        logger.info("App startup beginning")

        config_path = settings.resolved_authorization_config_path()
        app.state.authorization_config = load_authorization_config(config_path, jwt_secret=settings.jwt_secret)
        logger.info("Loaded authorization config: %s (provider=%s)", config_path, app.state.authorization_config.provider)
        warn_if_demo_provider(app.state.authorization_config)
        init_db()
        logger.info("Database initialized (tables ensured + seed if needed)")

        yield

    app = FastAPI(lifespan=lifespan)
    app.include_router(users.router)

    return app


app = create_app()
