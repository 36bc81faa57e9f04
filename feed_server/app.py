"""
Feed Recommendation API: FastAPI app factory.

Use: uvicorn --factory feed_server.app:create_app
Or:  from feed_server import create_app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import ServerConfig, get_config
from .routes import register_routes
from .state import AppState

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    config: Optional[ServerConfig] = None,
    state: Optional[AppState] = None,
) -> FastAPI:
    """Build FastAPI app with CORS, routes, and the shared AppState."""
    config = config or (state.config if state else get_config())
    configure_logging(config.log_level)
    ok, errors = config.validate()
    for err in errors:
        logger.warning("[startup] config: %s", err)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("[startup] Feed Recommendation API starting (data_source=%s)", config.data_source)
        yield
        app.state.feed.close()
        logger.info("[shutdown] sessions cleared")

    app = FastAPI(
        title="Feed Recommendation API",
        description="Personalized feed ranking with cold-start fallbacks",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.feed = state or AppState(config)
    register_routes(app)
    return app
