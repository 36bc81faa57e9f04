"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .feed import router as feed_router
from .interactions import router as interactions_router
from .root import router as root_router
from .tags import router as tags_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(feed_router, prefix="/api/feed", tags=["feed"])
    app.include_router(interactions_router, prefix="/api/interactions", tags=["interactions"])
    app.include_router(users_router, prefix="/api", tags=["users"])
    app.include_router(tags_router, prefix="/api", tags=["tags"])
