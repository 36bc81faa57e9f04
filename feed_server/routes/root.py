"""Root and health endpoints."""

from fastapi import APIRouter, Depends

from ..state import AppState, get_state

router = APIRouter()

API_VERSION = "1.0.0"


@router.get("/")
def root(state: AppState = Depends(get_state)):
    return {
        "name": "Feed Recommendation API",
        "version": API_VERSION,
        "data_source": state.config.data_source,
        "endpoints": {
            "feed": [
                "/api/feed",
                "/api/feed/{session_id}/more",
                "/api/feed/{session_id}/refresh",
                "/api/feed/{session_id}/seen",
            ],
            "interactions": ["/api/interactions"],
            "users": ["/api/users/{user_id}/interests", "/api/interests"],
            "tags": ["/api/trending-tags"],
        },
    }


@router.get("/api/health")
def health(state: AppState = Depends(get_state)):
    return {
        "status": "healthy",
        "post_provider": type(state.posts).__name__,
        "signal_store": type(state.signals).__name__,
        "active_sessions": len(state.sessions),
    }
