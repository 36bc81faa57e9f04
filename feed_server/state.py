"""Application state: stores, providers, and the recommendation service."""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import Request

from feed_algorithm.models import RecommendationConfig

from .config import ServerConfig
from .services import (
    FirestorePostProvider,
    FirestoreSignalStore,
    InMemoryPostProvider,
    InMemorySignalStore,
    InteractionRecorder,
    JsonPostProvider,
    PostProvider,
    RecommendationService,
    SessionRegistry,
    SignalStore,
)

logger = logging.getLogger(__name__)


class AppState:
    """Everything one app instance shares across requests. Held on app.state."""

    def __init__(
        self,
        config: ServerConfig,
        posts: Optional[PostProvider] = None,
        signals: Optional[SignalStore] = None,
        algorithm_config: Optional[RecommendationConfig] = None,
    ):
        self.config = config
        self.algorithm_config = algorithm_config or config.load_algorithm_config()
        self.posts = posts if posts is not None else self._create_post_provider(config)
        self.signals = signals if signals is not None else self._create_signal_store(config)
        idle = config.session_idle_minutes
        self.sessions = SessionRegistry(idle_ttl=timedelta(minutes=idle) if idle > 0 else None)
        self.service = RecommendationService(
            self.posts, self.signals, self.algorithm_config, self.sessions
        )
        self.recorder = InteractionRecorder(self.signals, self.algorithm_config)
        logger.info(
            "[startup] post provider: %s, signal store: %s",
            type(self.posts).__name__,
            type(self.signals).__name__,
        )

    def _create_post_provider(self, config: ServerConfig) -> PostProvider:
        if config.data_source == "firebase":
            return FirestorePostProvider(
                project_id=config.firebase_project_id,
                credentials_path=config.firebase_credentials_path,
            )
        if config.data_source == "json" and config.posts_json_path:
            return JsonPostProvider(config.posts_json_path)
        return InMemoryPostProvider()

    def _create_signal_store(self, config: ServerConfig) -> SignalStore:
        if config.data_source == "firebase":
            return FirestoreSignalStore(
                project_id=config.firebase_project_id,
                credentials_path=config.firebase_credentials_path,
            )
        return InMemorySignalStore()

    def close(self) -> None:
        self.sessions.clear()


def get_state(request: Request) -> AppState:
    """FastAPI dependency: the AppState of the app serving this request."""
    return request.app.state.feed
