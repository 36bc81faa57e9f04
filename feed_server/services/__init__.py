"""
Service layer: stores, providers, sessions, and the recommendation service.
"""

from .feed_session import FeedPage, FeedSession, SessionNotFound, SessionRegistry
from .interaction_recorder import InteractionRecorder
from .post_provider import (
    CandidatePoolUnavailable,
    FirestorePostProvider,
    InMemoryPostProvider,
    JsonPostProvider,
    PostProvider,
)
from .recommendation_service import AVAILABLE_INTERESTS, RecommendationService
from .signal_store import InMemorySignalStore, SignalStore
from .firestore_signal_store import FirestoreSignalStore

__all__ = [
    "AVAILABLE_INTERESTS",
    "CandidatePoolUnavailable",
    "FeedPage",
    "FeedSession",
    "FirestorePostProvider",
    "FirestoreSignalStore",
    "InMemoryPostProvider",
    "InMemorySignalStore",
    "InteractionRecorder",
    "JsonPostProvider",
    "PostProvider",
    "RecommendationService",
    "SessionNotFound",
    "SessionRegistry",
    "SignalStore",
]
