"""Data models for the feed recommendation algorithm."""

from .config import (
    DEFAULT_CONFIG,
    RECOMMENDATION_SERVICE_WEIGHTS,
    SCORING_PRESETS,
    SIMPLE_FEED_WEIGHTS,
    RecommendationConfig,
    ScoringWeights,
    resolve_config,
)
from .feed import FeedResult, FeedSource
from .post import MediaKind, Post, ensure_posts, normalize_tag
from .scoring import ScoredPost
from .signals import (
    CreatorPreference,
    InteractionEvent,
    InteractionType,
    InterestSelection,
    SeenRecord,
    TagPreference,
    UserSignals,
    utc_now,
)

__all__ = [
    "DEFAULT_CONFIG",
    "RECOMMENDATION_SERVICE_WEIGHTS",
    "SCORING_PRESETS",
    "SIMPLE_FEED_WEIGHTS",
    "CreatorPreference",
    "FeedResult",
    "FeedSource",
    "InteractionEvent",
    "InteractionType",
    "InterestSelection",
    "MediaKind",
    "Post",
    "RecommendationConfig",
    "ScoredPost",
    "ScoringWeights",
    "SeenRecord",
    "TagPreference",
    "UserSignals",
    "ensure_posts",
    "normalize_tag",
    "resolve_config",
    "utc_now",
]
