"""
Feed Recommendation Algorithm

Single entry point for the algorithm package:
- models/: RecommendationConfig, Post, UserSignals, signal rows, FeedResult
- stages/: candidate_pool, related_tags, scoring, cold_start, personalized,
  composer, continuation, trending, orchestrator
- interactions: interaction weights and tag normalization for recording

Everything here is pure and synchronous; store access lives in feed_server.
"""

from .interactions import interaction_weight, normalized_tags
from .models import (
    DEFAULT_CONFIG,
    RECOMMENDATION_SERVICE_WEIGHTS,
    SIMPLE_FEED_WEIGHTS,
    CreatorPreference,
    FeedResult,
    FeedSource,
    InteractionEvent,
    InteractionType,
    InterestSelection,
    Post,
    RecommendationConfig,
    ScoredPost,
    ScoringWeights,
    SeenRecord,
    TagPreference,
    UserSignals,
    ensure_posts,
    normalize_tag,
    resolve_config,
)
from .stages import (
    TAG_CATEGORIES,
    build_feed,
    classify_regime,
    compose,
    diversify_by_creator,
    get_more_posts,
    get_related_tags,
    get_top_tags,
    get_trending_tags,
    score_post,
    score_posts,
)

__all__ = [
    "DEFAULT_CONFIG",
    "RECOMMENDATION_SERVICE_WEIGHTS",
    "SIMPLE_FEED_WEIGHTS",
    "TAG_CATEGORIES",
    "CreatorPreference",
    "FeedResult",
    "FeedSource",
    "InteractionEvent",
    "InteractionType",
    "InterestSelection",
    "Post",
    "RecommendationConfig",
    "ScoredPost",
    "ScoringWeights",
    "SeenRecord",
    "TagPreference",
    "UserSignals",
    "build_feed",
    "classify_regime",
    "compose",
    "diversify_by_creator",
    "ensure_posts",
    "get_more_posts",
    "get_related_tags",
    "get_top_tags",
    "get_trending_tags",
    "interaction_weight",
    "normalize_tag",
    "normalized_tags",
    "resolve_config",
    "score_post",
    "score_posts",
]
