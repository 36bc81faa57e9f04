"""Pipeline stages: candidate pool, scoring, cold start, composition, continuation."""

from .cold_start import build_interests_feed, build_trending_feed, classify_regime
from .composer import compose, compose_streams, diversify_by_creator, interleave, slot_quotas
from .continuation import get_more_posts
from .orchestrator import build_feed
from .personalized import build_personalized_feed
from .related_tags import TAG_CATEGORIES, get_related_tags, get_top_tags
from .scoring import score_post, score_posts
from .trending import get_trending_tags

__all__ = [
    "TAG_CATEGORIES",
    "build_feed",
    "build_interests_feed",
    "build_personalized_feed",
    "build_trending_feed",
    "classify_regime",
    "compose",
    "compose_streams",
    "diversify_by_creator",
    "get_more_posts",
    "get_related_tags",
    "get_top_tags",
    "get_trending_tags",
    "interleave",
    "score_post",
    "score_posts",
    "slot_quotas",
]
