"""
Candidate pool selection.

Filters the loader's snapshot before ranking: minimum engagement, seen-post
exclusion (falling back to the whole pool when everything has been seen),
and the trending window used for users without signal.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import AbstractSet, Iterable, List, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.post import Post

logger = logging.getLogger(__name__)


def filter_min_engagement(
    posts: Iterable[Post],
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[Post]:
    """Drop posts whose engagement score is below config.min_engagement_score."""
    floor = config.min_engagement_score
    return [p for p in posts if p.engagement_score >= floor]


def exclude_seen(posts: List[Post], seen_ids: AbstractSet[str]) -> List[Post]:
    """Posts not yet seen; the full list when every post has been seen."""
    if not seen_ids:
        return list(posts)
    unseen = [p for p in posts if p.id not in seen_ids]
    if not unseen:
        logger.info("[pool_fallback] ALL_SEEN pool=%s, ranking seen posts", len(posts))
        return list(posts)
    return unseen


def exclude_ids(posts: Iterable[Post], ids: AbstractSet[str]) -> List[Post]:
    return [p for p in posts if p.id not in ids]


def get_trending_pool(
    posts: List[Post],
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> List[Post]:
    """
    Posts created within the trending window, by engagement score (descending),
    capped at trending_pool_size. Uses the whole pool when the window is empty.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=config.trending_window_days)
    recent = [p for p in posts if p.created_at is not None and p.created_at >= cutoff]
    if not recent:
        logger.info(
            "[pool_fallback] TRENDING_WINDOW_EMPTY window_days=%s pool=%s",
            config.trending_window_days,
            len(posts),
        )
        recent = list(posts)
    recent.sort(key=lambda p: p.engagement_score, reverse=True)
    return recent[: config.trending_pool_size]
