"""
Pipeline orchestrator: classify the user, run the matching regime, and
return the composed first page with its source.

The main entry point is build_feed. It is pure: all store reads happen in
the caller, which passes a UserSignals snapshot and the candidate pool.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from ..models.config import RecommendationConfig, resolve_config
from ..models.feed import FeedResult, FeedSource
from ..models.post import Post, ensure_posts
from ..models.signals import UserSignals
from .candidate_pool import filter_min_engagement
from .cold_start import build_interests_feed, build_trending_feed, classify_regime
from .personalized import build_personalized_feed

logger = logging.getLogger(__name__)


def build_feed(
    signals: Optional[UserSignals],
    posts: List[Union[Dict, Post]],
    limit: Optional[int] = None,
    config: Optional[RecommendationConfig] = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    shuffle: bool = False,
) -> FeedResult:
    """
    Build the first feed page for a user.

    shuffle only affects the trending regime (randomized order of the
    trending pool); the interests regime always shuffles.
    """
    config = resolve_config(config)
    limit = config.initial_limit if limit is None else limit
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()

    pool = filter_min_engagement(ensure_posts(posts), config)
    regime = classify_regime(signals)

    if regime == FeedSource.PERSONALIZED:
        items = build_personalized_feed(signals, pool, limit, config, now, rng)
    elif regime == FeedSource.INTERESTS:
        items = build_interests_feed(signals, pool, limit, config, rng)
    else:
        items = build_trending_feed(pool, limit, config, now, rng, shuffle)

    logger.debug(
        "[feed] regime=%s pool=%s limit=%s returned=%s",
        regime.value, len(pool), limit, len(items),
    )
    return FeedResult(items=items, source=regime)
