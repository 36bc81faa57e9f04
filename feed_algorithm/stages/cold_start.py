"""
Cold-start handling: regime classification and the two no-preference feeds.

Regimes:
- personalized: the user has at least one tag preference row
- interests: no preferences yet, but onboarding interests were chosen
- trending: neither (and always for anonymous users)
"""

import random
from datetime import datetime
from typing import List, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.feed import FeedSource
from ..models.post import Post
from ..models.signals import UserSignals
from .candidate_pool import get_trending_pool
from .composer import compose_streams
from .related_tags import get_related_tags


def classify_regime(signals: Optional[UserSignals]) -> FeedSource:
    """Pick the feed regime from what is known about the user."""
    if signals is None or not signals.user_id:
        return FeedSource.TRENDING
    if signals.has_preferences:
        return FeedSource.PERSONALIZED
    if signals.has_interests:
        return FeedSource.INTERESTS
    return FeedSource.TRENDING


def build_trending_feed(
    posts: List[Post],
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    shuffle: bool = False,
) -> List[Post]:
    """Most engaging recent posts, optionally shuffled."""
    trending = get_trending_pool(posts, config, now)
    if shuffle:
        (rng or random.Random()).shuffle(trending)
    return trending[:limit]


def build_interests_feed(
    signals: UserSignals,
    posts: List[Post],
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> List[Post]:
    """
    Interest-matched posts interleaved with posts from related tags.

    There is no preference signal to rank by yet, so both streams are
    shuffled instead of scored, and interleaving is a strict run of
    interleave_run interest posts per related post.
    """
    rng = rng or random.Random()
    interests = set(signals.interests)
    interest_posts = [p for p in posts if p.has_any_tag(interests)]
    interest_ids = {p.id for p in interest_posts}

    related = get_related_tags(signals.interests)
    related_posts = [
        p for p in posts if p.id not in interest_ids and p.has_any_tag(related)
    ]

    rng.shuffle(interest_posts)
    rng.shuffle(related_posts)
    return compose_streams(
        interest_posts, related_posts, limit, config, rng, extra_chance=0.0
    )
