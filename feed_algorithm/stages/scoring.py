"""
Per-post relevance scoring.

One parameterized formula (config.scoring) covers both the recommendation
service and the simple feed sorter; see ScoringWeights for the terms.
"""

from datetime import datetime, timezone
from typing import Collection, List, Mapping, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.post import Post
from ..models.scoring import (
    ScoredPost,
    clamped_ratio,
    days_since,
    freshness_score,
    log_scaled,
)


def score_post(
    post: Post,
    tag_preferences: Mapping[str, float],
    creator_preferences: Mapping[str, float],
    top_tags: Collection[str],
    related_tags: Collection[str],
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> float:
    """
    Relevance score for one post. Pure; never raises on missing or negative inputs.

    Tag relevance sums the user's preference over all of the post's tags, so
    top_tags only decides which stream a post lands in (see personalized.py);
    it is accepted here so callers pass the same tag context everywhere.
    """
    w = config.scoring

    tag_sum = sum(max(0.0, tag_preferences.get(tag, 0.0) or 0.0) for tag in post.tags)
    score = w.tag_weight * clamped_ratio(tag_sum, w.tag_normalizer)

    if related_tags and post.has_any_tag(related_tags):
        score += w.related_tag_bonus

    if post.creator_id:
        creator_score = creator_preferences.get(post.creator_id, 0.0)
        score += w.creator_weight * clamped_ratio(creator_score, w.creator_normalizer)

    score += w.engagement_weight * log_scaled(post.engagement_score)
    score += w.viral_weight * log_scaled(post.viral_score)

    age = days_since(post.created_at, now)
    score += w.freshness_weight * freshness_score(age, config.decay_factor)

    score += w.quality_weight * max(0.0, post.quality_score) / 100.0

    if post.has_active_badge:
        score += config.badge_bonus

    return score


def score_posts(
    posts: List[Post],
    tag_preferences: Mapping[str, float],
    creator_preferences: Mapping[str, float],
    top_tags: Collection[str],
    related_tags: Collection[str],
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> List[ScoredPost]:
    """Score every post and return them sorted by score (descending, stable)."""
    now = now or datetime.now(timezone.utc)
    scored = [
        ScoredPost(
            post=p,
            score=score_post(
                p, tag_preferences, creator_preferences, top_tags, related_tags, config, now
            ),
        )
        for p in posts
    ]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored
