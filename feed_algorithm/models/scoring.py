"""
Scoring model: ScoredPost and the score/time helpers used by the pipeline.

Contains:
- ScoredPost: a post with its recommendation score
- days_since, freshness_score, log_scaled, clamped_ratio: term helpers for the scorer
"""

import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from .post import Post


def days_since(created_at: Optional[datetime], now: Optional[datetime] = None) -> Optional[float]:
    """Fractional days since created_at (never negative). None when unknown."""
    if created_at is None:
        return None
    now = now or datetime.now(timezone.utc)
    delta = (now - created_at).total_seconds() / 86400.0
    return max(0.0, delta)


def freshness_score(days_old: Optional[float], decay_factor: float = 0.95) -> float:
    """decay_factor ** days; 0 for posts with no creation time."""
    if days_old is None:
        return 0.0
    return decay_factor ** days_old


def log_scaled(value: float) -> float:
    """log1p(value) / 10, with negative values treated as 0."""
    return math.log1p(max(0.0, value or 0.0)) / 10.0


def clamped_ratio(value: float, normalizer: float) -> float:
    """min(value / normalizer, 1), with negative values treated as 0."""
    return min(max(0.0, value or 0.0) / normalizer, 1.0)


class ScoredPost(BaseModel):
    """A post with its final recommendation score."""

    post: Post
    score: float
