"""Shared fixtures: a fixed clock, a seeded RNG, and a post factory."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from feed_algorithm.models import Post

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def build_post(
    post_id,
    tags=(),
    creator_id=None,
    days_old=1.0,
    engagement=0.0,
    viral=0.0,
    quality=0.0,
    badge=False,
    now=NOW,
) -> Post:
    return Post(
        id=post_id,
        tags=list(tags),
        creator_id=creator_id,
        created_at=now - timedelta(days=days_old),
        engagement_score=engagement,
        viral_score=viral,
        quality_score=quality,
        has_active_badge=badge,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def make_post():
    return build_post
