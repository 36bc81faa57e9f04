"""Trending tags: most frequent tags across the most recent posts."""

from collections import Counter
from datetime import datetime, timezone
from typing import List, Tuple

from ..models.post import Post

TRENDING_SAMPLE_SIZE = 250
TRENDING_TAGS_LIMIT = 8

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def get_trending_tags(
    posts: List[Post],
    sample_size: int = TRENDING_SAMPLE_SIZE,
    limit: int = TRENDING_TAGS_LIMIT,
) -> List[Tuple[str, int]]:
    """(tag, count) pairs for the most used tags among the sample_size newest posts."""
    newest = sorted(posts, key=lambda p: p.created_at or _EPOCH, reverse=True)
    counts: Counter = Counter()
    for post in newest[:sample_size]:
        counts.update(post.tags)
    return counts.most_common(limit)
