"""
Continuation pages for infinite scroll.

Ranks what is left of the pool after the already-served posts, using the
user's current preferences, and returns one slice of it. Creator
diversification is only applied here when config.diversify_continuation is set.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Union

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.post import Post
from ..models.signals import UserSignals
from .candidate_pool import exclude_ids, filter_min_engagement
from .composer import diversify_by_creator
from .related_tags import get_related_tags, get_top_tags
from .scoring import score_posts


def get_more_posts(
    signals: UserSignals,
    already_served: Iterable[Union[Post, str]],
    posts: List[Post],
    offset: int,
    page_size: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> List[Post]:
    """Slice [offset, offset + page_size) of the ranked remaining pool."""
    served_ids = {s.id if isinstance(s, Post) else s for s in already_served}
    remaining = exclude_ids(filter_min_engagement(posts, config), served_ids)

    top_tags = get_top_tags(signals.tag_preferences, config.top_tags_limit)
    related = get_related_tags(top_tags)
    scored = score_posts(
        remaining,
        signals.tag_preferences,
        signals.creator_preferences,
        top_tags,
        related,
        config,
        now,
    )

    start = max(0, offset)
    page = [s.post for s in scored[start : start + max(0, page_size)]]
    if config.diversify_continuation:
        page = diversify_by_creator(page, config.max_same_creator_in_feed)
    return page
