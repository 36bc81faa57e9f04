"""
Personalized feed: split the unseen pool into matching and discovery streams,
score both, and compose a page.
"""

import random
from datetime import datetime
from typing import List, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.post import Post
from ..models.signals import UserSignals
from .candidate_pool import exclude_seen
from .composer import compose
from .related_tags import get_related_tags, get_top_tags
from .scoring import score_posts


def build_personalized_feed(
    signals: UserSignals,
    posts: List[Post],
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Post]:
    """
    Matching = unseen posts carrying any of the user's top tags.
    Discovery = every other unseen post; related-tag posts rank first there
    through the discovery bonus.
    """
    to_score = exclude_seen(posts, signals.seen_post_ids)

    top_tags = get_top_tags(signals.tag_preferences, config.top_tags_limit)
    top_set = set(top_tags)
    related = get_related_tags(top_tags)

    matching = [p for p in to_score if p.has_any_tag(top_set)]
    discovery = [p for p in to_score if not p.has_any_tag(top_set)]

    args = (signals.tag_preferences, signals.creator_preferences, top_tags, related, config, now)
    scored_matching = score_posts(matching, *args)
    scored_discovery = score_posts(discovery, *args)

    return compose(scored_matching, scored_discovery, limit, config, rng)
