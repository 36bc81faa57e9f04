"""
Feed composition: slot quotas, interleaving, and creator diversification.

A page is built from a primary stream (matching / interest posts) and a
secondary stream (discovery / related posts):

1. Quotas: personalized_ratio of the slots go to the primary stream, the
   rest to the secondary; slots a short stream cannot fill are back-filled
   from the other one.
2. Interleave: interleave_run primary posts (plus one more with
   interleave_extra_chance), then one secondary post, until the page is
   full or both streams are drained.
3. Diversify: at most max_same_creator_in_feed posts per creator in the
   primary segment; overflow is moved to the end in its original order.
4. Truncate to limit.
"""

import math
import random
from typing import Dict, List, Optional, Tuple

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.post import Post
from ..models.scoring import ScoredPost


def slot_quotas(
    n_primary: int,
    n_secondary: int,
    limit: int,
    ratio: float,
) -> Tuple[int, int]:
    """How many posts to take from each stream for a page of size limit."""
    limit = max(0, limit)
    primary_quota = int(math.floor(limit * ratio + 1e-9))
    secondary_quota = limit - primary_quota
    primary_take = min(n_primary, primary_quota)
    secondary_take = min(n_secondary, secondary_quota)
    # Back-fill from the other stream
    primary_fill = min(n_primary, primary_take + (secondary_quota - secondary_take))
    secondary_fill = min(n_secondary, secondary_take + (primary_quota - primary_take))
    return primary_fill, secondary_fill


def interleave(
    primary: List[Post],
    secondary: List[Post],
    limit: int,
    run: int = 2,
    extra_chance: float = 0.0,
    rng: Optional[random.Random] = None,
) -> List[Post]:
    """Take run (or run + 1) primary posts then one secondary post, repeatedly."""
    rng = rng or random.Random()
    out: List[Post] = []
    p_idx, s_idx = 0, 0
    while len(out) < limit and (p_idx < len(primary) or s_idx < len(secondary)):
        take = run
        if extra_chance > 0 and rng.random() < extra_chance:
            take += 1
        for _ in range(take):
            if p_idx < len(primary) and len(out) < limit:
                out.append(primary[p_idx])
                p_idx += 1
        if s_idx < len(secondary) and len(out) < limit:
            out.append(secondary[s_idx])
            s_idx += 1
    return out


def diversify_by_creator(posts: List[Post], max_per_creator: int = 3) -> List[Post]:
    """
    Cap each creator at max_per_creator posts; defer the rest to the end.

    Posts without a creator id are never capped.
    """
    counts: Dict[str, int] = {}
    kept: List[Post] = []
    deferred: List[Post] = []
    for post in posts:
        creator = post.creator_id
        if not creator:
            kept.append(post)
            continue
        count = counts.get(creator, 0)
        if count < max_per_creator:
            kept.append(post)
            counts[creator] = count + 1
        else:
            deferred.append(post)
    return kept + deferred


def compose_streams(
    primary: List[Post],
    secondary: List[Post],
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
    extra_chance: Optional[float] = None,
) -> List[Post]:
    """Quota, interleave, diversify and truncate two already-ordered streams."""
    if extra_chance is None:
        extra_chance = config.interleave_extra_chance
    n_primary, n_secondary = slot_quotas(
        len(primary), len(secondary), limit, config.personalized_ratio
    )
    combined = interleave(
        primary[:n_primary],
        secondary[:n_secondary],
        limit,
        run=config.interleave_run,
        extra_chance=extra_chance,
        rng=rng,
    )
    diversified = diversify_by_creator(combined, config.max_same_creator_in_feed)
    return diversified[:limit]


def compose(
    scored_matching: List[ScoredPost],
    scored_discovery: List[ScoredPost],
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> List[Post]:
    """Sort both scored streams independently (descending) and compose a page."""
    matching = sorted(scored_matching, key=lambda s: s.score, reverse=True)
    discovery = sorted(scored_discovery, key=lambda s: s.score, reverse=True)
    return compose_streams(
        [s.post for s in matching],
        [s.post for s in discovery],
        limit,
        config,
        rng,
    )
