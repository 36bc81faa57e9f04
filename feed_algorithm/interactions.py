"""
Interaction weights: how much one user action adds to preference scores.

The accumulate-and-persist half of recording lives with the store
(feed_server.services.interaction_recorder); this module is the pure half.
"""

from typing import Iterable, List, Optional, Union

from .models.config import DEFAULT_CONFIG, RecommendationConfig
from .models.post import normalize_tag
from .models.signals import InteractionType


def interaction_weight(
    interaction_type: Union[InteractionType, str],
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> float:
    """User-side weight for an interaction type (0 for unknown types)."""
    if isinstance(interaction_type, InteractionType):
        interaction_type = interaction_type.value
    return config.interaction_weight(interaction_type)


def normalized_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Normalized, de-duplicated, non-empty tags in their original order."""
    out: List[str] = []
    for raw in tags or []:
        tag = normalize_tag(raw)
        if tag and tag not in out:
            out.append(tag)
    return out
