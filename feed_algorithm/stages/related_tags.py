"""
Related-tag expansion for discovery.

Broad categories group topically adjacent tags. A user's top tags are
expanded to every tag sharing a category with them, minus the top tags
themselves, giving a discovery set wider than direct preference.
"""

from typing import Dict, FrozenSet, Iterable, List, Mapping, Set

from ..models.post import normalize_tag

TAG_CATEGORIES: Dict[str, FrozenSet[str]] = {
    "sports": frozenset({"sports", "football", "basketball", "soccer", "tennis", "fitness", "gym", "workout"}),
    "gaming": frozenset({"gaming", "esports", "twitch", "streaming", "games", "console", "pc"}),
    "art": frozenset({"art", "photography", "design", "illustration", "digital art", "painting", "drawing"}),
    "music": frozenset({"music", "edm", "hiphop", "rock", "pop", "jazz", "indie", "concerts"}),
    "tech": frozenset({"technology", "crypto", "nfts", "web3", "ai", "coding", "programming"}),
    "lifestyle": frozenset({"fashion", "beauty", "food", "travel", "fitness", "wellness"}),
    "entertainment": frozenset({"movies", "anime", "tv", "comedy", "memes", "dance"}),
    "nature": frozenset({"nature", "animals", "wildlife", "outdoors", "hiking", "adventure"}),
    "automotive": frozenset({"cars", "motorcycles", "racing", "supercars", "tuning"}),
    "education": frozenset({"education", "diy", "tutorials", "howto", "learning"}),
}


def get_top_tags(tag_preferences: Mapping[str, float], limit: int = 10) -> List[str]:
    """Highest-scoring preference tags, best first (ties broken by tag for stable output)."""
    ranked = sorted(tag_preferences.items(), key=lambda kv: (-kv[1], kv[0]))
    return [tag for tag, _ in ranked[:limit]]


def get_related_tags(tags: Iterable[str]) -> Set[str]:
    """Union of all categories containing any of tags, minus tags themselves."""
    own = {normalize_tag(t) for t in tags}
    own.discard("")
    related: Set[str] = set()
    for members in TAG_CATEGORIES.values():
        if own & members:
            related |= members
    return related - own
