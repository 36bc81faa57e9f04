"""
Algorithm configuration: interaction weights, scoring weights, feed composition.

RecommendationConfig defaults are defined here. The server may pass a dict
(e.g. loaded from ALGORITHM_CONFIG_PATH); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator


class ScoringWeights(BaseModel):
    """
    Weights and normalizers for one scoring formula.

    score = tag_weight * min(tag_sum / tag_normalizer, 1)
          + related_tag_bonus (flat, when any post tag is in the related set)
          + creator_weight * min(creator_score / creator_normalizer, 1)
          + engagement_weight * log1p(engagement) / 10
          + viral_weight * log1p(viral) / 10
          + freshness_weight * decay_factor ** days
          + quality_weight * quality / 100
          (+ badge bonus, outside the weighted sum)
    """

    tag_normalizer: float = 50.0
    tag_weight: float = 0.35
    related_tag_bonus: float = 0.10
    creator_normalizer: float = 50.0
    creator_weight: float = 0.15
    engagement_weight: float = 0.15
    viral_weight: float = 0.10
    freshness_weight: float = 0.10
    quality_weight: float = 0.05

    @property
    def total(self) -> float:
        return (
            self.tag_weight
            + self.related_tag_bonus
            + self.creator_weight
            + self.engagement_weight
            + self.viral_weight
            + self.freshness_weight
            + self.quality_weight
        )

    @model_validator(mode="after")
    def weights_within_budget(self):
        if self.total > 1.0 + 1e-9:
            raise ValueError(f"Scoring weights must sum to <= 1.0, got {self.total}")
        if self.tag_normalizer <= 0 or self.creator_normalizer <= 0:
            raise ValueError("Normalizers must be positive")
        return self


# Formula used by the full recommendation service (default).
RECOMMENDATION_SERVICE_WEIGHTS = ScoringWeights()

# Formula used by the lightweight in-session feed sorter.
SIMPLE_FEED_WEIGHTS = ScoringWeights(
    tag_normalizer=100.0,
    tag_weight=0.30,
    related_tag_bonus=0.0,
    creator_normalizer=100.0,
    creator_weight=0.15,
    engagement_weight=0.20,
    viral_weight=0.15,
    freshness_weight=0.10,
    quality_weight=0.05,
)

SCORING_PRESETS: Dict[str, ScoringWeights] = {
    "recommendation_service": RECOMMENDATION_SERVICE_WEIGHTS,
    "simple_feed": SIMPLE_FEED_WEIGHTS,
}


def _default_interaction_weights() -> Dict[str, float]:
    return {"like": 10.0, "comment": 20.0, "tip": 40.0, "profile_check": 5.0}


def _default_creator_boosts() -> Dict[str, float]:
    return {
        "like": 5.0,
        "comment": 10.0,
        "tip": 15.0,
        "profile_check": 3.0,
        "creator_badge": 25.0,
    }


class RecommendationConfig(BaseModel):
    """Configuration for the feed recommendation algorithm."""

    # -------------------------------------------------------------------------
    # Interaction weights (added to tag and creator preference scores)
    # -------------------------------------------------------------------------

    interaction_weights: Dict[str, float] = Field(default_factory=_default_interaction_weights)

    # Creator boosts applied by the store's engagement triggers.
    # creator_badge / 100 is also the scorer's badge bonus.
    creator_boosts: Dict[str, float] = Field(default_factory=_default_creator_boosts)

    # Score given to a tag when the user picks it as an onboarding interest.
    interest_seed_score: float = 100.0

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    scoring: ScoringWeights = Field(default_factory=lambda: RECOMMENDATION_SERVICE_WEIGHTS.model_copy())

    # Freshness = decay_factor ** days_since_creation.
    decay_factor: float = 0.95

    # Number of highest-scoring preference tags treated as "top tags".
    top_tags_limit: int = 10

    # Posts below this engagement score are dropped from the pool.
    min_engagement_score: float = 0.0

    # -------------------------------------------------------------------------
    # Feed composition
    # -------------------------------------------------------------------------

    # Share of slots targeted at matching/personalized posts; rest is discovery.
    personalized_ratio: float = 0.7

    # Matching posts taken per interleave round before one discovery post.
    interleave_run: int = 2
    # Chance of a third matching post in a round (personalized regime only).
    interleave_extra_chance: float = 0.5

    # Creator diversification cap on the primary segment of a composed page.
    max_same_creator_in_feed: int = 3

    # Apply the creator cap to continuation pages too.
    diversify_continuation: bool = False

    # -------------------------------------------------------------------------
    # Pool sizes and paging
    # -------------------------------------------------------------------------

    candidate_pool_size: int = 500
    seen_lookback: int = 1000
    trending_window_days: int = 7
    trending_pool_size: int = 100
    page_size: int = 20
    initial_pages: int = 2

    @model_validator(mode="after")
    def ratios_in_range(self):
        if not 0.0 <= self.personalized_ratio <= 1.0:
            raise ValueError(f"personalized_ratio must be within [0, 1], got {self.personalized_ratio}")
        if not 0.0 <= self.interleave_extra_chance <= 1.0:
            raise ValueError("interleave_extra_chance must be within [0, 1]")
        if self.interleave_run < 1:
            raise ValueError("interleave_run must be >= 1")
        if self.max_same_creator_in_feed < 1:
            raise ValueError("max_same_creator_in_feed must be >= 1")
        return self

    @property
    def badge_bonus(self) -> float:
        return self.creator_boosts.get("creator_badge", 0.0) / 100.0

    @property
    def initial_limit(self) -> int:
        return self.page_size * self.initial_pages

    def interaction_weight(self, interaction_type: str) -> float:
        return self.interaction_weights.get(interaction_type, 0.0)

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RecommendationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat: Dict = {}
        if "interactions" in config_dict:
            flat["interaction_weights"] = {
                **_default_interaction_weights(),
                **config_dict["interactions"],
            }
        if "creator_boosts" in config_dict:
            flat["creator_boosts"] = {
                **_default_creator_boosts(),
                **config_dict["creator_boosts"],
            }
        if "scoring" in config_dict:
            sc = dict(config_dict["scoring"])
            preset = sc.pop("preset", "recommendation_service")
            if preset not in SCORING_PRESETS:
                raise ValueError(f"Unknown scoring preset: {preset!r}")
            base = SCORING_PRESETS[preset].model_dump()
            flat["scoring"] = ScoringWeights.model_validate(base | sc)
        for group in ("quality", "feed"):
            if group in config_dict:
                flat.update(config_dict[group])
        for key, value in config_dict.items():
            if key not in ("interactions", "creator_boosts", "scoring", "quality", "feed"):
                flat[key] = value
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
