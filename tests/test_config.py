"""
Configuration Tests

RecommendationConfig defaults, validation and from_dict() merging, plus
ServerConfig environment loading.

Run:
----
    pytest tests/test_config.py -v
"""

import json
import math

import pytest

from feed_algorithm.models import (
    DEFAULT_CONFIG,
    RECOMMENDATION_SERVICE_WEIGHTS,
    SIMPLE_FEED_WEIGHTS,
    RecommendationConfig,
    ScoringWeights,
)
from feed_server.config import ServerConfig


class TestScoringWeights:
    def test_recommendation_service_weights_fill_budget(self):
        assert math.isclose(RECOMMENDATION_SERVICE_WEIGHTS.total, 1.0)

    def test_simple_feed_weights_within_budget(self):
        assert math.isclose(SIMPLE_FEED_WEIGHTS.total, 0.95)
        assert SIMPLE_FEED_WEIGHTS.related_tag_bonus == 0.0
        assert SIMPLE_FEED_WEIGHTS.tag_normalizer == 100.0

    def test_over_budget_rejected(self):
        with pytest.raises(ValueError):
            ScoringWeights(tag_weight=0.5)

    def test_non_positive_normalizer_rejected(self):
        with pytest.raises(ValueError):
            ScoringWeights(tag_normalizer=0)


class TestRecommendationConfig:
    def test_defaults(self):
        config = RecommendationConfig()
        assert config.interaction_weight("like") == 10
        assert config.interaction_weight("comment") == 20
        assert config.interaction_weight("tip") == 40
        assert config.interaction_weight("profile_check") == 5
        assert config.interaction_weight("share") == 0
        assert config.creator_boosts["creator_badge"] == 25
        assert config.badge_bonus == pytest.approx(0.25)
        assert config.max_same_creator_in_feed == 3
        assert config.diversify_continuation is False
        assert config.initial_limit == 40
        assert config.candidate_pool_size == 500
        assert config.seen_lookback == 1000

    def test_default_config_is_shared_instance(self):
        assert DEFAULT_CONFIG.personalized_ratio == 0.7

    def test_from_dict_groups(self):
        config = RecommendationConfig.from_dict(
            {
                "interactions": {"like": 12},
                "creator_boosts": {"creator_badge": 50},
                "feed": {"page_size": 10, "max_same_creator_in_feed": 2},
                "quality": {"min_engagement_score": 1.5},
                "decay_factor": 0.9,
                "unknown_key": "ignored",
            }
        )
        assert config.interaction_weight("like") == 12
        assert config.interaction_weight("tip") == 40
        assert config.badge_bonus == pytest.approx(0.5)
        assert config.page_size == 10
        assert config.initial_limit == 20
        assert config.max_same_creator_in_feed == 2
        assert config.min_engagement_score == 1.5
        assert config.decay_factor == 0.9

    def test_from_dict_scoring_preset_with_override(self):
        config = RecommendationConfig.from_dict(
            {"scoring": {"preset": "simple_feed", "tag_weight": 0.25}}
        )
        assert config.scoring.tag_normalizer == 100.0
        assert config.scoring.tag_weight == 0.25
        assert config.scoring.engagement_weight == 0.20

    def test_from_dict_unknown_preset(self):
        with pytest.raises(ValueError):
            RecommendationConfig.from_dict({"scoring": {"preset": "legacy"}})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"personalized_ratio": 1.5},
            {"interleave_extra_chance": -0.1},
            {"interleave_run": 0},
            {"max_same_creator_in_feed": 0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValueError):
            RecommendationConfig(**overrides)


class TestServerConfig:
    def test_from_env_defaults(self, monkeypatch):
        for key in ("DATA_SOURCE", "PORT", "HOST", "POSTS_JSON_PATH", "ALGORITHM_CONFIG_PATH", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)
        config = ServerConfig.from_env()
        assert config.data_source == "memory"
        assert config.port == 8000
        assert config.log_level == "INFO"

    def test_unknown_data_source_falls_back_to_memory(self, monkeypatch):
        monkeypatch.setenv("DATA_SOURCE", "postgres")
        assert ServerConfig.from_env().data_source == "memory"

    def test_env_values(self, monkeypatch, tmp_path):
        posts = tmp_path / "posts.json"
        posts.write_text("[]")
        monkeypatch.setenv("DATA_SOURCE", "JSON")
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("POSTS_JSON_PATH", str(posts))
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = ServerConfig.from_env()
        assert config.data_source == "json"
        assert config.port == 9001
        assert config.posts_json_path == posts
        assert config.log_level == "DEBUG"
        assert config.validate() == (True, [])

    def test_validate_reports_missing_posts_file(self, tmp_path):
        config = ServerConfig(data_source="json", posts_json_path=tmp_path / "missing.json")
        ok, errors = config.validate()
        assert not ok
        assert "Posts file not found" in errors[0]

    def test_load_algorithm_config(self, tmp_path):
        path = tmp_path / "algorithm.json"
        path.write_text(json.dumps({"feed": {"personalized_ratio": 0.6}}))
        config = ServerConfig(algorithm_config_path=path)
        assert config.load_algorithm_config().personalized_ratio == 0.6

    def test_load_algorithm_config_defaults(self):
        assert ServerConfig().load_algorithm_config() == RecommendationConfig()
