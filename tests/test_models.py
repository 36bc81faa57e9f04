"""
Model Tests

Post and signal model normalization: tag cleanup, field aliases, missing
numeric fields, and UserSignals aggregation from store rows.

Run:
----
    pytest tests/test_models.py -v
"""

from datetime import datetime, timezone

from feed_algorithm.models import (
    CreatorPreference,
    InterestSelection,
    MediaKind,
    Post,
    SeenRecord,
    TagPreference,
    UserSignals,
    ensure_posts,
    normalize_tag,
)


class TestNormalizeTag:
    def test_trims_and_lowercases(self):
        assert normalize_tag(" Art ") == "art"

    def test_non_string_is_empty(self):
        assert normalize_tag(None) == ""
        assert normalize_tag(42) == ""


class TestPost:
    def test_tags_normalized_and_deduplicated(self):
        post = Post(id="p1", tags=[" Art ", "art", "Gaming", "", None])
        assert post.tags == ["art", "gaming"]

    def test_malformed_tags_become_empty(self):
        assert Post(id="p1", tags="art").tags == []
        assert Post(id="p1", tags=None).tags == []

    def test_store_row_aliases(self):
        post = Post.model_validate(
            {
                "id": "p1",
                "type": "video",
                "user_id": "creator-1",
                "timestamp": "2026-01-10T08:00:00",
                "engagement_score": None,
                "views_count": None,
            }
        )
        assert post.kind == MediaKind.VIDEO
        assert post.creator_id == "creator-1"
        assert post.created_at == datetime(2026, 1, 10, 8, 0, tzinfo=timezone.utc)
        assert post.engagement_score == 0.0
        assert post.views_count == 0

    def test_extra_fields_kept(self):
        post = Post.model_validate({"id": "p1", "caption": "hello"})
        assert post.model_extra == {"caption": "hello"}

    def test_has_any_tag(self):
        post = Post(id="p1", tags=["art", "design"])
        assert post.has_any_tag({"design"})
        assert not post.has_any_tag({"music"})

    def test_ensure_posts_accepts_dicts_and_models(self):
        existing = Post(id="p2")
        posts = ensure_posts([{"id": "p1"}, existing])
        assert [p.id for p in posts] == ["p1", "p2"]
        assert posts[1] is existing


class TestUserSignals:
    def test_from_rows(self):
        signals = UserSignals.from_rows(
            "u1",
            tag_rows=[TagPreference(user_id="u1", tag=" Art ", score=20)],
            creator_rows=[CreatorPreference(user_id="u1", creator_id="c1", score=5)],
            seen_rows=[SeenRecord(user_id="u1", post_id="p1")],
            interest_rows=[InterestSelection(user_id="u1", interest="Gaming")],
        )
        assert signals.tag_preferences == {"art": 20}
        assert signals.creator_preferences == {"c1": 5}
        assert signals.seen_post_ids == frozenset({"p1"})
        assert signals.interests == ["gaming"]
        assert signals.has_preferences
        assert signals.has_interests

    def test_tag_keys_merged_after_normalization(self):
        signals = UserSignals(user_id="u1", tag_preferences={" Art ": 10, "art": 5, "  ": 3})
        assert signals.tag_preferences == {"art": 15}

    def test_empty_signals(self):
        signals = UserSignals()
        assert not signals.has_preferences
        assert not signals.has_interests
        assert signals.user_id is None
