"""
Feed Composer Tests

Slot quotas with back-fill, the 2:1 interleave (with and without the random
third matching post), the 65-75% matching share, creator diversification,
and truncation.

Run:
----
    pytest tests/test_composer.py -v
"""

import random
from collections import Counter

import pytest

from feed_algorithm.models import RecommendationConfig, ScoredPost
from feed_algorithm.stages import compose, compose_streams, diversify_by_creator, interleave, slot_quotas


def _stream(make_post, prefix, n, creator=None):
    return [make_post(f"{prefix}{i}", creator_id=creator) for i in range(n)]


def _scored(posts, start=100.0):
    return [ScoredPost(post=p, score=start - i) for i, p in enumerate(posts)]


class TestSlotQuotas:
    @pytest.mark.parametrize(
        "n_primary, n_secondary, limit, expected",
        [
            (100, 100, 20, (14, 6)),
            (100, 100, 40, (28, 12)),
            (3, 100, 20, (3, 17)),
            (100, 2, 20, (18, 2)),
            (5, 5, 20, (5, 5)),
            (0, 0, 20, (0, 0)),
            (10, 10, 0, (0, 0)),
        ],
    )
    def test_quotas(self, n_primary, n_secondary, limit, expected):
        assert slot_quotas(n_primary, n_secondary, limit, 0.7) == expected


class TestInterleave:
    def test_strict_two_to_one(self, make_post):
        primary = _stream(make_post, "m", 10)
        secondary = _stream(make_post, "d", 10)
        out = interleave(primary, secondary, 9, run=2, extra_chance=0.0)
        assert [p.id[0] for p in out] == list("mmdmmdmmd")

    def test_drains_other_stream_when_one_exhausts(self, make_post):
        primary = _stream(make_post, "m", 2)
        secondary = _stream(make_post, "d", 5)
        out = interleave(primary, secondary, 10, run=2)
        assert [p.id for p in out] == ["m0", "m1", "d0", "d1", "d2", "d3", "d4"]

    def test_extra_chance_one_takes_three(self, make_post):
        primary = _stream(make_post, "m", 10)
        secondary = _stream(make_post, "d", 10)
        out = interleave(primary, secondary, 8, run=2, extra_chance=1.0, rng=random.Random(0))
        assert [p.id[0] for p in out] == list("mmmdmmmd")

    def test_limit_respected(self, make_post):
        out = interleave(_stream(make_post, "m", 50), _stream(make_post, "d", 50), 7)
        assert len(out) == 7


class TestDiversification:
    def test_overflow_deferred_in_order(self, make_post):
        posts = _stream(make_post, "a", 5, creator="c1") + _stream(make_post, "b", 2, creator="c2")
        out = diversify_by_creator(posts, max_per_creator=3)
        assert [p.id for p in out] == ["a0", "a1", "a2", "b0", "b1", "a3", "a4"]

    def test_posts_without_creator_never_capped(self, make_post):
        posts = _stream(make_post, "x", 6)
        assert diversify_by_creator(posts, 3) == posts

    def test_primary_segment_respects_cap(self, make_post):
        rng = random.Random(7)
        posts = [make_post(f"p{i}", creator_id=f"c{i % 4}") for i in range(40)]
        rng.shuffle(posts)
        out = diversify_by_creator(posts, 3)
        distinct = len({p.creator_id for p in posts})
        primary_segment = out[: 3 * distinct]
        counts = Counter(p.creator_id for p in primary_segment)
        assert max(counts.values()) <= 3
        assert sorted(p.id for p in out) == sorted(p.id for p in posts)


class TestCompose:
    def test_matching_share_between_65_and_75_percent(self, make_post):
        matching = _scored(_stream(make_post, "m", 40))
        discovery = _scored(_stream(make_post, "d", 40))
        for seed in range(25):
            out = compose(matching, discovery, 20, rng=random.Random(seed))
            assert len(out) == 20
            share = sum(1 for p in out if p.id.startswith("m")) / len(out)
            assert 0.65 <= share <= 0.75

    def test_streams_sorted_independently(self, make_post):
        matching = [
            ScoredPost(post=make_post("m-low"), score=0.1),
            ScoredPost(post=make_post("m-high"), score=0.9),
        ]
        discovery = [
            ScoredPost(post=make_post("d-low"), score=0.2),
            ScoredPost(post=make_post("d-high"), score=0.8),
        ]
        config = RecommendationConfig(interleave_extra_chance=0.0)
        out = compose(matching, discovery, 4, config)
        assert [p.id for p in out] == ["m-high", "m-low", "d-high", "d-low"]

    def test_back_fills_short_discovery(self, make_post):
        matching = _scored(_stream(make_post, "m", 30))
        discovery = _scored(_stream(make_post, "d", 2))
        out = compose(matching, discovery, 20, rng=random.Random(1))
        assert len(out) == 20
        assert sum(1 for p in out if p.id.startswith("d")) == 2

    def test_diversifies_and_truncates(self, make_post):
        same_creator = _stream(make_post, "m", 10, creator="c1")
        others = [make_post(f"d{i}", creator_id=f"o{i}") for i in range(10)]
        config = RecommendationConfig(interleave_extra_chance=0.0)
        out = compose_streams(same_creator, others, 10, config)
        assert len(out) == 10
        head = out[:6]
        assert sum(1 for p in head if p.creator_id == "c1") <= 3

    def test_empty_streams(self):
        assert compose([], [], 20) == []
