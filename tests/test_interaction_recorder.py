"""
Interaction Recorder Tests

Weights per interaction type, accumulation onto tag and creator
preferences, tag normalization, and the best-effort failure policy: a
failed write is logged and returned, never raised, and never undoes the
other writes.

Run:
----
    pytest tests/test_interaction_recorder.py -v
"""

import asyncio
import logging

import pytest

from feed_algorithm.models import InteractionType
from feed_server.services import InMemorySignalStore, InteractionRecorder


class EventFailingStore(InMemorySignalStore):
    async def append_interaction(self, event):
        raise ConnectionError("events table unavailable")


class PreferenceFailingStore(InMemorySignalStore):
    async def increment_tag_preference(self, user_id, tag, amount):
        raise ConnectionError("preferences table unavailable")

    async def increment_creator_preference(self, user_id, creator_id, amount):
        raise ConnectionError("preferences table unavailable")


class YieldingStore(InMemorySignalStore):
    """Suspends before every call, like a networked store."""

    async def get_tag_preference(self, user_id, tag):
        await asyncio.sleep(0)
        return await super().get_tag_preference(user_id, tag)

    async def upsert_tag_preference(self, row):
        await asyncio.sleep(0)
        await super().upsert_tag_preference(row)

    async def increment_tag_preference(self, user_id, tag, amount):
        await asyncio.sleep(0)
        await super().increment_tag_preference(user_id, tag, amount)

    async def increment_creator_preference(self, user_id, creator_id, amount):
        await asyncio.sleep(0)
        await super().increment_creator_preference(user_id, creator_id, amount)


def _prefs(store, user_id):
    rows = asyncio.run(store.get_tag_preferences(user_id))
    return {r.tag: r.score for r in rows}


def _creator_score(store, user_id, creator_id):
    row = asyncio.run(store.get_creator_preference(user_id, creator_id))
    return row.score if row else None


class TestRecord:
    @pytest.mark.parametrize(
        "interaction_type, weight",
        [("like", 10), ("comment", 20), ("tip", 40), ("profile_check", 5)],
    )
    def test_weights(self, interaction_type, weight):
        store = InMemorySignalStore()
        recorder = InteractionRecorder(store)
        failures = asyncio.run(recorder.record("u1", "p1", "c1", ["art"], interaction_type))
        assert failures == []
        assert _prefs(store, "u1") == {"art": weight}
        assert _creator_score(store, "u1", "c1") == weight

    def test_accumulates(self):
        store = InMemorySignalStore()
        recorder = InteractionRecorder(store)
        asyncio.run(recorder.record("u1", "p1", "c1", ["art"], InteractionType.COMMENT))
        asyncio.run(recorder.record("u1", "p2", "c1", ["art", "music"], InteractionType.LIKE))
        assert _prefs(store, "u1") == {"art": 30, "music": 10}
        assert _creator_score(store, "u1", "c1") == 30

    def test_tags_normalized_and_empty_skipped(self):
        store = InMemorySignalStore()
        asyncio.run(InteractionRecorder(store).record("u1", "p1", "c1", [" Art ", "art", "", "Gaming"], "like"))
        assert _prefs(store, "u1") == {"art": 10, "gaming": 10}

    def test_event_appended(self):
        store = InMemorySignalStore()
        asyncio.run(InteractionRecorder(store).record("u1", "p1", "c1", ["art"], "tip"))
        events = store.interactions_for("u1")
        assert len(events) == 1
        assert events[0].interaction_type == InteractionType.TIP
        assert events[0].creator_id == "c1"

    def test_without_creator(self):
        store = InMemorySignalStore()
        asyncio.run(InteractionRecorder(store).record("u1", "p1", None, ["art"], "like"))
        assert asyncio.run(store.get_creator_preferences("u1")) == []
        assert store.interactions_for("u1")[0].creator_id is None

    def test_missing_tags(self):
        store = InMemorySignalStore()
        failures = asyncio.run(InteractionRecorder(store).record("u1", "p1", "c1", None, "like"))
        assert failures == []
        assert _prefs(store, "u1") == {}
        assert _creator_score(store, "u1", "c1") == 10

    def test_users_isolated(self):
        store = InMemorySignalStore()
        recorder = InteractionRecorder(store)
        asyncio.run(recorder.record("u1", "p1", "c1", ["art"], "like"))
        assert _prefs(store, "u2") == {}

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            asyncio.run(InteractionRecorder(InMemorySignalStore()).record("u1", "p1", "c1", [], "share"))


class TestPartialFailure:
    def test_event_failure_keeps_preference_updates(self, caplog):
        store = EventFailingStore()
        with caplog.at_level(logging.WARNING):
            failures = asyncio.run(InteractionRecorder(store).record("u1", "p1", "c1", ["art"], "like"))
        assert len(failures) == 1
        assert _prefs(store, "u1") == {"art": 10}
        assert _creator_score(store, "u1", "c1") == 10
        assert "[recorder] event write failed" in caplog.text

    def test_preference_failure_keeps_event(self):
        store = PreferenceFailingStore()
        failures = asyncio.run(InteractionRecorder(store).record("u1", "p1", "c1", ["art"], "like"))
        assert len(failures) == 2
        assert len(store.interactions_for("u1")) == 1
        assert _prefs(store, "u1") == {}


class TestConcurrentRecords:
    def test_concurrent_records_keep_every_weight(self):
        store = YieldingStore()
        recorder = InteractionRecorder(store)

        async def both():
            return await asyncio.gather(
                recorder.record("u1", "p1", "c1", ["art"], "comment"),
                recorder.record("u1", "p2", "c1", ["art"], "like"),
            )

        results = asyncio.run(both())
        assert results == [[], []]
        assert _prefs(store, "u1") == {"art": 30}
        assert _creator_score(store, "u1", "c1") == 30

    def test_many_concurrent_records_never_lower_score(self):
        store = YieldingStore()
        recorder = InteractionRecorder(store)

        async def many():
            await asyncio.gather(
                *(recorder.record("u1", f"p{i}", None, ["art", "music"], "like") for i in range(10))
            )

        asyncio.run(many())
        assert _prefs(store, "u1") == {"art": 100, "music": 100}
