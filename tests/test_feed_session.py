"""
Feed Session Registry Tests

Session lifecycle in the registry: create, touch on get, close, and idle
expiry against a controllable clock.

Run:
----
    pytest tests/test_feed_session.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from feed_server.config import ServerConfig
from feed_server.services import InMemoryPostProvider, InMemorySignalStore, SessionNotFound, SessionRegistry
from feed_server.state import AppState


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 15, 12, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return SessionRegistry(idle_ttl=timedelta(minutes=30), clock=clock)


class TestIdleExpiry:
    def test_idle_session_expires(self, registry, clock):
        session = registry.create("u1")
        session.served_ids.append("p1")
        clock.advance(minutes=31)
        with pytest.raises(SessionNotFound):
            registry.get(session.session_id)
        assert len(registry) == 0
        assert session.served_ids == []

    def test_get_keeps_session_alive(self, registry, clock):
        session = registry.create("u1")
        for _ in range(4):
            clock.advance(minutes=20)
            assert registry.get(session.session_id) is session
        assert session.last_active_at == clock.now

    def test_create_sweeps_idle_sessions(self, registry, clock):
        old = registry.create("u1")
        clock.advance(minutes=45)
        fresh = registry.create("u2")
        assert len(registry) == 1
        assert registry.get(fresh.session_id) is fresh
        with pytest.raises(SessionNotFound):
            registry.close(old.session_id)

    def test_expire_idle_returns_count(self, registry, clock):
        registry.create("u1")
        registry.create(None)
        clock.advance(minutes=10)
        kept = registry.create("u3")
        assert registry.expire_idle(clock.now + timedelta(minutes=25)) == 2
        assert len(registry) == 1
        assert registry.get(kept.session_id) is kept

    def test_no_ttl_keeps_sessions(self, clock):
        registry = SessionRegistry(idle_ttl=None, clock=clock)
        session = registry.create("u1")
        clock.advance(days=2)
        assert registry.expire_idle() == 0
        assert registry.get(session.session_id) is session


class TestConfigWiring:
    def _state(self, minutes):
        return AppState(
            ServerConfig(session_idle_minutes=minutes),
            posts=InMemoryPostProvider([]),
            signals=InMemorySignalStore(),
        )

    def test_idle_minutes_sets_ttl(self):
        assert self._state(5).sessions.idle_ttl == timedelta(minutes=5)

    def test_zero_disables_expiry(self):
        assert self._state(0).sessions.idle_ttl is None

    def test_negative_is_invalid(self):
        ok, errors = ServerConfig(session_idle_minutes=-1).validate()
        assert not ok
        assert "SESSION_IDLE_MINUTES must be >= 0" in errors
