"""
Feed sessions: per-viewer state that lives between page requests.

A FeedSession owns what was already served (for continuation) and an
in-memory seen cache (to skip redundant seen writes). Nothing here is
authoritative; the Signal Store's seen records are the source of truth for
the next session. Sessions are held by a SessionRegistry owned by the app
state, never in module globals.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Set

from feed_algorithm.models import FeedSource, Post, utc_now

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TTL = timedelta(minutes=30)


class SessionNotFound(KeyError):
    """No live feed session with this id."""


@dataclass
class FeedPage:
    """One page handed back to the caller."""

    session_id: str
    items: List[Post]
    source: FeedSource
    # Position of items[0] in the session stream: served so far plus skipped
    offset: int
    has_more: bool


@dataclass
class FeedSession:
    user_id: Optional[str]
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    source: Optional[FeedSource] = None
    served_ids: List[str] = field(default_factory=list)
    seen_ids: Set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=utc_now)
    refreshed_at: Optional[datetime] = None
    last_active_at: datetime = field(default_factory=utc_now)

    @property
    def served_count(self) -> int:
        return len(self.served_ids)

    def touch(self, now: Optional[datetime] = None) -> None:
        self.last_active_at = now or utc_now()

    def add_served(self, posts: List[Post]) -> None:
        known = set(self.served_ids)
        for p in posts:
            if p.id not in known:
                known.add(p.id)
                self.served_ids.append(p.id)

    def restart(self, source: FeedSource, posts: List[Post]) -> None:
        """Start over from offset 0 (new first page). The seen cache survives."""
        self.source = source
        self.served_ids = []
        self.add_served(posts)
        self.refreshed_at = utc_now()

    def clear(self) -> None:
        self.served_ids.clear()
        self.seen_ids.clear()
        self.source = None


class SessionRegistry:
    """
    Live sessions by id.

    Sessions untouched for longer than idle_ttl are dropped on the next
    create/get. idle_ttl=None keeps sessions until closed.
    """

    def __init__(self, idle_ttl: Optional[timedelta] = DEFAULT_IDLE_TTL, clock: Callable[[], datetime] = utc_now):
        self._sessions: Dict[str, FeedSession] = {}
        self.idle_ttl = idle_ttl
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: Optional[str]) -> FeedSession:
        now = self._clock()
        self.expire_idle(now)
        session = FeedSession(user_id=user_id, created_at=now, last_active_at=now)
        self._sessions[session.session_id] = session
        logger.debug("[session] created id=%s user=%s", session.session_id, user_id)
        return session

    def get(self, session_id: str) -> FeedSession:
        now = self._clock()
        self.expire_idle(now)
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None
        session.touch(now)
        return session

    def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFound(session_id)
        session.clear()
        logger.debug("[session] closed id=%s", session_id)

    def expire_idle(self, now: Optional[datetime] = None) -> int:
        """Drop sessions idle longer than idle_ttl. Returns how many were dropped."""
        if self.idle_ttl is None:
            return 0
        cutoff = (now or self._clock()) - self.idle_ttl
        stale = [sid for sid, s in self._sessions.items() if s.last_active_at < cutoff]
        for sid in stale:
            self._sessions.pop(sid).clear()
        if stale:
            logger.info("[session] expired %s idle sessions", len(stale))
        return len(stale)

    def clear(self) -> None:
        for session in self._sessions.values():
            session.clear()
        self._sessions.clear()
