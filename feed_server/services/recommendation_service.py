"""
Recommendation service: the async shell around the pure feed_algorithm core.

Per feed computation the candidate pool and the four per-user signal reads
(tag preferences, creator preferences, seen records, interests) are issued
concurrently and joined before ranking. Signal read failures degrade to
empty (the user is then treated as cold start); a candidate pool failure is
surfaced as CandidatePoolUnavailable.
"""

import asyncio
import logging
import random
from typing import Awaitable, Iterable, List, Optional, Tuple, TypeVar, Union

from feed_algorithm import build_feed, get_more_posts, get_trending_tags
from feed_algorithm.models import (
    InterestSelection,
    Post,
    RecommendationConfig,
    SeenRecord,
    TagPreference,
    UserSignals,
    resolve_config,
    utc_now,
)

from .feed_session import FeedPage, FeedSession, SessionRegistry
from .post_provider import CandidatePoolUnavailable, PostProvider
from .signal_store import SignalStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Interest labels offered during onboarding.
AVAILABLE_INTERESTS = [
    "Art", "Photography", "Gaming", "Music", "Fashion", "Food",
    "Travel", "Sports", "Technology", "Nature", "Animals", "Cars",
    "Fitness", "Beauty", "Comedy", "Dance", "DIY", "Education",
    "Movies", "Anime", "Memes", "Crypto", "NFTs", "Web3",
]


class RecommendationService:
    def __init__(
        self,
        posts: PostProvider,
        signals: SignalStore,
        config: Optional[RecommendationConfig] = None,
        sessions: Optional[SessionRegistry] = None,
        rng: Optional[random.Random] = None,
    ):
        self.posts = posts
        self.signals = signals
        self.config = resolve_config(config)
        self.sessions = sessions if sessions is not None else SessionRegistry()
        self.rng = rng or random.Random()

    # -------------------------------------------------------------------------
    # Loads
    # -------------------------------------------------------------------------

    async def _degrade(self, what: str, user_id: str, read: Awaitable[T], default: T) -> T:
        try:
            return await read
        except Exception as e:
            logger.warning("[signal_fallback] %s load failed user=%s: %s", what, user_id, e)
            return default

    async def load_signals(self, user_id: Optional[str]) -> UserSignals:
        """Read the four per-user signals concurrently; any failed read counts as empty."""
        if not user_id:
            return UserSignals()
        store = self.signals
        tags, creators, seen, interests = await asyncio.gather(
            self._degrade("tag_preferences", user_id, store.get_tag_preferences(user_id), []),
            self._degrade("creator_preferences", user_id, store.get_creator_preferences(user_id), []),
            self._degrade(
                "seen", user_id, store.get_seen_records(user_id, self.config.seen_lookback), []
            ),
            self._degrade("interests", user_id, store.get_interests(user_id), []),
        )
        return UserSignals.from_rows(user_id, tags, creators, seen, interests)

    async def load_pool(self, limit: Optional[int] = None) -> List[Post]:
        limit = self.config.candidate_pool_size if limit is None else limit
        try:
            return await self.posts.get_recent_posts(limit)
        except CandidatePoolUnavailable:
            raise
        except Exception as e:
            raise CandidatePoolUnavailable(f"Candidate pool load failed: {e}") from e

    async def _load_context(self, user_id: Optional[str]) -> Tuple[List[Post], UserSignals]:
        pool, signals = await asyncio.gather(self.load_pool(), self.load_signals(user_id))
        return pool, signals

    # -------------------------------------------------------------------------
    # Feed
    # -------------------------------------------------------------------------

    async def start_session(
        self,
        user_id: Optional[str],
        limit: Optional[int] = None,
        shuffle: bool = False,
    ) -> FeedPage:
        """Open a feed session and compute its first page."""
        pool, signals = await self._load_context(user_id)
        limit = self.config.initial_limit if limit is None else limit
        result = build_feed(signals, pool, limit, self.config, rng=self.rng, shuffle=shuffle)

        session = self.sessions.create(user_id)
        session.restart(result.source, result.items)
        logger.info(
            "[feed] session=%s user=%s source=%s items=%s pool=%s",
            session.session_id, user_id, result.source.value, len(result.items), len(pool),
        )
        return FeedPage(
            session_id=session.session_id,
            items=result.items,
            source=result.source,
            offset=0,
            has_more=len(pool) > len(result.items),
        )

    async def more(
        self,
        user_id: Optional[str],
        already_served: Iterable[Union[Post, str]],
        offset: int = 0,
        page_size: Optional[int] = None,
    ) -> List[Post]:
        """Ranked slice of the pool left after already_served, with fresh preferences."""
        page_size = self.config.page_size if page_size is None else page_size
        pool, signals = await self._load_context(user_id)
        return get_more_posts(signals, already_served, pool, offset, page_size, self.config)

    async def get_more(
        self,
        session_id: str,
        offset: int = 0,
        page_size: Optional[int] = None,
    ) -> FeedPage:
        """
        Next page for a session. Served posts are excluded before ranking, so
        offset 0 is the next unserved page; a positive offset skips further.
        The returned offset is where the page starts in the session stream:
        posts served so far plus the skipped offset.
        """
        session = self.sessions.get(session_id)
        page_size = self.config.page_size if page_size is None else page_size
        start = session.served_count + max(0, offset)
        items = await self.more(session.user_id, session.served_ids, offset, page_size)
        session.add_served(items)
        return FeedPage(
            session_id=session_id,
            items=items,
            source=session.source,
            offset=start,
            has_more=page_size > 0 and len(items) == page_size,
        )

    async def refresh(self, session_id: str, limit: Optional[int] = None, shuffle: bool = False) -> FeedPage:
        """Recompute the session's feed from offset 0 (scroll position is not kept)."""
        session = self.sessions.get(session_id)
        pool, signals = await self._load_context(session.user_id)
        limit = self.config.initial_limit if limit is None else limit
        result = build_feed(signals, pool, limit, self.config, rng=self.rng, shuffle=shuffle)
        session.restart(result.source, result.items)
        logger.info(
            "[feed] refresh session=%s source=%s items=%s",
            session_id, result.source.value, len(result.items),
        )
        return FeedPage(
            session_id=session_id,
            items=result.items,
            source=result.source,
            offset=0,
            has_more=len(pool) > len(result.items),
        )

    def close_session(self, session_id: str) -> None:
        self.sessions.close(session_id)

    # -------------------------------------------------------------------------
    # Seen
    # -------------------------------------------------------------------------

    async def mark_seen(
        self,
        user_id: str,
        post_id: str,
        session: Optional[FeedSession] = None,
    ) -> bool:
        """
        Idempotently record that user_id has seen post_id. Returns True only
        when a new seen record was created (and the view count bumped).
        """
        if session is not None and post_id in session.seen_ids:
            return False
        try:
            is_new = await self.signals.upsert_seen(
                SeenRecord(user_id=user_id, post_id=post_id, seen_at=utc_now())
            )
        except Exception as e:
            logger.warning("[seen] upsert failed user=%s post=%s: %s", user_id, post_id, e)
            return False
        if session is not None:
            session.seen_ids.add(post_id)
        if is_new:
            try:
                await self.posts.increment_view_count(post_id)
            except Exception as e:
                logger.warning("[seen] view count bump failed post=%s: %s", post_id, e)
        return is_new

    async def mark_seen_in_session(self, session_id: str, post_id: str) -> bool:
        session = self.sessions.get(session_id)
        if not session.user_id:
            return False
        return await self.mark_seen(session.user_id, post_id, session)

    # -------------------------------------------------------------------------
    # Interests and tags
    # -------------------------------------------------------------------------

    async def save_interests(self, user_id: str, labels: List[str]) -> List[InterestSelection]:
        """
        Replace the user's interests and seed a tag preference per interest.
        Seeding never overwrites an existing preference row.
        """
        rows = await self.signals.replace_interests(user_id, labels)
        seeded = 0
        for row in rows:
            inserted = await self.signals.insert_tag_preference_if_absent(
                TagPreference(
                    user_id=user_id,
                    tag=row.interest,
                    score=self.config.interest_seed_score,
                    updated_at=utc_now(),
                )
            )
            seeded += int(inserted)
        logger.info("[interests] user=%s interests=%s seeded=%s", user_id, len(rows), seeded)
        return rows

    async def get_interests(self, user_id: str) -> List[str]:
        return [r.interest for r in await self.signals.get_interests(user_id)]

    async def trending_tags(self, sample_size: int = 250, limit: int = 8) -> List[Tuple[str, int]]:
        posts = await self.load_pool(sample_size)
        return get_trending_tags(posts, sample_size, limit)
