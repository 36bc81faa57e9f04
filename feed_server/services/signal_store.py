"""
Signal Store abstraction.

Per-user tag preferences, creator preferences, seen records, interaction
events and interest selections. Implementations: in-memory (tests, local
runs) and Firestore (production). Swap via DATA_SOURCE.

Every method is async so the recommendation service can issue the
independent reads of one feed computation concurrently.
"""

from typing import Dict, List, Optional, Protocol, Tuple

from feed_algorithm.models import (
    CreatorPreference,
    InteractionEvent,
    InterestSelection,
    SeenRecord,
    TagPreference,
    normalize_tag,
    utc_now,
)


class SignalStore(Protocol):
    """Protocol for per-user signal tables. Reads are scoped by user id."""

    async def get_tag_preferences(self, user_id: str) -> List[TagPreference]:
        ...

    async def get_tag_preference(self, user_id: str, tag: str) -> Optional[TagPreference]:
        ...

    async def upsert_tag_preference(self, row: TagPreference) -> None:
        """Insert or replace the (user_id, tag) row."""
        ...

    async def increment_tag_preference(self, user_id: str, tag: str, amount: float) -> None:
        """Atomically add amount to the (user_id, tag) score, creating the row at 0."""
        ...

    async def insert_tag_preference_if_absent(self, row: TagPreference) -> bool:
        """Insert the row unless (user_id, tag) exists. Returns True if inserted."""
        ...

    async def get_creator_preferences(self, user_id: str) -> List[CreatorPreference]:
        ...

    async def get_creator_preference(
        self, user_id: str, creator_id: str
    ) -> Optional[CreatorPreference]:
        ...

    async def upsert_creator_preference(self, row: CreatorPreference) -> None:
        """Insert or replace the (user_id, creator_id) row."""
        ...

    async def increment_creator_preference(self, user_id: str, creator_id: str, amount: float) -> None:
        """Atomically add amount to the (user_id, creator_id) score, creating the row at 0."""
        ...

    async def get_seen_records(self, user_id: str, limit: int = 1000) -> List[SeenRecord]:
        """Most recent seen records first, at most limit."""
        ...

    async def upsert_seen(self, row: SeenRecord) -> bool:
        """Insert or refresh the (user_id, post_id) row. Returns True if it was new."""
        ...

    async def append_interaction(self, event: InteractionEvent) -> None:
        ...

    async def get_interests(self, user_id: str) -> List[InterestSelection]:
        ...

    async def replace_interests(self, user_id: str, interests: List[str]) -> List[InterestSelection]:
        """Replace the user's interest set with the normalized, de-duplicated labels."""
        ...


def interest_rows(user_id: str, interests: List[str]) -> List[InterestSelection]:
    """Normalized, de-duplicated, non-empty interest rows in input order."""
    rows: List[InterestSelection] = []
    seen = set()
    for label in interests:
        tag = normalize_tag(label)
        if tag and tag not in seen:
            seen.add(tag)
            rows.append(InterestSelection(user_id=user_id, interest=tag))
    return rows


class InMemorySignalStore:
    """
    Signal store held in process memory (no persistence).
    Used for local testing, the test suite, and DATA_SOURCE=memory.
    """

    def __init__(self):
        self._tags: Dict[Tuple[str, str], TagPreference] = {}
        self._creators: Dict[Tuple[str, str], CreatorPreference] = {}
        self._seen: Dict[Tuple[str, str], SeenRecord] = {}
        self._events: List[InteractionEvent] = []
        self._interests: Dict[str, List[InterestSelection]] = {}

    async def get_tag_preferences(self, user_id: str) -> List[TagPreference]:
        return [r for (uid, _), r in self._tags.items() if uid == user_id]

    async def get_tag_preference(self, user_id: str, tag: str) -> Optional[TagPreference]:
        return self._tags.get((user_id, normalize_tag(tag)))

    async def upsert_tag_preference(self, row: TagPreference) -> None:
        self._tags[(row.user_id, row.tag)] = row

    async def increment_tag_preference(self, user_id: str, tag: str, amount: float) -> None:
        tag = normalize_tag(tag)
        current = self._tags.get((user_id, tag))
        score = (current.score if current else 0.0) + amount
        self._tags[(user_id, tag)] = TagPreference(user_id=user_id, tag=tag, score=score, updated_at=utc_now())

    async def insert_tag_preference_if_absent(self, row: TagPreference) -> bool:
        key = (row.user_id, row.tag)
        if key in self._tags:
            return False
        self._tags[key] = row
        return True

    async def get_creator_preferences(self, user_id: str) -> List[CreatorPreference]:
        return [r for (uid, _), r in self._creators.items() if uid == user_id]

    async def get_creator_preference(
        self, user_id: str, creator_id: str
    ) -> Optional[CreatorPreference]:
        return self._creators.get((user_id, creator_id))

    async def upsert_creator_preference(self, row: CreatorPreference) -> None:
        self._creators[(row.user_id, row.creator_id)] = row

    async def increment_creator_preference(self, user_id: str, creator_id: str, amount: float) -> None:
        current = self._creators.get((user_id, creator_id))
        score = (current.score if current else 0.0) + amount
        self._creators[(user_id, creator_id)] = CreatorPreference(
            user_id=user_id, creator_id=creator_id, score=score, updated_at=utc_now()
        )

    async def get_seen_records(self, user_id: str, limit: int = 1000) -> List[SeenRecord]:
        rows = [r for (uid, _), r in self._seen.items() if uid == user_id]
        rows.sort(key=lambda r: r.seen_at, reverse=True)
        return rows[:limit]

    async def upsert_seen(self, row: SeenRecord) -> bool:
        key = (row.user_id, row.post_id)
        is_new = key not in self._seen
        self._seen[key] = row
        return is_new

    async def append_interaction(self, event: InteractionEvent) -> None:
        self._events.append(event)

    async def get_interests(self, user_id: str) -> List[InterestSelection]:
        return list(self._interests.get(user_id, []))

    async def replace_interests(self, user_id: str, interests: List[str]) -> List[InterestSelection]:
        rows = interest_rows(user_id, interests)
        self._interests[user_id] = rows
        return list(rows)

    def interactions_for(self, user_id: str) -> List[InteractionEvent]:
        """Logged events for one user, oldest first."""
        return [e for e in self._events if e.user_id == user_id]

    def seen_count(self, user_id: str) -> int:
        return sum(1 for uid, _ in self._seen if uid == user_id)
