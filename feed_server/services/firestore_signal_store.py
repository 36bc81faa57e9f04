"""
Firestore signal store: per-user subcollections under users/{user_id}.

    users/{user_id}/tag_preferences/{tag}          { tag, score, updated_at }
    users/{user_id}/creator_preferences/{creator}  { creator_id, score, updated_at }
    users/{user_id}/seen_posts/{post_id}           { post_id, seen_at }
    users/{user_id}/interactions/{auto}            { post_id, creator_id, interaction_type, created_at }
    users/{user_id}/interests/{interest}           { interest }

Used when DATA_SOURCE=firebase.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from google.api_core.exceptions import AlreadyExists
from google.cloud import firestore
from google.cloud.firestore import AsyncClient

from feed_algorithm.models import (
    CreatorPreference,
    InteractionEvent,
    InterestSelection,
    SeenRecord,
    TagPreference,
    normalize_tag,
    utc_now,
)

from .firestore_client import create_async_client, doc_id
from .signal_store import interest_rows

logger = logging.getLogger(__name__)


class FirestoreSignalStore:
    """Signal store backed by Cloud Firestore (async client)."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        users_collection: str = "users",
        client: Optional[AsyncClient] = None,
    ):
        self._db = client if client is not None else create_async_client(project_id, credentials_path)
        self._users = users_collection

    def _sub(self, user_id: str, name: str):
        return self._db.collection(self._users).document(user_id).collection(name)

    # -- tag preferences ------------------------------------------------------

    async def get_tag_preferences(self, user_id: str) -> List[TagPreference]:
        out = []
        async for doc in self._sub(user_id, "tag_preferences").stream():
            d = doc.to_dict()
            out.append(TagPreference(user_id=user_id, tag=d.get("tag", doc.id), score=d.get("score") or 0.0))
        return out

    async def get_tag_preference(self, user_id: str, tag: str) -> Optional[TagPreference]:
        tag = normalize_tag(tag)
        doc = await self._sub(user_id, "tag_preferences").document(doc_id(tag)).get()
        if not doc.exists:
            return None
        d = doc.to_dict()
        return TagPreference(user_id=user_id, tag=tag, score=d.get("score") or 0.0)

    async def upsert_tag_preference(self, row: TagPreference) -> None:
        ref = self._sub(row.user_id, "tag_preferences").document(doc_id(row.tag))
        await ref.set({"tag": row.tag, "score": row.score, "updated_at": row.updated_at})

    async def increment_tag_preference(self, user_id: str, tag: str, amount: float) -> None:
        tag = normalize_tag(tag)
        ref = self._sub(user_id, "tag_preferences").document(doc_id(tag))
        await ref.set(
            {"tag": tag, "score": firestore.Increment(amount), "updated_at": utc_now()},
            merge=True,
        )

    async def insert_tag_preference_if_absent(self, row: TagPreference) -> bool:
        ref = self._sub(row.user_id, "tag_preferences").document(doc_id(row.tag))
        try:
            await ref.create({"tag": row.tag, "score": row.score, "updated_at": row.updated_at})
        except AlreadyExists:
            return False
        return True

    # -- creator preferences --------------------------------------------------

    async def get_creator_preferences(self, user_id: str) -> List[CreatorPreference]:
        out = []
        async for doc in self._sub(user_id, "creator_preferences").stream():
            d = doc.to_dict()
            out.append(
                CreatorPreference(
                    user_id=user_id,
                    creator_id=d.get("creator_id", doc.id),
                    score=d.get("score") or 0.0,
                )
            )
        return out

    async def get_creator_preference(
        self, user_id: str, creator_id: str
    ) -> Optional[CreatorPreference]:
        doc = await self._sub(user_id, "creator_preferences").document(doc_id(creator_id)).get()
        if not doc.exists:
            return None
        d = doc.to_dict()
        return CreatorPreference(user_id=user_id, creator_id=creator_id, score=d.get("score") or 0.0)

    async def upsert_creator_preference(self, row: CreatorPreference) -> None:
        ref = self._sub(row.user_id, "creator_preferences").document(doc_id(row.creator_id))
        await ref.set({"creator_id": row.creator_id, "score": row.score, "updated_at": row.updated_at})

    async def increment_creator_preference(self, user_id: str, creator_id: str, amount: float) -> None:
        ref = self._sub(user_id, "creator_preferences").document(doc_id(creator_id))
        await ref.set(
            {"creator_id": creator_id, "score": firestore.Increment(amount), "updated_at": utc_now()},
            merge=True,
        )

    # -- seen posts -----------------------------------------------------------

    async def get_seen_records(self, user_id: str, limit: int = 1000) -> List[SeenRecord]:
        query = (
            self._sub(user_id, "seen_posts")
            .order_by("seen_at", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        out = []
        async for doc in query.stream():
            d = doc.to_dict()
            out.append(SeenRecord(user_id=user_id, post_id=d.get("post_id", doc.id), seen_at=d["seen_at"]))
        return out

    async def upsert_seen(self, row: SeenRecord) -> bool:
        ref = self._sub(row.user_id, "seen_posts").document(doc_id(row.post_id))
        data = {"post_id": row.post_id, "seen_at": row.seen_at}
        try:
            await ref.create(data)
        except AlreadyExists:
            await ref.set(data)
            return False
        return True

    # -- interactions ---------------------------------------------------------

    async def append_interaction(self, event: InteractionEvent) -> None:
        await self._sub(event.user_id, "interactions").add(
            {
                "post_id": event.post_id,
                "creator_id": event.creator_id,
                "interaction_type": event.interaction_type.value,
                "created_at": event.created_at,
            }
        )

    # -- interests ------------------------------------------------------------

    async def get_interests(self, user_id: str) -> List[InterestSelection]:
        out = []
        async for doc in self._sub(user_id, "interests").stream():
            d = doc.to_dict()
            out.append(InterestSelection(user_id=user_id, interest=d.get("interest", doc.id)))
        return out

    async def replace_interests(self, user_id: str, interests: List[str]) -> List[InterestSelection]:
        rows = interest_rows(user_id, interests)
        coll = self._sub(user_id, "interests")
        batch = self._db.batch()
        async for doc in coll.stream():
            batch.delete(doc.reference)
        for row in rows:
            batch.set(coll.document(doc_id(row.interest)), {"interest": row.interest})
        await batch.commit()
        logger.info("[signals] interests replaced user=%s count=%s", user_id, len(rows))
        return rows
