"""
Post Provider abstraction.

Supplies the candidate pool (most recent posts, newest first) and the view
counter bump on first view. Implementations: in-memory, JSON file, and
Firestore. Swap via DATA_SOURCE.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore

from feed_algorithm.models import Post, ensure_posts

from .firestore_client import create_async_client, doc_id

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class CandidatePoolUnavailable(Exception):
    """The post catalog could not be read; no feed can be built."""


class PostProvider(Protocol):
    """Protocol for the post catalog the recommender ranks."""

    async def get_recent_posts(self, limit: int) -> List[Post]:
        """Up to limit posts, newest first."""
        ...

    async def increment_view_count(self, post_id: str) -> None:
        ...


def newest_first(posts: List[Post]) -> List[Post]:
    return sorted(posts, key=lambda p: p.created_at or _EPOCH, reverse=True)


class InMemoryPostProvider:
    """
    Post provider over a list held in memory.
    Used for tests and DATA_SOURCE=memory.
    """

    def __init__(self, posts: Optional[List[Union[Dict[str, Any], Post]]] = None):
        self._posts: Dict[str, Post] = {p.id: p for p in ensure_posts(posts or [])}

    def add(self, post: Union[Dict[str, Any], Post]) -> Post:
        p = ensure_posts([post])[0]
        self._posts[p.id] = p
        return p

    def get(self, post_id: str) -> Optional[Post]:
        return self._posts.get(post_id)

    async def get_recent_posts(self, limit: int) -> List[Post]:
        return newest_first(list(self._posts.values()))[:limit]

    async def increment_view_count(self, post_id: str) -> None:
        post = self._posts.get(post_id)
        if post is None:
            return
        self._posts[post_id] = post.model_copy(update={"views_count": post.views_count + 1})


class JsonPostProvider(InMemoryPostProvider):
    """
    Post provider loaded from a JSON file: either a list of posts or an
    object with a "posts" list. View counts are kept in memory only.
    """

    def __init__(self, posts_path: Union[Path, str]):
        self.path = Path(posts_path)
        super().__init__(self._load(self.path))
        logger.info("[posts] loaded %s posts from %s", len(self._posts), self.path)

    @staticmethod
    def _load(path: Path) -> List[Dict[str, Any]]:
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CandidatePoolUnavailable(f"Cannot read posts file {path}: {e}") from e
        if isinstance(data, dict):
            data = data.get("posts", [])
        if not isinstance(data, list):
            raise CandidatePoolUnavailable(f"Posts file {path} must hold a list of posts")
        return data


class FirestorePostProvider:
    """Post provider backed by the Firestore posts collection."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        posts_collection: str = "posts",
    ):
        self._db = create_async_client(project_id, credentials_path)
        self._collection = posts_collection

    async def get_recent_posts(self, limit: int) -> List[Post]:
        query = (
            self._db.collection(self._collection)
            .order_by("created_at", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        posts: List[Post] = []
        try:
            async for doc in query.stream():
                d = doc.to_dict() or {}
                d.setdefault("id", doc.id)
                posts.append(Post.model_validate(d))
        except GoogleAPICallError as e:
            raise CandidatePoolUnavailable(f"Firestore posts query failed: {e}") from e
        return posts

    async def increment_view_count(self, post_id: str) -> None:
        ref = self._db.collection(self._collection).document(doc_id(post_id))
        await ref.update({"views_count": firestore.Increment(1)})
