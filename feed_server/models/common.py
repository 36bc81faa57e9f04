"""Common Pydantic models shared across routes."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from feed_algorithm.models import Post


class PostCard(BaseModel):
    id: str
    kind: str
    creator_id: Optional[str] = None
    tags: List[str] = []
    created_at: Optional[datetime] = None
    engagement_score: float = 0.0
    viral_score: float = 0.0
    quality_score: float = 0.0
    views_count: int = 0
    likes_count: int = 0
    has_active_badge: bool = False


def to_post_card(post: Post) -> PostCard:
    return PostCard(
        id=post.id,
        kind=post.kind.value,
        creator_id=post.creator_id,
        tags=list(post.tags),
        created_at=post.created_at,
        engagement_score=post.engagement_score,
        viral_score=post.viral_score,
        quality_score=post.quality_score,
        views_count=post.views_count,
        likes_count=post.likes_count,
        has_active_badge=post.has_active_badge,
    )
