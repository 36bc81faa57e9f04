"""Feed session request/response models."""

from typing import List, Optional

from pydantic import BaseModel, Field

from feed_algorithm.models import FeedSource

from ..services import FeedPage
from .common import PostCard, to_post_card


class CreateFeedRequest(BaseModel):
    user_id: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1, le=200)
    shuffle: bool = False


class LoadMoreRequest(BaseModel):
    # Extra ranked posts to skip past the already-served ones.
    offset: int = Field(default=0, ge=0)
    page_size: Optional[int] = Field(default=None, ge=1, le=100)


class RefreshRequest(BaseModel):
    limit: Optional[int] = Field(default=None, ge=1, le=200)
    shuffle: bool = False


class MarkSeenRequest(BaseModel):
    post_id: str


class MarkSeenResponse(BaseModel):
    post_id: str
    newly_seen: bool


class FeedResponse(BaseModel):
    session_id: str
    source: Optional[FeedSource] = None
    offset: int
    has_more: bool
    posts: List[PostCard]


def to_feed_response(page: FeedPage) -> FeedResponse:
    return FeedResponse(
        session_id=page.session_id,
        source=page.source,
        offset=page.offset,
        has_more=page.has_more,
        posts=[to_post_card(p) for p in page.items],
    )
