"""Request/response models for the HTTP API."""

from .common import PostCard, to_post_card
from .feed import (
    CreateFeedRequest,
    FeedResponse,
    LoadMoreRequest,
    MarkSeenRequest,
    MarkSeenResponse,
    RefreshRequest,
    to_feed_response,
)
from .interactions import InteractionAccepted, InteractionRequest
from .users import (
    AvailableInterestsResponse,
    InterestsRequest,
    InterestsResponse,
    TrendingTag,
    TrendingTagsResponse,
)

__all__ = [
    "AvailableInterestsResponse",
    "CreateFeedRequest",
    "FeedResponse",
    "InteractionAccepted",
    "InteractionRequest",
    "InterestsRequest",
    "InterestsResponse",
    "LoadMoreRequest",
    "MarkSeenRequest",
    "MarkSeenResponse",
    "PostCard",
    "RefreshRequest",
    "TrendingTag",
    "TrendingTagsResponse",
    "to_feed_response",
    "to_post_card",
]
