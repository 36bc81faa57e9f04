"""
Post model: typed representation of a candidate post for the ranking pipeline.

Built from store/API dicts via Post.model_validate(d). Accepts both the
snake_case row names (user_id, created_at, engagement_score) and the field
names used here.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


def normalize_tag(tag: Any) -> str:
    """Lower-case and trim a tag; non-strings normalize to ''."""
    if not isinstance(tag, str):
        return ""
    return tag.strip().lower()


class Post(BaseModel):
    """
    A candidate post. Immutable from the recommender's point of view.

    tags is an ordered set of normalized tags; anything malformed becomes [].
    creator_id may be missing, in which case the post gets no creator affinity.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str
    kind: MediaKind = Field(
        default=MediaKind.IMAGE, validation_alias=AliasChoices("kind", "type")
    )
    creator_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("creator_id", "user_id", "userId")
    )
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("created_at", "timestamp")
    )
    engagement_score: float = 0.0
    viral_score: float = 0.0
    quality_score: float = 0.0
    views_count: int = 0
    likes_count: int = 0
    has_active_badge: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        out: List[str] = []
        for raw in value:
            tag = normalize_tag(raw)
            if tag and tag not in out:
                out.append(tag)
        return out

    @field_validator("engagement_score", "viral_score", "quality_score", mode="before")
    @classmethod
    def _none_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("views_count", "likes_count", mode="before")
    @classmethod
    def _none_count_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("has_active_badge", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> Any:
        return bool(value)

    @field_validator("created_at", mode="after")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def has_any_tag(self, tags) -> bool:
        """True if any of this post's tags is in the given collection of normalized tags."""
        return any(t in tags for t in self.tags)


def ensure_posts(posts: List[Union[Dict[str, Any], "Post"]]) -> List["Post"]:
    """Convert list of dicts or Posts to list of Post models for use in the pipeline."""
    return [
        Post.model_validate(p) if isinstance(p, dict) else p
        for p in posts
    ]
