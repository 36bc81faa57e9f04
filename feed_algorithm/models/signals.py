"""
Signal models: per-user preference, seen, interest, and interaction rows.

One model per Signal Store table with explicit fields, plus UserSignals,
the in-memory aggregate the ranking stages read.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .post import normalize_tag


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InteractionType(str, Enum):
    LIKE = "like"
    COMMENT = "comment"
    TIP = "tip"
    PROFILE_CHECK = "profile_check"


class TagPreference(BaseModel):
    """(user, tag) -> accumulated score. Tag is stored normalized."""

    user_id: str
    tag: str
    score: float = 0.0
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("tag", mode="before")
    @classmethod
    def _normalize(cls, value):
        return normalize_tag(value)


class CreatorPreference(BaseModel):
    """(user, creator) -> accumulated score."""

    user_id: str
    creator_id: str
    score: float = 0.0
    updated_at: datetime = Field(default_factory=utc_now)


class SeenRecord(BaseModel):
    user_id: str
    post_id: str
    seen_at: datetime = Field(default_factory=utc_now)


class InteractionEvent(BaseModel):
    """Append-only interaction log entry."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    post_id: str
    creator_id: Optional[str] = None
    interaction_type: InteractionType
    created_at: datetime = Field(default_factory=utc_now)


class InterestSelection(BaseModel):
    user_id: str
    interest: str

    @field_validator("interest", mode="before")
    @classmethod
    def _normalize(cls, value):
        return normalize_tag(value)


class UserSignals(BaseModel):
    """
    Everything the ranking stages know about one user for one computation.

    Built fresh per request; never shared between users.
    """

    user_id: Optional[str] = None
    tag_preferences: Dict[str, float] = Field(default_factory=dict)
    creator_preferences: Dict[str, float] = Field(default_factory=dict)
    seen_post_ids: FrozenSet[str] = frozenset()
    interests: List[str] = Field(default_factory=list)

    @field_validator("tag_preferences", mode="before")
    @classmethod
    def _normalize_tag_keys(cls, value):
        if not isinstance(value, dict):
            return {}
        out: Dict[str, float] = {}
        for tag, score in value.items():
            key = normalize_tag(tag)
            if key:
                out[key] = out.get(key, 0.0) + (score or 0.0)
        return out

    @field_validator("interests", mode="before")
    @classmethod
    def _normalize_interests(cls, value):
        if not isinstance(value, (list, tuple, set, frozenset)):
            return []
        out: List[str] = []
        for raw in value:
            tag = normalize_tag(raw)
            if tag and tag not in out:
                out.append(tag)
        return out

    @property
    def has_preferences(self) -> bool:
        return len(self.tag_preferences) > 0

    @property
    def has_interests(self) -> bool:
        return len(self.interests) > 0

    @classmethod
    def from_rows(
        cls,
        user_id: Optional[str],
        tag_rows: Iterable[TagPreference] = (),
        creator_rows: Iterable[CreatorPreference] = (),
        seen_rows: Iterable[SeenRecord] = (),
        interest_rows: Iterable[InterestSelection] = (),
    ) -> "UserSignals":
        """Aggregate Signal Store rows into the ranking view."""
        return cls(
            user_id=user_id,
            tag_preferences={r.tag: r.score for r in tag_rows},
            creator_preferences={r.creator_id: r.score for r in creator_rows},
            seen_post_ids=frozenset(r.post_id for r in seen_rows),
            interests=[r.interest for r in interest_rows],
        )
