"""Feed result model: ordered posts plus the regime that produced them."""

from enum import Enum
from typing import List

from pydantic import BaseModel

from .post import Post


class FeedSource(str, Enum):
    PERSONALIZED = "personalized"
    INTERESTS = "interests"
    TRENDING = "trending"


class FeedResult(BaseModel):
    items: List[Post]
    source: FeedSource

    @property
    def post_ids(self) -> List[str]:
        return [p.id for p in self.items]
