"""User interest and tag models."""

from typing import List

from pydantic import BaseModel


class InterestsRequest(BaseModel):
    interests: List[str]


class InterestsResponse(BaseModel):
    user_id: str
    interests: List[str]


class AvailableInterestsResponse(BaseModel):
    interests: List[str]


class TrendingTag(BaseModel):
    tag: str
    count: int


class TrendingTagsResponse(BaseModel):
    tags: List[TrendingTag]
