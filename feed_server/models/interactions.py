"""Interaction recording models."""

from typing import List, Optional

from pydantic import BaseModel

from feed_algorithm.models import InteractionType


class InteractionRequest(BaseModel):
    user_id: str
    post_id: str
    creator_id: Optional[str] = None
    tags: List[str] = []
    interaction_type: InteractionType


class InteractionAccepted(BaseModel):
    status: str = "accepted"
    post_id: str
    interaction_type: InteractionType
