"""
Interaction Recorder: turn one user action into preference score updates.

Three independent writes per interaction, issued concurrently:
  1. append the interaction event
  2. atomically add the weight to every (user, tag) preference
  3. atomically add the weight to the (user, creator) preference

Writes are best effort. A failure in one is logged and does not undo or
block the others; record() itself never raises for store errors.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Union

from feed_algorithm import interaction_weight, normalized_tags
from feed_algorithm.models import (
    InteractionEvent,
    InteractionType,
    RecommendationConfig,
    resolve_config,
)

from .signal_store import SignalStore

logger = logging.getLogger(__name__)


class InteractionRecorder:
    def __init__(self, store: SignalStore, config: Optional[RecommendationConfig] = None):
        self.store = store
        self.config = resolve_config(config)

    async def record(
        self,
        user_id: str,
        post_id: str,
        creator_id: Optional[str],
        tags: Optional[Iterable[str]],
        interaction_type: Union[InteractionType, str],
    ) -> List[BaseException]:
        """
        Record one interaction. Returns the exceptions of the writes that
        failed (already logged); an empty list means every write landed.
        """
        interaction_type = InteractionType(interaction_type)
        weight = interaction_weight(interaction_type, self.config)
        event = InteractionEvent(
            user_id=user_id,
            post_id=post_id,
            creator_id=creator_id or None,
            interaction_type=interaction_type,
        )

        writes = [
            ("event", self.store.append_interaction(event)),
            ("tags", self._accumulate_tags(user_id, normalized_tags(tags), weight)),
        ]
        if creator_id:
            writes.append(("creator", self._accumulate_creator(user_id, creator_id, weight)))

        results = await asyncio.gather(*(w for _, w in writes), return_exceptions=True)
        failures: List[BaseException] = []
        for (name, _), result in zip(writes, results):
            if isinstance(result, Exception):
                logger.warning(
                    "[recorder] %s write failed user=%s post=%s type=%s: %s",
                    name, user_id, post_id, interaction_type.value, result,
                )
                failures.append(result)
        logger.debug(
            "[recorder] user=%s post=%s type=%s weight=%s failed=%s",
            user_id, post_id, interaction_type.value, weight, len(failures),
        )
        return failures

    async def _accumulate_tags(self, user_id: str, tags: List[str], weight: float) -> None:
        for tag in tags:
            await self.store.increment_tag_preference(user_id, tag, weight)

    async def _accumulate_creator(self, user_id: str, creator_id: str, weight: float) -> None:
        await self.store.increment_creator_preference(user_id, creator_id, weight)
