"""
Topic read models.

Joins topics with their category, options and vote count at call time.
Pure projection over an open store session: nothing here writes or caches.
"""

from typing import Optional

from repositories.base import EntityStore
from schemas.topic import UNCATEGORIZED, Category, Topic, TopicDetail, TopicWithOptions
from services.tally_service import TallyEngine


class TopicAssembler:
    """Composes TopicWithOptions / TopicDetail views."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def _category_index(self) -> dict[int, Category]:
        return {category.id: category for category in await self.store.list_categories()}

    async def assemble(
        self,
        topic: Topic,
        categories: Optional[dict[int, Category]] = None,
    ) -> TopicWithOptions:
        """Attach category (or Uncategorized), options and vote count to one topic."""
        if categories is None:
            category = None
            if topic.category_id is not None:
                category = await self.store.get_category(topic.category_id)
        else:
            category = categories.get(topic.category_id) if topic.category_id is not None else None

        return TopicWithOptions(
            **topic.model_dump(),
            category=category or UNCATEGORIZED,
            options=await self.store.list_options(topic.id),
            vote_count=await self.store.count_votes(topic.id),
        )

    async def assemble_many(self, topics: list[Topic]) -> list[TopicWithOptions]:
        """Assemble a batch, resolving categories once. Preserves input order."""
        categories = await self._category_index()
        return [await self.assemble(topic, categories) for topic in topics]

    async def list_topics(self, category_id: Optional[int] = None) -> list[TopicWithOptions]:
        """Every topic in insertion order, optionally restricted to one category."""
        return await self.assemble_many(await self.store.list_topics(category_id=category_id))

    async def get_topic(self, topic_id: int, user_id: Optional[int] = None) -> Optional[TopicDetail]:
        """
        Full view of one topic, or None if it does not exist.

        When ``user_id`` is given the caller's current vote is attached.
        """
        topic = await self.store.get_topic(topic_id)
        if topic is None:
            return None

        assembled = await self.assemble(topic)
        stats = await TallyEngine(self.store).stats_for(topic_id)
        user_vote = await self.store.find_vote(user_id, topic_id) if user_id is not None else None

        return TopicDetail(**assembled.model_dump(), stats=stats, user_vote=user_vote)
