"""
Tests for topic read-model assembly.
"""

import pytest

from schemas.topic import CategoryCreate
from services.topic_assembly import TopicAssembler


@pytest.mark.unit
class TestTopicAssembler:
    """Category resolution and joined fields."""

    async def test_missing_category_falls_back(self, storage, user) -> None:
        """A category id that no longer resolves shows as Uncategorized."""
        async with storage.session(write=True) as store:
            topic = await store.add_topic("Dangling category", None, user.id, 77)
            await store.add_option(topic.id, "Yes")
            await store.add_option(topic.id, "No")

        async with storage.session() as store:
            assembled = await TopicAssembler(store).assemble(topic)
            [listed] = await TopicAssembler(store).list_topics()

        assert assembled.category.name == "Uncategorized"
        assert listed.category.id == 0
        assert [o.text for o in assembled.options] == ["Yes", "No"]

    async def test_resolves_category(self, storage, user) -> None:
        async with storage.session(write=True) as store:
            category = await store.add_category(CategoryCreate(name="Health", icon="activity"))
            topic = await store.add_topic("Four day week?", None, user.id, category.id)

        async with storage.session() as store:
            assembled = await TopicAssembler(store).assemble(topic)

        assert assembled.category == category
        assert assembled.vote_count == 0

    async def test_get_topic_unknown(self, storage) -> None:
        async with storage.session() as store:
            assert await TopicAssembler(store).get_topic(999) is None

    async def test_get_topic_without_votes(self, storage, topic) -> None:
        async with storage.session() as store:
            detail = await TopicAssembler(store).get_topic(topic.id, user_id=topic.author_id)

        assert detail.user_vote is None
        assert [s.vote_count for s in detail.stats] == [0, 0]
        assert [s.option_id for s in detail.stats] == [o.id for o in topic.options]
