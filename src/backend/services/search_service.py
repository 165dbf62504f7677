"""
Topic search: case-insensitive substring match on title or description.

No ranking or index. Results come back in store order (insertion order).
"""

from core.exceptions import InvalidQueryError
from repositories.base import EntityStore
from schemas.topic import Topic, TopicWithOptions
from services.topic_assembly import TopicAssembler

MIN_QUERY_LENGTH = 2


def normalize_query(query: str | None) -> str:
    """Trim a raw query, rejecting anything shorter than MIN_QUERY_LENGTH."""
    trimmed = (query or "").strip()
    if len(trimmed) < MIN_QUERY_LENGTH:
        raise InvalidQueryError(f"Search query must be at least {MIN_QUERY_LENGTH} characters")
    return trimmed


def topic_matches(topic: Topic, needle: str) -> bool:
    """``needle`` must already be lower-cased."""
    if needle in topic.title.lower():
        return True
    return bool(topic.description) and needle in topic.description.lower()


class SearchIndex:
    """Substring filter over the topics visible in a store session."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def search(self, query: str) -> list[TopicWithOptions]:
        needle = normalize_query(query).lower()
        topics = [topic for topic in await self.store.list_topics() if topic_matches(topic, needle)]
        return await TopicAssembler(self.store).assemble_many(topics)
