"""
Topic operations used by the API: listing, lookup, search and creation.

Reads open a fresh session per call, so results reflect whatever was
committed at that moment. Creation writes the topic and all of its options
in one write session; no reader can see a topic without its options.
"""

from typing import Optional, Sequence

import structlog

from core.exceptions import NotFoundError, ValidationError
from repositories.base import Storage
from schemas.topic import (
    DESCRIPTION_MAX_LENGTH,
    MAX_OPTIONS,
    MIN_OPTIONS,
    OPTION_TEXT_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    UNCATEGORIZED,
    TopicDetail,
    TopicWithOptions,
)
from services.search_service import SearchIndex, normalize_query
from services.topic_assembly import TopicAssembler

logger = structlog.get_logger(__name__)


def clean_option_texts(option_texts: Sequence[str]) -> list[str]:
    """
    Validate submitted option texts and drop the blank ones.

    Between MIN_OPTIONS and MAX_OPTIONS texts may be submitted; after blanks
    are removed at least MIN_OPTIONS must remain.
    """
    if not MIN_OPTIONS <= len(option_texts) <= MAX_OPTIONS:
        raise ValidationError(f"A topic needs between {MIN_OPTIONS} and {MAX_OPTIONS} options")

    kept = [text.strip() for text in option_texts if text and text.strip()]
    if len(kept) < MIN_OPTIONS:
        raise ValidationError(f"At least {MIN_OPTIONS} options must have text")

    too_long = [text for text in kept if len(text) > OPTION_TEXT_MAX_LENGTH]
    if too_long:
        raise ValidationError(f"Options must be at most {OPTION_TEXT_MAX_LENGTH} characters")

    return kept


def clean_title(title: str) -> str:
    title = (title or "").strip()
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters")
    return title


def clean_description(description: Optional[str]) -> Optional[str]:
    description = (description or "").strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")
    return description or None


class TopicService:
    """Topic reads and creation on top of a storage backend."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_topics(self) -> list[TopicWithOptions]:
        async with self.storage.session() as store:
            return await TopicAssembler(store).list_topics()

    async def topics_by_category(self, category_id: int) -> list[TopicWithOptions]:
        """Topics in one category. Raises NotFoundError for an unknown category."""
        async with self.storage.session() as store:
            if await store.get_category(category_id) is None:
                raise NotFoundError("Category not found")
            return await TopicAssembler(store).list_topics(category_id=category_id)

    async def get_topic(self, topic_id: int, user_id: Optional[int] = None) -> TopicDetail:
        """Topic with stats and, for an authenticated caller, their current vote."""
        async with self.storage.session() as store:
            detail = await TopicAssembler(store).get_topic(topic_id, user_id=user_id)
        if detail is None:
            raise NotFoundError("Topic not found")
        return detail

    async def search(self, query: str) -> list[TopicWithOptions]:
        needle = normalize_query(query)
        async with self.storage.session() as store:
            return await SearchIndex(store).search(needle)

    async def create_topic(
        self,
        author_id: int,
        title: str,
        description: Optional[str],
        category_id: Optional[int],
        option_texts: Sequence[str],
    ) -> TopicWithOptions:
        """
        Create a topic together with its options.

        Raises:
            ValidationError: title, description or option rules violated.
            NotFoundError: author or category does not exist.
        """
        title = clean_title(title)
        description = clean_description(description)
        texts = clean_option_texts(option_texts)

        async with self.storage.session(write=True) as store:
            if await store.get_user(author_id) is None:
                raise NotFoundError("User not found")

            category = None
            if category_id is not None:
                category = await store.get_category(category_id)
                if category is None:
                    raise NotFoundError("Category not found")

            topic = await store.add_topic(
                title=title,
                description=description,
                author_id=author_id,
                category_id=category_id,
            )
            options = [await store.add_option(topic.id, text) for text in texts]

        logger.info("topic_created", topic_id=topic.id, author_id=author_id, options=len(options))
        return TopicWithOptions(
            **topic.model_dump(),
            category=category or UNCATEGORIZED,
            options=options,
            vote_count=0,
        )
