"""
Storage port shared by the in-memory and relational backends.

Usage:
    async with storage.session() as store:          # read-only snapshot
        topic = await store.get_topic(topic_id)

    async with storage.session(write=True) as store:  # one atomic unit
        topic = await store.add_topic(...)
        await store.add_option(topic.id, "Yes")

A write session commits when the block exits normally and discards every
change if it raises. Primitives here never enforce business rules; missing
rows come back as None.
"""

from contextlib import AbstractAsyncContextManager
from typing import Optional, Protocol, runtime_checkable

from schemas.topic import Category, CategoryCreate, Option, Topic
from schemas.user import User
from schemas.vote import Vote


@runtime_checkable
class EntityStore(Protocol):
    """CRUD primitives over users, categories, topics, options and votes."""

    # Users
    async def add_user(self, username: str, email: str, password_hash: str) -> User: ...
    async def get_user(self, user_id: int) -> Optional[User]: ...
    async def find_user_by_username(self, username: str) -> Optional[User]: ...
    async def find_user_by_email(self, email: str) -> Optional[User]: ...

    # Categories
    async def add_category(self, category: CategoryCreate) -> Category: ...
    async def get_category(self, category_id: int) -> Optional[Category]: ...
    async def list_categories(self) -> list[Category]: ...
    async def count_categories(self) -> int: ...

    # Topics and options
    async def add_topic(
        self,
        title: str,
        description: Optional[str],
        author_id: int,
        category_id: Optional[int],
    ) -> Topic: ...
    async def get_topic(self, topic_id: int, for_update: bool = False) -> Optional[Topic]: ...
    async def list_topics(self, category_id: Optional[int] = None) -> list[Topic]: ...
    async def add_option(self, topic_id: int, text: str) -> Option: ...
    async def get_option(self, option_id: int) -> Optional[Option]: ...
    async def list_options(self, topic_id: int) -> list[Option]: ...

    # Votes
    async def add_vote(self, user_id: int, option_id: int, topic_id: int) -> Vote: ...
    async def delete_vote(self, vote_id: int) -> bool: ...
    async def find_vote(self, user_id: int, topic_id: int) -> Optional[Vote]: ...
    async def list_votes(self, topic_id: int) -> list[Vote]: ...
    async def count_votes(self, topic_id: int) -> int: ...


@runtime_checkable
class Storage(Protocol):
    """A storage backend: lifecycle plus session factory."""

    name: str

    async def init(self) -> None: ...
    async def close(self) -> None: ...
    def session(self, write: bool = False) -> AbstractAsyncContextManager[EntityStore]: ...
