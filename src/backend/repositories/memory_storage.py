"""
In-memory storage backend.

Keeps one dict per entity type, keyed by monotonically issued integer ids.
Write sessions are serialised on a single asyncio.Lock and stage their
changes in an overlay that is applied in one synchronous step on commit,
so a concurrent reader sees either none or all of a session's writes.
"""

import asyncio
import itertools
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional, TypeVar

import structlog
from pydantic import BaseModel

from schemas.topic import Category, CategoryCreate, Option, Topic
from schemas.user import User
from schemas.vote import Vote

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

ENTITY_KINDS = ("users", "categories", "topics", "options", "votes")


class MemoryState:
    """The committed tables and their id counters."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[int, BaseModel]] = {kind: {} for kind in ENTITY_KINDS}
        self.counters = {kind: itertools.count(1) for kind in ENTITY_KINDS}

    def next_id(self, kind: str) -> int:
        return next(self.counters[kind])


class MemoryEntityStore:
    """EntityStore over MemoryState. Writable only inside a write session."""

    def __init__(self, state: MemoryState, writable: bool = False):
        self.state = state
        self.writable = writable
        self._pending: dict[str, dict[int, BaseModel]] = {kind: {} for kind in ENTITY_KINDS}
        self._deleted: dict[str, set[int]] = {kind: set() for kind in ENTITY_KINDS}

    # ========================================================================
    # Overlay helpers
    # ========================================================================

    def _rows(self, kind: str) -> list:
        """All visible rows of a kind, in insertion (id) order."""
        base = self.state.tables[kind]
        if not self.writable:
            return list(base.values())
        # Pending ids are always newer than committed ones, so order holds
        merged = {**base, **self._pending[kind]}
        deleted = self._deleted[kind]
        return [row for row_id, row in merged.items() if row_id not in deleted]

    def _get(self, kind: str, row_id: int) -> Optional[BaseModel]:
        if self.writable:
            if row_id in self._deleted[kind]:
                return None
            if row_id in self._pending[kind]:
                return self._pending[kind][row_id]
        return self.state.tables[kind].get(row_id)

    def _insert(self, kind: str, record: RecordT) -> RecordT:
        self._require_writable()
        self._pending[kind][record.id] = record  # type: ignore[attr-defined]
        return record

    def _delete(self, kind: str, row_id: int) -> bool:
        self._require_writable()
        if self._get(kind, row_id) is None:
            return False
        if row_id in self._pending[kind]:
            del self._pending[kind][row_id]
        else:
            self._deleted[kind].add(row_id)
        return True

    def _require_writable(self) -> None:
        if not self.writable:
            raise RuntimeError("Mutation attempted outside a write session")

    def commit(self) -> None:
        """Apply the overlay to the committed tables. Never awaits."""
        for kind in ENTITY_KINDS:
            table = self.state.tables[kind]
            for row_id in self._deleted[kind]:
                table.pop(row_id, None)
            table.update(self._pending[kind])
        self.discard()

    def discard(self) -> None:
        for kind in ENTITY_KINDS:
            self._pending[kind].clear()
            self._deleted[kind].clear()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    # ========================================================================
    # Users
    # ========================================================================

    async def add_user(self, username: str, email: str, password_hash: str) -> User:
        user = User(
            id=self.state.next_id("users"),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=self._now(),
        )
        return self._insert("users", user)

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._get("users", user_id)  # type: ignore[return-value]

    async def find_user_by_username(self, username: str) -> Optional[User]:
        wanted = username.lower()
        return next((u for u in self._rows("users") if u.username.lower() == wanted), None)

    async def find_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        return next((u for u in self._rows("users") if u.email.lower() == wanted), None)

    # ========================================================================
    # Categories
    # ========================================================================

    async def add_category(self, category: CategoryCreate) -> Category:
        record = Category(id=self.state.next_id("categories"), **category.model_dump())
        return self._insert("categories", record)

    async def get_category(self, category_id: int) -> Optional[Category]:
        return self._get("categories", category_id)  # type: ignore[return-value]

    async def list_categories(self) -> list[Category]:
        return self._rows("categories")

    async def count_categories(self) -> int:
        return len(self._rows("categories"))

    # ========================================================================
    # Topics and options
    # ========================================================================

    async def add_topic(
        self,
        title: str,
        description: Optional[str],
        author_id: int,
        category_id: Optional[int],
    ) -> Topic:
        topic = Topic(
            id=self.state.next_id("topics"),
            title=title,
            description=description,
            author_id=author_id,
            category_id=category_id,
            created_at=self._now(),
            active=True,
        )
        return self._insert("topics", topic)

    async def get_topic(self, topic_id: int, for_update: bool = False) -> Optional[Topic]:
        # for_update is implied: write sessions already hold the global lock
        return self._get("topics", topic_id)  # type: ignore[return-value]

    async def list_topics(self, category_id: Optional[int] = None) -> list[Topic]:
        topics = self._rows("topics")
        if category_id is None:
            return topics
        return [t for t in topics if t.category_id == category_id]

    async def add_option(self, topic_id: int, text: str) -> Option:
        option = Option(id=self.state.next_id("options"), text=text, topic_id=topic_id)
        return self._insert("options", option)

    async def get_option(self, option_id: int) -> Optional[Option]:
        return self._get("options", option_id)  # type: ignore[return-value]

    async def list_options(self, topic_id: int) -> list[Option]:
        return [o for o in self._rows("options") if o.topic_id == topic_id]

    # ========================================================================
    # Votes
    # ========================================================================

    async def add_vote(self, user_id: int, option_id: int, topic_id: int) -> Vote:
        vote = Vote(
            id=self.state.next_id("votes"),
            user_id=user_id,
            option_id=option_id,
            topic_id=topic_id,
            created_at=self._now(),
        )
        return self._insert("votes", vote)

    async def delete_vote(self, vote_id: int) -> bool:
        return self._delete("votes", vote_id)

    async def find_vote(self, user_id: int, topic_id: int) -> Optional[Vote]:
        return next(
            (v for v in self._rows("votes") if v.user_id == user_id and v.topic_id == topic_id),
            None,
        )

    async def list_votes(self, topic_id: int) -> list[Vote]:
        return [v for v in self._rows("votes") if v.topic_id == topic_id]

    async def count_votes(self, topic_id: int) -> int:
        return sum(1 for v in self._rows("votes") if v.topic_id == topic_id)


class MemoryStorage:
    """
    Process-local storage backend.

    All write sessions share one lock, so the vote ledger's
    read-modify-write sequence is serialised globally.
    """

    name = "memory"

    def __init__(self) -> None:
        self.state = MemoryState()
        self._write_lock = asyncio.Lock()

    async def init(self) -> None:
        logger.info("memory_storage_ready")

    async def close(self) -> None:
        logger.info("memory_storage_closed")

    @asynccontextmanager
    async def session(self, write: bool = False) -> AsyncGenerator[MemoryEntityStore, None]:
        """Open a read view, or an atomic write unit holding the write lock."""
        if not write:
            yield MemoryEntityStore(self.state)
            return

        async with self._write_lock:
            store = MemoryEntityStore(self.state, writable=True)
            try:
                yield store
            except BaseException:
                store.discard()
                raise
            store.commit()
