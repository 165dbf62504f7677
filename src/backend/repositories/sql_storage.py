"""
Relational storage backend (async SQLAlchemy).

Works against PostgreSQL (asyncpg) in production and SQLite (aiosqlite)
locally and in tests. Write sessions are single transactions; a unique
constraint violation raised inside one surfaces as TransactionConflictError.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from core.exceptions import TransactionConflictError
from db.session import build_engine, build_session_maker, create_tables
from models.category import Category as CategoryModel
from models.topic import Option as OptionModel
from models.topic import Topic as TopicModel
from models.user import User as UserModel
from models.vote import Vote as VoteModel
from schemas.topic import Category, CategoryCreate, Option, Topic
from schemas.user import User
from schemas.vote import Vote

logger = structlog.get_logger(__name__)


class SqlEntityStore:
    """EntityStore bound to one AsyncSession."""

    def __init__(self, db: AsyncSession, writable: bool = False):
        self.db = db
        self.writable = writable

    def _require_writable(self) -> None:
        if not self.writable:
            raise RuntimeError("Mutation attempted outside a write session")

    async def _add(self, row):
        self._require_writable()
        self.db.add(row)
        await self.db.flush()
        return row

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    # ========================================================================
    # Users
    # ========================================================================

    async def add_user(self, username: str, email: str, password_hash: str) -> User:
        row = await self._add(
            UserModel(
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=self._now(),
            )
        )
        return User.model_validate(row)

    async def get_user(self, user_id: int) -> Optional[User]:
        row = await self.db.get(UserModel, user_id)
        return User.model_validate(row) if row else None

    async def find_user_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(
            select(UserModel).where(func.lower(UserModel.username) == username.lower())
        )
        row = result.scalar_one_or_none()
        return User.model_validate(row) if row else None

    async def find_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        )
        row = result.scalar_one_or_none()
        return User.model_validate(row) if row else None

    # ========================================================================
    # Categories
    # ========================================================================

    async def add_category(self, category: CategoryCreate) -> Category:
        row = await self._add(CategoryModel(**category.model_dump()))
        return Category.model_validate(row)

    async def get_category(self, category_id: int) -> Optional[Category]:
        row = await self.db.get(CategoryModel, category_id)
        return Category.model_validate(row) if row else None

    async def list_categories(self) -> list[Category]:
        result = await self.db.execute(select(CategoryModel).order_by(CategoryModel.id))
        return [Category.model_validate(row) for row in result.scalars().all()]

    async def count_categories(self) -> int:
        result = await self.db.execute(select(func.count(CategoryModel.id)))
        return result.scalar() or 0

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
        row = await self._add(
            TopicModel(
                title=title,
                description=description,
                author_id=author_id,
                category_id=category_id,
                active=True,
                created_at=self._now(),
            )
        )
        return Topic.model_validate(row)

    async def get_topic(self, topic_id: int, for_update: bool = False) -> Optional[Topic]:
        query = select(TopicModel).where(TopicModel.id == topic_id)
        if for_update:
            # Row lock on the topic serialises concurrent ledger writes per topic
            query = query.with_for_update()
        result = await self.db.execute(query)
        row = result.scalar_one_or_none()
        return Topic.model_validate(row) if row else None

    async def list_topics(self, category_id: Optional[int] = None) -> list[Topic]:
        query = select(TopicModel)
        if category_id is not None:
            query = query.where(TopicModel.category_id == category_id)
        result = await self.db.execute(query.order_by(TopicModel.id))
        return [Topic.model_validate(row) for row in result.scalars().all()]

    async def add_option(self, topic_id: int, text: str) -> Option:
        row = await self._add(OptionModel(topic_id=topic_id, text=text))
        return Option.model_validate(row)

    async def get_option(self, option_id: int) -> Optional[Option]:
        row = await self.db.get(OptionModel, option_id)
        return Option.model_validate(row) if row else None

    async def list_options(self, topic_id: int) -> list[Option]:
        result = await self.db.execute(
            select(OptionModel).where(OptionModel.topic_id == topic_id).order_by(OptionModel.id)
        )
        return [Option.model_validate(row) for row in result.scalars().all()]

    # ========================================================================
    # Votes
    # ========================================================================

    async def add_vote(self, user_id: int, option_id: int, topic_id: int) -> Vote:
        row = await self._add(
            VoteModel(
                user_id=user_id,
                option_id=option_id,
                topic_id=topic_id,
                created_at=self._now(),
            )
        )
        return Vote.model_validate(row)

    async def delete_vote(self, vote_id: int) -> bool:
        self._require_writable()
        result = await self.db.execute(delete(VoteModel).where(VoteModel.id == vote_id))
        return (getattr(result, "rowcount", 0) or 0) > 0

    async def find_vote(self, user_id: int, topic_id: int) -> Optional[Vote]:
        result = await self.db.execute(
            select(VoteModel).where(
                VoteModel.user_id == user_id,
                VoteModel.topic_id == topic_id,
            )
        )
        row = result.scalar_one_or_none()
        return Vote.model_validate(row) if row else None

    async def list_votes(self, topic_id: int) -> list[Vote]:
        result = await self.db.execute(
            select(VoteModel).where(VoteModel.topic_id == topic_id).order_by(VoteModel.id)
        )
        return [Vote.model_validate(row) for row in result.scalars().all()]

    async def count_votes(self, topic_id: int) -> int:
        result = await self.db.execute(
            select(func.count(VoteModel.id)).where(VoteModel.topic_id == topic_id)
        )
        return result.scalar() or 0


class SqlStorage:
    """Storage backend over an async SQLAlchemy engine."""

    name = "sql"

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    async def init(self) -> None:
        """Create the engine and any missing tables."""
        self._engine = build_engine(self.database_url, echo=self.echo)
        self._session_maker = build_session_maker(self._engine)
        await create_tables(self._engine)
        logger.info("sql_storage_ready", dialect=self._engine.dialect.name)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("sql_storage_closed")
        self._engine = None
        self._session_maker = None

    @asynccontextmanager
    async def session(self, write: bool = False) -> AsyncGenerator[SqlEntityStore, None]:
        """Open a read session, or a transaction that commits on clean exit."""
        if self._session_maker is None:
            raise RuntimeError("SqlStorage.init() has not been called")

        async with self._session_maker() as db:
            if not write:
                yield SqlEntityStore(db)
                return

            try:
                async with db.begin():
                    yield SqlEntityStore(db, writable=True)
            except IntegrityError as e:
                logger.warning("sql_write_conflict", error=str(e.orig))
                raise TransactionConflictError(
                    "The change collided with a concurrent update; please retry"
                ) from e
