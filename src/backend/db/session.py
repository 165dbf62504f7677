"""
Async SQLAlchemy engine and session factory.

Only used when STORAGE_BACKEND=sql. The engine is owned by SqlStorage,
which creates it at startup and disposes of it at shutdown.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from db.base import Base


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for a database URL."""
    engine = create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=not database_url.startswith("sqlite"),
    )

    if database_url.startswith("sqlite"):
        # SQLite leaves foreign keys off unless asked per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory; objects stay readable after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    # Register every model on Base.metadata
    import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
