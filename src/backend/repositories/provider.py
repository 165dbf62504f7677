"""
Storage provider for dependency injection.

The backend is chosen once from settings.STORAGE_BACKEND when the
application starts and is never swapped while the process runs.

Usage:
    from repositories.provider import get_storage

    # In FastAPI dependencies:
    async def some_endpoint(storage: Storage = Depends(get_storage)):
        async with storage.session() as store:
            ...
"""

from typing import Optional

import structlog

from core.config import Settings
from repositories.base import Storage

logger = structlog.get_logger(__name__)

_storage: Optional[Storage] = None


def create_storage(config: Settings) -> Storage:
    """Build the storage backend named by the configuration."""
    if config.STORAGE_BACKEND == "sql":
        from repositories.sql_storage import SqlStorage

        return SqlStorage(config.DATABASE_URL, echo=config.DATABASE_ECHO)

    from repositories.memory_storage import MemoryStorage

    return MemoryStorage()


async def init_storage(config: Settings) -> Storage:
    """Create and initialise the process-wide storage backend."""
    global _storage
    if _storage is not None:
        raise RuntimeError(f"Storage already initialised ({_storage.name})")
    storage = create_storage(config)
    await storage.init()
    _storage = storage
    logger.info("storage_initialised", backend=storage.name)
    return storage


async def close_storage() -> None:
    """Close and forget the process-wide storage backend."""
    global _storage
    if _storage is None:
        return
    await _storage.close()
    _storage = None


def set_storage(storage: Optional[Storage]) -> None:
    """Install a storage backend directly (used by tests)."""
    global _storage
    _storage = storage


def get_storage() -> Storage:
    """FastAPI dependency returning the active storage backend."""
    if _storage is None:
        raise RuntimeError("Storage has not been initialised")
    return _storage
