"""Storage backends and the port they share."""

from repositories.base import EntityStore, Storage
from repositories.memory_storage import MemoryStorage
from repositories.sql_storage import SqlStorage

__all__ = [
    "EntityStore",
    "Storage",
    "MemoryStorage",
    "SqlStorage",
]
