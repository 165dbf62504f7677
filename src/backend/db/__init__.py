"""Database module."""

from db.base import Base
from db.session import build_engine, build_session_maker, create_tables

__all__ = ["Base", "build_engine", "build_session_maker", "create_tables"]
