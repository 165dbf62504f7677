"""Database models module."""

from models.category import Category
from models.topic import Option, Topic
from models.user import User
from models.vote import Vote

__all__ = [
    "User",
    "Category",
    "Topic",
    "Option",
    "Vote",
]
