"""Schemas module initialization."""

from schemas.auth import LoginRequest, TokenResponse
from schemas.topic import (
    UNCATEGORIZED,
    Category,
    CategoryCreate,
    Option,
    SuggestionsResponse,
    Topic,
    TopicCreate,
    TopicDetail,
    TopicWithOptions,
)
from schemas.user import User, UserCreate, UserResponse
from schemas.vote import OptionStats, Vote, VoteCreate, VoteResult

__all__ = [
    "User",
    "UserCreate",
    "UserResponse",
    "Category",
    "CategoryCreate",
    "UNCATEGORIZED",
    "Topic",
    "TopicCreate",
    "TopicDetail",
    "TopicWithOptions",
    "Option",
    "OptionStats",
    "SuggestionsResponse",
    "Vote",
    "VoteCreate",
    "VoteResult",
    "LoginRequest",
    "TokenResponse",
]
