"""
Topic, option and category Pydantic schemas.

Stored records (Category, Topic, Option) are frozen; the assembled read models
(TopicWithOptions, TopicDetail) are what the API returns.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.vote import OptionStats, Vote

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
OPTION_TEXT_MAX_LENGTH = 200
MIN_OPTIONS = 2
MAX_OPTIONS = 10


class CategoryCreate(BaseModel):
    """Category seed/insert payload."""

    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    icon: Optional[str] = None


class Category(CategoryCreate):
    """Stored category record."""

    id: int

    model_config = {"from_attributes": True, "frozen": True}


# Shown for topics whose category is missing or no longer resolves.
UNCATEGORIZED = Category(id=0, name="Uncategorized")


class Topic(BaseModel):
    """Stored topic record."""

    id: int
    title: str
    description: Optional[str] = None
    author_id: int
    category_id: Optional[int] = None
    created_at: Optional[datetime] = None
    active: bool = True

    model_config = {"from_attributes": True, "frozen": True}


class Option(BaseModel):
    """Stored option record. Belongs to exactly one topic."""

    id: int
    text: str
    topic_id: int

    model_config = {"from_attributes": True, "frozen": True}


class TopicWithOptions(Topic):
    """Topic joined with its category and options, plus the topic's vote count."""

    category: Category
    options: list[Option]
    vote_count: int = 0

    model_config = {"from_attributes": True, "frozen": False}


class TopicDetail(TopicWithOptions):
    """Single-topic view: adds per-option stats and the caller's current vote."""

    stats: list[OptionStats] = Field(default_factory=list)
    user_vote: Optional[Vote] = None


class TopicCreate(BaseModel):
    """Schema for creating a topic. Blank option texts are dropped server-side."""

    title: str = Field(..., min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    category_id: Optional[int] = None
    options: list[str] = Field(..., min_length=MIN_OPTIONS, max_length=MAX_OPTIONS)


class SuggestionsResponse(BaseModel):
    """Topic title suggestions."""

    suggestions: list[str]
