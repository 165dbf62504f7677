"""
Topic and option models.

A topic's options are written in the same transaction as the topic and
never change afterwards.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Topic(Base):
    """A single votable question."""

    __tablename__ = "topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        index=True,
    )
    # Not a foreign key: an unresolved category renders as "Uncategorized"
    category_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        index=True,
    )


class Option(Base):
    """One selectable choice of a topic."""

    __tablename__ = "options"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(String(200))
    topic_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("topics.id", ondelete="CASCADE"),
        index=True,
    )
