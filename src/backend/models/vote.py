"""
Vote model for relational storage.

One row per (user_id, topic_id). The unique constraint holds even when two
transactions race past the ledger's existing-vote check.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Vote(Base):
    """A user's current choice on a topic."""

    __tablename__ = "votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        index=True,
    )
    option_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("options.id", ondelete="CASCADE"),
        index=True,
    )
    # Denormalised from options.topic_id so tallies never join through options
    topic_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("topics.id", ondelete="CASCADE"),
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "topic_id", name="uq_votes_user_topic"),
        Index("ix_votes_topic_option", "topic_id", "option_id"),
    )
