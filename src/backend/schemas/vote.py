"""
Vote and tally Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote. The voter comes from the bearer token."""

    topic_id: int
    option_id: int


class Vote(BaseModel):
    """
    Stored vote record.

    At most one exists per (user_id, topic_id). topic_id duplicates the
    option's topic and is checked against it when the vote is written.
    """

    id: int
    user_id: int
    option_id: int
    topic_id: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}


class OptionStats(BaseModel):
    """Tally line for a single option."""

    option_id: int
    text: str
    vote_count: int = 0
    percentage: int = Field(0, ge=0, le=100, description="Independently rounded share of the topic's votes")


class VoteResult(BaseModel):
    """Response after casting a vote: the live vote row and fresh stats."""

    vote: Vote
    stats: list[OptionStats]
