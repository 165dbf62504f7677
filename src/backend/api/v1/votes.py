"""
Vote endpoints.

A user holds at most one vote per topic. Voting again for a different
option replaces the earlier vote; voting again for the same option is a
no-op that returns the existing vote.
"""

from fastapi import APIRouter, Depends, status

from api.deps import CurrentUserId, get_vote_ledger
from schemas.vote import VoteCreate, VoteResult
from services.vote_ledger import VoteLedger

router = APIRouter()


@router.post("", response_model=VoteResult, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    vote_data: VoteCreate,
    user_id: CurrentUserId,
    ledger: VoteLedger = Depends(get_vote_ledger),
) -> VoteResult:
    """Cast or change the caller's vote and return the topic's fresh stats."""
    return await ledger.cast_vote_with_stats(
        user_id=user_id,
        topic_id=vote_data.topic_id,
        option_id=vote_data.option_id,
    )
