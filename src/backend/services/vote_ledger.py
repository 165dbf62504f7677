"""
Vote ledger: the only writer of vote rows.

At most one vote exists per (user_id, topic_id).

cast_vote runs its lookup and mutation inside one write session:
- no existing vote          -> insert a new row
- existing vote, same option -> return it unchanged
- existing vote, other option -> delete it, insert a new row (new id, fresh timestamp)

Write sessions are serialised (memory backend) or transactional with a
topic row lock and a UNIQUE(user_id, topic_id) constraint (SQL backend), so
two concurrent casts for the same pair can never both insert.
"""

from typing import Optional

import structlog

from core.config import settings
from core.exceptions import InvalidOptionError, NotFoundError, TransactionConflictError
from repositories.base import EntityStore, Storage
from schemas.vote import Vote, VoteResult
from services.tally_service import TallyEngine

logger = structlog.get_logger(__name__)


class VoteLedger:
    """Casts votes and reports fresh tallies."""

    def __init__(self, storage: Storage, max_retries: Optional[int] = None):
        self.storage = storage
        self.max_retries = settings.VOTE_CONFLICT_RETRIES if max_retries is None else max_retries

    async def cast_vote(self, user_id: int, topic_id: int, option_id: int) -> Vote:
        """
        Record ``user_id``'s choice of ``option_id`` on ``topic_id``.

        Raises:
            NotFoundError: topic (or user) does not exist.
            InvalidOptionError: option missing or bound to another topic.
            TransactionConflictError: the atomic section kept colliding.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._cast_once(user_id, topic_id, option_id)
            except TransactionConflictError:
                if attempt > self.max_retries:
                    logger.error(
                        "vote_conflict_exhausted",
                        user_id=user_id,
                        topic_id=topic_id,
                        attempts=attempt,
                    )
                    raise
                logger.warning("vote_conflict_retry", user_id=user_id, topic_id=topic_id, attempt=attempt)

    async def _cast_once(self, user_id: int, topic_id: int, option_id: int) -> Vote:
        async with self.storage.session(write=True) as store:
            await self._check_references(store, user_id, topic_id, option_id)

            existing = await store.find_vote(user_id, topic_id)
            if existing is not None:
                if existing.option_id == option_id:
                    logger.debug("vote_unchanged", vote_id=existing.id, topic_id=topic_id)
                    return existing
                await store.delete_vote(existing.id)

            vote = await store.add_vote(user_id=user_id, option_id=option_id, topic_id=topic_id)

        logger.info(
            "vote_cast",
            vote_id=vote.id,
            topic_id=topic_id,
            option_id=option_id,
            replaced_vote_id=existing.id if existing else None,
        )
        return vote

    @staticmethod
    async def _check_references(store: EntityStore, user_id: int, topic_id: int, option_id: int) -> None:
        """Validate topic, voter and option binding before any write."""
        topic = await store.get_topic(topic_id, for_update=True)
        if topic is None:
            raise NotFoundError("Topic not found")

        if await store.get_user(user_id) is None:
            raise NotFoundError("User not found")

        option = await store.get_option(option_id)
        if option is None or option.topic_id != topic_id:
            # Vote.topic_id is denormalised from here; reject any mismatch
            raise InvalidOptionError("Option does not belong to this topic")

    async def cast_vote_with_stats(self, user_id: int, topic_id: int, option_id: int) -> VoteResult:
        """Cast a vote, then recompute the topic's tally from committed state."""
        vote = await self.cast_vote(user_id, topic_id, option_id)
        async with self.storage.session() as store:
            stats = await TallyEngine(store).stats_for(topic_id)
        return VoteResult(vote=vote, stats=stats)

    async def get_vote(self, user_id: int, topic_id: int) -> Optional[Vote]:
        """The user's current vote on a topic, if any."""
        async with self.storage.session() as store:
            return await store.find_vote(user_id, topic_id)
