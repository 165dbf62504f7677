"""
Vote tallying.

Counts are recomputed from the vote rows on every call; nothing is cached.
Percentages are rounded per option (half up) and are not forced to sum to
100, so a three-way 1/1/1 split reads 33/33/33.
"""

from collections import Counter
from typing import Iterable

from repositories.base import EntityStore
from schemas.topic import Option
from schemas.vote import OptionStats, Vote


def rounded_percentage(count: int, total: int) -> int:
    """round(100 * count / total) with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    # Integer form of floor(100 * count / total + 0.5), free of float error
    return (200 * count + total) // (2 * total)


def compute_option_stats(options: Iterable[Option], votes: Iterable[Vote]) -> list[OptionStats]:
    """
    Tally votes per option.

    ``options`` must be in creation order. The result is sorted by vote count,
    highest first; equal counts keep creation order.
    """
    options = list(options)
    counts = Counter(vote.option_id for vote in votes)
    total = sum(counts[option.id] for option in options)

    stats = [
        OptionStats(
            option_id=option.id,
            text=option.text,
            vote_count=counts[option.id],
            percentage=rounded_percentage(counts[option.id], total),
        )
        for option in options
    ]
    # sorted() is stable, so ties stay in creation order
    return sorted(stats, key=lambda line: -line.vote_count)


class TallyEngine:
    """Per-topic statistics over an open store session."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def stats_for(self, topic_id: int) -> list[OptionStats]:
        """Ordered tally lines for every option of a topic."""
        options = await self.store.list_options(topic_id)
        votes = await self.store.list_votes(topic_id)
        return compute_option_stats(options, votes)
