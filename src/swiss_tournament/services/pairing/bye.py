"""Bye selection for odd rosters."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from swiss_tournament.core.config import BYE, WHITE_WIN

from .types import Competitor, HistoryEntry, PairingHistory

logger = structlog.get_logger()


def select_bye_recipient(ranked: Sequence[Competitor], history: PairingHistory) -> Competitor:
    """Pick the lowest-scoring competitor who has not had a bye yet.

    Ties on score go to the lowest-ranked competitor. When everyone has
    already had a bye, the same rule applies to the whole roster.

    Args:
        ranked: Competitors in standing order (non-empty).
        history: History index for the tournament.

    Returns:
        The competitor receiving the bye.
    """
    candidates = [c for c in ranked if not history.has_bye(c.id)]
    if not candidates:
        logger.debug("bye_pool_exhausted", roster=len(ranked))
        candidates = list(ranked)

    # min() keeps the first minimum; walking from the bottom favours the lowest-ranked.
    return min(reversed(candidates), key=lambda c: c.score)


def resolve_bye(
    ranked: Sequence[Competitor],
    history: PairingHistory,
    round_number: int,
    bye_result: str = WHITE_WIN,
) -> tuple[list[Competitor], HistoryEntry | None]:
    """Remove one competitor from an odd pool and record their bye.

    Returns:
        Tuple of (remaining_pool, bye_entry). bye_entry is None for even pools.
    """
    pool = list(ranked)
    if len(pool) % 2 == 0:
        return pool, None

    recipient = select_bye_recipient(pool, history)
    pool = [c for c in pool if c.id != recipient.id]
    entry = HistoryEntry(
        first_id=recipient.id,
        second_id=BYE,
        round_number=round_number,
        result=bye_result,
    )
    logger.debug("bye_assigned", competitor=recipient.id, score=recipient.score)
    return pool, entry
