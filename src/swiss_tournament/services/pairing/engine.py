"""Swiss-system round pairing.

The engine is a pure function of its inputs: it ranks the roster, resolves a
bye for odd rosters, pairs the opening round by halves or later rounds by
score group, and balances sides from the history. Nothing passed in is
mutated; the bye it awards comes back as a new history entry for the caller
to persist.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from swiss_tournament.core.config import BYE, WHITE_WIN
from swiss_tournament.core.errors import InvalidRosterError

from .bye import resolve_bye
from .colors import assign_sides
from .groups import partition_score_groups
from .matcher import pair_opening_round, pair_score_groups
from .ranker import rank_competitors, rank_index
from .types import Competitor, HistoryEntry, Pairing, PairingHistory

logger = structlog.get_logger()


def _validate_roster(competitors: Sequence[Competitor], round_number: int) -> None:
    if round_number < 1:
        msg = f"Round number must be at least 1, got {round_number}"
        raise InvalidRosterError(msg)

    seen: set[str] = set()
    for competitor in competitors:
        if competitor.id == BYE:
            raise InvalidRosterError(
                f"Competitor id '{BYE}' is reserved for byes",
                "Rename the competitor before pairing.",
            )
        if competitor.id in seen:
            raise InvalidRosterError(f"Duplicate competitor id '{competitor.id}'")
        seen.add(competitor.id)


def generate_swiss_pairings(
    competitors: Sequence[Competitor],
    history: Sequence[HistoryEntry],
    round_number: int,
    allow_rematches: bool = False,
    *,
    bye_result: str = WHITE_WIN,
) -> tuple[list[Pairing], list[HistoryEntry]]:
    """Generate the pairings for one Swiss round.

    Args:
        competitors: Active competitors with resolved scores and tie-breaks.
        history: Every match of the tournament so far, byes included.
        round_number: Round being paired (1-based).
        allow_rematches: Pair without regard to previous meetings.
        bye_result: Result recorded for the bye recipient.

    Returns:
        Tuple of (pairings, new_history_entries). new_history_entries holds
        the bye entry when the roster was odd and is empty otherwise.

    Raises:
        InvalidRosterError: If the round number or roster is malformed.
        UnpairedCompetitorError: If a competitor is left without an opponent.
    """
    _validate_roster(competitors, round_number)

    index = PairingHistory(history)
    ranked = rank_competitors(competitors)
    pool, bye_entry = resolve_bye(ranked, index, round_number, bye_result)

    if round_number == 1:
        matches = pair_opening_round(pool)
    else:
        groups = partition_score_groups(pool)
        matches = pair_score_groups(groups, rank_index(pool), index, allow_rematches)

    pairings = assign_sides(matches, index)
    new_entries = [bye_entry] if bye_entry is not None else []

    logger.info(
        "round_paired",
        round=round_number,
        competitors=len(competitors),
        pairings=len(pairings),
        bye=bye_entry.first_id if bye_entry else None,
    )
    return pairings, new_entries
