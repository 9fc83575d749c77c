"""Match formation within score groups.

Later rounds are processed as a work-queue: the competitors that could not be
matched in a group (floaters, anchors with no fresh opponent, odd leftovers)
are carried into the next lower group and merged there in rank order. Each
group pass is a fold returning the matches it formed and what it carries on.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from swiss_tournament.core.errors import UnpairedCompetitorError

from .groups import float_down, merge_carried
from .types import Competitor, PairingHistory, ScoreGroup

logger = structlog.get_logger()

# (anchor, opponent) in the order the match was formed
Match = tuple[Competitor, Competitor]


def pair_opening_round(ranked: Sequence[Competitor]) -> list[Match]:
    """Pair the top half against the bottom half: 1 v half+1, 2 v half+2, ..."""
    half = len(ranked) // 2
    return list(zip(ranked[:half], ranked[half : 2 * half], strict=True))


def _find_opponent(
    anchor: Competitor,
    remaining: Sequence[Competitor],
    history: PairingHistory,
    allow_rematches: bool,
) -> int | None:
    """Position of the first remaining competitor the anchor may face."""
    for position, candidate in enumerate(remaining):
        if allow_rematches or not history.have_played(anchor.id, candidate.id):
            return position
    return None


def match_pool(
    pool: Sequence[Competitor],
    history: PairingHistory,
    *,
    allow_rematches: bool = False,
    force_rematches: bool = False,
) -> tuple[list[Match], list[Competitor]]:
    """Pair a rank-ordered pool anchor by anchor.

    Each anchor takes the first competitor below it that it has not met. An
    anchor without such an opponent is either forced into a rematch with the
    next competitor (force_rematches) or carried on.

    Returns:
        Tuple of (matches, carried).
    """
    remaining = list(pool)
    matches: list[Match] = []
    carried: list[Competitor] = []

    while len(remaining) >= 2:
        anchor = remaining.pop(0)
        position = _find_opponent(anchor, remaining, history, allow_rematches)
        if position is None:
            if not force_rematches:
                logger.debug("anchor_carried", competitor=anchor.id, score=anchor.score)
                carried.append(anchor)
                continue
            position = 0
            logger.warning(
                "forced_rematch", anchor=anchor.id, opponent=remaining[position].id
            )
        matches.append((anchor, remaining.pop(position)))

    carried.extend(remaining)
    return matches, carried


def pair_score_groups(
    groups: Sequence[ScoreGroup],
    ranks: Mapping[str, int],
    history: PairingHistory,
    allow_rematches: bool = False,
) -> list[Match]:
    """Pair score groups from the top down, carrying the unmatched downwards.

    Args:
        groups: Score groups, highest score first.
        ranks: Rank position per competitor id.
        history: History index for rematch checks.
        allow_rematches: Skip the never-met filter.

    Returns:
        Matches in formation order.

    Raises:
        UnpairedCompetitorError: If a single competitor remains at the end.
    """
    matches: list[Match] = []
    carried: list[Competitor] = []
    last = len(groups) - 1

    for index, group in enumerate(groups):
        is_last = index == last
        pool = merge_carried(group, carried, ranks)
        pool, floated = float_down(pool, is_last)
        if floated:
            logger.debug("floated_down", competitor=floated[0].id, from_score=group.score)

        formed, leftover = match_pool(
            pool,
            history,
            allow_rematches=allow_rematches,
            force_rematches=is_last or allow_rematches,
        )
        matches.extend(formed)
        carried = [*leftover, *floated]

    carried.sort(key=lambda c: ranks[c.id])
    formed, leftover = match_pool(
        carried, history, allow_rematches=allow_rematches, force_rematches=True
    )
    matches.extend(formed)

    if leftover:
        raise UnpairedCompetitorError(leftover[0].id)

    return matches
