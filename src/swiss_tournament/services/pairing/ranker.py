"""Standing order used by every pairing step."""

from __future__ import annotations

from collections.abc import Sequence

from .types import Competitor


def _standing_key(competitor: Competitor) -> tuple:
    tiebreak = competitor.primary_tiebreak
    seed = competitor.seed
    return (
        -competitor.score,
        tiebreak is None,
        -(tiebreak or 0.0),
        seed is None,
        seed or 0,
    )


def rank_competitors(competitors: Sequence[Competitor]) -> list[Competitor]:
    """Order competitors by score, primary tie-break, then seed.

    Missing tie-breaks and seeds rank after present ones. The sort is stable,
    so fully tied competitors keep their input order.
    """
    return sorted(competitors, key=_standing_key)


def rank_index(ranked: Sequence[Competitor]) -> dict[str, int]:
    """Map competitor id to its position in the ranked list."""
    return {c.id: position for position, c in enumerate(ranked)}
