"""Score-group partitioning and the float-down rule."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .types import Competitor, ScoreGroup


def partition_score_groups(ranked: Sequence[Competitor]) -> list[ScoreGroup]:
    """Group competitors by exact score, highest score first.

    Members keep the ranked order they arrive in.
    """
    groups: dict[float, ScoreGroup] = {}
    for competitor in ranked:
        group = groups.get(competitor.score)
        if group is None:
            group = groups[competitor.score] = ScoreGroup(score=competitor.score)
        group.members.append(competitor)
    return sorted(groups.values(), key=lambda g: g.score, reverse=True)


def merge_carried(
    group: ScoreGroup,
    carried: Sequence[Competitor],
    ranks: Mapping[str, int],
) -> list[Competitor]:
    """Combine a group with competitors carried down from above, in rank order."""
    return sorted([*carried, *group.members], key=lambda c: ranks[c.id])


def float_down(
    pool: Sequence[Competitor], is_last: bool
) -> tuple[list[Competitor], list[Competitor]]:
    """Split off the lowest-ranked member of an odd pool.

    The last group never floats; anything left there is resolved by forced
    pairing instead.

    Args:
        pool: Merged group in rank order.
        is_last: Whether this is the final group of the walk.

    Returns:
        Tuple of (pool_to_pair, floated).
    """
    if len(pool) % 2 == 0 or is_last:
        return list(pool), []
    return list(pool[:-1]), [pool[-1]]
