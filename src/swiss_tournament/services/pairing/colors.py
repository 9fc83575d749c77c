"""Side assignment and board numbering."""

from __future__ import annotations

from collections.abc import Sequence

from .matcher import Match
from .types import Pairing, PairingHistory


def assign_sides(matches: Sequence[Match], history: PairingHistory) -> list[Pairing]:
    """Give the first side to whoever has had it less often.

    On equal counts the anchor takes the first side. Boards are numbered from
    1 in the order the matches were formed.
    """
    pairings: list[Pairing] = []
    for board_number, (anchor, opponent) in enumerate(matches, start=1):
        first, second = anchor, opponent
        if history.first_side_count(opponent.id) < history.first_side_count(anchor.id):
            first, second = opponent, anchor
        pairings.append(
            Pairing(first_id=first.id, second_id=second.id, board_number=board_number)
        )
    return pairings
