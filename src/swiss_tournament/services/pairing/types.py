"""Value types consumed and produced by the pairing engine."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from swiss_tournament.core.config import BYE


@dataclass
class Competitor:
    """A competitor as seen by the pairing engine.

    Attributes:
        id: Unique identifier (tournament entrant id).
        name: Display name.
        handle: External handle, e.g. a chess.com username.
        score: Current cumulative score.
        tiebreaks: Resolved tie-break values, primary first.
        seed: Optional seed number, lower is stronger.
    """

    id: str
    name: str = ""
    handle: str = ""
    score: float = 0.0
    tiebreaks: tuple[float, ...] = ()
    seed: int | None = None

    @property
    def primary_tiebreak(self) -> float | None:
        return self.tiebreaks[0] if self.tiebreaks else None


@dataclass(frozen=True)
class HistoryEntry:
    """One past match. Either side may be the BYE sentinel."""

    first_id: str
    second_id: str
    round_number: int
    result: str | None = None

    @property
    def is_bye(self) -> bool:
        return BYE in (self.first_id, self.second_id)

    @property
    def bye_recipient(self) -> str | None:
        """Id of the competitor who received the bye, if this is a bye entry."""
        if self.second_id == BYE:
            return self.first_id
        if self.first_id == BYE:
            return self.second_id
        return None


@dataclass(frozen=True)
class Pairing:
    """A board in the generated round. first_id takes the first (white) side."""

    first_id: str
    second_id: str
    board_number: int


@dataclass
class ScoreGroup:
    """Competitors sharing an identical score, in rank order."""

    score: float
    members: list[Competitor] = field(default_factory=list)


class PairingHistory:
    """Read-only index over the history entries of one tournament.

    Built once per engine call so rematch and side-count lookups are O(1).
    """

    def __init__(self, entries: Iterable[HistoryEntry]) -> None:
        self._played: set[frozenset[str]] = set()
        self._first_sides: Counter[str] = Counter()
        self._byes: set[str] = set()

        for entry in entries:
            recipient = entry.bye_recipient
            if recipient is not None:
                self._byes.add(recipient)
                # A bye stored with the recipient on the first side counts as a first side.
                if entry.first_id == recipient:
                    self._first_sides[recipient] += 1
                continue
            self._played.add(frozenset({entry.first_id, entry.second_id}))
            self._first_sides[entry.first_id] += 1

    def have_played(self, competitor_a: str, competitor_b: str) -> bool:
        """Check if two competitors have met before."""
        return frozenset({competitor_a, competitor_b}) in self._played

    def has_bye(self, competitor_id: str) -> bool:
        return competitor_id in self._byes

    def first_side_count(self, competitor_id: str) -> int:
        """Number of history entries with the competitor on the first side, byes included."""
        return self._first_sides[competitor_id]
