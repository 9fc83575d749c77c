"""Standings and tie-break computation from recorded results."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass

from swiss_tournament.core.config import DRAW, RESULT_POINTS
from swiss_tournament.models import Entrant
from swiss_tournament.services.pairing import Competitor, HistoryEntry


@dataclass
class Standing:
    """One row of the standings table."""

    entrant_id: str
    name: str
    handle: str = ""
    seed: int | None = None
    score: float = 0.0
    buchholz: float = 0.0
    sonneborn_berger: float = 0.0
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0


def _points(entry: HistoryEntry, competitor_id: str) -> float:
    first_points, second_points = RESULT_POINTS[entry.result]
    return first_points if entry.first_id == competitor_id else second_points


def compute_standings(
    entrants: Sequence[Entrant], history: Sequence[HistoryEntry]
) -> list[Standing]:
    """Compute score, Buchholz and Sonneborn-Berger for every entrant.

    Matches without a result are ignored. A bye adds its points to the score
    but is not a game and has no opponent for the tie-breaks.

    Args:
        entrants: Entrants to rank.
        history: Recorded matches, byes included.

    Returns:
        Standings sorted by score, Buchholz, then Sonneborn-Berger.
    """
    scores: dict[str, float] = defaultdict(float)
    games: dict[str, list[tuple[str, float]]] = defaultdict(list)

    for entry in history:
        if entry.result not in RESULT_POINTS:
            continue
        recipient = entry.bye_recipient
        if recipient is not None:
            # The bye result is read from the recipient's side whichever slot holds it.
            scores[recipient] += RESULT_POINTS[entry.result][0]
            continue
        for own, opponent in (
            (entry.first_id, entry.second_id),
            (entry.second_id, entry.first_id),
        ):
            points = _points(entry, own)
            scores[own] += points
            games[own].append((opponent, points))

    standings = []
    for entrant in entrants:
        row = Standing(
            entrant_id=entrant.id,
            name=entrant.name,
            handle=entrant.handle,
            seed=entrant.seed,
            score=scores[entrant.id],
        )
        for opponent, points in games[entrant.id]:
            opponent_score = scores[opponent]
            row.games_played += 1
            row.buchholz += opponent_score
            if points == 1.0:
                row.wins += 1
                row.sonneborn_berger += opponent_score
            elif points == RESULT_POINTS[DRAW][0]:
                row.draws += 1
                row.sonneborn_berger += opponent_score / 2
            else:
                row.losses += 1
        standings.append(row)

    return sorted(
        standings,
        key=lambda s: (s.score, s.buchholz, s.sonneborn_berger),
        reverse=True,
    )


def to_competitors(standings: Sequence[Standing]) -> list[Competitor]:
    """Convert standings rows into pairing engine input."""
    return [
        Competitor(
            id=s.entrant_id,
            name=s.name,
            handle=s.handle,
            score=s.score,
            tiebreaks=(s.buchholz, s.sonneborn_berger),
            seed=s.seed,
        )
        for s in standings
    ]
