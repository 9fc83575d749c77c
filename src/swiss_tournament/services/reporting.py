"""Table rendering for pairings and standings."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from tabulate import tabulate

from swiss_tournament.services.pairing import Pairing
from swiss_tournament.services.standings import Standing

RESULT_LABELS = {
    "1/2-1/2": "½-½",
    None: "",
}


def _label(names: Mapping[str, str], competitor_id: str) -> str:
    return names.get(competitor_id, competitor_id)


def format_pairings_table(
    pairings: Sequence[Pairing],
    names: Mapping[str, str],
    results: Mapping[int, str | None] | None = None,
    tablefmt: str = "github",
) -> str:
    """Render boards as a table of board, white, black and result.

    Args:
        pairings: Boards in board order.
        names: Display name per competitor id; unknown ids print as-is.
        results: Optional result per board number.
        tablefmt: Any tabulate table format.
    """
    results = results or {}
    rows = [
        [
            p.board_number,
            _label(names, p.first_id),
            _label(names, p.second_id),
            RESULT_LABELS.get(results.get(p.board_number), results.get(p.board_number)),
        ]
        for p in pairings
    ]
    return tabulate(rows, headers=["Board", "White", "Black", "Result"], tablefmt=tablefmt)


def format_standings_table(standings: Sequence[Standing], tablefmt: str = "github") -> str:
    """Render standings with rank, score and tie-breaks."""
    rows = [
        [
            rank,
            s.name,
            s.handle,
            s.score,
            s.buchholz,
            s.sonneborn_berger,
            s.games_played,
            f"{s.wins}/{s.draws}/{s.losses}",
        ]
        for rank, s in enumerate(standings, start=1)
    ]
    return tabulate(
        rows,
        headers=["#", "Name", "Handle", "Score", "Buchholz", "SB", "Games", "W/D/L"],
        tablefmt=tablefmt,
        floatfmt=".1f",
    )
