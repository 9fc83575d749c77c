"""Conversion from stored rows to pairing engine values.

Rows exported from the hosted store embed the related round either as an
object, as a one-element list, or not at all. That ambiguity is resolved here
so the pairing engine only ever sees plain values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from swiss_tournament.models import MatchRecord
from swiss_tournament.services.pairing import Competitor, HistoryEntry


def _unwrap_relation(value: Any) -> Mapping[str, Any] | None:
    """Collapse a related record given as object, list or None into one mapping."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, Mapping):
        return value
    return None


def normalize_round_number(row: Mapping[str, Any]) -> int:
    """Read the round number of a match row, 0 when it cannot be determined."""
    if row.get("round_number") is not None:
        return int(row["round_number"])
    related = _unwrap_relation(row.get("round"))
    if related is not None and related.get("round_number") is not None:
        return int(related["round_number"])
    return 0


def _first_present(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return None


def history_entry_from_row(row: Mapping[str, Any]) -> HistoryEntry:
    """Build a HistoryEntry from an exported match row.

    Accepts both the storage column names (white_id/black_id) and the engine
    names (first_id/second_id).
    """
    first_id = _first_present(row, "first_id", "white_id")
    second_id = _first_present(row, "second_id", "black_id")
    if first_id is None or second_id is None:
        msg = f"Match row is missing a side: {dict(row)}"
        raise ValueError(msg)
    return HistoryEntry(
        first_id=str(first_id),
        second_id=str(second_id),
        round_number=normalize_round_number(row),
        result=row.get("result"),
    )


def competitor_from_row(row: Mapping[str, Any]) -> Competitor:
    """Build a Competitor from an exported standings or participant row."""
    competitor_id = _first_present(row, "id", "tournament_participant_id")
    if competitor_id is None:
        msg = f"Competitor row has no id: {dict(row)}"
        raise ValueError(msg)

    if row.get("tiebreaks") is not None:
        tiebreaks = tuple(float(t) for t in row["tiebreaks"])
    else:
        values = [
            _first_present(row, "tiebreak_1", "tiebreak1", "buchholz"),
            _first_present(row, "tiebreak_2", "tiebreak2", "sonneborn_berger"),
        ]
        # Keep only the leading defined values so position still means priority.
        tiebreak_list: list[float] = []
        for value in values:
            if value is None:
                break
            tiebreak_list.append(float(value))
        tiebreaks = tuple(tiebreak_list)

    seed = row.get("seed")
    return Competitor(
        id=str(competitor_id),
        name=str(_first_present(row, "name", "participant_name") or ""),
        handle=str(_first_present(row, "handle", "chesscom_username") or ""),
        score=float(row.get("score") or 0.0),
        tiebreaks=tiebreaks,
        seed=int(seed) if seed is not None else None,
    )


def history_entry_from_record(record: MatchRecord, round_number: int) -> HistoryEntry:
    """Build a HistoryEntry from a persisted match and its round number."""
    return HistoryEntry(
        first_id=record.first_id,
        second_id=record.second_id,
        round_number=round_number,
        result=record.result,
    )
