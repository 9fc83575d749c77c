"""Loading offline pairing snapshots exported from the hosted store."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from swiss_tournament.core.errors import MissingFieldError, ValidationError
from swiss_tournament.services.pairing import Competitor, HistoryEntry

from .adapters import competitor_from_row, history_entry_from_row


@dataclass
class Snapshot:
    """Inputs for one pairing run.

    Attributes:
        competitors: Active competitors with scores and tie-breaks.
        history: All previous matches of the tournament.
        round_number: Round to pair.
    """

    competitors: list[Competitor]
    history: list[HistoryEntry] = field(default_factory=list)
    round_number: int = 1


def parse_snapshot(data: dict[str, Any], source: str = "<snapshot>") -> Snapshot:
    """Build a Snapshot from decoded YAML/JSON data.

    The round number defaults to one past the latest round in the history.
    """
    if not isinstance(data, dict) or "competitors" not in data:
        raise MissingFieldError("competitors", source)

    if not isinstance(data["competitors"] or [], list):
        raise ValidationError("competitors", "Expected a list of competitor rows.")

    try:
        competitors = [competitor_from_row(row) for row in data["competitors"] or []]
        history = [history_entry_from_row(row) for row in data.get("matches") or []]
    except (TypeError, ValueError) as e:
        raise ValidationError("competitors/matches", str(e)) from e

    round_number = data.get("round_number")
    if round_number is None:
        round_number = max((entry.round_number for entry in history), default=0) + 1

    return Snapshot(competitors=competitors, history=history, round_number=int(round_number))


def load_snapshot(path: str | Path) -> Snapshot:
    """Load a snapshot from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MissingFieldError: If the competitor list is absent.
        ValidationError: If the file cannot be parsed or a row cannot be read.
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        msg = f"Snapshot file not found: {snapshot_path}"
        raise FileNotFoundError(msg)

    with snapshot_path.open(encoding="utf-8") as f:
        try:
            if snapshot_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValidationError("snapshot", f"Cannot parse {snapshot_path}: {e}") from e

    return parse_snapshot(data, str(snapshot_path))
