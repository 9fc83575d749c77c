from .adapters import (
    competitor_from_row,
    history_entry_from_record,
    history_entry_from_row,
    normalize_round_number,
)
from .match_repository import MatchRepository
from .round_repository import RoundRepository
from .snapshot import Snapshot, load_snapshot
from .store import TournamentStore
from .tournament_repository import TournamentRepository

__all__ = [
    "MatchRepository",
    "RoundRepository",
    "Snapshot",
    "TournamentRepository",
    "TournamentStore",
    "competitor_from_row",
    "history_entry_from_record",
    "history_entry_from_row",
    "load_snapshot",
    "normalize_round_number",
]
