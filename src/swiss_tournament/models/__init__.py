from .match_record import MatchRecord
from .round import Round
from .tournament import Entrant, Tournament

__all__ = ["Entrant", "MatchRecord", "Round", "Tournament"]
