from .bye import resolve_bye, select_bye_recipient
from .colors import assign_sides
from .engine import generate_swiss_pairings
from .groups import float_down, merge_carried, partition_score_groups
from .matcher import match_pool, pair_opening_round, pair_score_groups
from .ranker import rank_competitors, rank_index
from .types import Competitor, HistoryEntry, Pairing, PairingHistory, ScoreGroup

__all__ = [
    "Competitor",
    "HistoryEntry",
    "Pairing",
    "PairingHistory",
    "ScoreGroup",
    "assign_sides",
    "float_down",
    "generate_swiss_pairings",
    "match_pool",
    "merge_carried",
    "pair_opening_round",
    "pair_score_groups",
    "partition_score_groups",
    "rank_competitors",
    "rank_index",
    "resolve_bye",
    "select_bye_recipient",
]
