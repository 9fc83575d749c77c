"""Swiss Tournament.

Swiss-system round pairing with byes, rematch avoidance and side balancing,
plus round administration on top of a SQL store.
"""

from swiss_tournament.services.pairing import (
    Competitor,
    HistoryEntry,
    Pairing,
    generate_swiss_pairings,
)

__version__ = "0.1.0"
__all__ = [
    "Competitor",
    "HistoryEntry",
    "Pairing",
    "__version__",
    "generate_swiss_pairings",
]
