"""Core configuration and errors for Swiss Tournament."""

from swiss_tournament.core.config import (
    BYE,
    VALID_RESULTS,
    EntrantConfig,
    PairingConfig,
    TournamentConfig,
    calculate_nr_rounds,
    load_config,
)
from swiss_tournament.core.errors import (
    ConfigurationError,
    EntrantNotFoundError,
    InvalidRosterError,
    MissingFieldError,
    PairingError,
    ResultError,
    RoundCompletionError,
    RoundCreationError,
    RoundError,
    TournamentError,
    TournamentNotFoundError,
    UnpairedCompetitorError,
    ValidationError,
)

__all__ = [
    "BYE",
    "VALID_RESULTS",
    "EntrantConfig",
    "PairingConfig",
    "TournamentConfig",
    "calculate_nr_rounds",
    "load_config",
    "ConfigurationError",
    "EntrantNotFoundError",
    "InvalidRosterError",
    "MissingFieldError",
    "PairingError",
    "ResultError",
    "RoundCompletionError",
    "RoundCreationError",
    "RoundError",
    "TournamentError",
    "TournamentNotFoundError",
    "UnpairedCompetitorError",
    "ValidationError",
]
