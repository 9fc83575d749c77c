"""Custom exceptions for configuration, pairing and round administration."""

from __future__ import annotations


class TournamentError(Exception):
    """Base exception with an optional suggestion for the operator."""

    label = "Error"

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[{self.label}] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class ConfigurationError(TournamentError):
    """Base exception for configuration errors."""

    label = "Configuration Error"


class MissingFieldError(ConfigurationError):
    """Error when a required configuration field is missing."""

    def __init__(self, field: str, config_path: str) -> None:
        super().__init__(
            f"Missing required field '{field}' in {config_path}",
            "Add the field to your configuration.",
        )


class ValidationError(ConfigurationError):
    """Error when configuration validation fails."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{field}'",
            f"{reason}",
        )


class PairingError(TournamentError):
    """Base exception for pairing engine failures."""

    label = "Pairing Error"


class InvalidRosterError(PairingError):
    """Raised when the engine input cannot be paired as given."""


class UnpairedCompetitorError(PairingError):
    """Raised when a competitor is left without an opponent.

    Only reachable with an odd pool after bye resolution or corrupted input.
    """

    def __init__(self, competitor_id: str) -> None:
        self.competitor_id = competitor_id
        super().__init__(
            f"Competitor '{competitor_id}' is left unpaired after all pairing steps",
            "Check the roster and history snapshot; the round must not be saved.",
        )


class TournamentNotFoundError(TournamentError):
    """Raised when a tournament id does not exist in storage."""

    label = "Not Found"

    def __init__(self, tournament_id: str) -> None:
        self.tournament_id = tournament_id
        super().__init__(f"Tournament '{tournament_id}' does not exist")


class EntrantNotFoundError(TournamentError):
    """Raised when an entrant id does not exist in storage."""

    label = "Not Found"

    def __init__(self, entrant_id: str) -> None:
        self.entrant_id = entrant_id
        super().__init__(f"Entrant '{entrant_id}' does not exist")


class RoundError(TournamentError):
    """Base exception for round administration failures."""

    label = "Round Error"


class RoundCreationError(RoundError):
    """Raised when a new round cannot be created."""


class RoundCompletionError(RoundError):
    """Raised when the active round cannot be completed."""


class ResultError(RoundError):
    """Raised when a match result cannot be recorded."""
