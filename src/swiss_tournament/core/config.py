"""Configuration schemas and loading for Swiss Tournament."""

from __future__ import annotations

import math
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

BYE = "BYE"
WHITE_WIN = "1-0"
BLACK_WIN = "0-1"
DRAW = "1/2-1/2"
VALID_RESULTS = (WHITE_WIN, BLACK_WIN, DRAW)

# Points awarded to the (first, second) side for each recorded result.
RESULT_POINTS: dict[str, tuple[float, float]] = {
    WHITE_WIN: (1.0, 0.0),
    BLACK_WIN: (0.0, 1.0),
    DRAW: (0.5, 0.5),
}


class PairingConfig(BaseModel):
    """Pairing engine options.

    Attributes:
        allow_rematches: Skip the never-met filter entirely.
        bye_result: Result recorded for the competitor receiving a bye.
    """

    allow_rematches: bool = False
    bye_result: str = WHITE_WIN

    @field_validator("bye_result")
    @classmethod
    def validate_bye_result(cls, v: str) -> str:
        if v not in VALID_RESULTS:
            msg = f"bye_result must be one of {', '.join(VALID_RESULTS)}"
            raise ValueError(msg)
        return v


class EntrantConfig(BaseModel):
    """A competitor registered through the config file."""

    name: str = Field(..., min_length=1)
    handle: str = ""
    seed: int | None = Field(default=None, ge=1)


class TournamentConfig(BaseModel):
    """Complete tournament configuration."""

    name: str = Field(..., min_length=1)
    description: str = ""
    total_rounds: int = Field(default=5, ge=1)
    time_control: str = ""
    entrants: list[EntrantConfig] = Field(default_factory=list)
    pairing: PairingConfig = Field(default_factory=PairingConfig)
    output_dir: str = "./runs"
    database_url: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            msg = "Tournament name cannot be blank"
            raise ValueError(msg)
        return v.strip()

    @field_validator("entrants")
    @classmethod
    def validate_unique_entrants(cls, v: list[EntrantConfig]) -> list[EntrantConfig]:
        """Reject duplicate entrant names."""
        seen: set[str] = set()
        for entrant in v:
            key = entrant.name.casefold()
            if key in seen:
                msg = f"Duplicate entrant name: {entrant.name}"
                raise ValueError(msg)
            seen.add(key)
        return v

    def get_database_url(self) -> str:
        """Get the SQLAlchemy URL, defaulting to a DuckDB file under output_dir."""
        if self.database_url:
            return self.database_url
        db_path = Path(self.output_dir) / "tournament.duckdb"
        return f"duckdb:///{db_path}"


def load_config(path: str | Path) -> TournamentConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated TournamentConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config is invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f)

    return TournamentConfig.model_validate(data)


def calculate_nr_rounds(num_entrants: int) -> int:
    """Calculate recommended Swiss tournament rounds.

    Uses ceil(log2(N)), the number of rounds needed to separate a single
    winner from N entrants.

    Args:
        num_entrants: Number of participants in the tournament.

    Returns:
        Recommended number of rounds (minimum 1).
    """
    if num_entrants <= 2:
        return 1
    return math.ceil(math.log2(num_entrants))
