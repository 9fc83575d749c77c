"""Unified tournament storage layer."""

from __future__ import annotations

import gc
from pathlib import Path

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from swiss_tournament.core.config import TournamentConfig

from .match_repository import MatchRepository
from .round_repository import RoundRepository
from .tournament_repository import TournamentRepository

logger = structlog.get_logger()


class TournamentStore:
    """Persistence layer for tournaments, rounds and matches.

    Owns the database engine and hands out one repository per table family.
    """

    def __init__(self, config: TournamentConfig) -> None:
        """Initialize tournament store.

        Args:
            config: Tournament configuration (database location).
        """
        self.config = config
        self.db_url = config.get_database_url()
        self._engine = None
        self._init_db()

        self.tournaments = TournamentRepository(self._engine)
        self.rounds = RoundRepository(self._engine)
        self.matches = MatchRepository(self._engine)

    def _init_db(self) -> None:
        """Create the database file's directory, the engine and the tables."""
        url = make_url(self.db_url)
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        # Use NullPool to avoid connection pooling issues on Windows
        self._engine = create_engine(self.db_url, poolclass=NullPool)
        SQLModel.metadata.create_all(self._engine)
        logger.info("store_init", url=self.db_url)

    async def close(self) -> None:
        """Dispose of the database engine."""
        self.close_sync()

    def close_sync(self) -> None:
        """Synchronously dispose of the database engine."""
        if self._engine:
            self._engine.dispose()
            self._engine = None

        gc.collect()
