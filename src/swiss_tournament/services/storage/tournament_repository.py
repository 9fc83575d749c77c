"""Database persistence for tournaments and their entrants."""

from __future__ import annotations

from sqlmodel import Session, col, select

from swiss_tournament.core.config import TournamentConfig
from swiss_tournament.core.errors import EntrantNotFoundError, TournamentNotFoundError
from swiss_tournament.models import Entrant, Tournament

from .repository import AsyncRepository


class TournamentRepository(AsyncRepository):
    """Persist and query tournaments and entrants."""

    async def create_tournament(self, config: TournamentConfig) -> Tournament:
        """Create a tournament with the entrants listed in the config."""

        def _create(session: Session) -> Tournament:
            tournament = Tournament(
                name=config.name,
                description=config.description,
                total_rounds=config.total_rounds,
                time_control=config.time_control,
            )
            session.add(tournament)
            for entrant in config.entrants:
                session.add(
                    Entrant(
                        tournament_id=tournament.id,
                        name=entrant.name,
                        handle=entrant.handle,
                        seed=entrant.seed,
                    )
                )
            return tournament

        return await self._write(_create)

    async def get_tournament(self, tournament_id: str) -> Tournament:
        """Get a tournament by id."""

        def _get(session: Session) -> Tournament | None:
            return session.get(Tournament, tournament_id)

        tournament = await self._read(_get)
        if tournament is None:
            raise TournamentNotFoundError(tournament_id)
        return tournament

    async def add_entrant(
        self, tournament_id: str, name: str, handle: str = "", seed: int | None = None
    ) -> Entrant:
        """Register one more entrant."""

        def _add(session: Session) -> Entrant:
            entrant = Entrant(tournament_id=tournament_id, name=name, handle=handle, seed=seed)
            session.add(entrant)
            return entrant

        return await self._write(_add)

    async def list_entrants(self, tournament_id: str, active_only: bool = True) -> list[Entrant]:
        """List entrants in registration order."""

        def _list(session: Session) -> list[Entrant]:
            statement = select(Entrant).where(Entrant.tournament_id == tournament_id)
            if active_only:
                statement = statement.where(Entrant.status == "active")
            statement = statement.order_by(col(Entrant.created_at), col(Entrant.id))
            return list(session.exec(statement).all())

        return await self._read(_list)

    async def withdraw_entrant(self, entrant_id: str) -> None:
        """Mark an entrant withdrawn so later rounds skip them."""

        def _withdraw(session: Session) -> None:
            entrant = session.get(Entrant, entrant_id)
            if entrant is None:
                raise EntrantNotFoundError(entrant_id)
            entrant.status = "withdrawn"
            session.add(entrant)

        await self._write(_withdraw)
