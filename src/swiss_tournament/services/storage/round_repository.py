"""Database persistence for rounds."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlmodel import Session, col, select

from swiss_tournament.core.config import BYE
from swiss_tournament.core.errors import TournamentNotFoundError
from swiss_tournament.models import MatchRecord, Round, Tournament
from swiss_tournament.services.pairing import HistoryEntry, Pairing

from .repository import AsyncRepository


class RoundRepository(AsyncRepository):
    """Persist and query rounds."""

    async def list_rounds(self, tournament_id: str) -> list[Round]:
        """List rounds ordered by round number."""

        def _list(session: Session) -> list[Round]:
            statement = (
                select(Round)
                .where(Round.tournament_id == tournament_id)
                .order_by(col(Round.round_number))
            )
            return list(session.exec(statement).all())

        return await self._read(_list)

    async def get_active_round(self, tournament_id: str) -> Round | None:
        """Get the round currently in play, if any."""

        def _get(session: Session) -> Round | None:
            statement = select(Round).where(
                Round.tournament_id == tournament_id,
                Round.status == "active",
            )
            return session.exec(statement).first()

        return await self._read(_get)

    async def create_round(
        self,
        tournament_id: str,
        round_number: int,
        pairings: Sequence[Pairing],
        new_entries: Sequence[HistoryEntry],
    ) -> tuple[Round, list[MatchRecord]]:
        """Save a round with its boards and bye in one transaction.

        Boards are stored with null results. Bye entries keep their result
        and use board number 0. A draft tournament becomes active in the same
        transaction.
        """

        def _create(session: Session) -> tuple[Round, list[MatchRecord]]:
            tournament = session.get(Tournament, tournament_id)
            if tournament is None:
                raise TournamentNotFoundError(tournament_id)
            if tournament.status == "draft":
                tournament.status = "active"
                session.add(tournament)

            round_ = Round(tournament_id=tournament_id, round_number=round_number)
            records = [
                MatchRecord(
                    tournament_id=tournament_id,
                    round_id=round_.id,
                    first_id=p.first_id,
                    second_id=p.second_id,
                    board_number=p.board_number,
                )
                for p in pairings
            ]
            records.extend(
                MatchRecord(
                    tournament_id=tournament_id,
                    round_id=round_.id,
                    first_id=entry.bye_recipient or entry.first_id,
                    second_id=BYE,
                    result=entry.result,
                )
                for entry in new_entries
            )
            session.add(round_)
            session.add_all(records)
            return round_, records

        return await self._write(_create)

    async def complete_round(self, round_id: str, finish_tournament: bool = False) -> Round:
        """Mark a round completed and stamp its end time.

        With finish_tournament the tournament is marked completed in the same
        transaction.
        """

        def _complete(session: Session) -> Round:
            round_ = session.get(Round, round_id)
            if round_ is None:
                msg = f"Round not found: {round_id}"
                raise ValueError(msg)
            round_.status = "completed"
            round_.end_time = datetime.now(UTC)
            session.add(round_)
            if finish_tournament:
                tournament = session.get(Tournament, round_.tournament_id)
                if tournament is not None:
                    tournament.status = "completed"
                    session.add(tournament)
            return round_

        return await self._write(_complete)
