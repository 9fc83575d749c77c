"""Database persistence for match records."""

from __future__ import annotations

from sqlmodel import Session, col, select

from swiss_tournament.models import MatchRecord, Round
from swiss_tournament.services.pairing import HistoryEntry

from .adapters import history_entry_from_record
from .repository import AsyncRepository


class MatchRepository(AsyncRepository):
    """Persist and query match records."""

    async def get_history(self, tournament_id: str) -> list[HistoryEntry]:
        """Get every match of the tournament, byes included, as engine history."""

        def _get(session: Session) -> list[HistoryEntry]:
            statement = (
                select(MatchRecord, Round.round_number)
                .join(Round, col(MatchRecord.round_id) == col(Round.id))
                .where(MatchRecord.tournament_id == tournament_id)
                .order_by(col(Round.round_number), col(MatchRecord.board_number))
            )
            return [
                history_entry_from_record(record, round_number)
                for record, round_number in session.exec(statement).all()
            ]

        return await self._read(_get)

    async def list_matches(self, tournament_id: str) -> list[MatchRecord]:
        """Get all match records of a tournament."""

        def _list(session: Session) -> list[MatchRecord]:
            statement = select(MatchRecord).where(MatchRecord.tournament_id == tournament_id)
            return list(session.exec(statement).all())

        return await self._read(_list)

    async def list_round_matches(self, round_id: str) -> list[MatchRecord]:
        """Get the boards of a round ordered by board number, bye first."""

        def _list(session: Session) -> list[MatchRecord]:
            statement = (
                select(MatchRecord)
                .where(MatchRecord.round_id == round_id)
                .order_by(col(MatchRecord.board_number))
            )
            return list(session.exec(statement).all())

        return await self._read(_list)

    async def get_match(self, match_id: str) -> MatchRecord | None:
        """Get a single match record."""

        def _get(session: Session) -> MatchRecord | None:
            return session.get(MatchRecord, match_id)

        return await self._read(_get)

    async def save_result(self, match_id: str, result: str) -> MatchRecord:
        """Store the result of a match."""

        def _save(session: Session) -> MatchRecord:
            record = session.get(MatchRecord, match_id)
            if record is None:
                msg = f"Match not found: {match_id}"
                raise ValueError(msg)
            record.result = result
            session.add(record)
            return record

        return await self._write(_save)
