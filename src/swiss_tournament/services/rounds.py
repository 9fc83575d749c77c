"""Round administration: creating, scoring and completing rounds."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from swiss_tournament.core.config import BYE, VALID_RESULTS, TournamentConfig
from swiss_tournament.core.errors import (
    PairingError,
    ResultError,
    RoundCompletionError,
    RoundCreationError,
)
from swiss_tournament.models import MatchRecord, Round
from swiss_tournament.services.pairing import generate_swiss_pairings
from swiss_tournament.services.standings import Standing, compute_standings, to_competitors
from swiss_tournament.services.storage import TournamentStore

logger = structlog.get_logger()

MIN_ROSTER_SIZE = 2


@dataclass
class RoundCreated:
    """Outcome of a successful round creation."""

    round: Round
    boards: list[MatchRecord]
    bye: MatchRecord | None = None


class RoundService:
    """Orchestrates standings, the pairing engine and round persistence.

    This is the only caller of the pairing engine that writes anything: it
    gathers the snapshot, pairs, checks the result and saves it atomically.
    """

    def __init__(self, config: TournamentConfig, store: TournamentStore) -> None:
        """Initialize round service.

        Args:
            config: Tournament configuration (pairing options).
            store: Storage layer for tournaments, rounds and matches.
        """
        self.config = config
        self.store = store

    async def standings(self, tournament_id: str) -> list[Standing]:
        """Compute current standings of the active entrants."""
        entrants = await self.store.tournaments.list_entrants(tournament_id)
        history = await self.store.matches.get_history(tournament_id)
        return compute_standings(entrants, history)

    async def create_round(self, tournament_id: str) -> RoundCreated:
        """Pair and persist the next round of a tournament.

        Raises:
            RoundCreationError: If the round limit is reached, a round is still
                active, the roster is too small, or the pairing is invalid.
        """
        tournament = await self.store.tournaments.get_tournament(tournament_id)
        rounds = await self.store.rounds.list_rounds(tournament_id)
        next_round = max((r.round_number for r in rounds), default=0) + 1

        if next_round > tournament.total_rounds:
            raise RoundCreationError(
                f"Tournament already has all {tournament.total_rounds} rounds",
                "Raise total_rounds to continue the tournament.",
            )
        if any(r.status == "active" for r in rounds):
            raise RoundCreationError(
                "A round is still active",
                "Complete the current round before starting a new one.",
            )

        entrants = await self.store.tournaments.list_entrants(tournament_id)
        if len(entrants) < MIN_ROSTER_SIZE:
            raise RoundCreationError(
                f"At least {MIN_ROSTER_SIZE} active entrants are required, found {len(entrants)}"
            )
        history = await self.store.matches.get_history(tournament_id)
        competitors = to_competitors(compute_standings(entrants, history))

        try:
            pairings, new_entries = generate_swiss_pairings(
                competitors,
                history,
                next_round,
                self.config.pairing.allow_rematches,
                bye_result=self.config.pairing.bye_result,
            )
        except PairingError as e:
            logger.error("pairing_failed", tournament=tournament_id, round=next_round)
            raise RoundCreationError(e.message, e.suggestion) from e

        expected_byes = len(competitors) % 2
        if len(pairings) != len(competitors) // 2 or len(new_entries) != expected_byes:
            raise RoundCreationError(
                f"Pairing produced {len(pairings)} boards and {len(new_entries)} byes "
                f"for {len(competitors)} entrants"
            )

        round_, records = await self.store.rounds.create_round(
            tournament_id, next_round, pairings, new_entries
        )

        boards = [r for r in records if r.second_id != BYE]
        bye = next((r for r in records if r.second_id == BYE), None)
        logger.info(
            "round_created",
            tournament=tournament_id,
            round=next_round,
            boards=len(boards),
            bye=bye.first_id if bye else None,
        )
        return RoundCreated(round=round_, boards=boards, bye=bye)

    async def record_result(self, match_id: str, result: str) -> MatchRecord:
        """Record the result of a board in the active round.

        Raises:
            ResultError: If the match is unknown, a bye, already in a completed
                round, or the result is not a recognised value.
        """
        if result not in VALID_RESULTS:
            raise ResultError(
                f"Invalid result '{result}'",
                f"Use one of: {', '.join(VALID_RESULTS)}",
            )

        record = await self.store.matches.get_match(match_id)
        if record is None:
            raise ResultError(f"Match '{match_id}' does not exist")
        if record.second_id == BYE:
            raise ResultError("Bye results are fixed when the round is created")

        active = await self.store.rounds.get_active_round(record.tournament_id)
        if active is None or active.id != record.round_id:
            raise ResultError("Results can only be changed while the round is active")

        saved = await self.store.matches.save_result(match_id, result)
        logger.info("result_recorded", match=match_id, board=saved.board_number, result=result)
        return saved

    async def complete_round(self, tournament_id: str) -> Round:
        """Close the active round once every board has a result.

        Raises:
            RoundCompletionError: If no round is active or boards are unfinished.
        """
        tournament = await self.store.tournaments.get_tournament(tournament_id)
        active = await self.store.rounds.get_active_round(tournament_id)
        if active is None:
            raise RoundCompletionError("There is no active round to complete")

        boards = await self.store.matches.list_round_matches(active.id)
        unfinished = [b for b in boards if b.result is None]
        if unfinished:
            raise RoundCompletionError(
                f"{len(unfinished)} board(s) still have no result",
                "Record all results before completing the round.",
            )

        completed = await self.store.rounds.complete_round(
            active.id, finish_tournament=active.round_number >= tournament.total_rounds
        )
        logger.info("round_completed", tournament=tournament_id, round=completed.round_number)
        return completed
