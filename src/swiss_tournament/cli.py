"""CLI for Swiss Tournament."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, TypeVar

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from swiss_tournament import __version__
from swiss_tournament.core.config import BYE, TournamentConfig, calculate_nr_rounds, load_config
from swiss_tournament.core.errors import RoundError, TournamentError
from swiss_tournament.services.pairing import Pairing, generate_swiss_pairings
from swiss_tournament.services.reporting import format_pairings_table, format_standings_table
from swiss_tournament.services.rounds import RoundService
from swiss_tournament.services.storage import TournamentStore, load_snapshot

T = TypeVar("T")

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="swiss-tournament",
    help="Swiss Tournament - pair and administer Swiss-system chess rounds",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"swiss-tournament v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Swiss Tournament CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _run_with_store(
    config_path: Path, action: Callable[[TournamentConfig, TournamentStore], Awaitable[T]]
) -> T:
    """Load config, open the store, run an async action and close the store.

    Errors are reported on the console and turned into exit code 1.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    async def _run() -> T:
        store = TournamentStore(config)
        try:
            return await action(config, store)
        finally:
            await store.close()

    try:
        return asyncio.run(_run())
    except TournamentError as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(1) from e


@app.command()
def pair(
    snapshot_path: Annotated[Path, typer.Argument(help="Snapshot YAML/JSON with competitors")],
    round_number: Annotated[
        int | None, typer.Option("--round", help="Round to pair (default: next round)")
    ] = None,
    allow_rematches: Annotated[
        bool, typer.Option("--allow-rematches", help="Ignore previous meetings")
    ] = False,
    table_format: Annotated[str, typer.Option("--format", help="tabulate table format")] = "github",
) -> None:
    """Pair one round from a snapshot file without touching the database.

    Args:
        snapshot_path: Path to the snapshot file.
        round_number: Override the round inferred from the history.
        allow_rematches: Pair without regard to previous meetings.
        table_format: Output table format.
    """
    try:
        snapshot = load_snapshot(snapshot_path)
        target_round = round_number if round_number is not None else snapshot.round_number
        pairings, new_entries = generate_swiss_pairings(
            snapshot.competitors, snapshot.history, target_round, allow_rematches
        )
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except TournamentError as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(1) from e

    names = {c.id: c.name or c.id for c in snapshot.competitors}
    console.print(f"[bold]Round {target_round}[/bold]")
    console.print(format_pairings_table(pairings, names, tablefmt=table_format))
    for entry in new_entries:
        console.print(f"Bye: {names.get(entry.first_id, entry.first_id)} ({entry.result})")


@app.command()
def create(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Create a tournament and register the entrants listed in the config."""

    async def _create(config: TournamentConfig, store: TournamentStore) -> None:
        tournament = await store.tournaments.create_tournament(config)
        console.print(f"[green]Created tournament[/green] {tournament.name}")
        console.print(f"  ID: {tournament.id}")
        console.print(f"  Entrants: {len(config.entrants)}")
        console.print(f"  Rounds: {tournament.total_rounds}")

    _run_with_store(config_path, _create)


@app.command("add-entrant")
def add_entrant(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    tournament_id: Annotated[str, typer.Argument(help="Tournament ID")],
    name: Annotated[str, typer.Argument(help="Entrant name")],
    handle: Annotated[str, typer.Option("--handle", help="External handle")] = "",
    seed: Annotated[int | None, typer.Option("--seed", min=1, help="Seed number")] = None,
) -> None:
    """Register a late entrant; they are paired from the next round on."""

    async def _add(config: TournamentConfig, store: TournamentStore) -> None:
        await store.tournaments.get_tournament(tournament_id)
        entrant = await store.tournaments.add_entrant(tournament_id, name, handle, seed)
        console.print(f"[green]Added[/green] {entrant.name} ({entrant.id})")

    _run_with_store(config_path, _add)


@app.command()
def withdraw(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    entrant_id: Annotated[str, typer.Argument(help="Entrant ID")],
) -> None:
    """Withdraw an entrant so later rounds no longer pair them."""

    async def _withdraw(config: TournamentConfig, store: TournamentStore) -> None:
        await store.tournaments.withdraw_entrant(entrant_id)
        console.print(f"[yellow]Withdrawn[/yellow] {entrant_id}")

    _run_with_store(config_path, _withdraw)


@app.command("new-round")
def new_round(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    tournament_id: Annotated[str, typer.Argument(help="Tournament ID")],
) -> None:
    """Pair and save the next round of a tournament."""

    async def _new_round(config: TournamentConfig, store: TournamentStore) -> None:
        service = RoundService(config, store)
        created = await service.create_round(tournament_id)
        entrants = await store.tournaments.list_entrants(tournament_id, active_only=False)
        names = {e.id: e.name for e in entrants}

        pairings = [
            Pairing(first_id=b.first_id, second_id=b.second_id, board_number=b.board_number)
            for b in created.boards
        ]
        console.print(f"[bold green]Round {created.round.round_number} created[/bold green]")
        console.print(format_pairings_table(pairings, names))
        for board in created.boards:
            console.print(f"  board {board.board_number}: match id {board.id}")
        if created.bye:
            console.print(f"Bye: {names.get(created.bye.first_id, created.bye.first_id)}")

    _run_with_store(config_path, _new_round)


@app.command()
def result(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    match_id: Annotated[str, typer.Argument(help="Match ID")],
    outcome: Annotated[str, typer.Argument(help="1-0, 0-1 or 1/2-1/2")],
) -> None:
    """Record the result of a board."""

    async def _result(config: TournamentConfig, store: TournamentStore) -> None:
        record = await RoundService(config, store).record_result(match_id, outcome)
        console.print(f"[green]Board {record.board_number}:[/green] {record.result}")

    _run_with_store(config_path, _result)


@app.command("complete-round")
def complete_round(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    tournament_id: Annotated[str, typer.Argument(help="Tournament ID")],
) -> None:
    """Complete the active round once all results are in."""

    async def _complete(config: TournamentConfig, store: TournamentStore) -> None:
        completed = await RoundService(config, store).complete_round(tournament_id)
        console.print(f"[green]Round {completed.round_number} completed[/green]")

    _run_with_store(config_path, _complete)


@app.command("show-round")
def show_round(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    tournament_id: Annotated[str, typer.Argument(help="Tournament ID")],
    round_number: Annotated[
        int | None, typer.Option("--round", help="Round to show (default: latest)")
    ] = None,
) -> None:
    """Show the boards of a round with their results."""

    async def _show(config: TournamentConfig, store: TournamentStore) -> None:
        await store.tournaments.get_tournament(tournament_id)
        rounds = await store.rounds.list_rounds(tournament_id)
        if round_number is not None:
            rounds = [r for r in rounds if r.round_number == round_number]
        if not rounds:
            raise RoundError("No matching round found")
        round_ = rounds[-1]

        entrants = await store.tournaments.list_entrants(tournament_id, active_only=False)
        names = {e.id: e.name for e in entrants}
        records = await store.matches.list_round_matches(round_.id)
        boards = [r for r in records if r.second_id != BYE]

        pairings = [
            Pairing(first_id=b.first_id, second_id=b.second_id, board_number=b.board_number)
            for b in boards
        ]
        results = {b.board_number: b.result for b in boards}
        console.print(f"[bold]Round {round_.round_number}[/bold] ({round_.status})")
        console.print(format_pairings_table(pairings, names, results))
        for bye in (r for r in records if r.second_id == BYE):
            console.print(f"Bye: {names.get(bye.first_id, bye.first_id)} ({bye.result})")

    _run_with_store(config_path, _show)


@app.command()
def standings(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    tournament_id: Annotated[str, typer.Argument(help="Tournament ID")],
) -> None:
    """Show current standings with Buchholz and Sonneborn-Berger."""

    async def _standings(config: TournamentConfig, store: TournamentStore) -> None:
        await store.tournaments.get_tournament(tournament_id)
        rows = await RoundService(config, store).standings(tournament_id)
        console.print(format_standings_table(rows))

    _run_with_store(config_path, _standings)


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without running.

    Args:
        config_path: Path to YAML configuration file.
    """
    try:
        config = load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Name: {config.name}")
        console.print(f"  Entrants: {len(config.entrants)}")
        console.print(f"  Rounds: {config.total_rounds}")
        console.print(f"  Recommended rounds: {calculate_nr_rounds(len(config.entrants))}")
        console.print(f"  Allow rematches: {config.pairing.allow_rematches}")
        console.print(f"  Database: {config.get_database_url()}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Validation error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Swiss Tournament[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Pair a round from an exported snapshot")
    console.print("  swiss-tournament pair snapshot.yaml --round 3\n")

    console.print("  # Create a tournament from config")
    console.print("  swiss-tournament create config.yaml\n")

    console.print("  # Register a late entrant or withdraw one")
    console.print("  swiss-tournament add-entrant config.yaml <tournament-id> \"Name\" --seed 9")
    console.print("  swiss-tournament withdraw config.yaml <entrant-id>\n")

    console.print("  # Start the next round")
    console.print("  swiss-tournament new-round config.yaml <tournament-id>\n")

    console.print("  # Record a result and close the round")
    console.print("  swiss-tournament result config.yaml <match-id> 1-0")
    console.print("  swiss-tournament show-round config.yaml <tournament-id>")
    console.print("  swiss-tournament complete-round config.yaml <tournament-id>\n")

    console.print("  # Validate config")
    console.print("  swiss-tournament validate config.yaml")


if __name__ == "__main__":
    app()
