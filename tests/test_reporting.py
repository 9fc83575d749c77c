"""Tests for pairing and standings tables."""

from swiss_tournament.services.pairing import Pairing
from swiss_tournament.services.reporting import format_pairings_table, format_standings_table
from swiss_tournament.services.standings import Standing


class TestPairingsTable:
    """Tests for the board table."""

    def test_results_rendered(self):
        """Test decisive results print as stored, draws as ½-½ and unplayed boards blank."""
        pairings = [Pairing("a", "b", 1), Pairing("c", "d", 2), Pairing("e", "f", 3)]
        names = {"a": "Ada", "b": "Bo", "c": "Chen", "d": "Dara"}

        table = format_pairings_table(pairings, names, {1: "1-0", 2: "1/2-1/2", 3: None})
        rows = table.splitlines()[2:]

        assert "Ada" in rows[0]
        assert "1-0" in rows[0]
        assert "½-½" in rows[1]
        assert "1/2-1/2" not in table
        assert "e" in rows[2].split("|")[2]
        assert rows[2].split("|")[4].strip() == ""

    def test_without_results(self):
        """Test boards print with an empty result column when no results are given."""
        table = format_pairings_table([Pairing("a", "b", 1)], {"a": "Ada", "b": "Bo"})

        header = [cell.strip() for cell in table.splitlines()[0].split("|")[1:-1]]
        assert header == ["Board", "White", "Black", "Result"]
        assert table.splitlines()[2].split("|")[4].strip() == ""


class TestStandingsTable:
    """Tests for the standings table."""

    def test_rank_and_record(self):
        """Test rows are ranked in order with the W/D/L record."""
        standings = [
            Standing("a", "Ada", score=1.5, buchholz=2.0, games_played=2, wins=1, draws=1),
            Standing("b", "Bo", score=0.5, games_played=2, draws=1, losses=1),
        ]

        lines = format_standings_table(standings).splitlines()

        assert "Buchholz" in lines[0]
        assert lines[2].split("|")[1].strip() == "1"
        assert "Ada" in lines[2]
        assert "1/1/0" in lines[2]
        assert "0/1/1" in lines[3]
