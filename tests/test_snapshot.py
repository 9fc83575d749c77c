"""Tests for snapshot loading and row normalization."""

import json
import tempfile
from pathlib import Path

import pytest
import yaml

from swiss_tournament.core.config import BYE
from swiss_tournament.core.errors import MissingFieldError, ValidationError
from swiss_tournament.services.pairing import HistoryEntry, Pairing, generate_swiss_pairings
from swiss_tournament.services.storage import (
    competitor_from_row,
    history_entry_from_row,
    load_snapshot,
    normalize_round_number,
)
from swiss_tournament.services.storage.snapshot import parse_snapshot


class TestNormalizeRoundNumber:
    """Tests for the related-round shapes of exported match rows."""

    def test_plain_column(self):
        """Test a top-level round_number wins."""
        assert normalize_round_number({"round_number": 3, "round": {"round_number": 9}}) == 3

    def test_nested_object(self):
        """Test a related round given as an object."""
        assert normalize_round_number({"round": {"round_number": 2}}) == 2

    def test_one_element_list(self):
        """Test a related round given as a one-element list."""
        assert normalize_round_number({"round": [{"round_number": 4}]}) == 4

    @pytest.mark.parametrize("row", [{}, {"round": None}, {"round": []}, {"round": [{}]}])
    def test_missing_round_is_zero(self, row):
        """Test absent or empty relations fall back to 0."""
        assert normalize_round_number(row) == 0


class TestRowAdapters:
    """Tests for row to engine value conversion."""

    def test_history_entry_from_storage_columns(self):
        """Test white/black columns map to first/second sides."""
        row = {"white_id": "a", "black_id": "b", "result": "0-1", "round": [{"round_number": 1}]}

        assert history_entry_from_row(row) == HistoryEntry("a", "b", 1, "0-1")

    def test_history_entry_requires_both_sides(self):
        """Test a row without a second side is rejected."""
        with pytest.raises(ValueError, match="missing a side"):
            history_entry_from_row({"white_id": "a"})

    def test_competitor_from_standings_row(self):
        """Test standings view columns are recognised."""
        row = {
            "tournament_participant_id": "tp-1",
            "participant_name": "Alice",
            "chesscom_username": "alice_c",
            "score": 2.5,
            "buchholz": 4.0,
            "sonneborn_berger": 3.25,
        }

        competitor = competitor_from_row(row)

        assert competitor.id == "tp-1"
        assert competitor.name == "Alice"
        assert competitor.handle == "alice_c"
        assert competitor.score == 2.5
        assert competitor.tiebreaks == (4.0, 3.25)
        assert competitor.seed is None

    def test_competitor_tiebreaks_stop_at_first_gap(self):
        """Test a missing primary tie-break leaves no tie-breaks at all."""
        competitor = competitor_from_row({"id": "x", "tiebreak_2": 1.0, "seed": "3"})

        assert competitor.tiebreaks == ()
        assert competitor.seed == 3
        assert competitor.score == 0.0

    def test_competitor_requires_id(self):
        """Test rows without any id are rejected."""
        with pytest.raises(ValueError, match="no id"):
            competitor_from_row({"name": "nobody"})


class TestLoadSnapshot:
    """Tests for snapshot files."""

    def test_round_inferred_from_history(self):
        """Test the next round follows the latest round in the history."""
        snapshot = parse_snapshot(
            {
                "competitors": [{"id": "a"}, {"id": "b"}],
                "matches": [
                    {"white_id": "a", "black_id": "b", "round_number": 1},
                    {"white_id": "a", "black_id": BYE, "round": {"round_number": 2}},
                ],
            }
        )

        assert snapshot.round_number == 3
        assert len(snapshot.history) == 2

    def test_empty_history_is_round_one(self):
        """Test a snapshot without matches pairs round 1."""
        snapshot = parse_snapshot({"competitors": [{"id": "a"}]})

        assert snapshot.round_number == 1
        assert snapshot.history == []

    def test_missing_competitors(self):
        """Test the competitor list is required."""
        with pytest.raises(MissingFieldError):
            parse_snapshot({"matches": []})

    def test_malformed_row(self):
        """Test rows that cannot be read are reported as configuration errors."""
        with pytest.raises(ValidationError, match="competitors/matches"):
            parse_snapshot({"competitors": [{"name": "no id"}]}, "bad.yaml")

    @pytest.mark.parametrize(
        ("filename", "content"),
        [("snapshot.yaml", "competitors: [a, b\n"), ("snapshot.json", '{"competitors": [')],
    )
    def test_unparseable_file(self, tmp_path, filename, content):
        """Test syntax errors in either format become validation errors."""
        path = tmp_path / filename
        path.write_text(content)

        with pytest.raises(ValidationError, match="Cannot parse"):
            load_snapshot(path)

    def test_load_yaml_and_json(self):
        """Test both file formats load the same data."""
        data = {
            "round_number": 2,
            "competitors": [{"id": "a", "score": 1}, {"id": "b", "score": 0}],
            "matches": [{"white_id": "a", "black_id": "b", "result": "1-0", "round_number": 1}],
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            yaml_path = Path(tmpdir) / "snapshot.yaml"
            json_path = Path(tmpdir) / "snapshot.json"
            yaml_path.write_text(yaml.dump(data))
            json_path.write_text(json.dumps(data))

            from_yaml = load_snapshot(yaml_path)
            from_json = load_snapshot(json_path)

        assert from_yaml == from_json
        assert from_yaml.round_number == 2

    def test_missing_file(self):
        """Test a missing snapshot raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_snapshot("/nonexistent/snapshot.yaml")


class TestExampleSnapshot:
    """Tests against the snapshot shipped in examples/."""

    def test_pairs_next_round(self):
        """Test the sample export pairs round 2 with Emeka on the bye.

        Chen held white through the round 1 bye, so Dara takes white on board 2.
        """
        snapshot = load_snapshot(Path(__file__).parent.parent / "examples" / "snapshot.yaml")

        pairings, new_entries = generate_swiss_pairings(
            snapshot.competitors, snapshot.history, snapshot.round_number
        )

        assert snapshot.round_number == 2
        assert new_entries == [HistoryEntry("e", BYE, 2, "1-0")]
        assert pairings == [Pairing("a", "b", 1), Pairing("d", "c", 2)]
