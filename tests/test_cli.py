"""Tests for the command line interface."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from swiss_tournament import __version__
from swiss_tournament.cli import app

runner = CliRunner()


@pytest.fixture
def snapshot_file(tmp_path):
    """Three competitors after one round; Emeka trails and has had no bye."""
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps(
            {
                "competitors": [
                    {"id": "a", "name": "Ada", "score": 1},
                    {"id": "b", "name": "Bo", "score": 1},
                    {"id": "e", "name": "Emeka", "score": 0},
                ],
                "matches": [
                    {"white_id": "a", "black_id": "e", "result": "1-0", "round_number": 1},
                    {"white_id": "b", "black_id": "BYE", "result": "1-0", "round_number": 1},
                ],
            }
        )
    )
    return path


@pytest.fixture
def config_file(tmp_path):
    """Config with four seeded entrants and a database under tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "name": "CLI Open",
                "total_rounds": 2,
                "output_dir": str(tmp_path / "runs"),
                "entrants": [{"name": n, "seed": i} for i, n in enumerate("WXYZ", start=1)],
            }
        )
    )
    return path


def _tournament_id(output: str) -> str:
    for line in output.splitlines():
        if line.strip().startswith("ID:"):
            return line.split("ID:", 1)[1].strip()
    raise AssertionError(f"no tournament id in output:\n{output}")


class TestPairCommand:
    """Tests for pairing from a snapshot file."""

    def test_pair_prints_boards_and_bye(self, snapshot_file):
        """Test the next round is inferred and the bye is reported."""
        result = runner.invoke(app, ["pair", str(snapshot_file)])

        assert result.exit_code == 0, result.output
        assert "Round 2" in result.output
        assert "Ada" in result.output
        assert "Bye: Emeka (1-0)" in result.output

    def test_pair_missing_file(self, tmp_path):
        """Test a missing snapshot exits with an error."""
        result = runner.invoke(app, ["pair", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_pair_invalid_round(self, snapshot_file):
        """Test engine input errors are reported with exit code 1."""
        result = runner.invoke(app, ["pair", str(snapshot_file), "--round", "-1"])

        assert result.exit_code == 1
        assert "Pairing Error" in result.output

    def test_pair_unparseable_snapshot(self, tmp_path):
        """Test a snapshot with a syntax error is reported in red with exit code 1."""
        path = tmp_path / "broken.yaml"
        path.write_text("competitors: [a, b\n")

        result = runner.invoke(app, ["pair", str(path)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output
        assert "Cannot parse" in result.output

    def test_pair_round_zero_rejected(self, snapshot_file):
        """Test an explicit round 0 is rejected rather than replaced by the inferred round."""
        result = runner.invoke(app, ["pair", str(snapshot_file), "--round", "0"])

        assert result.exit_code == 1
        assert "Pairing Error" in result.output
        assert "Round 2" not in result.output


class TestTournamentCommands:
    """Tests for commands backed by the database."""

    def test_validate(self, config_file):
        """Test a valid config is summarised."""
        result = runner.invoke(app, ["validate", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Configuration is valid" in result.output
        assert "Recommended rounds: 2" in result.output

    def test_validate_missing_file(self, tmp_path):
        """Test validating a missing file fails."""
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1

    def test_create_pair_and_standings(self, config_file):
        """Test creating a tournament, pairing round 1 and showing standings."""
        created = runner.invoke(app, ["create", str(config_file)])
        assert created.exit_code == 0, created.output
        tournament_id = _tournament_id(created.output)

        paired = runner.invoke(app, ["new-round", str(config_file), tournament_id])
        assert paired.exit_code == 0, paired.output
        assert "Round 1 created" in paired.output
        assert "board 2" in paired.output

        blocked = runner.invoke(app, ["new-round", str(config_file), tournament_id])
        assert blocked.exit_code == 1
        assert "still active" in blocked.output

        table = runner.invoke(app, ["standings", str(config_file), tournament_id])
        assert table.exit_code == 0, table.output
        assert "Buchholz" in table.output

    def test_late_entrant_and_show_round(self, config_file):
        """Test a late entrant is paired and the round is shown with its bye."""
        created = runner.invoke(app, ["create", str(config_file)])
        tournament_id = _tournament_id(created.output)

        added = runner.invoke(
            app, ["add-entrant", str(config_file), tournament_id, "Late", "--seed", "5"]
        )
        assert added.exit_code == 0, added.output
        assert "Added Late" in added.output

        paired = runner.invoke(app, ["new-round", str(config_file), tournament_id])
        assert paired.exit_code == 0, paired.output

        shown = runner.invoke(app, ["show-round", str(config_file), tournament_id])
        assert shown.exit_code == 0, shown.output
        assert "Round 1 (active)" in shown.output
        assert "Bye: Late (1-0)" in shown.output

    def test_withdraw_unknown_entrant(self, config_file):
        """Test withdrawing a missing entrant exits with an error."""
        result = runner.invoke(app, ["withdraw", str(config_file), "nobody"])

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_unknown_tournament(self, config_file):
        """Test commands report an unknown tournament id."""
        result = runner.invoke(app, ["standings", str(config_file), "missing"])

        assert result.exit_code == 1
        assert "missing" in result.output


class TestInfo:
    """Tests for informational commands."""

    def test_version(self):
        """Test --version prints the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
