"""
CLI test suite.

Runs the click commands against a temporary storage directory.
"""

import json

import pytest
from click.testing import CliRunner

from frameset.cli import cli
from frameset.persistence import FramesetPersistence


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def stored(storage_dir, frameset):
    """Storage directory holding the fixture frameset as desktop/work."""
    FramesetPersistence(storage_dir).save_frameset(frameset)
    return storage_dir


def invoke(runner, storage_dir, *args):
    return runner.invoke(cli, ["--dir", str(storage_dir), *args])


class TestListShow:
    """Test listing and showing framesets."""

    def test_list_empty(self, runner, storage_dir):
        result = invoke(runner, storage_dir, "list")

        assert result.exit_code == 0
        assert "No framesets saved" in result.output

    def test_list_json(self, runner, stored):
        result = invoke(runner, stored, "list", "--json")

        assert result.exit_code == 0
        entries = json.loads(result.output)
        assert [(e["app"], e["name"]) for e in entries] == [("desktop", "work")]

    def test_list_table(self, runner, stored):
        result = invoke(runner, stored, "list")

        assert result.exit_code == 0
        assert "work" in result.output

    def test_show(self, runner, stored):
        result = invoke(runner, stored, "show", "work", "--app", "desktop")

        assert result.exit_code == 0
        assert "Frameset: work" in result.output

    def test_show_json(self, runner, stored):
        result = invoke(runner, stored, "show", "work", "--app", "desktop", "--json")

        assert result.exit_code == 0
        assert json.loads(result.output)["version"] == 1

    def test_show_missing(self, runner, storage_dir):
        result = invoke(runner, storage_dir, "show", "nothing")

        assert result.exit_code == 1
        assert "Frameset not found" in result.output


class TestValidateDelete:
    """Test validating files and deleting framesets."""

    def test_validate_valid(self, runner, stored):
        result = invoke(runner, stored, "validate", str(stored / "desktop" / "work.json"))

        assert result.exit_code == 0
        assert "Valid frameset" in result.output

    def test_validate_invalid(self, runner, tmp_path):
        path = tmp_path / "layout.json"
        path.write_text(json.dumps({"version": 1, "states": []}))

        result = invoke(runner, tmp_path, "validate", str(path))

        assert result.exit_code == 1
        assert "Not a valid frameset" in result.output

    def test_delete(self, runner, stored):
        result = invoke(runner, stored, "delete", "work", "--app", "desktop")

        assert result.exit_code == 0
        assert not (stored / "desktop" / "work.json").exists()

    def test_delete_missing(self, runner, storage_dir):
        result = invoke(runner, storage_dir, "delete", "nothing")

        assert result.exit_code == 1


class TestSimulate:
    """Test simulated restores."""

    def test_simulate(self, runner, stored):
        result = invoke(runner, stored, "simulate", "work", "--app", "desktop", "--json")

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report["success"]
        assert [a["action"] for a in report["actions"]] == ["created", "created"]

    def test_simulate_on_terminal(self, runner, stored):
        result = invoke(runner, stored, "simulate", "work", "--app", "desktop",
                        "--current-display", "tty", "--display", "current", "--json")

        assert result.exit_code == 0
        assert len(json.loads(result.output)["actions"]) == 2

    def test_simulate_skipping_other_displays(self, runner, stored):
        result = invoke(runner, stored, "simulate", "work", "--app", "desktop",
                        "--current-display", ":5", "--display", "delete", "--json")

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report["skipped"] == 2
        assert report["actions"] == []

    def test_simulate_table(self, runner, stored):
        result = invoke(runner, stored, "simulate", "work", "--app", "desktop")

        assert result.exit_code == 0
        assert "2 created" in result.output

    def test_simulate_missing(self, runner, storage_dir):
        result = invoke(runner, storage_dir, "simulate", "nothing")

        assert result.exit_code == 1
