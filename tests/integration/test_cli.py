"""Integration tests for the racks CLI.

These tests run the Typer app end-to-end against JSON files:
- Creating configurations and adding racks and components
- Moving, removing and measuring components
- Showing diagrams, upgrading legacy files and exporting
"""

import json
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from racks.cli.main import app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def lab_file(tmp_path: Path) -> Path:
    """Writable copy of the two-rack lab configuration."""
    path = tmp_path / "lab.json"
    shutil.copy(FIXTURES_PATH / "lab.json", path)
    return path


def read_racks(path: Path) -> list[dict]:
    return json.loads(path.read_text(encoding="utf-8"))


def component_ids(path: Path, rack_index: int) -> list[str]:
    return [c["id"] for c in read_racks(path)[rack_index]["components"]]


class TestNewCommand:
    """Tests for creating configuration files."""

    def test_creates_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "new.json"
        result = runner.invoke(app, ["new", str(path), "--name", "Lab", "--height", "24U"])

        assert result.exit_code == 0
        assert "with rack 'Lab (24U)'" in result.output
        racks = read_racks(path)
        assert len(racks) == 1
        assert racks[0]["height"] == 24
        assert racks[0]["components"] == []

    def test_refuses_to_overwrite(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["new", str(lab_file)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert len(read_racks(lab_file)) == 2

    def test_force_overwrites(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["new", str(lab_file), "--force"])
        assert result.exit_code == 0
        assert len(read_racks(lab_file)) == 1

    def test_invalid_height(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "new.json"
        result = runner.invoke(app, ["new", str(path), "--height", "200"])
        assert result.exit_code == 1
        assert "Rack height cannot exceed 100U" in result.output
        assert not path.exists()


class TestAddCommands:
    """Tests for add-rack and add."""

    def test_add_rack(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["add-rack", str(lab_file), "--name", "Row C", "-u", "12"])
        assert result.exit_code == 0
        assert "Added rack 'Row C'" in result.output
        racks = read_racks(lab_file)
        assert [r["name"] for r in racks] == ["Row A", "Row B", "Row C"]

    def test_add_auto_placed(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["add", str(lab_file), "Server", "--height", "2"])
        assert result.exit_code == 0
        assert "Added 'Server' at [41, 42] in 'Row A'" in result.output

    def test_add_to_named_rack_with_options(
        self, runner: CliRunner, lab_file: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "add", str(lab_file), "Patch", "--rack", "Row B",
                "--position", "5", "--type", "patch_panel",
                "--tag", "Copper", "--tag", "row b",
            ],
        )
        assert result.exit_code == 0
        added = read_racks(lab_file)[1]["components"][-1]
        assert added["position"] == 5
        assert added["type"] == "patch_panel"
        assert added["color"] == "#8B5CF6"
        assert added["tags"] == ["copper", "row-b"]

    def test_add_overlap_rejected(self, runner: CliRunner, lab_file: Path) -> None:
        before = lab_file.read_text(encoding="utf-8")
        result = runner.invoke(app, ["add", str(lab_file), "Clash", "-u", "2", "-p", "29"])
        assert result.exit_code == 1
        assert "Error: Component would overlap with existing components: DB" in result.output
        assert lab_file.read_text(encoding="utf-8") == before

    def test_add_unknown_rack(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["add", str(lab_file), "X", "--rack", "nowhere"])
        assert result.exit_code == 1
        assert "Unknown rack: nowhere" in result.output


class TestMoveAndRemove:
    """Tests for move and remove."""

    def test_move_within_rack(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["move", str(lab_file), "web-1", "--position", "15"])
        assert result.exit_code == 0
        assert "Moved 'Web 1' to [15, 15] in 'Row A'" in result.output

    def test_move_to_other_rack(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(
            app, ["move", str(lab_file), "Web 1", "--rack", "rack-2", "-p", "10"]
        )
        assert result.exit_code == 0
        assert component_ids(lab_file, 0) == ["web-2", "db-1"]
        assert component_ids(lab_file, 1) == ["sw-1", "web-1"]
        moved = read_racks(lab_file)[1]["components"][1]
        assert moved["position"] == 10
        assert moved["name"] == "Web 1"

    def test_invalid_move_rejected(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["move", str(lab_file), "web-1", "-p", "31"])
        assert result.exit_code == 1
        assert "overlap" in result.output
        assert read_racks(lab_file)[0]["components"][0]["position"] == 10

    def test_remove(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["remove", str(lab_file), "Web 2"])
        assert result.exit_code == 0
        assert "Removed 'Web 2'" in result.output
        assert component_ids(lab_file, 0) == ["web-1", "db-1"]

    def test_remove_unknown(self, runner: CliRunner, lab_file: Path) -> None:
        result = runner.invoke(app, ["remove", str(lab_file), "ghost"])
        assert result.exit_code == 1
        assert "Unknown component: ghost" in result.output


class TestShowAndDistance:
    """Tests for read-only commands."""

    def test_show_all(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["show", str(FIXTURES_PATH / "lab.json")])
        assert result.exit_code == 0
        assert "RACK: Row A (42U)" in result.output
        assert "RACK: Row B (24U)" in result.output
        assert "[Core Switch (1U)" in result.output

    def test_show_one_rack(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["show", str(FIXTURES_PATH / "lab.json"), "--rack", "Row B"]
        )
        assert result.exit_code == 0
        assert "Row A" not in result.output
        assert "Components: 1" in result.output

    def test_distance_between_two(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["distance", str(FIXTURES_PATH / "lab.json"), "web-1", "web-2"]
        )
        assert result.exit_code == 0
        assert "Distance between 'Web 1' and 'Web 2': 17.5 inches" in result.output

    def test_distance_in_rack_units(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["distance", str(FIXTURES_PATH / "lab.json"), "web-1", "web-2", "--unit", "U"],
        )
        assert "10.0 U" in result.output

    def test_distance_report(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["distance", str(FIXTURES_PATH / "lab.json"), "web-1"])
        assert result.exit_code == 0
        assert "Distances from 'Web 1' [10, 10]:" in result.output
        assert "DB" in result.output
        assert "Web 2" in result.output

    def test_distance_across_racks_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["distance", str(FIXTURES_PATH / "lab.json"), "web-1", "sw-1"]
        )
        assert result.exit_code == 1
        assert "different racks" in result.output


class TestUpgradeCommand:
    """Tests for rewriting legacy files."""

    def test_upgrade_legacy(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "upgraded.json"
        result = runner.invoke(
            app,
            ["upgrade", str(FIXTURES_PATH / "legacy_rack.json"), "--output", str(output)],
        )
        assert result.exit_code == 0
        assert "Wrote 1 rack(s)" in result.output

        racks = read_racks(output)
        component = racks[0]["components"][0]
        assert component["networkInterfaces"][0]["name"] == "eth0"
        assert component["networkInterfaces"][0]["addresses"][0]["address"] == "10.0.0.5"
        assert component["pduConfig"] == {"count": 2, "frontBack": "back", "side": "left"}


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "lab.json")])
        assert result.exit_code == 0
        assert "Validation passed. Configuration is valid." in result.output

    def test_warnings(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "with_empty_rack.json")])
        assert result.exit_code == 2
        assert "Rack 'Spare' is empty" in result.output
        assert "Validation passed with 1 warning(s)" in result.output

    def test_overlap(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "overlapping.json")])
        assert result.exit_code == 1
        assert "[0].components[1].position" in result.output
        assert "Validation failed" in result.output

    def test_schema_error(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "bad_height.json")])
        assert result.exit_code == 1
        assert "[0].components[0].height" in result.output

    def test_invalid_json(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "invalid_json.json")])
        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "nonexistent.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_editing_overlapping_file_refused(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        path = tmp_path / "overlapping.json"
        shutil.copy(FIXTURES_PATH / "overlapping.json", path)
        result = runner.invoke(app, ["add", str(path), "New"])
        assert result.exit_code == 1
        assert "overlaps" in result.output


class TestExportCommand:
    """Tests for the export command."""

    def test_selected_formats(self, runner: CliRunner, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["export", str(FIXTURES_PATH / "lab.json"), "-f", "json,svg", "-o", str(out)],
        )
        assert result.exit_code == 0
        assert (out / "lab_json.json").exists()
        assert (out / "lab_svg.svg").exists()
        assert not (out / "lab_xlsx.xlsx").exists()

    def test_all_formats_with_project_name(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            [
                "export", str(FIXTURES_PATH / "lab.json"),
                "-o", str(tmp_path), "--project-name", "dc1",
            ],
        )
        assert result.exit_code == 0
        assert "Exported files:" in result.output
        assert "XLSX:" in result.output
        assert (tmp_path / "dc1_xlsx.xlsx").exists()

    def test_unknown_format(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            ["export", str(FIXTURES_PATH / "lab.json"), "-f", "pdf", "-o", str(tmp_path)],
        )
        assert result.exit_code == 1
        assert "Unknown formats: pdf" in result.output


class TestVerboseFlag:
    """The global --verbose flag is accepted before any command."""

    def test_verbose(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--verbose", "show", str(FIXTURES_PATH / "lab.json")])
        assert result.exit_code == 0
