"""Tests for CLI interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from gardensim.main import app

runner = CliRunner()

GARDEN_YAML = """
name: "CLI Garden"
seed: 11
garden:
  random_attack_chance: 0.0
plantings:
  - plot: "0,0"
    name: basil-1
    species: Basil
  - plot: "0,1"
    name: lettuce-1
    species: Lettuce
"""


class TestRunCommand:
    """Tests for the run command."""

    def test_run_with_config_file(self, tmp_path: Path) -> None:
        """Test run command with config file."""
        config = tmp_path / "garden.yaml"
        config.write_text(GARDEN_YAML)

        result = runner.invoke(app, ["run", str(config), "--days", "2", "-q"])

        assert result.exit_code == 0

    def test_run_defaults_without_config(self) -> None:
        """Running without a config uses the defaults."""
        result = runner.invoke(app, ["run", "--days", "1", "-q"])
        assert result.exit_code == 0

    def test_run_console_output(self, tmp_path: Path) -> None:
        """Console format prints a summary."""
        config = tmp_path / "garden.yaml"
        config.write_text(GARDEN_YAML)

        result = runner.invoke(app, ["run", str(config), "--days", "2"])

        assert result.exit_code == 0
        assert "Simulation Complete" in result.stdout

    def test_run_with_missing_config_errors(self) -> None:
        """Test that missing config file errors."""
        result = runner.invoke(app, ["run", "/nonexistent/path.yaml"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_run_with_invalid_config_errors(self, tmp_path: Path) -> None:
        """Test that invalid config file errors."""
        config = tmp_path / "invalid.yaml"
        config.write_text("garden:\n  initial_coins: -5\n")

        result = runner.invoke(app, ["run", str(config)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout

    def test_run_with_unknown_format_errors(self) -> None:
        """Unknown output formats are rejected."""
        result = runner.invoke(app, ["run", "--format", "xml"])
        assert result.exit_code == 1

    def test_run_with_output_dir(self, tmp_path: Path) -> None:
        """Results are written as JSON to the output directory."""
        config = tmp_path / "garden.yaml"
        config.write_text(GARDEN_YAML)
        output_dir = tmp_path / "results"

        result = runner.invoke(
            app, ["run", str(config), "--days", "4", "-o", str(output_dir), "-q"]
        )

        assert result.exit_code == 0
        data = json.loads((output_dir / "results.json").read_text())
        assert data["name"] == "CLI Garden"
        assert data["stats"]["days_elapsed"] == 4
        # Both plants mature within four days and are harvested at the end
        assert data["stats"]["plants_harvested"] == 2
        assert data["final_state"]["plants"] == []

    def test_run_json_to_stdout(self, tmp_path: Path) -> None:
        """JSON format without an output directory prints JSON."""
        config = tmp_path / "garden.yaml"
        config.write_text(GARDEN_YAML)

        result = runner.invoke(
            app, ["run", str(config), "--days", "1", "--format", "json"]
        )

        assert result.exit_code == 0
        assert '"days_elapsed": 1' in result.stdout


class TestSpeciesCommand:
    """Tests for the species command."""

    def test_lists_catalog(self) -> None:
        """The built-in catalog is listed."""
        result = runner.invoke(app, ["species"])

        assert result.exit_code == 0
        assert "Tomato" in result.stdout
        assert "Marigold" in result.stdout


class TestInitCommand:
    """Tests for the init command."""

    def test_init_creates_file(self, tmp_path: Path) -> None:
        """Test init creates a config file."""
        output = tmp_path / "my-garden.yaml"

        result = runner.invoke(app, ["init", "My Garden", "-o", str(output)])

        assert result.exit_code == 0
        assert output.exists()
        assert "My Garden" in output.read_text()

    def test_init_output_validates(self, tmp_path: Path) -> None:
        """A generated config passes validation."""
        output = tmp_path / "starter.yaml"
        runner.invoke(app, ["init", "Starter", "-o", str(output)])

        result = runner.invoke(app, ["validate", str(output)])

        assert result.exit_code == 0
        assert "Valid" in result.stdout
        assert "Plantings: 3" in result.stdout


class TestValidateCommand:
    """Tests for the validate command."""

    def test_validate_valid_config(self, tmp_path: Path) -> None:
        """Test validate with valid config."""
        config = tmp_path / "valid.yaml"
        config.write_text(GARDEN_YAML)

        result = runner.invoke(app, ["validate", str(config)])

        assert result.exit_code == 0
        assert "Valid" in result.stdout
        assert "CLI Garden" in result.stdout

    def test_validate_invalid_config(self, tmp_path: Path) -> None:
        """Test validate with invalid config."""
        config = tmp_path / "invalid.yaml"
        config.write_text("watering:\n  low_moisture_threshold: 150\n")

        result = runner.invoke(app, ["validate", str(config)])

        assert result.exit_code == 1
        assert "Invalid" in result.stdout

    def test_validate_missing_file(self) -> None:
        """Test validate with missing file."""
        result = runner.invoke(app, ["validate", "/nonexistent.yaml"])

        assert result.exit_code == 1
        assert "not found" in result.stdout
