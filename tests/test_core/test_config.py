"""Tests for configuration models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from gardensim.core.config import (
    ClockConfig,
    GardenConfig,
    PestControlConfig,
    PlantingConfig,
    SimulationConfig,
    SpeciesConfig,
    WateringConfig,
    load_config,
    save_config,
    validate_config,
)
from gardensim.core.state import SPECIES_CATALOG, ParasitePolicy


class TestSectionDefaults:
    """Tests for section defaults."""

    def test_garden_defaults(self) -> None:
        """Garden defaults match the documented constants."""
        config = GardenConfig()
        assert config.initial_coins == 100
        assert config.default_temperature == 72
        assert config.random_attack_chance == 0.15
        assert config.parasite_policy is ParasitePolicy.UNCONDITIONAL

    def test_watering_threshold_default(self) -> None:
        """Watering threshold defaults to 30 and may be set to 40."""
        assert WateringConfig().low_moisture_threshold == 30
        assert WateringConfig(low_moisture_threshold=40).low_moisture_threshold == 40

    def test_clock_period_minimum(self) -> None:
        """Clock period below one second is rejected."""
        with pytest.raises(ValidationError):
            ClockConfig(period_seconds=0.5)

    def test_health_range_order(self) -> None:
        """initial_health_min may not exceed initial_health_max."""
        with pytest.raises(ValidationError, match="initial_health"):
            GardenConfig(initial_health_min=90, initial_health_max=60)

    def test_efficacy_range_order(self) -> None:
        """efficacy_min may not exceed efficacy_max."""
        with pytest.raises(ValidationError, match="efficacy_min"):
            PestControlConfig(efficacy_min=90, efficacy_max=60)

    def test_frozen(self) -> None:
        """Section models are immutable."""
        config = GardenConfig()
        with pytest.raises(ValidationError):
            config.initial_coins = 5  # type: ignore[misc]


class TestSpeciesConfig:
    """Tests for species entries."""

    def test_to_species(self) -> None:
        """Config entries convert to Species."""
        entry = SpeciesConfig(
            name="Kale", temp_min=40, temp_max=75, parasites=["aphid"], seed_price=4
        )
        species = entry.to_species()
        assert species.name == "Kale"
        assert species.parasite_vulnerabilities == frozenset({"aphid"})
        assert species.seed_price == 4

    def test_round_trip_catalog_entry(self) -> None:
        """from_species preserves a catalog entry."""
        tomato = SPECIES_CATALOG["Tomato"]
        assert SpeciesConfig.from_species(tomato).to_species() == tomato

    def test_temperature_order(self) -> None:
        """temp_min above temp_max is rejected."""
        with pytest.raises(ValidationError):
            SpeciesConfig(name="Kale", temp_min=80, temp_max=40)


class TestSimulationConfig:
    """Tests for the top-level config."""

    def test_default_catalog(self) -> None:
        """Default species list is the built-in catalog."""
        config = SimulationConfig()
        catalog = config.species_catalog()
        assert set(catalog) == set(SPECIES_CATALOG)

    def test_unknown_keys_rejected(self) -> None:
        """Top-level typos are errors."""
        with pytest.raises(ValidationError):
            SimulationConfig.model_validate({"gardn": {}})

    def test_duplicate_species(self) -> None:
        """Species names are unique regardless of case."""
        with pytest.raises(ValidationError, match="Duplicate species"):
            SimulationConfig(
                species=[
                    SpeciesConfig(name="Kale", temp_min=40, temp_max=75),
                    SpeciesConfig(name="kale", temp_min=40, temp_max=75),
                ]
            )

    def test_duplicate_plots(self) -> None:
        """A plot may only be planted once."""
        with pytest.raises(ValidationError, match="plot"):
            SimulationConfig(
                plantings=[
                    PlantingConfig(plot="0,0", name="a", species="Tomato"),
                    PlantingConfig(plot="0,0", name="b", species="Basil"),
                ]
            )

    def test_validate_config(self) -> None:
        """validate_config accepts nested dicts."""
        config = validate_config(
            {
                "name": "Test",
                "seed": 7,
                "watering": {"low_moisture_threshold": 40},
                "garden": {"parasite_policy": "vulnerable_only"},
            }
        )
        assert config.seed == 7
        assert config.watering.low_moisture_threshold == 40
        assert config.garden.parasite_policy is ParasitePolicy.VULNERABLE_ONLY


class TestConfigFiles:
    """Tests for loading and saving."""

    def test_yaml_round_trip(self, tmp_path: Path) -> None:
        """Saved YAML loads back equal."""
        config = SimulationConfig(
            name="Round Trip",
            seed=3,
            plantings=[PlantingConfig(plot="0,0", name="t1", species="Tomato")],
        )
        path = tmp_path / "garden.yaml"
        save_config(config, path)

        assert load_config(path) == config

    def test_json_load(self, tmp_path: Path) -> None:
        """JSON files are accepted."""
        path = tmp_path / "garden.json"
        path.write_text('{"name": "JSON Garden", "garden": {"initial_coins": 50}}')

        config = load_config(path)
        assert config.name == "JSON Garden"
        assert config.garden.initial_coins == 50

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """An empty file yields the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SimulationConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")
