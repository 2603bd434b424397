"""Pydantic configuration models for garden simulation.

This module defines the configuration schema for garden simulations
using Pydantic v2 models. Configuration can be loaded from YAML or JSON files.

The configuration hierarchy:
- SimulationConfig (top-level)
  - ClockConfig
  - GardenConfig
  - WateringConfig
  - HeatingConfig
  - PestControlConfig
  - SpeciesConfig[]
  - PlantingConfig[]
  - LoggingConfig
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gardensim.core.state import SPECIES_CATALOG, ParasitePolicy, Species


class ClockConfig(BaseModel):
    """Day-tick clock configuration."""

    model_config = ConfigDict(frozen=True)

    period_seconds: Annotated[
        float, Field(ge=1, description="Real seconds per simulated day")
    ] = 3600.0


class GardenConfig(BaseModel):
    """Garden economy and environment configuration."""

    model_config = ConfigDict(frozen=True)

    initial_coins: Annotated[int, Field(ge=0)] = 100
    default_temperature: int = Field(default=72, description="Initial ambient °F")
    initial_health_min: Annotated[int, Field(ge=1, le=100)] = 60
    initial_health_max: Annotated[int, Field(ge=1, le=100)] = 80
    random_attack_chance: Annotated[float, Field(ge=0, le=1)] = 0.15
    random_attack_interval: Annotated[
        float, Field(gt=0, description="Seconds between attack checks")
    ] = 300.0
    parasite_policy: ParasitePolicy = Field(default=ParasitePolicy.UNCONDITIONAL)
    temperature_warn_min: int = 40
    temperature_warn_max: int = 120
    random_temperature_min: int = 50
    random_temperature_max: int = 80

    @model_validator(mode="after")
    def validate_ranges(self) -> GardenConfig:
        """Ensure every min/max pair is ordered."""
        pairs = [
            ("initial_health", self.initial_health_min, self.initial_health_max),
            ("temperature_warn", self.temperature_warn_min, self.temperature_warn_max),
            (
                "random_temperature",
                self.random_temperature_min,
                self.random_temperature_max,
            ),
        ]
        for label, low, high in pairs:
            if low > high:
                msg = f"{label}_min ({low}) cannot exceed {label}_max ({high})"
                raise ValueError(msg)
        return self


class WateringConfig(BaseModel):
    """Automatic irrigation configuration."""

    model_config = ConfigDict(frozen=True)

    low_moisture_threshold: Annotated[
        int, Field(ge=0, le=100, description="Water below this moisture")
    ] = 30
    water_amount: Annotated[int, Field(gt=0, le=100)] = 10


class HeatingConfig(BaseModel):
    """Heating system configuration."""

    model_config = ConfigDict(frozen=True)

    target_min: int = Field(default=60, description="Lowest acceptable °F")
    max_lift: Annotated[int, Field(gt=0, description="Max °F per call")] = 10


class PestControlConfig(BaseModel):
    """Pest control configuration."""

    model_config = ConfigDict(frozen=True)

    sweep_interval: Annotated[
        float, Field(gt=0, description="Seconds between sweeps")
    ] = 3600.0
    cure_chance: Annotated[float, Field(ge=0, le=1)] = 0.6
    efficacy_min: Annotated[int, Field(ge=0, le=100)] = 50
    efficacy_max: Annotated[int, Field(ge=0, le=100)] = 100

    @model_validator(mode="after")
    def validate_efficacy(self) -> PestControlConfig:
        """Ensure efficacy_min doesn't exceed efficacy_max."""
        if self.efficacy_min > self.efficacy_max:
            msg = (
                f"efficacy_min ({self.efficacy_min}) cannot exceed "
                f"efficacy_max ({self.efficacy_max})"
            )
            raise ValueError(msg)
        return self


class SpeciesConfig(BaseModel):
    """Species / plant-type table entry."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    daily_water_need: Annotated[int, Field(ge=0)] = 10
    temp_min: int
    temp_max: int
    parasites: list[str] = Field(default_factory=list)
    days_to_harvest: Annotated[int, Field(gt=0)] = 5
    seed_price: Annotated[int, Field(ge=0)] = 10

    @model_validator(mode="after")
    def validate_temperatures(self) -> SpeciesConfig:
        """Ensure temp_min doesn't exceed temp_max."""
        if self.temp_min > self.temp_max:
            msg = f"temp_min ({self.temp_min}) cannot exceed temp_max ({self.temp_max})"
            raise ValueError(msg)
        return self

    def to_species(self) -> Species:
        """Convert to Species state object."""
        return Species(
            name=self.name,
            daily_water_need=self.daily_water_need,
            temp_min=self.temp_min,
            temp_max=self.temp_max,
            parasite_vulnerabilities=frozenset(self.parasites),
            days_to_harvest=self.days_to_harvest,
            seed_price=self.seed_price,
        )

    @classmethod
    def from_species(cls, species: Species) -> SpeciesConfig:
        """Build a config entry from a Species."""
        return cls(
            name=species.name,
            daily_water_need=species.daily_water_need,
            temp_min=species.temp_min,
            temp_max=species.temp_max,
            parasites=sorted(species.parasite_vulnerabilities),
            days_to_harvest=species.days_to_harvest,
            seed_price=species.seed_price,
        )


def _default_species() -> list[SpeciesConfig]:
    return [SpeciesConfig.from_species(s) for s in SPECIES_CATALOG.values()]


class PlantingConfig(BaseModel):
    """A plant placed in the garden at startup."""

    plot: str = Field(min_length=1, description="Plot key, e.g. '0,0'")
    name: str = Field(min_length=1, description="Unique plant name")
    species: str = Field(min_length=1, description="Species name from the table")


class LoggingConfig(BaseModel):
    """Logging sink configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    file: str | None = Field(default=None, description="Optional log file path")


class SimulationConfig(BaseModel):
    """Top-level simulation configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="Garden Simulation")
    seed: int | None = Field(default=None, description="Seed for reproducible runs")

    clock: ClockConfig = Field(default_factory=ClockConfig)
    garden: GardenConfig = Field(default_factory=GardenConfig)
    watering: WateringConfig = Field(default_factory=WateringConfig)
    heating: HeatingConfig = Field(default_factory=HeatingConfig)
    pest_control: PestControlConfig = Field(default_factory=PestControlConfig)

    species: list[SpeciesConfig] = Field(default_factory=_default_species)
    plantings: list[PlantingConfig] = Field(default_factory=list)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("species", mode="after")
    @classmethod
    def validate_unique_species(cls, v: list[SpeciesConfig]) -> list[SpeciesConfig]:
        """Ensure species names are unique (case-insensitive)."""
        names = [s.name.lower() for s in v]
        if len(names) != len(set(names)):
            duplicates = {n for n in names if names.count(n) > 1}
            msg = f"Duplicate species names: {duplicates}"
            raise ValueError(msg)
        return v

    @field_validator("plantings", mode="after")
    @classmethod
    def validate_unique_plantings(
        cls, v: list[PlantingConfig]
    ) -> list[PlantingConfig]:
        """Ensure plots and plant names are not reused."""
        for attr in ("plot", "name"):
            values = [getattr(p, attr) for p in v]
            if len(values) != len(set(values)):
                duplicates = {x for x in values if values.count(x) > 1}
                msg = f"Duplicate planting {attr}s: {duplicates}"
                raise ValueError(msg)
        return v

    def species_catalog(self) -> dict[str, Species]:
        """Build the name -> Species table from configuration."""
        return {s.name: s.to_species() for s in self.species}


def load_config(path: str | Path) -> SimulationConfig:
    """Load simulation configuration from YAML or JSON file.

    Args:
        path: Path to configuration file.

    Returns:
        Validated SimulationConfig object.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If configuration is invalid.
    """
    path = Path(path)

    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    return SimulationConfig.model_validate(data or {})


def save_config(config: SimulationConfig, path: str | Path) -> None:
    """Save simulation configuration to YAML or JSON file.

    Args:
        config: Configuration to save.
        path: Output file path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)

    with path.open("w") as f:
        if path.suffix in (".yaml", ".yml"):
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def validate_config(data: dict[str, Any]) -> SimulationConfig:
    """Validate configuration data without loading from file.

    Args:
        data: Configuration dictionary.

    Returns:
        Validated SimulationConfig object.

    Raises:
        ValueError: If configuration is invalid.
    """
    return SimulationConfig.model_validate(data)
