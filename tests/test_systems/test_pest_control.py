"""Tests for pest control."""

from __future__ import annotations

import numpy as np
import pytest

from gardensim.core.config import GardenConfig, PestControlConfig
from gardensim.core.events import EventBus
from gardensim.core.state import Species
from gardensim.simulation.garden import Garden
from gardensim.systems.pest_control import PestControl, PestSweepResult


class TestPestSweepResult:
    """Tests for PestSweepResult."""

    def test_success_rate(self) -> None:
        """Success rate is cures over attempts, as a percentage."""
        result = PestSweepResult(infestations=2, cures=3, failures=1)
        assert result.attempts == 4
        assert result.success_rate == 75.0

    def test_empty(self) -> None:
        """No attempts means a zero rate."""
        assert PestSweepResult().success_rate == 0.0


class TestPestControl:
    """Tests for PestControl."""

    def test_no_infestations(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """A clean garden needs no treatment."""
        pest = PestControl(garden, bus, seed=1)
        garden.add_plant("0,0", "radish-1", quick_species)

        assert pest.sweep() == PestSweepResult()

    def test_full_efficacy_cures_everything(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """Efficacy fixed at 100 always cures."""
        pest = PestControl(
            garden, bus, PestControlConfig(efficacy_min=100, efficacy_max=100), seed=1
        )
        garden.add_plant("0,0", "radish-1", quick_species)
        garden.add_plant("0,1", "radish-2", quick_species)
        garden.on_parasite("aphid")
        garden.infect_plant("radish-1", "thrips")

        result = pest.daily_sweep()

        assert result == PestSweepResult(infestations=2, cures=3, failures=0)
        assert all(not p.parasites for p in garden.plants)

    def test_low_cure_chance_never_cures(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """Partial treatments with zero chance always fail."""
        pest = PestControl(
            garden,
            bus,
            PestControlConfig(efficacy_min=50, efficacy_max=99, cure_chance=0.0),
            seed=1,
        )
        garden.add_plant("0,0", "radish-1", quick_species)
        garden.infect_plant("radish-1", "aphid")

        result = pest.sweep()

        assert result.cures == 0
        assert result.failures == 1
        plant = garden.get_plant("radish-1")
        assert plant is not None
        assert plant.parasites == frozenset({"aphid"})

    def test_dead_plants_skipped(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """Dead plants are not treated."""
        pest = PestControl(garden, bus, seed=1)
        garden.add_plant("0,0", "radish-1", quick_species)
        garden.infect_plant("radish-1", "aphid")
        plant = garden.get_plant("radish-1")
        assert plant is not None
        plant.health = 0

        assert pest.sweep().infestations == 0
        assert pest.tracked == []

    def test_overall_cure_rate(self, bus: EventBus, quick_species: Species) -> None:
        """Across many treatments the cure rate reflects the efficacy mix."""
        rng = np.random.default_rng(2024)
        garden = Garden(bus, GardenConfig(initial_coins=10_000), rng=rng)
        pest = PestControl(garden, bus, rng=rng)
        for i in range(50):
            garden.add_plant(f"{i},0", f"p{i}", quick_species)

        cures = failures = 0
        for _ in range(40):
            garden.on_parasite("aphid")
            result = pest.sweep()
            cures += result.cures
            failures += result.failures

        # 1/51 of draws are guaranteed cures; the rest cure with p=0.6
        expected = (1 / 51) + (50 / 51) * 0.6
        assert cures / (cures + failures) == pytest.approx(expected, abs=0.03)
