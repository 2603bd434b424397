"""State management for garden simulation.

This module defines the data structures that represent the state of the
garden's plants:

- Species: Immutable template (water need, temperature tolerance, pests)
- Plant: Mutable per-plant state machine advanced by the garden
- PlantSnapshot / GardenSnapshot: Read-only views for render layers
- Parasite damage table and infection policy
- SPECIES_CATALOG: Built-in plant types
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from numpy.random import Generator

# Health and moisture bounds
MAX_HEALTH = 100
MAX_MOISTURE = 100
INITIAL_MOISTURE = 50
DEFAULT_DAYS_TO_HARVEST = 5
DEFAULT_SEED_PRICE = 10

# Daily moisture
NATURAL_MOISTURE_DECAY = 5
HEALTH_DAMAGE_WHEN_DRY = 5

# Temperature stress
TEMPERATURE_STRESS_RECOVERY = 2
TEMPERATURE_STRESS_THRESHOLD = 20
TEMPERATURE_STRESS_DAMAGE = 3

# Health recovery
HEALTH_RECOVERY_RATE = 2
RECOVERY_MOISTURE_THRESHOLD = 40

# Treatment
EFFICACY_GUARANTEED = 100
EFFICACY_MINIMUM = 50
CURE_SUCCESS_CHANCE = 0.6

# Harvest rewards
BASE_REWARD_MATURE = 30
BASE_REWARD_NORMAL = 20
HEALTH_BONUS_HIGH = 20
HEALTH_BONUS_MEDIUM = 10
HEALTH_BONUS_LOW = 5
HEALTH_THRESHOLD_HIGH = 80
HEALTH_THRESHOLD_MEDIUM = 50

READY_STAGE = 4


class GrowthStage(int, Enum):
    """Plant maturity classification."""

    SEED = 0
    SPROUT = 1
    SMALL = 2
    MEDIUM = 3
    READY = 4


def growth_stage_for(days_planted: int, days_to_harvest: int) -> int:
    """Compute growth stage from elapsed days.

    Args:
        days_planted: Days since planting.
        days_to_harvest: Days required to reach harvest.

    Returns:
        Stage 0-4; 4 means ready to harvest.
    """
    if days_planted >= days_to_harvest:
        return GrowthStage.READY.value
    progress = days_planted / days_to_harvest
    if progress >= 0.75:
        return GrowthStage.MEDIUM.value
    if progress >= 0.50:
        return GrowthStage.SMALL.value
    if progress >= 0.25:
        return GrowthStage.SPROUT.value
    return GrowthStage.SEED.value


# Per-day health damage by parasite type
PARASITE_DAMAGE: dict[str, int] = {
    "aphid": 2,
    "spider_mite": 5,
    "mite": 5,
    "whitefly": 3,
    "thrips": 6,
}
UNKNOWN_PARASITE_DAMAGE = 4

# Parasites that can arrive in a random attack
RANDOM_ATTACK_PARASITES: tuple[str, ...] = ("aphid", "spider_mite", "whitefly", "thrips")


def parasite_damage(name: str) -> int:
    """Daily health damage caused by a parasite (case-insensitive)."""
    return PARASITE_DAMAGE.get(name.strip().lower(), UNKNOWN_PARASITE_DAMAGE)


class ParasitePolicy(str, Enum):
    """Which plants a parasite may infect."""

    UNCONDITIONAL = "unconditional"
    VULNERABLE_ONLY = "vulnerable_only"


@dataclass(frozen=True)
class Species:
    """Immutable plant species template.

    Attributes:
        name: Species name (e.g., "Tomato").
        daily_water_need: Daily water requirement in moisture units.
        temp_min: Lowest tolerated temperature in °F.
        temp_max: Highest tolerated temperature in °F.
        parasite_vulnerabilities: Parasite names the species is vulnerable to.
        days_to_harvest: Days from planting until harvest.
        seed_price: Coin cost of one seed.
    """

    name: str
    daily_water_need: int = 10
    temp_min: int = 50
    temp_max: int = 90
    parasite_vulnerabilities: frozenset[str] = field(default_factory=frozenset)
    days_to_harvest: int = DEFAULT_DAYS_TO_HARVEST
    seed_price: int = DEFAULT_SEED_PRICE

    def __post_init__(self) -> None:
        """Validate species values."""
        if not self.name or not self.name.strip():
            msg = "Species name cannot be empty"
            raise ValueError(msg)
        if self.daily_water_need < 0:
            msg = f"daily_water_need cannot be negative, got {self.daily_water_need}"
            raise ValueError(msg)
        if self.temp_min > self.temp_max:
            msg = f"temp_min ({self.temp_min}) cannot exceed temp_max ({self.temp_max})"
            raise ValueError(msg)
        if self.days_to_harvest <= 0:
            msg = f"days_to_harvest must be positive, got {self.days_to_harvest}"
            raise ValueError(msg)
        if self.seed_price < 0:
            msg = f"seed_price cannot be negative, got {self.seed_price}"
            raise ValueError(msg)
        if not isinstance(self.parasite_vulnerabilities, frozenset):
            object.__setattr__(
                self,
                "parasite_vulnerabilities",
                frozenset(self.parasite_vulnerabilities),
            )

    def is_vulnerable_to(self, parasite: str) -> bool:
        """Whether this species is vulnerable to a parasite (case-insensitive)."""
        wanted = parasite.strip().lower()
        return any(v.lower() == wanted for v in self.parasite_vulnerabilities)

    def with_overrides(self, **changes: Any) -> Species:
        """Return a copy with some fields replaced."""
        values = {
            "name": self.name,
            "daily_water_need": self.daily_water_need,
            "temp_min": self.temp_min,
            "temp_max": self.temp_max,
            "parasite_vulnerabilities": self.parasite_vulnerabilities,
            "days_to_harvest": self.days_to_harvest,
            "seed_price": self.seed_price,
        }
        values.update({k: v for k, v in changes.items() if v is not None})
        return Species(**values)


@dataclass(frozen=True)
class PlantSnapshot:
    """Read-only view of a plant for render layers."""

    name: str
    species: str
    health: int
    moisture: int
    temperature_stress: int
    active_parasites: tuple[str, ...]
    days_planted: int
    days_to_harvest: int
    growth_stage: int
    ready_to_harvest: bool
    is_dead: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to dictionary for serialization."""
        return {
            "name": self.name,
            "species": self.species,
            "health": self.health,
            "moisture": self.moisture,
            "temperature_stress": self.temperature_stress,
            "active_parasites": list(self.active_parasites),
            "days_planted": self.days_planted,
            "days_to_harvest": self.days_to_harvest,
            "growth_stage": self.growth_stage,
            "ready_to_harvest": self.ready_to_harvest,
            "is_dead": self.is_dead,
        }


@dataclass(frozen=True)
class GardenSnapshot:
    """Read-only view of the whole garden (live plants plus coin balance)."""

    day: int
    coins: int
    temperature: int
    plants: tuple[PlantSnapshot, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to dictionary for serialization."""
        return {
            "day": self.day,
            "coins": self.coins,
            "temperature": self.temperature,
            "plants": [p.to_dict() for p in self.plants],
        }


class Plant:
    """A growing plant built on a shared Species.

    The plant is a small state machine advanced once per day by the garden
    and nudged between days by rain, temperature, parasites and treatment.
    Thread safety is the owning Garden's responsibility.

    Attributes:
        name: Unique name within the garden.
        species: Shared species template.
        health: Health percentage (0 = dead).
        soil_moisture: Soil moisture percentage.
        temperature_stress: Accumulated temperature stress.
        days_planted: Days since planting.
        days_to_harvest: Days required to reach harvest.
        growth_stage: Derived maturity stage (0-4).
    """

    def __init__(
        self,
        name: str,
        species: Species,
        *,
        health: int = 70,
        soil_moisture: int = INITIAL_MOISTURE,
    ) -> None:
        """Initialize plant.

        Args:
            name: Unique plant name.
            species: Species template.
            health: Initial health (0-100).
            soil_moisture: Initial soil moisture (0-100).

        Raises:
            ValueError: If the name is empty or values are out of range.
        """
        if not name or not name.strip():
            msg = "Plant name cannot be empty"
            raise ValueError(msg)
        if not 0 <= health <= MAX_HEALTH:
            msg = f"Health {health} outside valid range [0, {MAX_HEALTH}]"
            raise ValueError(msg)
        if not 0 <= soil_moisture <= MAX_MOISTURE:
            msg = f"Moisture {soil_moisture} outside valid range [0, {MAX_MOISTURE}]"
            raise ValueError(msg)

        self._name = name
        self._species = species
        self.health = health
        self.soil_moisture = soil_moisture
        self.temperature_stress = 0
        self._parasites: set[str] = set()
        self.days_planted = 0
        self._days_to_harvest = species.days_to_harvest
        self.growth_stage = GrowthStage.SEED.value

    def __repr__(self) -> str:
        return (
            f"Plant(name={self._name!r}, species={self._species.name!r}, "
            f"health={self.health}, moisture={self.soil_moisture})"
        )

    @property
    def name(self) -> str:
        """Unique plant name."""
        return self._name

    @property
    def species(self) -> Species:
        """Species template (read-only)."""
        return self._species

    @property
    def days_to_harvest(self) -> int:
        """Days required to reach harvest."""
        return self._days_to_harvest

    @property
    def parasites(self) -> frozenset[str]:
        """Currently active parasites."""
        return frozenset(self._parasites)

    @property
    def is_dead(self) -> bool:
        """A plant with no health left is dead."""
        return self.health <= 0

    @property
    def ready_to_harvest(self) -> bool:
        """Whether the plant has reached harvest maturity."""
        return self.days_planted >= self._days_to_harvest

    def advance_day(self) -> None:
        """Advance growth by one day and recompute the growth stage."""
        self.days_planted += 1
        self.growth_stage = growth_stage_for(self.days_planted, self._days_to_harvest)

    def apply_moisture_decay(
        self,
        decay: int = NATURAL_MOISTURE_DECAY,
        dry_penalty: int = HEALTH_DAMAGE_WHEN_DRY,
    ) -> None:
        """Apply daily evaporation; a bone-dry plant loses health."""
        self.soil_moisture = max(0, self.soil_moisture - decay)
        if self.soil_moisture == 0:
            self.health = max(0, self.health - dry_penalty)

    def apply_parasite_damage(self) -> int:
        """Apply cumulative daily damage from active parasites.

        Returns:
            Total damage dealt.
        """
        if not self._parasites:
            return 0
        damage = sum(parasite_damage(p) for p in self._parasites)
        self.health = max(0, self.health - damage)
        return damage

    def apply_temperature(self, fahrenheit: int) -> None:
        """Accumulate or relieve temperature stress for the day."""
        if fahrenheit < self._species.temp_min:
            self.temperature_stress += self._species.temp_min - fahrenheit
        elif fahrenheit > self._species.temp_max:
            self.temperature_stress += fahrenheit - self._species.temp_max
        else:
            self.temperature_stress = max(
                0, self.temperature_stress - TEMPERATURE_STRESS_RECOVERY
            )
        if self.temperature_stress > TEMPERATURE_STRESS_THRESHOLD:
            self.health = max(0, self.health - TEMPERATURE_STRESS_DAMAGE)

    def recover_health(self) -> bool:
        """Recover a little health when growing conditions are good.

        Returns:
            True if health was recovered.
        """
        if self.is_dead or self.health >= MAX_HEALTH:
            return False
        if (
            self.soil_moisture >= RECOVERY_MOISTURE_THRESHOLD
            and self.temperature_stress <= TEMPERATURE_STRESS_THRESHOLD // 2
            and not self._parasites
        ):
            self.health = min(MAX_HEALTH, self.health + HEALTH_RECOVERY_RATE)
            return True
        return False

    def water(self, amount: int) -> None:
        """Add moisture, capped at 100. Negative amounts are ignored."""
        if amount <= 0:
            return
        self.soil_moisture = min(MAX_MOISTURE, self.soil_moisture + amount)

    def infest(
        self,
        parasite: str,
        policy: ParasitePolicy = ParasitePolicy.UNCONDITIONAL,
    ) -> bool:
        """Add a parasite to the plant.

        Args:
            parasite: Parasite name.
            policy: Infection policy to apply.

        Returns:
            True if the parasite is now active on the plant.
        """
        cleaned = parasite.strip() if parasite else ""
        if not cleaned:
            return False
        if (
            policy is ParasitePolicy.VULNERABLE_ONLY
            and not self._species.is_vulnerable_to(cleaned)
        ):
            return False
        self._parasites.add(cleaned)
        return True

    def cure(
        self,
        parasite: str,
        efficacy: int,
        rng: Generator,
        *,
        cure_chance: float = CURE_SUCCESS_CHANCE,
    ) -> bool:
        """Attempt to remove a parasite with a treatment of given efficacy.

        Efficacy 100 always cures. Efficacy in [50, 100) cures with
        probability `cure_chance`. Lower efficacy never cures.

        Args:
            parasite: Parasite to treat.
            efficacy: Treatment strength (50-100).
            rng: Random generator for the probabilistic cure.
            cure_chance: Success probability for partial efficacy.

        Returns:
            True if the parasite was present and has been removed.
        """
        if parasite not in self._parasites:
            return False
        if efficacy >= EFFICACY_GUARANTEED:
            self._parasites.discard(parasite)
            return True
        if efficacy >= EFFICACY_MINIMUM and rng.random() < cure_chance:
            self._parasites.discard(parasite)
            return True
        return False

    def harvest_reward(self) -> int:
        """Coin reward for harvesting this plant now."""
        fully_mature = self.days_planted >= self._days_to_harvest + 1
        base = BASE_REWARD_MATURE if fully_mature else BASE_REWARD_NORMAL
        if self.health > HEALTH_THRESHOLD_HIGH:
            bonus = HEALTH_BONUS_HIGH
        elif self.health > HEALTH_THRESHOLD_MEDIUM:
            bonus = HEALTH_BONUS_MEDIUM
        else:
            bonus = HEALTH_BONUS_LOW
        return base + bonus

    def snapshot(self) -> PlantSnapshot:
        """Create a read-only view of the current plant state."""
        return PlantSnapshot(
            name=self._name,
            species=self._species.name,
            health=self.health,
            moisture=self.soil_moisture,
            temperature_stress=self.temperature_stress,
            active_parasites=tuple(sorted(self._parasites)),
            days_planted=self.days_planted,
            days_to_harvest=self._days_to_harvest,
            growth_stage=self.growth_stage,
            ready_to_harvest=self.ready_to_harvest,
            is_dead=self.is_dead,
        )


def _species(
    name: str,
    water: int,
    temp_min: int,
    temp_max: int,
    parasites: Iterable[str],
    days_to_harvest: int,
    seed_price: int,
) -> Species:
    return Species(
        name=name,
        daily_water_need=water,
        temp_min=temp_min,
        temp_max=temp_max,
        parasite_vulnerabilities=frozenset(parasites),
        days_to_harvest=days_to_harvest,
        seed_price=seed_price,
    )


# Pre-defined plant types
SPECIES_CATALOG: dict[str, Species] = {
    "Tomato": _species("Tomato", 12, 55, 85, ("aphid", "whitefly", "spider_mite"), 5, 10),
    "Rose": _species("Rose", 8, 50, 80, ("aphid", "thrips", "spider_mite"), 7, 15),
    "Basil": _species("Basil", 6, 60, 90, ("aphid", "whitefly"), 3, 5),
    "Pepper": _species("Pepper", 10, 60, 90, ("aphid", "spider_mite"), 6, 8),
    "Cucumber": _species("Cucumber", 14, 60, 90, ("spider_mite", "whitefly"), 4, 10),
    "Lettuce": _species("Lettuce", 8, 45, 75, ("aphid", "thrips"), 3, 6),
    "Carrot": _species("Carrot", 7, 45, 80, ("aphid",), 5, 7),
    "Strawberry": _species("Strawberry", 9, 50, 80, ("spider_mite", "thrips"), 6, 12),
    "Sunflower": _species("Sunflower", 5, 55, 95, ("aphid",), 8, 9),
    "Marigold": _species("Marigold", 4, 50, 90, ("thrips",), 4, 5),
}


def find_species(catalog: dict[str, Species], name: str | None) -> Species | None:
    """Case-insensitive species lookup.

    Args:
        catalog: Mapping of species name to Species.
        name: Species name to look up.

    Returns:
        The species, or None when unknown or blank.
    """
    if not name or not name.strip():
        return None
    wanted = name.strip().lower()
    for key, species in catalog.items():
        if key.lower() == wanted:
            return species
    return None
