#!/usr/bin/env python3
"""Basic garden simulation example.

This script demonstrates how to drive the garden simulation headlessly:
planting, advancing days, reacting to events and harvesting.

Run with: uv run python examples/basic_simulation.py
"""

from gardensim.core.config import SimulationConfig, WateringConfig
from gardensim.core.events import Event, EventType
from gardensim.simulation.engine import GardenSimulation


def run_basic_garden() -> None:
    """Grow a few plants for a week and harvest what is ready."""
    print("=" * 60)
    print("BASIC GARDEN: one week")
    print("=" * 60)

    simulation = GardenSimulation(SimulationConfig(name="Basic Garden", seed=42))

    for plot, name, species in [
        ("0,0", "basil-1", "Basil"),
        ("0,1", "lettuce-1", "Lettuce"),
        ("1,0", "tomato-1", "Tomato"),
    ]:
        price = simulation.get_seed_price(species)
        planted = simulation.add_plant(plot, name, species)
        print(f"Planted {name:<10} ({species}, {price} coins): {planted}")
    print(f"Coins after planting: {simulation.get_coins()}")
    print()

    def on_sprinkler(event: Event) -> None:
        data = event.data
        print(
            f"  sprinkler: {data['plant']} moisture {data['before']}% -> {data['after']}%"
        )

    simulation.bus.subscribe(EventType.SPRINKLER_ACTIVATED, on_sprinkler)

    for _ in range(7):
        day = simulation.advance_day()
        simulation.trigger_pest_control()
        print(f"Day {day}: temperature for tomorrow {simulation.garden.temperature}F")

    print()
    print(f"{'Plant':<12} {'Health':>8} {'Moisture':>10} {'Stage':>6}")
    print("-" * 40)
    for plant in simulation.snapshot().plants:
        print(
            f"{plant.name:<12} {plant.health:>7}% {plant.moisture:>9}% "
            f"{plant.growth_stage:>6}"
        )

    earned = simulation.harvest_all_ready()
    print()
    print(f"Harvested for {earned} coins; balance {simulation.get_coins()}")


def run_drought_scenario() -> None:
    """Show the watering system keeping a pest-ridden garden alive."""
    print()
    print("=" * 60)
    print("DROUGHT: aggressive watering threshold and aphids")
    print("=" * 60)

    config = SimulationConfig(
        name="Drought",
        seed=7,
        watering=WateringConfig(low_moisture_threshold=40, water_amount=15),
    )
    simulation = GardenSimulation(config)
    simulation.add_plant("0,0", "rose-1", "Rose")
    simulation.add_plant("0,1", "pepper-1", "Pepper")
    simulation.parasite("aphid")

    simulation.temperature(45)
    stats = simulation.run(5)

    print(f"Days: {stats.days_elapsed}")
    print(f"Sprinkler activations: {stats.sprinkler_activations}")
    print(f"Heating activations: {stats.heating_activations}")
    print(f"Cure rate: {stats.cure_rate:.1f}%")
    print(simulation.get_state())


if __name__ == "__main__":
    run_basic_garden()
    run_drought_scenario()
