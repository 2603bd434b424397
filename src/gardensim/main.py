"""CLI interface for gardensim.

This module provides a command-line interface for running garden
simulations from YAML configuration files without writing code.

Usage:
    gsim run my-garden.yaml --days 10
    gsim species
    gsim init "My Garden" -o my-garden.yaml
    gsim validate my-garden.yaml
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

if TYPE_CHECKING:
    from gardensim.simulation.engine import GardenSimulation, SimulationStats

from gardensim.core.config import (
    LoggingConfig,
    PlantingConfig,
    SimulationConfig,
    load_config,
    save_config,
)
from gardensim.simulation.engine import GardenSimulation

app = typer.Typer(
    name="gsim",
    help="Garden simulation: plants, weather, irrigation, heating and pests.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

_CONSOLE_HANDLER = "gardensim_console"
_FILE_HANDLER = "gardensim_file"


def setup_logging(config: LoggingConfig, *, quiet: bool = False) -> None:
    """Install the console (rich) and optional file log handlers.

    Handlers are named so repeated calls replace rather than duplicate them.

    Args:
        config: Logging configuration.
        quiet: Only show warnings and errors on the console.
    """
    level = logging.getLevelName(config.level)
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        if handler.get_name() in {_CONSOLE_HANDLER, _FILE_HANDLER}:
            root.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(console=console, show_path=False)
    console_handler.set_name(_CONSOLE_HANDLER)
    console_handler.setLevel(logging.WARNING if quiet else level)
    root.addHandler(console_handler)

    if config.file:
        path = Path(config.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root.addHandler(file_handler)


def _load(config_path: Path | None) -> SimulationConfig:
    """Load a config file, or the defaults when no path is given."""
    if config_path is None:
        return SimulationConfig()
    try:
        return load_config(config_path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/] Config file not found: {config_path}")
        raise typer.Exit(1) from None
    except Exception as e:
        console.print(f"[red]Error:[/] Invalid configuration: {e}")
        raise typer.Exit(1) from None


@app.command()
def run(
    config_path: Annotated[
        Path | None,
        typer.Argument(help="Path to YAML configuration file"),
    ] = None,
    days: Annotated[
        int,
        typer.Option("--days", "-d", min=1, help="Number of days to simulate"),
    ] = 10,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Override random seed"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Output directory for results"),
    ] = None,
    format_: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: console, json"),
    ] = "console",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress progress output"),
    ] = False,
) -> None:
    """Run a headless garden simulation for a number of days."""
    if format_ not in ("console", "json"):
        console.print(f"[red]Error:[/] Unknown format '{format_}'")
        raise typer.Exit(1)

    config = _load(config_path)
    if seed is not None:
        config = config.model_copy(update={"seed": seed})
    setup_logging(config.logging, quiet=quiet or format_ == "json")

    simulation = GardenSimulation(config)

    if not quiet and format_ == "console":
        console.print(f"\n[bold]Running:[/] {config.name}")
        console.print(f"  Days: {days}")
        console.print(f"  Plants: {len(simulation.garden.plants)}\n")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Simulating...", total=days)
            stats = simulation.run(days, on_day=lambda _: progress.advance(task))
            progress.update(task, description="[green]Complete!")
    else:
        stats = simulation.run(days)

    simulation.harvest_all_ready()
    _output_results(simulation, stats, format_, output_dir, quiet)


@app.command()
def species(
    config_path: Annotated[
        Path | None,
        typer.Argument(help="Path to YAML configuration file"),
    ] = None,
) -> None:
    """List the species available for planting."""
    config = _load(config_path)

    table = Table(title="Species")
    table.add_column("Name", style="cyan")
    table.add_column("Water/day", justify="right")
    table.add_column("Temp range (F)", justify="right")
    table.add_column("Vulnerable to")
    table.add_column("Harvest (days)", justify="right")
    table.add_column("Seed price", justify="right")

    for entry in config.species:
        table.add_row(
            entry.name,
            str(entry.daily_water_need),
            f"{entry.temp_min}-{entry.temp_max}",
            ", ".join(entry.parasites) or "-",
            str(entry.days_to_harvest),
            str(entry.seed_price),
        )

    console.print(table)


@app.command()
def init(
    name: Annotated[str, typer.Argument(help="Name for the new garden")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path"),
    ] = None,
) -> None:
    """Generate a starter YAML configuration file."""
    config = SimulationConfig(
        name=name,
        seed=42,
        plantings=[
            PlantingConfig(plot="0,0", name="tomato-1", species="Tomato"),
            PlantingConfig(plot="0,1", name="basil-1", species="Basil"),
            PlantingConfig(plot="1,0", name="lettuce-1", species="Lettuce"),
        ],
    )

    # "My Garden" -> "my-garden.yaml"
    if output is None:
        filename = name.lower().replace(" ", "-") + ".yaml"
        output = Path(filename)

    save_config(config, output)
    console.print(f"[green]Created:[/] {output}")
    console.print("\nEdit this file to customize your garden, then run:")
    console.print(f"  gsim run {output}")


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to YAML configuration")],
) -> None:
    """Validate a configuration file without running."""
    try:
        config = load_config(config_path)
        console.print(f"[green]Valid:[/] {config.name}")
        console.print(f"  Seed: {config.seed}")
        console.print(f"  Day length: {config.clock.period_seconds:.0f} seconds")
        console.print(f"  Starting coins: {config.garden.initial_coins}")
        console.print(f"  Parasite policy: {config.garden.parasite_policy.value}")
        console.print(f"  Species: {len(config.species)}")
        console.print(f"  Plantings: {len(config.plantings)}")
    except FileNotFoundError:
        console.print(f"[red]Error:[/] File not found: {config_path}")
        raise typer.Exit(1) from None
    except Exception as e:
        console.print(f"[red]Invalid:[/] {e}")
        raise typer.Exit(1) from None


def _output_results(
    simulation: GardenSimulation,
    stats: SimulationStats,
    format_: str,
    output_dir: Path | None,
    quiet: bool,
) -> None:
    """Output simulation results in requested format.

    Args:
        simulation: The simulation after running.
        stats: Statistics from the run.
        format_: Output format (console, json).
        output_dir: Optional directory for file outputs.
        quiet: If True, suppress console output.
    """
    snapshot = simulation.snapshot()
    result = {
        "name": simulation.config.name,
        "stats": stats.to_dict(),
        "final_state": snapshot.to_dict(),
    }

    if format_ == "console" and not quiet:
        console.print("\n[bold]Simulation Complete[/]")
        console.print(f"  Days: {stats.days_elapsed}")
        console.print(f"  Coins: {snapshot.coins}")
        console.print(f"  Harvested: {stats.plants_harvested} (+{stats.coins_earned})")
        console.print(f"  Sprinkler activations: {stats.sprinkler_activations}")
        console.print(f"  Heating activations: {stats.heating_activations}")
        console.print(f"  Cure rate: {stats.cure_rate:.1f}%")
        console.print(f"  Wall time: {stats.wall_time:.2f}s")

        if snapshot.plants:
            table = Table(title="Plants")
            table.add_column("Name", style="cyan")
            table.add_column("Species")
            table.add_column("Health", justify="right")
            table.add_column("Moisture", justify="right")
            table.add_column("Stage", justify="right")
            table.add_column("Parasites")
            for plant in snapshot.plants:
                table.add_row(
                    plant.name,
                    plant.species,
                    f"{plant.health}%",
                    f"{plant.moisture}%",
                    str(plant.growth_stage),
                    ", ".join(plant.active_parasites) or "-",
                )
            console.print(table)
    elif format_ == "json" and not output_dir:
        console.print_json(json.dumps(result))

    if output_dir:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        json_path = output_dir / "results.json"
        json_path.write_text(json.dumps(result, indent=2))
        if not quiet:
            console.print(f"\n[dim]Results saved to {json_path}[/]")


def main() -> int:
    """Application entry point.

    Returns:
        Exit code (0 for success).
    """
    try:
        app()
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
