"""
Command-line interface for the wave grid solver.

The commands load a YAML configuration, drive a ``WaveSimulation`` for a
number of frames and write snapshots, animations or raw fields to disk.
"""

# Imports
from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Tuple
import click
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import yaml
from rich.console import Console
from rich.table import Table
from wavegrid.config import default_config, prepare_simulation, scheduled_injections
from wavegrid.exceptions import WaveGridError
from wavegrid.forcing import ForceEvent
from wavegrid.logging_config import setup_logging
from wavegrid.parameters import COURANT_LIMITS, SimulationParameters
from wavegrid.rendering import animate_fields, plot_field
from wavegrid.simulation import WaveSimulation

# Shared rich console instance to keep styling consistent across commands.
console = Console()


class ClickBaseException(click.ClickException):
    """
    Convert solver and configuration errors into Click-friendly messages.
    """

    def __init__(self, exc: Exception):
        super().__init__(str(exc))
    # end def __init__

# end class ClickBaseException


def _parse_injection(ctx, param, values) -> List[ForceEvent]:
    """
    Parse ``X,Y`` pairs given with ``--inject``.
    """
    events = []
    for value in values:
        try:
            x_text, y_text = value.split(",")
            events.append(ForceEvent(x=float(x_text), y=float(y_text)))
        except ValueError as exc:
            raise click.BadParameter(f"expected X,Y got {value!r}") from exc
        # end try
    # end for
    return events
# end def _parse_injection


def _parameters_table(parameters: SimulationParameters, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Parameter", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")
    for name, value in parameters.model_dump().items():
        table.add_row(name, str(value))
    # end for
    limit = COURANT_LIMITS[parameters.boundary_size]
    stability = "[green]stable[/green]" if parameters.is_stable else "[red]unstable[/red]"
    table.add_row("courant_number", f"{parameters.courant_number:.4f} (limit {limit:.4f}, {stability})")
    table.add_row("source_position", str(parameters.source_position))
    return table
# end def _parameters_table


@click.group(help="Command-line interface for the 2D wave grid solver.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug log messages.")
def cli(verbose: bool) -> None:
    """
    Top-level Click group used as the entry point for all subcommands.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)
# end def cli


@cli.command(help="Write a configuration file filled with the default values.")
@click.argument("output", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def init_config(output: Path, force: bool) -> None:
    """
    Dump the default configuration to ``output``.

    Args:
        output: Destination YAML file.
        force: Whether an existing file may be replaced.
    """
    if output.exists() and not force:
        raise click.ClickException(f"{output} already exists, use --force to overwrite it")
    # end if
    config = default_config()
    config["plot"]["figsize"] = list(config["plot"]["figsize"])
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w") as f:
        yaml.safe_dump(config, f, sort_keys=False)
    # end with
    console.print(f"[green]Default configuration written to[/green] {output}")
# end def init_config


@cli.command(help="Show the solver parameters of a configuration file.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default="config.yaml",
    show_default=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="Path to the YAML configuration file.",
)
def info(config_path: Path) -> None:
    """
    Print the validated parameters and derived stability figures.

    Args:
        config_path: Path to the YAML configuration.
    """
    try:
        _, parameters = prepare_simulation(config_path)
    except (FileNotFoundError, WaveGridError) as exc:
        raise ClickBaseException(exc) from exc
    # end try
    console.print(_parameters_table(parameters, f"Parameters from {config_path}"))
# end def info


@cli.command(help="Run the wave simulation described by a configuration file.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default="config.yaml",
    show_default=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="Path to the YAML configuration file.",
)
@click.option("--steps", type=int, default=None, help="Override the number of steps.")
@click.option(
    "--inject",
    "injections",
    multiple=True,
    callback=_parse_injection,
    help="Force event X,Y applied before the first step. Can be repeated.",
)
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for snapshots and fields. Overrides the configuration.",
)
@click.option("--animate/--no-animate", default=False, help="Write an animated GIF of the snapshots.")
@click.option("--save-field", is_flag=True, help="Save the final field as a NumPy .npy file.")
def simulate(
    config_path: Path,
    steps: Optional[int],
    injections: Tuple[ForceEvent, ...],
    output_dir: Optional[Path],
    animate: bool,
    save_field: bool,
) -> None:
    """
    Run the solver, then save the final snapshot and optional extras.

    Args:
        config_path: Path to the YAML configuration.
        steps: Number of steps, overriding ``simulation.steps``.
        injections: Events queued before the first step.
        output_dir: Output directory, overriding ``simulation.output_dir``.
        animate: Whether to write an animation of the collected snapshots.
        save_field: Whether to save the final field with ``numpy.save``.
    """
    try:
        config, parameters = prepare_simulation(config_path)
        schedule = scheduled_injections(config)
        simulation = WaveSimulation(parameters)
    except (FileNotFoundError, WaveGridError) as exc:
        raise ClickBaseException(exc) from exc
    # end try

    sim_cfg = config["simulation"]
    plot_cfg = config["plot"]
    num_steps = steps if steps is not None else int(sim_cfg["steps"])
    if num_steps < 0:
        raise click.BadParameter("number of steps must be non-negative", param_hint="--steps")
    # end if
    frame_time = float(sim_cfg["frame_time"])
    snapshot_interval = int(sim_cfg["snapshot_interval"])
    output_dir = Path(output_dir if output_dir is not None else sim_cfg["output_dir"])

    for event in injections:
        simulation.submit(event)
    # end for

    snapshots: List[np.ndarray] = []
    console.print("[green]Starting wave simulation...[/green]")
    for step_index in range(num_steps):
        simulation.step(frame_time, schedule.get(step_index))
        if snapshot_interval > 0 and step_index % snapshot_interval == 0:
            snapshots.append(simulation.field.copy())
        # end if
    # end for
    console.print("[green]Wave simulation completed.[/green]")

    output_dir.mkdir(parents=True, exist_ok=True)
    figure_path = output_dir / "final_field.png"
    fig = plot_field(
        simulation.field,
        plot_cfg,
        title=f"{plot_cfg['title']} - Step {simulation.step_count}",
        output=figure_path,
    )
    plt.close(fig)

    animation_path = None
    if animate and snapshots:
        animation_path = output_dir / "wavefield_animation.gif"
        console.log("[green]Animating snapshots...[/green]")
        animate_fields(
            snapshots,
            time_step=parameters.time_step_width * max(snapshot_interval, 1),
            output=animation_path,
            fps=int(plot_cfg["fps"]),
            plot_cfg=plot_cfg,
        )
        plt.close("all")
    # end if

    field_path = None
    if save_field:
        field_path = output_dir / "final_field.npy"
        np.save(field_path, np.array(simulation.field))
    # end if

    # Present a human-friendly summary of what was just generated and where.
    info_table = Table(title="Wave Simulation Summary")
    info_table.add_column("Setting", style="cyan", no_wrap=True)
    info_table.add_column("Value", style="magenta")
    info_table.add_row("Configuration", str(config_path))
    info_table.add_row("Grid", f"{parameters.dimx} x {parameters.dimy}")
    info_table.add_row("Steps", str(simulation.step_count))
    info_table.add_row("Final energy", f"{simulation.energy():.6g}")
    info_table.add_row("Max amplitude", f"{float(np.max(np.abs(simulation.field))):.6g}")
    info_table.add_row("Figure path", str(figure_path))
    if animation_path:
        info_table.add_row("Animation", str(animation_path))
    if field_path:
        info_table.add_row("Field", str(field_path))
    console.print(info_table)
# end def simulate


def main() -> None:
    cli()
# end def main


if __name__ == "__main__":
    main()
# end if
