"""
YAML configuration files for wave grid runs.

A configuration file has three sections. ``grid`` holds the solver
parameters, ``simulation`` describes the run driven by the command line
(number of steps, frame time, scheduled injections, snapshots) and ``plot``
holds display settings. Missing keys are filled from the defaults below.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from .exceptions import ConfigurationError
from .forcing import ForceEvent
from .parameters import SimulationParameters

# Type alias for configuration dictionaries
ConfigDict = Dict[str, Any]

DEFAULT_GRID = {
    "dimx": 100,
    "dimy": 100,
    "wave_velocity": 1.0,
    "time_step_width": 0.5,
    "spatial_step_width": 1.0,
    "boundary_size": 1,
    "use_absorbing_boundary": True,
    "applied_force_amplitude": 1.0,
    "force_period": 0.05,
    "force_enabled": True,
    "dtype": "float32",
}

DEFAULT_SIMULATION = {
    "steps": 200,
    "frame_time": 1.0 / 60.0,    # Elapsed seconds fed to the periodic source per step
    "snapshot_interval": 10,     # 0 disables snapshots
    "output_dir": "outputs",
    "injections": [],            # Entries {x, y, step}
}

DEFAULT_PLOT = {
    "title": "Wave Grid",
    "colormap": "tiles",
    "steepness": 0.8,
    "show_colorbar": True,
    "figsize": (8, 8),
    "dpi": 100,
    "fps": 20,
}

_SECTIONS = {
    "grid": DEFAULT_GRID,
    "simulation": DEFAULT_SIMULATION,
    "plot": DEFAULT_PLOT,
}


def default_config() -> ConfigDict:
    """
    Fresh copy of the default configuration.

    Returns:
        ConfigDict: Dictionary with ``grid``, ``simulation`` and ``plot`` sections.
    """
    return {name: copy.deepcopy(defaults) for name, defaults in _SECTIONS.items()}
# end def default_config


def merge_config(raw: Dict[str, Any]) -> ConfigDict:
    """
    Fill the missing sections and keys of a raw configuration.

    Args:
        raw (dict): Configuration as read from YAML.

    Returns:
        ConfigDict: Complete configuration.

    Raises:
        ConfigurationError: If a section is not a mapping or unknown.
    """
    if raw is None:
        raw = {}
    # end if
    if not isinstance(raw, dict):
        raise ConfigurationError("Configuration root must be a mapping")
    # end if

    unknown = set(raw) - set(_SECTIONS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")
    # end if

    config = default_config()
    for name in _SECTIONS:
        section = raw.get(name)
        if section is None:
            continue
        # end if
        if not isinstance(section, dict):
            raise ConfigurationError(f"Section '{name}' must be a mapping")
        # end if
        config[name].update(section)
    # end for

    return config
# end def merge_config


def load_config(path: Path) -> ConfigDict:
    """
    Load a run configuration from a YAML file.

    Args:
        path (Path): Path to the YAML configuration file.

    Returns:
        ConfigDict: Complete configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    # end if

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse configuration {path}: {e}") from e
    # end try

    return merge_config(raw)
# end def load_config


def parameters_from_config(config: ConfigDict) -> SimulationParameters:
    """
    Build validated solver parameters from the ``grid`` section.

    Raises:
        ConfigurationError: If the parameters are invalid.
    """
    return SimulationParameters(**config["grid"])
# end def parameters_from_config


def scheduled_injections(config: ConfigDict) -> Dict[int, List[ForceEvent]]:
    """
    Group the configured injections by the step they must be applied at.

    Args:
        config (ConfigDict): Complete configuration.

    Returns:
        dict: Step index (0-based) to events, in file order.

    Raises:
        ConfigurationError: If an entry lacks coordinates or has a negative step.
    """
    schedule: Dict[int, List[ForceEvent]] = {}
    for index, entry in enumerate(config["simulation"].get("injections") or []):
        try:
            event = ForceEvent(x=entry["x"], y=entry["y"])
            step = int(entry.get("step", 0))
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid injection #{index}: {entry!r}") from exc
        # end try
        if step < 0:
            raise ConfigurationError(f"Injection #{index} has a negative step {step}")
        # end if
        schedule.setdefault(step, []).append(event)
    # end for
    return schedule
# end def scheduled_injections


def prepare_simulation(config_path: Path) -> Tuple[ConfigDict, SimulationParameters]:
    """
    Load a configuration file and validate its solver parameters.

    Args:
        config_path (Path): Path to the configuration file.

    Returns:
        tuple: (configuration, parameters)
    """
    config = load_config(Path(config_path).expanduser())
    return config, parameters_from_config(config)
# end def prepare_simulation
