"""
Simulation Session Configuration

Tick cadence, time acceleration, trend history depth and control-drive
settings for a simulation session, plus loading of combined YAML files that
carry both the ``physics`` and ``simulation`` sections.
"""

import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pwr_simulator.exceptions import ConfigurationError
from pwr_simulator.systems.primary.reactor.config import (
    PhysicsConstants,
    get_section,
    is_flat_mapping,
    load_yaml_section,
    read_yaml_mapping,
)

# Packaged default tuning
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "default_config.yaml"

# Top-level sections of a combined configuration file
CONFIG_SECTIONS = ("physics", "simulation")


@dataclass
class SimulationConfig:
    """Configuration for a simulation session"""

    # Timing
    frame_rate: float = 60.0             # Physics ticks per second of wall time
    display_interval: float = 0.1        # Seconds of wall time between history samples
    time_acceleration: float = 10.0      # Simulated seconds per wall second

    # Variable frame handling
    fixed_tick: bool = True              # One physics step per frame regardless of dt
    max_catchup_steps: int = 10          # Sub-step cap when fixed_tick is False
    large_dt_warning: float = 1.0        # Frames longer than this are logged

    # Trend history
    history_max_points: int = 60

    # Control drives
    hold_repeat_interval: float = 0.05   # Seconds per step while a rod button is held
    scram_insertion_rate: int = 10       # Rod steps per frame during trip insertion
    presses_to_reset: int = 3            # SCRAM presses while tripped that reset

    # Random source
    seed: Optional[int] = None

    @property
    def nominal_dt(self) -> float:
        """Wall time of one tick at the configured frame rate"""
        return 1.0 / self.frame_rate

    def validate(self) -> None:
        """
        Check the session settings are usable

        Raises:
            ConfigurationError: On a non-positive interval, rate or count
        """
        positive = ("frame_rate", "display_interval", "time_acceleration",
                    "large_dt_warning", "hold_repeat_interval")
        for name in positive:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}", field=name)

        for name in ("max_catchup_steps", "history_max_points", "scram_insertion_rate", "presses_to_reset"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}", field=name)

        if self.seed is not None and (not isinstance(self.seed, int) or self.seed < 0):
            raise ConfigurationError(f"seed must be a non-negative integer, got {self.seed!r}", field="seed")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown simulation settings: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SimulationConfig":
        """Load settings from the ``simulation`` section of a YAML file"""
        return cls.from_dict(load_yaml_section(path, "simulation"))


def load_config(path: Union[str, Path]) -> Tuple[PhysicsConstants, SimulationConfig]:
    """
    Load physics constants and session settings from one YAML file

    Example file::

        physics:
          rod_worth: 0.015
          temp_coeff: -0.0002
        simulation:
          frame_rate: 30
          seed: 42

    A file without sections is read as physics constants, as
    ``PhysicsConstants.from_yaml`` reads it.

    Args:
        path: YAML file path

    Returns:
        Tuple of (PhysicsConstants, SimulationConfig), both validated

    Raises:
        ConfigurationError: On an unknown section or setting, or invalid values
    """
    yaml_data = read_yaml_mapping(path)
    if yaml_data and not set(CONFIG_SECTIONS) & set(yaml_data) and is_flat_mapping(yaml_data):
        yaml_data = {"physics": yaml_data}

    unknown = sorted(set(yaml_data) - set(CONFIG_SECTIONS))
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections in {path}: {', '.join(unknown)}")

    constants = PhysicsConstants.from_dict(get_section(yaml_data, "physics", path))
    config = SimulationConfig.from_dict(get_section(yaml_data, "simulation", path))
    constants.validate()
    config.validate()
    return constants, config
