"""
Reactor Physics Configuration

Tunable reactivity and feedback coefficients for the stylized core model.
The constants are fixed for a session; validating them is the caller's job
at configuration time, the stepper itself accepts whatever it is given.
"""

import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from pwr_simulator.exceptions import ConfigurationError


@dataclass(frozen=True)
class PhysicsConstants:
    """Reactivity and feedback coefficients for the core model"""

    rod_worth: float = 0.015        # Reactivity at full withdrawal (228 steps)
    temp_coeff: float = -0.0002     # Temperature coefficient per °C above 300 °C (negative)
    heat_transfer: float = 0.95     # Heat transfer efficiency (reserved, unused by the stepper)
    response_time: float = 0.1      # Power response factor per tick

    def validate(self) -> None:
        """
        Check the constants describe a self-limiting core

        Raises:
            ConfigurationError: If a coefficient is non-finite or would
                produce a positive-feedback runaway
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be a finite number, got {value!r}", field=f.name)

        if self.temp_coeff >= 0:
            raise ConfigurationError(
                f"temp_coeff must be negative for a stable core, got {self.temp_coeff}",
                field="temp_coeff",
            )
        if self.response_time <= 0:
            raise ConfigurationError(
                f"response_time must be positive, got {self.response_time}",
                field="response_time",
            )
        if self.rod_worth < 0:
            raise ConfigurationError(
                f"rod_worth must not be negative, got {self.rod_worth}",
                field="rod_worth",
            )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhysicsConstants":
        """
        Build constants from a mapping, rejecting unknown keys

        Args:
            data: Mapping of field name to value (missing keys keep defaults)

        Returns:
            PhysicsConstants instance (not validated)
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown physics constants: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PhysicsConstants":
        """Load constants from the ``physics`` section of a YAML file (or its top level)"""
        data = load_yaml_section(path, "physics")
        return cls.from_dict(data)


def read_yaml_mapping(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML configuration file whose top level is a mapping

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or its top
            level is not a mapping (an empty file reads as ``{}``)
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Could not read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return yaml_data


def is_flat_mapping(yaml_data: Dict[str, Any]) -> bool:
    """True when no top-level value is itself a section"""
    return not any(isinstance(v, dict) for v in yaml_data.values())


def get_section(yaml_data: Dict[str, Any], section: str, path: Union[str, Path]) -> Dict[str, Any]:
    """One named section of parsed configuration; ``{}`` when absent"""
    section_data = yaml_data.get(section) or {}
    if not isinstance(section_data, dict):
        raise ConfigurationError(f"Section '{section}' in {path} must be a mapping")
    return section_data


def load_yaml_section(path: Union[str, Path], section: str) -> Dict[str, Any]:
    """
    Read one section of a YAML configuration file

    A flat file without the named section is treated as the section itself,
    so single-purpose files can omit the wrapper key.
    """
    yaml_data = read_yaml_mapping(path)
    if section not in yaml_data and yaml_data and is_flat_mapping(yaml_data):
        return yaml_data
    return get_section(yaml_data, section, path)


def create_standard_physics_constants() -> PhysicsConstants:
    """Create the educational-display tuning"""
    return PhysicsConstants()
