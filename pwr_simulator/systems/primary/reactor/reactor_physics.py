"""
Reactor Physics Module

This module provides the plant state record and the physics stepper that
advances it one tick. The model is a stylized, tunable arithmetic model for an
educational display: reactivity from rod withdrawal and a negative temperature
coefficient drive power multiplicatively, and everything else follows power.

The stepper has two branches selected purely by ``state.is_scram``:

- tripped: exponential relaxation toward decay-heat floors
- normal: closed-loop reactivity feedback

followed by shared measurement jitter applied in either branch.
"""

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np

from pwr_simulator.exceptions import UnknownVariableError
from pwr_simulator.systems.secondary.steam_cycle import (
    apply_secondary_conditions,
    coast_down,
    derive_secondary_conditions,
)

from .config import PhysicsConstants
from .noise import RandomSource, centered_jitter

# Rod travel in steps: 0 = fully inserted, 228 = fully withdrawn
ROD_STEPS_MAX = 228

# Power clamp (% rated)
POWER_MIN = 0.0
POWER_MAX = 120.0

# Fixed heat-rate coefficient, MWt per % power
THERMAL_POWER_PER_PERCENT = 28.5

# Decay floors and ceilings approached while tripped
TRIP_FLUX_FLOOR = 0.1
TRIP_POWER_FLOOR = 1.0
TRIP_CORE_TEMP_FLOOR = 150.0
TRIP_THERMAL_POWER_FLOOR = 50.0


class RodMode(Enum):
    """Operator-facing rod control mode"""

    AUTO = "AUTO"
    MANUAL = "MANUAL"
    SCRAM = "SCRAM"


@dataclass
class ReactorState:
    """Current state of the plant as shown on the display"""

    # Primary
    power: float = 100.0            # % rated power
    rod_position: int = 225         # steps withdrawn (0-228)
    core_temp: float = 315.0        # °C
    rcs_pressure: float = 15.5      # MPa
    neutron_flux: float = 98.2      # %

    # Steam generator
    sg_pressure: float = 6.89       # MPa
    sg_temp: float = 285.0          # °C
    sg_flow: float = 4732.0         # kg/s

    # Pressurizer
    przr_level: float = 55.0        # %
    przr_pressure: float = 15.5     # MPa

    # Secondary
    steam_flow: float = 1580.0      # kg/s
    turbine_power: float = 950.0    # MWe
    thermal_power: float = 2850.0   # MWt
    condenser_vac: float = -95.0    # kPa

    # Status
    is_online: bool = True
    is_scram: bool = False
    rod_mode: RodMode = RodMode.AUTO

    def copy(self) -> "ReactorState":
        """Independent snapshot of the current state"""
        return replace(self)

    def to_dict(self, camel_case: bool = False) -> Dict[str, Any]:
        """
        Get state as a plain dictionary

        Args:
            camel_case: Emit the display field names (``rodPosition``) instead
                of Python attribute names

        Returns:
            Dictionary of field values with ``rod_mode`` as its string value
        """
        data = asdict(self)
        data["rod_mode"] = self.rod_mode.value
        if camel_case:
            return {FIELD_ALIASES[name]: value for name, value in data.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReactorState":
        """Build a state from attribute or display field names; missing fields keep defaults"""
        reverse_aliases = {alias: name for name, alias in FIELD_ALIASES.items()}
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = reverse_aliases.get(key, key)
            if name not in known:
                raise UnknownVariableError(key)
            values[name] = value
        if "rod_mode" in values and not isinstance(values["rod_mode"], RodMode):
            values["rod_mode"] = RodMode(values["rod_mode"])
        return cls(**values)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# Python attribute name -> display field name
FIELD_ALIASES: Dict[str, str] = {f.name: _camel(f.name) for f in fields(ReactorState)}


def step_physics(state: ReactorState, constants: PhysicsConstants, dt: float,
                 rng: Optional[RandomSource] = None) -> ReactorState:
    """
    Advance the reactor state by one simulation tick

    The constants are tuned for a fixed tick rate, so ``dt`` does not scale
    the deltas. Mutates ``state`` in place and returns it. Trip floors are
    applied before the shared jitter, which can carry ``core_temp`` up to
    0.15 °C below its floor.

    Args:
        state: Reactor state (mutated)
        constants: Reactivity and feedback coefficients
        dt: Elapsed wall time in seconds (unclamped, not used for scaling)
        rng: Uniform [0, 1) source; defaults to numpy's global generator

    Returns:
        The same ``state`` object
    """
    if rng is None:
        rng = np.random.random_sample

    if state.is_scram:
        _step_tripped(state)
    else:
        _step_normal(state, constants, rng)

    # Small fluctuations for realism, in either mode
    state.sg_pressure += centered_jitter(rng, 0.02)
    state.core_temp += centered_jitter(rng, 0.3)

    return state


def _step_tripped(state: ReactorState) -> None:
    """Decay heat and cooldown, independent of rods and temperature feedback"""
    state.neutron_flux = max(TRIP_FLUX_FLOOR, state.neutron_flux * 0.95)
    state.power = max(TRIP_POWER_FLOOR, state.power * 0.98)
    state.core_temp = max(TRIP_CORE_TEMP_FLOOR, state.core_temp - 0.5)
    state.thermal_power = max(TRIP_THERMAL_POWER_FLOOR, state.power * THERMAL_POWER_PER_PERCENT)

    # Primary pressure holds; pressurizer stays tied to it
    state.przr_pressure = state.rcs_pressure

    coast_down(state)


def _step_normal(state: ReactorState, constants: PhysicsConstants, rng: RandomSource) -> None:
    """Closed-loop reactivity feedback"""
    reactivity = calculate_net_reactivity(state, constants)

    # Reactivity acts multiplicatively on current power
    power_change = reactivity * state.power * constants.response_time
    state.power = min(POWER_MAX, max(POWER_MIN, state.power + power_change))

    # Flux tracks power with jitter of ±0.2
    state.neutron_flux = state.power * 0.98 + rng() * 0.4 - 0.2

    # First-order lag toward a power-dependent temperature
    target_temp = 280 + state.power * 0.5
    state.core_temp += (target_temp - state.core_temp) * 0.1

    state.thermal_power = state.power * THERMAL_POWER_PER_PERCENT

    target_pressure = 15.0 + (state.core_temp - 300) * 0.02
    state.rcs_pressure += (target_pressure - state.rcs_pressure) * 0.05
    state.przr_pressure = state.rcs_pressure

    conditions = derive_secondary_conditions(
        state.power, state.core_temp, state.thermal_power, rng
    )
    apply_secondary_conditions(state, conditions)


def calculate_rod_reactivity(rod_position: float, constants: PhysicsConstants) -> float:
    """Linear rod reactivity; full withdrawal contributes ``rod_worth``"""
    return (rod_position / ROD_STEPS_MAX) * constants.rod_worth


def calculate_temperature_feedback(core_temp: float, constants: PhysicsConstants) -> float:
    """Temperature feedback relative to 300 °C (negative above it for a stable core)"""
    return (core_temp - 300) * constants.temp_coeff


def calculate_net_reactivity(state: ReactorState, constants: PhysicsConstants) -> float:
    """Sum of rod and temperature contributions"""
    return (calculate_rod_reactivity(state.rod_position, constants)
            + calculate_temperature_feedback(state.core_temp, constants))


def critical_rod_position(core_temp: float, constants: PhysicsConstants) -> float:
    """
    Rod position at which rod reactivity cancels temperature feedback

    Args:
        core_temp: Core temperature (°C)
        constants: Reactivity coefficients

    Returns:
        Rod position in steps (may fall outside 0-228 if no position balances)
    """
    feedback = calculate_temperature_feedback(core_temp, constants)
    return -feedback / constants.rod_worth * ROD_STEPS_MAX
