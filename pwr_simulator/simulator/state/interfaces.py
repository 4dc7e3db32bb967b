"""
State Metadata Interfaces

This module describes every observable of the reactor state (category, unit,
display range) so display collaborators and the trend history can label and
validate what they read.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pwr_simulator.exceptions import UnknownVariableError


class StateCategory(Enum):
    """Categories for organizing state variables"""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    CONTROL = "control"
    SAFETY = "safety"


@dataclass(frozen=True)
class StateVariable:
    """Metadata for a state variable"""
    name: str                                    # ReactorState attribute name
    category: StateCategory                      # High-level category
    unit: str                                    # Physical unit
    description: str                             # Human-readable description
    data_type: type                              # Python data type
    valid_range: Optional[Tuple[float, float]] = None  # Expected range for numeric values
    is_critical: bool = False                    # Shown on the trip status bar

    def is_in_range(self, value: Any) -> bool:
        """Check a value against the expected range (always True when unbounded)"""
        if self.valid_range is None:
            return True
        low, high = self.valid_range
        return low <= value <= high


REACTOR_STATE_VARIABLES: Dict[str, StateVariable] = {
    var.name: var for var in (
        # Primary
        StateVariable("power", StateCategory.PRIMARY, "%", "Reactor power", float, (0.0, 120.0), True),
        StateVariable("core_temp", StateCategory.PRIMARY, "°C", "Core temperature", float, (150.0, 400.0), True),
        StateVariable("rcs_pressure", StateCategory.PRIMARY, "MPa", "Reactor coolant system pressure", float,
                      (10.0, 18.0), True),
        StateVariable("neutron_flux", StateCategory.PRIMARY, "%", "Neutron flux", float, (0.0, 120.0)),
        StateVariable("przr_level", StateCategory.PRIMARY, "%", "Pressurizer level", float, (0.0, 100.0)),
        StateVariable("przr_pressure", StateCategory.PRIMARY, "MPa", "Pressurizer pressure", float, (10.0, 18.0)),
        StateVariable("thermal_power", StateCategory.PRIMARY, "MWt", "Thermal output", float, (0.0, 3420.0)),

        # Secondary
        StateVariable("sg_pressure", StateCategory.SECONDARY, "MPa", "Steam generator pressure", float, (0.0, 10.0)),
        StateVariable("sg_temp", StateCategory.SECONDARY, "°C", "Steam generator temperature", float, (0.0, 320.0)),
        StateVariable("sg_flow", StateCategory.SECONDARY, "kg/s", "Primary flow through steam generators", float,
                      (0.0, 6000.0)),
        StateVariable("steam_flow", StateCategory.SECONDARY, "kg/s", "Steam flow", float, (0.0, 2000.0)),
        StateVariable("turbine_power", StateCategory.SECONDARY, "MWe", "Electrical output", float, (0.0, 1200.0)),
        StateVariable("condenser_vac", StateCategory.SECONDARY, "kPa", "Condenser vacuum", float, (-101.3, 0.0)),

        # Control
        StateVariable("rod_position", StateCategory.CONTROL, "steps", "Control rod withdrawal", int, (0, 228), True),
        StateVariable("rod_mode", StateCategory.CONTROL, "", "Rod control mode", str),

        # Safety
        StateVariable("is_online", StateCategory.SAFETY, "", "Reactor online", bool),
        StateVariable("is_scram", StateCategory.SAFETY, "", "Reactor tripped", bool, is_critical=True),
    )
}


def get_state_variable(name: str) -> StateVariable:
    """
    Look up metadata for a state variable

    Raises:
        UnknownVariableError: If the name is not a reactor state variable
    """
    try:
        return REACTOR_STATE_VARIABLES[name]
    except KeyError:
        raise UnknownVariableError(name) from None


def filter_states_by_category(states: Dict[str, Any], category: StateCategory) -> Dict[str, Any]:
    """
    Filter a state dictionary to variables of one category.

    Args:
        states: Dictionary of state variables (attribute names)
        category: Category to keep

    Returns:
        Filtered dictionary; keys without metadata are dropped
    """
    return {
        name: value for name, value in states.items()
        if name in REACTOR_STATE_VARIABLES and REACTOR_STATE_VARIABLES[name].category == category
    }


def find_out_of_range(states: Dict[str, Any]) -> Dict[str, Any]:
    """Variables whose values fall outside their expected display range"""
    return {
        name: value for name, value in states.items()
        if name in REACTOR_STATE_VARIABLES and not REACTOR_STATE_VARIABLES[name].is_in_range(value)
    }
