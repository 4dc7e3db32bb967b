"""
Steam Cycle Model

Secondary loop observables for the stylized plant. The secondary side has no
thermal inertia in this model: every tick its values are re-derived from the
current primary conditions instead of being integrated.
"""

from dataclasses import dataclass

from pwr_simulator.systems.primary.reactor.noise import RandomSource

# Fraction of thermal power delivered as electrical output
TURBINE_EFFICIENCY = 0.33


@dataclass
class SecondaryConditions:
    """Secondary loop values derived for one tick"""

    sg_pressure: float      # MPa
    sg_temp: float          # °C
    sg_flow: float          # kg/s
    steam_flow: float       # kg/s
    turbine_power: float    # MWe
    condenser_vac: float    # kPa (negative)
    przr_level: float       # %


def derive_secondary_conditions(power: float, core_temp: float, thermal_power: float,
                                rng: RandomSource) -> SecondaryConditions:
    """
    Re-derive secondary loop observables from primary conditions

    Random draws happen in a fixed order: SG pressure, SG flow, condenser vacuum.

    Args:
        power: Reactor power (% rated)
        core_temp: Core temperature (°C)
        thermal_power: Thermal output (MWt)
        rng: Uniform [0, 1) source

    Returns:
        SecondaryConditions for this tick
    """
    power_fraction = power / 100

    sg_pressure = 6.0 + power_fraction * 1.5 + rng() * 0.1
    sg_temp = 270 + power_fraction * 20
    sg_flow = 4000 + power_fraction * 1000 + rng() * 50

    steam_flow = 1400 + power_fraction * 300
    turbine_power = thermal_power * TURBINE_EFFICIENCY
    condenser_vac = -90 - power_fraction * 8 + rng() * 2

    przr_level = 50 + (core_temp - 300) * 0.5

    return SecondaryConditions(
        sg_pressure=sg_pressure,
        sg_temp=sg_temp,
        sg_flow=sg_flow,
        steam_flow=steam_flow,
        turbine_power=turbine_power,
        condenser_vac=condenser_vac,
        przr_level=przr_level,
    )


def apply_secondary_conditions(state, conditions: SecondaryConditions) -> None:
    """Copy derived secondary values onto the reactor state"""
    state.sg_pressure = conditions.sg_pressure
    state.sg_temp = conditions.sg_temp
    state.sg_flow = conditions.sg_flow
    state.steam_flow = conditions.steam_flow
    state.turbine_power = conditions.turbine_power
    state.condenser_vac = conditions.condenser_vac
    state.przr_level = conditions.przr_level


def coast_down(state) -> None:
    """
    Secondary coast-down after a reactor trip

    Steam flow and turbine output decay toward zero and the condenser vacuum
    degrades toward -50 kPa. SG and pressurizer values hold their last value.
    """
    state.steam_flow = max(0.0, state.steam_flow * 0.95)
    state.turbine_power = max(0.0, state.turbine_power * 0.96)
    state.condenser_vac = min(-50.0, state.condenser_vac + 0.5)
