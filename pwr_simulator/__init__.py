"""
PWR Simulator - stylized pressurized-water-reactor model for an educational display

This package steps a lumped-parameter model of a PWR's primary and secondary
state forward in time. Presentation (rendering, charts, input widgets) lives
outside the package; it feeds control commands in and reads state snapshots out.

Usage:
    import pwr_simulator

    sim = pwr_simulator.ReactorSimulator()
    sim.move_rods(5)
    sim.run(duration=10.0)
    print(sim.snapshot()["power"])
"""

__version__ = "1.0.0"

from .exceptions import (
    ConfigurationError,
    InvalidCommandError,
    PWRSimulatorError,
    UnknownVariableError,
)
from .simulator.config import SimulationConfig, load_config
from .simulator.core.sim import ControlAction, ReactorSimulator
from .systems.primary.reactor.config import PhysicsConstants
from .systems.primary.reactor.reactor_physics import ReactorState, RodMode, step_physics

__all__ = [
    'ReactorSimulator',
    'ControlAction',
    'ReactorState',
    'RodMode',
    'PhysicsConstants',
    'SimulationConfig',
    'load_config',
    'step_physics',
    'PWRSimulatorError',
    'ConfigurationError',
    'InvalidCommandError',
    'UnknownVariableError',
]
