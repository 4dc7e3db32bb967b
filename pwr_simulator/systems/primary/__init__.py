"""
Primary Reactor System

Core physics, control rod drive and SCRAM logic.
"""

from .reactor import (
    PhysicsConstants,
    ReactorState,
    RodControlSystem,
    RodMode,
    ScramSystem,
    step_physics,
)

__all__ = [
    'PhysicsConstants',
    'ReactorState',
    'RodControlSystem',
    'RodMode',
    'ScramSystem',
    'step_physics',
]
