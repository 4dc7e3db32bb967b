"""
Reactor Systems Package

Contains the reactor state, physics stepper, constants, random sources and
control systems.
"""

from .config import PhysicsConstants
from .noise import RandomSource, constant_random, make_random_source, sequence_random
from .reactor_physics import ROD_STEPS_MAX, ReactorState, RodMode, step_physics
from .rod_control import RodControlSystem
from .safety.scram_logic import ScramSystem

__all__ = [
    'PhysicsConstants',
    'RandomSource',
    'constant_random',
    'make_random_source',
    'sequence_random',
    'ROD_STEPS_MAX',
    'ReactorState',
    'RodMode',
    'step_physics',
    'RodControlSystem',
    'ScramSystem',
]
