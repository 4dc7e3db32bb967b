"""Simulation session"""

from .sim import ControlAction, ReactorSimulator

__all__ = ['ControlAction', 'ReactorSimulator']
