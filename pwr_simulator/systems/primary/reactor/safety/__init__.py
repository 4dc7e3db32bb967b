"""Reactor trip and reset logic"""

from .scram_logic import ScramSystem

__all__ = ['ScramSystem']
