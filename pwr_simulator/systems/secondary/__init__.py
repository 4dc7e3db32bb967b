"""
Secondary System

Memoryless steam-cycle model re-derived from primary conditions each tick.
"""

from .steam_cycle import SecondaryConditions, coast_down, derive_secondary_conditions

__all__ = ['SecondaryConditions', 'coast_down', 'derive_secondary_conditions']
