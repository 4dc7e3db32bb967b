"""
State Management System

State variable metadata and the rolling trend history behind the display charts.

Usage:
    from pwr_simulator.simulator.state import TrendHistory

    history = TrendHistory(max_points=60)
    history.record(sim_time, reactor_state)
    history.export_to_csv("trend.csv")
"""

from .interfaces import (
    REACTOR_STATE_VARIABLES,
    StateCategory,
    StateVariable,
    filter_states_by_category,
    find_out_of_range,
    get_state_variable,
)
from .state_manager import DEFAULT_TREND_VARIABLES, TrendHistory

__all__ = [
    'TrendHistory',
    'DEFAULT_TREND_VARIABLES',
    'StateVariable',
    'StateCategory',
    'REACTOR_STATE_VARIABLES',
    'get_state_variable',
    'filter_states_by_category',
    'find_out_of_range',
]
