"""
Trend History

This module keeps the rolling window of samples behind the display trend
charts and provides pandas views and CSV export of it. Samples are taken at
the display cadence, not every physics tick.
"""

import logging
import warnings
from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from pwr_simulator.exceptions import UnknownVariableError
from pwr_simulator.systems.primary.reactor.reactor_physics import ReactorState

from .interfaces import get_state_variable

logger = logging.getLogger(__name__)

# Variables plotted by the trend charts
DEFAULT_TREND_VARIABLES = (
    "power",
    "core_temp",
    "rod_position",
    "neutron_flux",
    "rcs_pressure",
    "sg_pressure",
)


class TrendHistory:
    """
    Rolling time series of selected reactor state variables.

    Only the most recent ``max_points`` samples are kept; older samples are
    dropped as new ones arrive.
    """

    def __init__(self, max_points: int = 60, variables: Sequence[str] = DEFAULT_TREND_VARIABLES):
        """
        Initialize trend history.

        Args:
            max_points: Maximum number of samples kept
            variables: ReactorState attribute names to sample
        """
        if max_points < 1:
            raise ValueError(f"max_points must be at least 1, got {max_points}")

        for name in variables:
            get_state_variable(name)

        self.max_points = max_points
        self.variables: Tuple[str, ...] = tuple(variables)
        self._rows: Deque[Dict[str, Any]] = deque(maxlen=max_points)
        self.total_samples = 0

    def __len__(self) -> int:
        return len(self._rows)

    def record(self, timestamp: float, state: ReactorState) -> Dict[str, Any]:
        """
        Add a sample of the current state.

        Args:
            timestamp: Simulation time of the sample
            state: Reactor state to sample

        Returns:
            The recorded row
        """
        row = {"time": timestamp}
        for name in self.variables:
            row[name] = getattr(state, name)

        self._rows.append(row)
        self.total_samples += 1
        return row

    def get_variable_history(self, variable_name: str,
                             time_range: Optional[Tuple[float, float]] = None) -> pd.Series:
        """
        Get time series for one variable.

        Args:
            variable_name: Name of a tracked variable
            time_range: Optional (start_time, end_time) filter, inclusive

        Returns:
            pandas Series indexed by simulation time
        """
        self._check_tracked(variable_name)
        data = self._filtered_frame(time_range)
        return data.set_index("time")[variable_name]

    def get_time_series(self, variable_names: List[str],
                        time_range: Optional[Tuple[float, float]] = None) -> pd.DataFrame:
        """
        Get a DataFrame with the time column and selected variables.

        Raises:
            UnknownVariableError: If any variable is not tracked
        """
        for name in variable_names:
            self._check_tracked(name)
        return self._filtered_frame(time_range)[["time"] + list(variable_names)]

    def to_dataframe(self) -> pd.DataFrame:
        """All retained samples as a DataFrame (``time`` plus tracked variables)"""
        return pd.DataFrame(list(self._rows), columns=["time", *self.variables])

    def feedback_points(self) -> List[Tuple[float, float]]:
        """
        (core temperature, power) pairs for the power-vs-temperature scatter.

        Requires both variables to be tracked.
        """
        self._check_tracked("core_temp")
        self._check_tracked("power")
        return [(row["core_temp"], row["power"]) for row in self._rows]

    def latest(self) -> Optional[Dict[str, Any]]:
        """Most recent sample, or None when empty"""
        return dict(self._rows[-1]) if self._rows else None

    def export_to_csv(self, filename: Union[str, Path],
                      time_range: Optional[Tuple[float, float]] = None,
                      variables: Optional[List[str]] = None) -> int:
        """
        Export samples to a CSV file.

        Args:
            filename: Output CSV filename
            time_range: Optional (start_time, end_time) filter
            variables: Optional subset of variables (default: all tracked)

        Returns:
            Number of rows written
        """
        if variables is not None:
            data_to_export = self.get_time_series(variables, time_range)
        else:
            data_to_export = self._filtered_frame(time_range)

        if data_to_export.empty:
            warnings.warn("Trend history is empty; exporting header only")

        data_to_export.to_csv(filename, index=False)
        logger.info(f"Exported {len(data_to_export)} rows to {filename}")
        return len(data_to_export)

    def summary_statistics(self) -> pd.DataFrame:
        """Descriptive statistics of the retained samples"""
        if not self._rows:
            warnings.warn("No data available for summary statistics")
            return pd.DataFrame()
        return self.to_dataframe().describe()

    def clear(self) -> None:
        self._rows.clear()
        self.total_samples = 0

    def _check_tracked(self, variable_name: str) -> None:
        if variable_name not in self.variables:
            raise UnknownVariableError(variable_name)

    def _filtered_frame(self, time_range: Optional[Tuple[float, float]]) -> pd.DataFrame:
        data = self.to_dataframe()
        if time_range is not None:
            start_time, end_time = time_range
            mask = (data["time"] >= start_time) & (data["time"] <= end_time)
            data = data.loc[mask]
        return data
