"""
State Metadata and Trend History Tests
"""

import pandas as pd
import pytest

from pwr_simulator.exceptions import UnknownVariableError
from pwr_simulator.simulator.state.interfaces import (
    REACTOR_STATE_VARIABLES,
    StateCategory,
    filter_states_by_category,
    find_out_of_range,
    get_state_variable,
)
from pwr_simulator.simulator.state.state_manager import DEFAULT_TREND_VARIABLES, TrendHistory
from pwr_simulator.systems.primary.reactor.reactor_physics import FIELD_ALIASES, ReactorState


def filled_history(samples, max_points=60):
    history = TrendHistory(max_points=max_points)
    state = ReactorState()
    for i in range(samples):
        state.power = 100.0 + i
        state.rod_position = 225 - i
        history.record(i * 1.0, state)
    return history


class TestStateMetadata:
    """Metadata registry"""

    def test_every_state_field_described(self):
        assert set(REACTOR_STATE_VARIABLES) == set(FIELD_ALIASES)

    def test_lookup(self):
        variable = get_state_variable("rod_position")
        assert variable.unit == "steps"
        assert variable.category == StateCategory.CONTROL
        assert variable.valid_range == (0, 228)
        assert variable.is_critical

    def test_unknown_variable(self):
        with pytest.raises(UnknownVariableError) as exc_info:
            get_state_variable("xenon")
        assert "xenon" in str(exc_info.value)

    def test_initial_state_in_range(self):
        assert find_out_of_range(ReactorState().to_dict()) == {}

    def test_out_of_range_detection(self):
        states = ReactorState(power=130.0, core_temp=140.0).to_dict()
        assert find_out_of_range(states) == {"power": 130.0, "core_temp": 140.0}

    def test_filter_by_category(self):
        states = ReactorState().to_dict()
        secondary = filter_states_by_category(states, StateCategory.SECONDARY)
        assert set(secondary) == {"sg_pressure", "sg_temp", "sg_flow", "steam_flow",
                                  "turbine_power", "condenser_vac"}
        safety = filter_states_by_category(states, StateCategory.SAFETY)
        assert safety == {"is_online": True, "is_scram": False}


class TestTrendHistory:
    """Rolling trend buffer"""

    def test_empty_history(self):
        history = TrendHistory()
        assert len(history) == 0
        assert history.latest() is None
        assert list(history.to_dataframe().columns) == ["time", *DEFAULT_TREND_VARIABLES]

    def test_record_samples_values(self):
        history = TrendHistory()
        row = history.record(1.5, ReactorState())
        assert row == {"time": 1.5, "power": 100.0, "core_temp": 315.0, "rod_position": 225,
                       "neutron_flux": 98.2, "rcs_pressure": 15.5, "sg_pressure": 6.89}
        assert history.latest() == row

    def test_record_copies_values(self):
        history = TrendHistory()
        state = ReactorState()
        history.record(0.0, state)
        state.power = 50.0
        assert history.latest()["power"] == 100.0

    def test_oldest_samples_dropped(self):
        history = filled_history(75)
        assert len(history) == 60
        assert history.total_samples == 75
        frame = history.to_dataframe()
        assert frame["time"].iloc[0] == 15.0
        assert frame["time"].iloc[-1] == 74.0

    def test_variable_history(self):
        history = filled_history(5)
        series = history.get_variable_history("power")
        assert isinstance(series, pd.Series)
        assert list(series.index) == [0.0, 1.0, 2.0, 3.0, 4.0]
        assert series.loc[2.0] == 102.0

    def test_time_range_filter(self):
        history = filled_history(10)
        series = history.get_variable_history("rod_position", time_range=(3.0, 5.0))
        assert list(series) == [222, 221, 220]

    def test_time_series_selection(self):
        history = filled_history(3)
        frame = history.get_time_series(["power", "core_temp"])
        assert list(frame.columns) == ["time", "power", "core_temp"]
        assert len(frame) == 3

    def test_untracked_variable(self):
        history = filled_history(3)
        with pytest.raises(UnknownVariableError):
            history.get_variable_history("turbine_power")

    def test_custom_variables(self):
        history = TrendHistory(variables=["turbine_power"])
        history.record(0.0, ReactorState())
        assert history.latest() == {"time": 0.0, "turbine_power": 950.0}

    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            TrendHistory(max_points=0)
        with pytest.raises(UnknownVariableError):
            TrendHistory(variables=["power", "xenon"])

    def test_feedback_points(self):
        history = filled_history(2)
        assert history.feedback_points() == [(315.0, 100.0), (315.0, 101.0)]

    def test_summary_statistics(self):
        history = filled_history(4)
        stats = history.summary_statistics()
        assert stats.loc["mean", "power"] == pytest.approx(101.5)
        assert stats.loc["count", "rod_position"] == 4

    def test_summary_statistics_empty(self):
        with pytest.warns(UserWarning):
            stats = TrendHistory().summary_statistics()
        assert stats.empty

    def test_clear(self):
        history = filled_history(5)
        history.clear()
        assert len(history) == 0
        assert history.total_samples == 0


class TestCsvExport:
    """CSV export of the trend buffer"""

    def test_export_all(self, tmp_path):
        history = filled_history(5)
        path = tmp_path / "trend.csv"
        assert history.export_to_csv(path) == 5
        frame = pd.read_csv(path)
        assert list(frame.columns) == ["time", *DEFAULT_TREND_VARIABLES]
        assert frame["power"].tolist() == [100.0, 101.0, 102.0, 103.0, 104.0]

    def test_export_subset(self, tmp_path):
        history = filled_history(5)
        path = tmp_path / "subset.csv"
        assert history.export_to_csv(path, time_range=(1.0, 2.0), variables=["rod_position"]) == 2
        frame = pd.read_csv(path)
        assert list(frame.columns) == ["time", "rod_position"]
        assert frame["rod_position"].tolist() == [224, 223]

    def test_export_empty_warns(self, tmp_path):
        path = tmp_path / "empty.csv"
        with pytest.warns(UserWarning):
            assert TrendHistory().export_to_csv(path) == 0
        assert path.exists()
