"""
SCRAM Logic Tests

Tests for reactor trip, trip rod insertion and the push-button reset.
"""

import logging

import pytest

from pwr_simulator.exceptions import InvalidCommandError
from pwr_simulator.systems.primary.reactor.reactor_physics import ReactorState, RodMode
from pwr_simulator.systems.primary.reactor.safety.scram_logic import ScramSystem


@pytest.fixture
def state():
    return ReactorState()


@pytest.fixture
def scram():
    return ScramSystem()


class TestTrip:
    """Tripping the reactor"""

    def test_trip_sets_status_flags(self, scram, state):
        assert scram.trip(state)
        assert state.is_scram
        assert not state.is_online
        assert state.rod_mode == RodMode.SCRAM
        assert scram.insertion_active
        assert scram.trip_count == 1
        assert scram.last_trip_reason == "manual"

    def test_trip_leaves_plant_values_alone(self, scram, state):
        before = state.to_dict()
        scram.trip(state)
        after = state.to_dict()
        for name in ("power", "core_temp", "rod_position", "neutron_flux", "rcs_pressure"):
            assert after[name] == before[name]

    def test_repeated_trip_is_noop(self, scram, state):
        scram.trip(state, reason="first")
        assert not scram.trip(state, reason="second")
        assert scram.trip_count == 1
        assert scram.last_trip_reason == "first"

    def test_trip_is_logged(self, scram, state, caplog):
        with caplog.at_level(logging.WARNING):
            scram.trip(state, reason="operator demand")
        assert "REACTOR TRIP: operator demand" in caplog.text


class TestRodInsertion:
    """Rapid rod insertion after a trip"""

    def test_insertion_rate_per_frame(self, scram, state):
        scram.trip(state)
        assert scram.advance_rod_insertion(state) == 215
        assert scram.advance_rod_insertion(state) == 205

    def test_insertion_stops_at_bottom(self, scram, state):
        scram.trip(state)
        positions = [scram.advance_rod_insertion(state) for _ in range(25)]
        assert positions[21] == 5
        assert positions[22] == 0
        assert all(p == 0 for p in positions[22:])
        assert not scram.insertion_active

    def test_no_insertion_without_trip(self, scram, state):
        assert scram.advance_rod_insertion(state) == 225

    def test_insertion_continues_after_reset(self, scram, state):
        scram.trip(state)
        scram.advance_rod_insertion(state)
        scram.reset(state)
        assert scram.advance_rod_insertion(state) == 205
        assert not state.is_scram

    def test_custom_insertion_rate(self, state):
        scram = ScramSystem(insertion_rate=100)
        scram.trip(state)
        assert scram.advance_rod_insertion(state) == 125
        assert scram.advance_rod_insertion(state) == 25
        assert scram.advance_rod_insertion(state) == 0

    def test_invalid_arguments_rejected(self):
        with pytest.raises(ValueError):
            ScramSystem(insertion_rate=0)
        with pytest.raises(ValueError):
            ScramSystem(presses_to_reset=0)


class TestReset:
    """Returning to normal operation"""

    def test_reset_restores_auto_mode(self, scram, state):
        scram.trip(state)
        state.power = 12.0
        scram.reset(state)
        assert not state.is_scram
        assert state.is_online
        assert state.rod_mode == RodMode.AUTO
        assert state.power == 12.0

    def test_reset_when_not_tripped_raises(self, scram, state):
        with pytest.raises(InvalidCommandError):
            scram.reset(state)
        assert state.is_online


class TestPushButton:
    """Push-button trip and multi-press reset"""

    def test_first_press_trips_and_counts(self, scram, state):
        assert scram.press_button(state) == "tripped"
        assert state.is_scram
        assert scram.reset_press_count == 1

    def test_three_presses_trip_and_reset(self, scram, state):
        assert scram.press_button(state) == "tripped"
        assert scram.press_button(state) == "counted"
        assert state.is_scram
        assert scram.press_button(state) == "reset"
        assert not state.is_scram
        assert state.rod_mode == RodMode.AUTO
        assert scram.reset_press_count == 0

    def test_commanded_trip_needs_three_presses(self, scram, state):
        scram.trip(state)
        assert scram.press_button(state) == "counted"
        assert scram.press_button(state) == "counted"
        assert scram.press_button(state) == "reset"

    def test_new_trip_restarts_count(self, scram, state):
        scram.press_button(state)
        scram.press_button(state)
        scram.press_button(state)
        assert scram.press_button(state) == "tripped"
        assert scram.press_button(state) == "counted"
        assert scram.trip_count == 2

    def test_single_press_setting_resets_on_next_press(self, state):
        scram = ScramSystem(presses_to_reset=1)
        assert scram.press_button(state) == "tripped"
        assert state.is_scram
        assert scram.press_button(state) == "reset"


class TestStatus:
    """Status reporting"""

    def test_status_dictionary(self, scram, state):
        scram.press_button(state)
        status = scram.get_status(state)
        assert status["is_scram"] is True
        assert status["rod_mode"] == "SCRAM"
        assert status["reset_press_count"] == 1
        assert status["presses_to_reset"] == 3
        assert status["last_trip_reason"] == "SCRAM push-button"
        assert scram.is_tripped(state)

    def test_summary_text(self, scram, state):
        assert "REACTOR ONLINE" in scram.get_safety_status_summary(state)
        scram.trip(state)
        summary = scram.get_safety_status_summary(state)
        assert "REACTOR TRIP" in summary
        assert "press SCRAM 3 more time(s)" in summary

    def test_summary_after_button_trip(self, scram, state):
        scram.press_button(state)
        assert "press SCRAM 2 more time(s)" in scram.get_safety_status_summary(state)
