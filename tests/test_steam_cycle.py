"""
Steam Cycle Tests
"""

import pytest

from pwr_simulator.systems.primary.reactor.noise import constant_random, sequence_random
from pwr_simulator.systems.primary.reactor.reactor_physics import ReactorState
from pwr_simulator.systems.secondary.steam_cycle import (
    apply_secondary_conditions,
    coast_down,
    derive_secondary_conditions,
)


class TestDerivedConditions:
    """Memoryless secondary values"""

    def test_full_power_midpoint(self):
        conditions = derive_secondary_conditions(100.0, 300.0, 2850.0, constant_random(0.5))
        assert conditions.sg_pressure == pytest.approx(7.55)
        assert conditions.sg_temp == pytest.approx(290.0)
        assert conditions.sg_flow == pytest.approx(5025.0)
        assert conditions.steam_flow == pytest.approx(1700.0)
        assert conditions.turbine_power == pytest.approx(940.5)
        assert conditions.condenser_vac == pytest.approx(-97.0)
        assert conditions.przr_level == pytest.approx(50.0)

    def test_draw_order(self):
        """SG pressure, SG flow and condenser vacuum draw in that order"""
        conditions = derive_secondary_conditions(100.0, 300.0, 2850.0, sequence_random([0.1, 0.2, 0.3]))
        assert conditions.sg_pressure == pytest.approx(7.51)
        assert conditions.sg_flow == pytest.approx(5010.0)
        assert conditions.condenser_vac == pytest.approx(-97.4)

    def test_zero_power(self):
        conditions = derive_secondary_conditions(0.0, 280.0, 0.0, constant_random(0.5))
        assert conditions.sg_temp == pytest.approx(270.0)
        assert conditions.steam_flow == pytest.approx(1400.0)
        assert conditions.turbine_power == 0.0
        assert conditions.przr_level == pytest.approx(40.0)

    def test_apply_copies_every_field(self):
        state = ReactorState()
        conditions = derive_secondary_conditions(50.0, 310.0, 1425.0, constant_random(0.5))
        apply_secondary_conditions(state, conditions)
        assert state.sg_pressure == conditions.sg_pressure
        assert state.sg_flow == conditions.sg_flow
        assert state.turbine_power == conditions.turbine_power
        assert state.przr_level == pytest.approx(55.0)


class TestCoastDown:
    """Secondary behaviour after a trip"""

    def test_single_coast_down(self):
        state = ReactorState()
        coast_down(state)
        assert state.steam_flow == pytest.approx(1501.0)
        assert state.turbine_power == pytest.approx(912.0)
        assert state.condenser_vac == pytest.approx(-94.5)
        assert state.sg_pressure == 6.89
        assert state.przr_level == 55.0

    def test_vacuum_degrades_to_limit(self):
        state = ReactorState()
        for _ in range(200):
            coast_down(state)
        assert state.condenser_vac == -50.0
        assert state.steam_flow > 0.0
        assert state.steam_flow < 1.0
