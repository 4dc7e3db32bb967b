"""
Control Rod Drive

Operator rod motion: keyboard nudges, slider set-points, and continuous
insert/withdraw while a button is held. Every motion is clamped to the rod
travel and switches the rod mode to MANUAL. Rod motion is refused while the
reactor is tripped; trip insertion is driven by the SCRAM system instead.
"""

import logging
from typing import Optional

from .reactor_physics import ROD_STEPS_MAX, ReactorState, RodMode

logger = logging.getLogger(__name__)

# Keyboard nudge size (arrow keys)
KEYBOARD_NUDGE_STEPS = 5


def clamp_rod_position(position: float) -> int:
    """Clamp a requested position to the rod travel"""
    return int(max(0, min(ROD_STEPS_MAX, position)))


class RodControlSystem:
    """
    Control rod drive for operator commands
    """

    INSERT = -1
    WITHDRAW = 1

    def __init__(self, hold_repeat_interval: float = 0.05):
        """
        Initialize rod drive

        Args:
            hold_repeat_interval: Seconds between single-step moves while a
                button is held
        """
        self.hold_repeat_interval = hold_repeat_interval
        self.hold_direction: Optional[int] = None
        self._hold_elapsed = 0.0

    def move_rods(self, state: ReactorState, steps: int) -> bool:
        """
        Move rods by a number of steps (positive withdraws)

        Args:
            state: Reactor state
            steps: Signed step count

        Returns:
            True if the command was applied, False if refused during a trip
        """
        if state.is_scram:
            logger.warning("Rod motion refused: reactor is tripped")
            return False

        new_position = clamp_rod_position(state.rod_position + steps)
        self._set_manual(state, new_position)
        return True

    def set_rod_position(self, state: ReactorState, position: float) -> bool:
        """
        Set rod position directly (slider input)

        Returns:
            True if applied, False if refused during a trip
        """
        if state.is_scram:
            logger.warning("Rod position change refused: reactor is tripped")
            return False

        self._set_manual(state, clamp_rod_position(position))
        return True

    def start_hold(self, direction: int) -> None:
        """Begin continuous motion; ``direction`` is INSERT or WITHDRAW"""
        if direction not in (self.INSERT, self.WITHDRAW):
            raise ValueError(f"Hold direction must be {self.INSERT} or {self.WITHDRAW}, got {direction}")
        self.hold_direction = direction
        self._hold_elapsed = 0.0

    def stop_hold(self) -> None:
        self.hold_direction = None
        self._hold_elapsed = 0.0

    @property
    def is_holding(self) -> bool:
        return self.hold_direction is not None

    def update(self, state: ReactorState, dt: float) -> int:
        """
        Advance continuous hold motion by elapsed wall time

        One step is taken per full repeat interval; the first step lands one
        interval after the hold began. A trip cancels the hold.

        Args:
            state: Reactor state
            dt: Elapsed wall time in seconds

        Returns:
            Number of steps moved this update
        """
        if self.hold_direction is None:
            return 0

        if state.is_scram:
            self.stop_hold()
            return 0

        self._hold_elapsed += dt
        moves = 0
        while self._hold_elapsed >= self.hold_repeat_interval:
            self._hold_elapsed -= self.hold_repeat_interval
            before = state.rod_position
            self.move_rods(state, self.hold_direction)
            if state.rod_position != before:
                moves += 1
        return moves

    def _set_manual(self, state: ReactorState, position: int) -> None:
        state.rod_position = position
        if state.rod_mode != RodMode.MANUAL:
            logger.info(f"Rod control mode {state.rod_mode.value} -> MANUAL")
        state.rod_mode = RodMode.MANUAL
