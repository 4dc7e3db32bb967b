"""
SCRAM Logic System

This module implements the reactor trip (emergency shutdown) and reset logic,
including the rapid rod insertion that follows a trip and the operator
push-button that both trips the reactor and, pressed repeatedly while
tripped, resets it.
"""

import logging
from typing import Any, Dict

from pwr_simulator.exceptions import InvalidCommandError

from ..reactor_physics import ReactorState, RodMode

logger = logging.getLogger(__name__)


class ScramSystem:
    """
    Reactor SCRAM system for trip and reset transitions
    """

    def __init__(self, insertion_rate: int = 10, presses_to_reset: int = 3):
        """
        Initialize SCRAM system

        Args:
            insertion_rate: Rod steps inserted per frame during trip insertion
            presses_to_reset: Button presses that reset the trip, counting the
                press that tripped it
        """
        if insertion_rate <= 0:
            raise ValueError(f"insertion_rate must be positive, got {insertion_rate}")
        if presses_to_reset < 1:
            raise ValueError(f"presses_to_reset must be at least 1, got {presses_to_reset}")

        self.insertion_rate = insertion_rate
        self.presses_to_reset = presses_to_reset

        self.insertion_active = False
        self.reset_press_count = 0
        self.trip_count = 0
        self.last_trip_reason = ""

    def trip(self, reactor_state: ReactorState, reason: str = "manual") -> bool:
        """
        Trip the reactor

        Repeated trips while already tripped are no-ops.

        Args:
            reactor_state: Current reactor state
            reason: Why the trip was demanded

        Returns:
            True if the reactor tripped now, False if it was already tripped
        """
        if reactor_state.is_scram:
            return False

        reactor_state.is_scram = True
        reactor_state.is_online = False
        reactor_state.rod_mode = RodMode.SCRAM

        self.insertion_active = True
        self.reset_press_count = 0
        self.trip_count += 1
        self.last_trip_reason = reason

        logger.warning(f"REACTOR TRIP: {reason} (power {reactor_state.power:.1f}%, "
                       f"rods at {reactor_state.rod_position})")
        return True

    def advance_rod_insertion(self, reactor_state: ReactorState) -> int:
        """
        Drive rods in for one frame of trip insertion

        Insertion runs until the rods reach the bottom, even if the trip is
        reset in the meantime.

        Args:
            reactor_state: Current reactor state

        Returns:
            Rod position after this frame
        """
        if not self.insertion_active:
            return reactor_state.rod_position

        if reactor_state.rod_position > 0:
            reactor_state.rod_position = max(0, reactor_state.rod_position - self.insertion_rate)

        if reactor_state.rod_position <= 0:
            self.insertion_active = False
            logger.debug("Trip rod insertion complete")

        return reactor_state.rod_position

    def reset(self, reactor_state: ReactorState) -> None:
        """
        Reset from a trip back to normal operation in AUTO

        Numeric plant values and rod position are left where they are.

        Args:
            reactor_state: Current reactor state

        Raises:
            InvalidCommandError: If the reactor is not tripped
        """
        if not reactor_state.is_scram:
            raise InvalidCommandError("Cannot reset: reactor is not tripped")

        reactor_state.is_scram = False
        reactor_state.is_online = True
        reactor_state.rod_mode = RodMode.AUTO
        self.reset_press_count = 0

        logger.info(f"Trip reset, reactor online in AUTO (rods at {reactor_state.rod_position})")

    def press_button(self, reactor_state: ReactorState) -> str:
        """
        Operator SCRAM push-button

        Trips the reactor when online; the tripping press counts as the first
        of ``presses_to_reset``. Further presses while tripped are counted and
        the trip is reset on the configured press (never on the tripping press
        itself).

        Args:
            reactor_state: Current reactor state

        Returns:
            "tripped", "counted" or "reset"
        """
        if not reactor_state.is_scram:
            self.trip(reactor_state, reason="SCRAM push-button")
            self.reset_press_count = 1
            return "tripped"

        self.reset_press_count += 1
        logger.debug(f"SCRAM button press {self.reset_press_count}/{self.presses_to_reset} while tripped")
        if self.reset_press_count >= self.presses_to_reset:
            self.reset(reactor_state)
            return "reset"
        return "counted"

    def is_tripped(self, reactor_state: ReactorState) -> bool:
        return reactor_state.is_scram

    def get_status(self, reactor_state: ReactorState) -> Dict[str, Any]:
        """Get SCRAM system status as a dictionary"""
        return {
            "is_scram": reactor_state.is_scram,
            "is_online": reactor_state.is_online,
            "rod_mode": reactor_state.rod_mode.value,
            "insertion_active": self.insertion_active,
            "reset_press_count": self.reset_press_count,
            "presses_to_reset": self.presses_to_reset,
            "trip_count": self.trip_count,
            "last_trip_reason": self.last_trip_reason,
        }

    def get_safety_status_summary(self, reactor_state: ReactorState) -> str:
        """
        Generate a formatted summary of safety system status

        Args:
            reactor_state: Current reactor state

        Returns:
            Formatted string with safety status
        """
        summary = "Safety System Status:\n"
        summary += "=" * 50 + "\n"
        summary += f"Master Status: {'REACTOR TRIP' if reactor_state.is_scram else 'REACTOR ONLINE'}\n"
        summary += f"Rod Mode: {reactor_state.rod_mode.value}\n"
        summary += f"Rod Position: {reactor_state.rod_position} steps\n"
        summary += "-" * 50 + "\n"
        summary += f"Trips This Session: {self.trip_count}\n"
        if self.last_trip_reason:
            summary += f"Last Trip Reason: {self.last_trip_reason}\n"
        if reactor_state.is_scram:
            remaining = max(1, self.presses_to_reset - self.reset_press_count)
            summary += f"Reset: press SCRAM {remaining} more time(s)\n"
        return summary
