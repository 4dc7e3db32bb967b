"""
Reactor Simulator Session

One simulation session owns one reactor state, its physics constants, the
control drives and the trend history. The host calls ``tick`` once per frame;
control commands may be queued from other threads at any time and are applied
at the start of the next tick, never in the middle of a physics step.
"""

import logging
import math
import queue
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pwr_simulator.exceptions import InvalidCommandError
from pwr_simulator.simulator.config import SimulationConfig
from pwr_simulator.simulator.state.state_manager import TrendHistory
from pwr_simulator.systems.primary.reactor.config import PhysicsConstants
from pwr_simulator.systems.primary.reactor.noise import RandomSource, make_random_source
from pwr_simulator.systems.primary.reactor.reactor_physics import ReactorState, step_physics
from pwr_simulator.systems.primary.reactor.rod_control import RodControlSystem
from pwr_simulator.systems.primary.reactor.safety.scram_logic import ScramSystem

logger = logging.getLogger(__name__)


class ControlAction(Enum):
    """Operator commands accepted by the session"""

    ROD_NUDGE = 0           # value: signed steps
    SET_ROD_POSITION = 1    # value: target position
    START_INSERT = 2
    START_WITHDRAW = 3
    STOP_HOLD = 4
    SCRAM = 5
    SCRAM_BUTTON = 6
    RESET_SCRAM = 7


# Actions that need a numeric value
_VALUE_ACTIONS = (ControlAction.ROD_NUDGE, ControlAction.SET_ROD_POSITION)

# Tolerance for accumulated frame times
_TIME_EPSILON = 1e-9


def _command_value(action: ControlAction, value: Any) -> Optional[float]:
    """
    Numeric value of a value-carrying command

    Raises:
        InvalidCommandError: If the value is missing, not a number or not finite
    """
    if action not in _VALUE_ACTIONS:
        return value
    if value is None:
        raise InvalidCommandError(f"{action.name} requires a value")
    if isinstance(value, bool):
        raise InvalidCommandError(f"{action.name} requires a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCommandError(f"{action.name} requires a number, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidCommandError(f"{action.name} requires a finite number, got {value!r}")
    return number


class ReactorSimulator:
    """Simulation session for the educational PWR display"""

    def __init__(self, constants: Optional[PhysicsConstants] = None,
                 config: Optional[SimulationConfig] = None,
                 rng: Optional[RandomSource] = None):
        """
        Initialize a session

        Args:
            constants: Physics constants (validated here, at configuration time)
            config: Session settings
            rng: Uniform [0, 1) source; seeded from ``config.seed`` when omitted
        """
        self.constants = constants if constants is not None else PhysicsConstants()
        self.config = config if config is not None else SimulationConfig()
        self.constants.validate()
        self.config.validate()

        self.rng = rng if rng is not None else make_random_source(self.config.seed)

        self.state = ReactorState()
        self.scram_system = ScramSystem(
            insertion_rate=self.config.scram_insertion_rate,
            presses_to_reset=self.config.presses_to_reset,
        )
        self.rod_control = RodControlSystem(hold_repeat_interval=self.config.hold_repeat_interval)
        self.history = TrendHistory(max_points=self.config.history_max_points)

        self.time = 0.0          # Wall seconds simulated
        self.sim_time = 0.0      # Accelerated plant seconds
        self.tick_count = 0
        self.step_count = 0
        self._since_display = 0.0
        self._commands: "queue.SimpleQueue[Tuple[ControlAction, Optional[float]]]" = queue.SimpleQueue()

    # --- Control inputs ---

    def queue_action(self, action: ControlAction, value: Optional[float] = None) -> None:
        """
        Queue a control command for the next tick (thread-safe)

        Raises:
            InvalidCommandError: If the action is unknown, or a value-carrying
                action has a missing or non-numeric value
        """
        if not isinstance(action, ControlAction):
            raise InvalidCommandError(f"Unknown control action: {action!r}")
        self._commands.put((action, _command_value(action, value)))

    def apply_action(self, action: ControlAction, value: Optional[float] = None) -> Any:
        """Apply a control command immediately; call only between ticks"""
        value = _command_value(action, value)
        if action == ControlAction.ROD_NUDGE:
            return self.rod_control.move_rods(self.state, int(value))
        if action == ControlAction.SET_ROD_POSITION:
            return self.rod_control.set_rod_position(self.state, value)
        if action == ControlAction.START_INSERT:
            return self._start_hold(RodControlSystem.INSERT)
        if action == ControlAction.START_WITHDRAW:
            return self._start_hold(RodControlSystem.WITHDRAW)
        if action == ControlAction.STOP_HOLD:
            return self.rod_control.stop_hold()
        if action == ControlAction.SCRAM:
            return self.trigger_scram()
        if action == ControlAction.SCRAM_BUTTON:
            return self.press_scram_button()
        if action == ControlAction.RESET_SCRAM:
            return self.reset_from_scram()
        raise InvalidCommandError(f"Unknown control action: {action!r}")

    def move_rods(self, steps: int) -> bool:
        return self.apply_action(ControlAction.ROD_NUDGE, steps)

    def set_rod_position(self, position: float) -> bool:
        return self.apply_action(ControlAction.SET_ROD_POSITION, position)

    def trigger_scram(self, reason: str = "manual") -> bool:
        """Trip the reactor; no-op when already tripped"""
        tripped = self.scram_system.trip(self.state, reason=reason)
        if tripped:
            self.rod_control.stop_hold()
        return tripped

    def reset_from_scram(self) -> None:
        self.scram_system.reset(self.state)

    def press_scram_button(self) -> str:
        result = self.scram_system.press_button(self.state)
        if result == "tripped":
            self.rod_control.stop_hold()
        return result

    def _start_hold(self, direction: int) -> bool:
        if self.state.is_scram:
            logger.warning("Rod hold refused: reactor is tripped")
            return False
        self.rod_control.start_hold(direction)
        return True

    def _drain_commands(self) -> int:
        applied = 0
        while True:
            try:
                action, value = self._commands.get_nowait()
            except queue.Empty:
                return applied
            try:
                self.apply_action(action, value)
            except InvalidCommandError as e:
                logger.warning(f"Ignoring {action.name}: {e}")
            applied += 1

    # --- Time advance ---

    def tick(self, dt: Optional[float] = None) -> ReactorState:
        """
        Advance the session by one frame

        Args:
            dt: Wall time since the previous frame in seconds
                (defaults to the nominal frame time)

        Returns:
            The live reactor state
        """
        if dt is None:
            dt = self.config.nominal_dt
        if dt > self.config.large_dt_warning:
            logger.warning(f"Large frame time {dt:.2f}s applied as-is")

        self._drain_commands()

        self.rod_control.update(self.state, dt)
        self.scram_system.advance_rod_insertion(self.state)

        for _ in range(self._physics_steps_for(dt)):
            step_physics(self.state, self.constants, dt, self.rng)
            self.step_count += 1

        self.time += dt
        self.sim_time += dt * self.config.time_acceleration
        self.tick_count += 1

        self._since_display += dt
        if self._since_display >= self.config.display_interval - _TIME_EPSILON:
            self._since_display = 0.0
            self.history.record(self.sim_time, self.state)

        logger.debug(f"tick {self.tick_count}: power {self.state.power:.2f}% "
                     f"core {self.state.core_temp:.1f}°C rods {self.state.rod_position}")
        return self.state

    def _physics_steps_for(self, dt: float) -> int:
        """Physics steps for a frame: one, or catch-up steps proportional to dt"""
        if self.config.fixed_tick:
            return 1
        steps = round(dt / self.config.nominal_dt)
        return max(1, min(self.config.max_catchup_steps, steps))

    def run(self, duration: float, frame_dt: Optional[float] = None) -> Dict[str, Any]:
        """
        Run the session headless for a span of wall time

        Args:
            duration: Wall seconds to simulate
            frame_dt: Frame time (defaults to the nominal frame time)

        Returns:
            Snapshot of the final state
        """
        if frame_dt is None:
            frame_dt = self.config.nominal_dt
        if frame_dt <= 0:
            raise ValueError(f"frame_dt must be positive, got {frame_dt}")

        frames = int(round(duration / frame_dt))
        for _ in range(frames):
            self.tick(frame_dt)
        return self.snapshot()

    # --- Display-facing reads ---

    def snapshot(self, camel_case: bool = False) -> Dict[str, Any]:
        """Copy of the current state for display"""
        data = self.state.to_dict(camel_case=camel_case)
        data["simTime" if camel_case else "sim_time"] = self.sim_time
        return data

    @property
    def sim_clock(self) -> str:
        """Accelerated simulation time as HH:MM:SS"""
        total = int(self.sim_time)
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def get_status(self) -> Dict[str, Any]:
        """Session status for logging/monitoring"""
        return {
            "time": self.time,
            "sim_time": self.sim_time,
            "sim_clock": self.sim_clock,
            "tick_count": self.tick_count,
            "step_count": self.step_count,
            "history_points": len(self.history),
            "rod_hold": self.rod_control.hold_direction,
            **self.scram_system.get_status(self.state),
        }

    def reset(self) -> None:
        """Return the session to its initial conditions"""
        self.state = ReactorState()
        self.scram_system = ScramSystem(
            insertion_rate=self.config.scram_insertion_rate,
            presses_to_reset=self.config.presses_to_reset,
        )
        self.rod_control.stop_hold()
        self.history.clear()
        self.time = 0.0
        self.sim_time = 0.0
        self.tick_count = 0
        self.step_count = 0
        self._since_display = 0.0
        self._commands = queue.SimpleQueue()
        logger.info("Simulator reset to initial conditions")
