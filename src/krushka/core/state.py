"""
Phase machine for a KRUSHKA play session.

Phases:
    MENU: Title screen, idle timer running
    PLAYING: Simulation advancing every frame
    PAUSED: Simulation frozen until resumed
    LEVEL_COMPLETE: Level target reached, waiting for continue
    ALL_COMPLETE: Every level cleared, waiting for restart

Game over is not a phase: running out of lives resets the session in
place and the phase stays PLAYING.
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Session phases."""
    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    LEVEL_COMPLETE = auto()
    ALL_COMPLETE = auto()


PhaseListener = Callable[[Phase, Phase], None]


class PhaseMachine:
    """
    Tracks the current phase and validates transitions.

    Listeners are notified after every accepted transition.
    """

    # Valid phase transitions
    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        # From MENU
        (Phase.MENU, Phase.PLAYING),

        # From PLAYING
        (Phase.PLAYING, Phase.PAUSED),
        (Phase.PLAYING, Phase.LEVEL_COMPLETE),
        (Phase.PLAYING, Phase.MENU),  # Demo stopped

        # From PAUSED
        (Phase.PAUSED, Phase.PLAYING),

        # From LEVEL_COMPLETE
        (Phase.LEVEL_COMPLETE, Phase.PLAYING),
        (Phase.LEVEL_COMPLETE, Phase.ALL_COMPLETE),

        # From ALL_COMPLETE
        (Phase.ALL_COMPLETE, Phase.PLAYING),  # Restart
    ]

    def __init__(self, initial_phase: Phase = Phase.MENU) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase

        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
