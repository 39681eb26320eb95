"""
Application state management.

Defines the state machine for Eyes with clear transitions.
"""

from enum import Enum, auto
from typing import Optional, Set
from dataclasses import dataclass
import threading


class AppState(Enum):
    """
    Application states.

    State transitions:
        IDLE -> RUNNING -> IDLE
        IDLE/RUNNING -> ERROR -> IDLE
    """

    IDLE = auto()       # Camera off, no frames processed
    RUNNING = auto()    # Camera open, frames flowing through the pipeline
    ERROR = auto()      # Camera unavailable or another fatal problem


_VALID_TRANSITIONS: dict[AppState, Set[AppState]] = {
    AppState.IDLE: {
        AppState.RUNNING,
        AppState.ERROR,
    },
    AppState.RUNNING: {
        AppState.IDLE,
        AppState.ERROR,
    },
    AppState.ERROR: {
        AppState.IDLE,
    },
}


def is_valid_transition(from_state: AppState, to_state: AppState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is allowed, False otherwise
    """
    # Same state is always valid (no-op)
    if from_state == to_state:
        return True

    return to_state in _VALID_TRANSITIONS.get(from_state, set())


class StateTransitionError(ValueError):
    """Raised when a forbidden state transition is required."""

    pass


@dataclass
class ErrorInfo:
    """Information about an error that occurred."""

    error_type: str
    message: str
    recoverable: bool = True
    details: Optional[str] = None


class StateMachine:
    """
    State machine for managing application state transitions.

    Transitions happen on the UI thread while the worker thread polls the
    current state, so reads and writes share a lock.
    """

    def __init__(self, initial_state: AppState = AppState.IDLE):
        self._lock = threading.Lock()
        self._current_state = initial_state
        self._previous_state: Optional[AppState] = None
        self._error: Optional[ErrorInfo] = None

    @property
    def current_state(self) -> AppState:
        """Get current state."""
        with self._lock:
            return self._current_state

    @property
    def previous_state(self) -> Optional[AppState]:
        """Get previous state."""
        with self._lock:
            return self._previous_state

    @property
    def error(self) -> Optional[ErrorInfo]:
        """Get error information if in ERROR state."""
        with self._lock:
            return self._error

    def transition_to(self, new_state: AppState) -> bool:
        """
        Transition to a new state.

        Args:
            new_state: Target state

        Returns:
            True if transition succeeded, False if invalid
        """
        with self._lock:
            return self._transition_locked(new_state)

    def _transition_locked(self, new_state: AppState) -> bool:
        if not is_valid_transition(self._current_state, new_state):
            return False

        self._previous_state = self._current_state
        self._current_state = new_state

        # Clear error when leaving ERROR state
        if self._previous_state == AppState.ERROR and new_state != AppState.ERROR:
            self._error = None

        return True

    def require_transition(self, new_state: AppState):
        """
        Transition to a new state, raising if the transition is invalid.

        Raises:
            StateTransitionError: If the transition is not allowed
        """
        with self._lock:
            from_state = self._current_state
            if not self._transition_locked(new_state):
                raise StateTransitionError(
                    f"Invalid state transition: {from_state.name} -> {new_state.name}"
                )

    def set_error(self, error_info: ErrorInfo) -> bool:
        """
        Set error state with error information.

        Args:
            error_info: Information about the error

        Returns:
            True if transition to ERROR succeeded
        """
        with self._lock:
            self._error = error_info
            return self._transition_locked(AppState.ERROR)

    def can_transition_to(self, new_state: AppState) -> bool:
        """Check if a transition would be valid without performing it."""
        with self._lock:
            return is_valid_transition(self._current_state, new_state)

    def reset(self):
        """Reset to IDLE state, clearing error."""
        with self._lock:
            self._previous_state = self._current_state
            self._current_state = AppState.IDLE
            self._error = None
