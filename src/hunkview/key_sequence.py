"""Detection of two-key gestures such as "gg"."""

from dataclasses import dataclass
import time
from typing import Callable


@dataclass(frozen=True)
class AwaitingSecondPress:
    """The first key of a gesture has been pressed."""
    key: str
    deadline: float


class KeySequenceTracker:
    """
    Small state machine for repeated-key gestures.

    States are Idle (no pending key) and AwaitingSecondPress(key, deadline).
    A second press of the same key before the deadline completes the gesture
    and returns to Idle; anything else restarts or clears the wait.
    """

    def __init__(self, timeout: float = 0.5, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize the tracker.

        Args:
            timeout: Seconds allowed between the two presses
            clock: Monotonic time source, in seconds
        """
        self._timeout = timeout
        self._clock = clock
        self._pending: AwaitingSecondPress | None = None

    @property
    def pending(self) -> AwaitingSecondPress | None:
        """The pending first press, or None when idle."""
        if self._pending is not None and self._clock() > self._pending.deadline:
            self._pending = None

        return self._pending

    def press(self, key: str) -> bool:
        """
        Record a key press.

        Args:
            key: The key pressed

        Returns:
            True if this press completed a two-key gesture
        """
        pending = self.pending
        if pending is not None and pending.key == key:
            self._pending = None
            return True

        self._pending = AwaitingSecondPress(key, self._clock() + self._timeout)
        return False

    def reset(self) -> None:
        """Return to the idle state."""
        self._pending = None
