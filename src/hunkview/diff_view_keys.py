"""Mapping from key presses to diff view actions."""

from enum import Enum, auto
from typing import Dict

from hunkview.key_sequence import KeySequenceTracker


class DiffViewAction(Enum):
    """Commands the diff view understands."""
    PENDING = auto()  # First key of a multi-key gesture
    LINE_DOWN = auto()
    LINE_UP = auto()
    HALF_PAGE_DOWN = auto()
    HALF_PAGE_UP = auto()
    GO_TO_TOP = auto()
    GO_TO_BOTTOM = auto()
    NEXT_HUNK = auto()
    PREVIOUS_HUNK = auto()
    STAGE_HUNK = auto()
    UNSTAGE_HUNK = auto()
    DISCARD_HUNK = auto()
    TOGGLE_FULL_FILE = auto()


_SINGLE_KEY_ACTIONS: Dict[str, DiffViewAction] = {
    "j": DiffViewAction.LINE_DOWN,
    "down": DiffViewAction.LINE_DOWN,
    "k": DiffViewAction.LINE_UP,
    "up": DiffViewAction.LINE_UP,
    "d": DiffViewAction.HALF_PAGE_DOWN,
    "u": DiffViewAction.HALF_PAGE_UP,
    "G": DiffViewAction.GO_TO_BOTTOM,
    "n": DiffViewAction.NEXT_HUNK,
    "N": DiffViewAction.PREVIOUS_HUNK,
    "s": DiffViewAction.STAGE_HUNK,
    "U": DiffViewAction.UNSTAGE_HUNK,
    "x": DiffViewAction.DISCARD_HUNK,
    "f": DiffViewAction.TOGGLE_FULL_FILE,
}


class DiffViewKeyDispatcher:
    """Translates key names into actions, handling the "gg" gesture."""

    def __init__(self, tracker: KeySequenceTracker) -> None:
        """
        Initialize the dispatcher.

        Args:
            tracker: Tracker used to detect the second "g" of "gg"
        """
        self._tracker = tracker

    def dispatch(self, key: str) -> DiffViewAction | None:
        """
        Work out which action a key press triggers.

        Args:
            key: Printable key text ("j", "G") or a lower-case key name ("down")

        Returns:
            The action, PENDING if the key starts a gesture, or None if the key
            has no meaning for the diff view
        """
        if key == "g":
            return DiffViewAction.GO_TO_TOP if self._tracker.press("g") else DiffViewAction.PENDING

        self._tracker.reset()
        return _SINGLE_KEY_ACTIONS.get(key)
