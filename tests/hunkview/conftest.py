"""Shared fixtures for key handling tests."""

import pytest

from hunkview.diff_view_keys import DiffViewKeyDispatcher
from hunkview.key_sequence import KeySequenceTracker


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        """Move time forward."""
        self.now += seconds


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def tracker(clock):
    """Create a key sequence tracker with a half-second timeout."""
    return KeySequenceTracker(timeout=0.5, clock=clock)


@pytest.fixture
def dispatcher(tracker):
    """Create a key dispatcher."""
    return DiffViewKeyDispatcher(tracker)
