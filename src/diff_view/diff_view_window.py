"""Bounded, shiftable window over the lines of a diff document."""

from dataclasses import dataclass, replace
import logging
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class WindowState:
    """Visible slice of a document: half-open bounds into its lines."""
    window_start: int = 0
    window_end: int = 0
    total_lines: int = 0

    @property
    def size(self) -> int:
        """Number of lines inside the window."""
        return self.window_end - self.window_start

    @property
    def is_at_start(self) -> bool:
        """True if the window begins at the first line."""
        return self.window_start == 0

    @property
    def is_at_end(self) -> bool:
        """True if the window reaches the last line."""
        return self.window_end >= self.total_lines

    def contains(self, position: int) -> bool:
        """Check whether an absolute line lies inside the window."""
        return self.window_start <= position < self.window_end


class DiffViewWindow:
    """
    Windowed line store.

    Holds every line of a document but only exposes a window of at most
    `window_size` lines for rendering.  The window follows the cursor lazily:
    it only moves, by `buffer_size` lines, once the cursor comes within
    `buffer_threshold` lines of an edge that is not a document boundary.

    All operations clamp their inputs and never raise.
    """

    DEFAULT_WINDOW_SIZE = 1000
    DEFAULT_BUFFER_THRESHOLD = 200
    DEFAULT_BUFFER_SIZE = 500

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW_SIZE,
        buffer_threshold: int = DEFAULT_BUFFER_THRESHOLD,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        logger: logging.Logger | None = None
    ) -> None:
        """
        Initialize the window.

        Args:
            window_size: Maximum number of lines materialized at once
            buffer_threshold: Distance from a window edge, in lines, that triggers a shift
            buffer_size: Number of lines the window moves per shift
            logger: Optional logger, defaults to a logger named after the class

        Raises:
            ValueError: If the configuration cannot produce a usable window
        """
        if window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {window_size}")

        if buffer_size < 1:
            raise ValueError(f"buffer_size must be at least 1, got {buffer_size}")

        if buffer_threshold < 0:
            raise ValueError(f"buffer_threshold must not be negative, got {buffer_threshold}")

        self._window_size = window_size
        self._buffer_threshold = buffer_threshold
        self._buffer_size = buffer_size
        self._logger = logger or logging.getLogger("DiffViewWindow")
        self._lines: Tuple[str, ...] = ()
        self._state = WindowState()

    @property
    def window_size(self) -> int:
        """Maximum number of lines in the window."""
        return self._window_size

    @property
    def state(self) -> WindowState:
        """Current window state."""
        return self._state

    @property
    def total_lines(self) -> int:
        """Number of lines in the document."""
        return len(self._lines)

    def set_lines(self, lines: Sequence[str]) -> None:
        """
        Replace the document and move the window to the top.

        Args:
            lines: Every line of the document
        """
        self._lines = tuple(lines)
        total = len(self._lines)
        self._state = WindowState(0, min(self._window_size, total), total)

    def reset(self) -> None:
        """Drop the document."""
        self.set_lines(())

    def get_windowed_lines(self) -> List[str]:
        """Get the lines inside the window."""
        return list(self._lines[self._state.window_start:self._state.window_end])

    def marker_offset(self) -> int:
        """
        Get the number of marker rows rendered above the first window line.

        Returns:
            1 if `get_windowed_content` prepends a "more lines above" marker, else 0
        """
        return 1 if self._shows_markers() and not self._state.is_at_start else 0

    def get_windowed_content(self) -> str:
        """
        Get the text of the window, ready for rendering.

        When the document is larger than the window, a marker line reports how
        many lines are hidden above and below.  Markers are cosmetic and play no
        part in position mapping.

        Returns:
            Newline-joined window text
        """
        lines = self.get_windowed_lines()
        if self._shows_markers():
            state = self._state
            if not state.is_at_start:
                lines.insert(0, f"─── {state.window_start} more lines above ───")

            if not state.is_at_end:
                lines.append(f"─── {state.total_lines - state.window_end} more lines below ───")

        return "\n".join(lines)

    def handle_scroll(self, absolute_position: int) -> bool:
        """
        Shift the window if the cursor is close to an inner edge.

        Args:
            absolute_position: Cursor position in document lines

        Returns:
            True if the window moved
        """
        total = len(self._lines)
        if total == 0:
            return False

        position = max(0, min(absolute_position, total - 1))
        state = self._state
        relative = position - state.window_start

        near_end = relative > state.size - self._buffer_threshold
        near_start = relative < self._buffer_threshold

        if near_end and not state.is_at_end:
            return self._shift_down()

        if near_start and not state.is_at_start:
            return self._shift_up()

        return False

    def scroll_to_absolute(self, position: int) -> bool:
        """
        Make sure an absolute line is inside the window.

        If the line is already visible nothing changes, otherwise the window is
        re-centred on it, clamped to the document bounds.

        Args:
            position: Absolute line, clamped to the document

        Returns:
            True if the window moved
        """
        total = len(self._lines)
        if total == 0:
            return False

        position = max(0, min(position, total - 1))
        if self._state.contains(position):
            return False

        start = position - self._window_size // 2
        start = max(0, min(start, total - self._window_size))
        return self._move_to(start)

    def to_absolute_position(self, relative_position: int) -> int:
        """Convert a window-relative line to a document line."""
        return self._state.window_start + relative_position

    def to_relative_position(self, absolute_position: int) -> int:
        """Convert a document line to a window-relative line."""
        return absolute_position - self._state.window_start

    def _shows_markers(self) -> bool:
        return len(self._lines) > self._window_size

    def _shift_down(self) -> bool:
        total = len(self._lines)
        start = min(self._state.window_start + self._buffer_size, max(0, total - self._window_size))
        return self._move_to(start)

    def _shift_up(self) -> bool:
        start = max(0, self._state.window_start - self._buffer_size)
        return self._move_to(start)

    def _move_to(self, start: int) -> bool:
        if start == self._state.window_start:
            return False

        end = min(start + self._window_size, len(self._lines))
        self._state = replace(self._state, window_start=start, window_end=end)
        self._logger.debug("Window moved to [%d, %d) of %d", start, end, self._state.total_lines)
        return True
