"""Hunk-by-hunk navigation over a windowed diff document."""

from dataclasses import dataclass
import logging
from typing import Tuple

from diff.diff_types import DiffDocument, DiffHunk
from diff_view.diff_view_window import DiffViewWindow


@dataclass(frozen=True)
class NavigatorState:
    """Index of the current hunk, -1 when the document has no hunks."""
    current_hunk_index: int = -1


class HunkNavigator:
    """
    Tracks the current hunk and keeps it inside the window.

    Navigation is by index rather than by searching for the next `@@` line past
    the scroll position, so adjacent hunks are never skipped and the result does
    not depend on where the window happens to be.
    """

    def __init__(self, window: DiffViewWindow, logger: logging.Logger | None = None) -> None:
        """
        Initialize the navigator.

        Args:
            window: Window re-centred whenever the current hunk changes
            logger: Optional logger, defaults to a logger named after the class
        """
        self._window = window
        self._logger = logger or logging.getLogger("HunkNavigator")
        self._document = DiffDocument.empty()
        self._hunks: Tuple[DiffHunk, ...] = ()
        self._state = NavigatorState()

    @property
    def state(self) -> NavigatorState:
        """Current navigator state."""
        return self._state

    @property
    def current_index(self) -> int:
        """Index of the current hunk, or -1."""
        return self._state.current_hunk_index

    @property
    def current_hunk(self) -> DiffHunk | None:
        """The current hunk, if there is one."""
        if self._state.current_hunk_index < 0:
            return None

        return self._hunks[self._state.current_hunk_index]

    @property
    def hunk_count(self) -> int:
        """Number of hunks being navigated."""
        return len(self._hunks)

    def set_document(self, document: DiffDocument) -> None:
        """
        Navigate a new document, making its first hunk current.

        Args:
            document: Document whose hunks are navigated
        """
        self._document = document
        self._hunks = document.hunks
        self._set_index(0 if self._hunks else -1)

    def next(self) -> bool:
        """
        Move to the next hunk.

        Returns:
            True if the current hunk changed, False at the last hunk
        """
        index = self._state.current_hunk_index
        if index >= len(self._hunks) - 1:
            return False

        self._set_index(index + 1)
        self._window.scroll_to_absolute(self._hunks[index + 1].start_line)
        return True

    def previous(self) -> bool:
        """
        Move to the previous hunk.

        Returns:
            True if the current hunk changed, False at the first hunk
        """
        index = self._state.current_hunk_index
        if index <= 0:
            return False

        self._set_index(index - 1)
        self._window.scroll_to_absolute(self._hunks[index - 1].start_line)
        return True

    def go_to_top(self) -> int:
        """
        Jump to the first line of the document.

        Returns:
            The absolute line jumped to
        """
        self._window.scroll_to_absolute(0)
        self._set_index(0 if self._hunks else -1)
        return 0

    def go_to_bottom(self) -> int:
        """
        Jump to the last line of the document.

        Returns:
            The absolute line jumped to
        """
        last_line = max(0, self._window.total_lines - 1)
        self._window.scroll_to_absolute(last_line)
        self._set_index(len(self._hunks) - 1)
        return last_line

    def sync_to_line(self, line: int) -> None:
        """
        Make the hunk containing a line current.

        Lines in the preamble leave the current hunk unchanged.

        Args:
            line: Absolute document line the cursor moved to
        """
        hunk = self._document.hunk_at_line(line)
        if hunk is not None:
            self._set_index(hunk.index)

    def _set_index(self, index: int) -> None:
        if index != self._state.current_hunk_index:
            self._logger.debug("Current hunk %d of %d", index, len(self._hunks))

        self._state = NavigatorState(index)
