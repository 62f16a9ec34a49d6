"""
Diff view controller.

Composes the parser, the windowed line store and the hunk navigator, and is the
only object the rendering and key dispatch layers talk to.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
import logging

from diff.diff_parser import DiffParser
from diff.diff_types import DiffDocument, DiffHunk
from diff_view.diff_view_navigator import HunkNavigator
from diff_view.diff_view_settings import DiffViewSettings
from diff_view.diff_view_window import DiffViewWindow, WindowState
from vcs.git_types import GitFile
from vcs.patch_apply_service import HunkIntent, PatchApplyService


class DiffViewMode(Enum):
    """What the view is currently showing."""
    EMPTY = auto()
    LOADED = auto()
    FULL_FILE = auto()


@dataclass(frozen=True)
class DiffViewRender:
    """Everything a renderer needs to paint the view and its status line."""
    text: str = ""
    cursor_line: int = 0  # Absolute document line
    cursor_row: int = 0  # Row within `text`, including any marker row
    window: WindowState = field(default_factory=WindowState)
    current_hunk_index: int = -1
    hunk_count: int = 0
    mode: DiffViewMode = DiffViewMode.EMPTY
    file_path: str | None = None

    @property
    def is_empty(self) -> bool:
        """True if no diff is loaded."""
        return self.mode == DiffViewMode.EMPTY


class DiffViewController:
    """
    State machine driving a single diff view.

    Modes move EMPTY -> LOADED <-> FULL_FILE, and back to EMPTY on `clear`.
    Every document change resets the window, the navigator and the cursor.

    Hunk operations only check whether the operation is legal for the file
    being viewed and then delegate to the patch apply service.  After a
    successful operation the caller is expected to fetch the diff again and
    call `show_diff`; the controller never refreshes itself.
    """

    def __init__(
        self,
        service: PatchApplyService,
        settings: DiffViewSettings | None = None,
        logger: logging.Logger | None = None
    ) -> None:
        """
        Initialize the controller.

        Args:
            service: Service used to apply hunks and fetch diffs
            settings: View settings, defaults if not given
            logger: Optional logger, defaults to a logger named after the class
        """
        self._service = service
        self._settings = settings or DiffViewSettings.create_default()
        self._logger = logger or logging.getLogger("DiffViewController")
        self._parser = DiffParser()
        self._window = DiffViewWindow(
            window_size=self._settings.window_size,
            buffer_threshold=self._settings.buffer_threshold,
            buffer_size=self._settings.buffer_size,
            logger=self._logger.getChild("window")
        )
        self._navigator = HunkNavigator(self._window, logger=self._logger.getChild("navigator"))

        self._mode = DiffViewMode.EMPTY
        self._file: GitFile | None = None
        self._document = DiffDocument.empty()
        self._diff_document: DiffDocument | None = None
        self._full_document: DiffDocument | None = None
        self._cursor = 0

        # Requests capture a token when they start; a result whose token is not
        # newer than the last teardown belongs to a view that no longer exists.
        self._request_token = 0
        self._teardown_token = 0

    @property
    def mode(self) -> DiffViewMode:
        """Current mode."""
        return self._mode

    @property
    def document(self) -> DiffDocument:
        """Document currently displayed."""
        return self._document

    @property
    def file(self) -> GitFile | None:
        """File the displayed diff belongs to."""
        return self._file

    @property
    def settings(self) -> DiffViewSettings:
        """View settings."""
        return self._settings

    @property
    def cursor_line(self) -> int:
        """Absolute line the cursor is on."""
        return self._cursor

    @property
    def window_state(self) -> WindowState:
        """Current window state."""
        return self._window.state

    @property
    def current_hunk_index(self) -> int:
        """Index of the current hunk, or -1."""
        return self._navigator.current_index

    @property
    def current_hunk(self) -> DiffHunk | None:
        """The current hunk, if there is one."""
        return self._navigator.current_hunk

    @property
    def hunk_count(self) -> int:
        """Number of hunks in the displayed document."""
        return self._navigator.hunk_count

    def show_diff(self, diff_text: str, file: GitFile) -> None:
        """
        Display a new diff.

        Any cached full-file diff belongs to the previous content and is dropped,
        and results of requests still in flight will be ignored.

        Args:
            diff_text: Unified diff text for a single file
            file: The file and the view (staged or unstaged) the diff shows
        """
        self._teardown()
        self._file = file
        self._diff_document = self._parser.parse(diff_text)
        self._full_document = None
        self._mode = DiffViewMode.LOADED
        self._load_document(self._diff_document)
        self._logger.debug(
            "Showing %s diff of %s: %d lines, %d hunks",
            "staged" if file.staged else "unstaged",
            file.path,
            self._document.total_lines,
            self._document.hunk_count
        )

    def clear(self) -> None:
        """Return to the empty state, discarding all derived state."""
        self._teardown()
        self._file = None
        self._diff_document = None
        self._full_document = None
        self._mode = DiffViewMode.EMPTY
        self._load_document(DiffDocument.empty())

    async def toggle_full_file_view(self) -> bool:
        """
        Switch between the diff and the full-file view.

        The full-context diff is fetched the first time the full-file view is
        entered for a selection and reused afterwards.

        Returns:
            True if the mode changed, False if there is nothing to toggle or the
            full-context diff is unavailable
        """
        if self._mode == DiffViewMode.FULL_FILE:
            self._mode = DiffViewMode.LOADED
            if self._diff_document is not None:
                self._load_document(self._diff_document)

            return True

        if self._mode != DiffViewMode.LOADED or self._file is None:
            return False

        if self._full_document is None:
            token = self._begin_request()
            full_text = await self._service.fetch_full_context(self._file)
            if not self._is_current(token):
                self._logger.debug("Discarding full-context diff for a view that has changed")
                return False

            if full_text is None:
                return False

            # Another toggle may have completed while we were waiting
            if self._mode != DiffViewMode.LOADED:
                return False

            self._full_document = self._parser.parse(full_text)

        self._mode = DiffViewMode.FULL_FILE
        self._load_document(self._full_document)
        return True

    async def fetch_current_diff(self) -> str | None:
        """
        Fetch the diff for the current file again.

        Returns:
            Fresh diff text, or None if there is no file, the fetch failed, or
            the view changed while fetching
        """
        if self._file is None:
            return None

        token = self._begin_request()
        diff_text = await self._service.fetch_diff(self._file)
        if not self._is_current(token):
            return None

        return diff_text

    def scroll_by(self, delta: int) -> bool:
        """
        Move the cursor by a number of lines.

        Args:
            delta: Lines to move, negative to move up

        Returns:
            True if the window moved
        """
        return self.scroll_to(self._cursor + delta)

    def scroll_to(self, absolute_line: int) -> bool:
        """
        Move the cursor to an absolute line.

        Args:
            absolute_line: Target line, clamped to the document

        Returns:
            True if the window moved
        """
        total = self._window.total_lines
        self._cursor = max(0, min(absolute_line, total - 1)) if total else 0

        moved = self._window.handle_scroll(self._cursor)
        if not self._window.state.contains(self._cursor):
            moved = self._window.scroll_to_absolute(self._cursor) or moved

        self._navigator.sync_to_line(self._cursor)
        return moved

    def handle_scroll(self, absolute_position: int) -> bool:
        """
        React to the renderer's viewport scrolling to an absolute line.

        The cursor stays where it is unless the window moves away from it, in
        which case it is pulled to the nearest line still inside the window.

        Args:
            absolute_position: Absolute line now at the top of the viewport

        Returns:
            True if the window moved and the text must be re-rendered
        """
        if not self._window.handle_scroll(absolute_position):
            return False

        state = self._window.state
        if not state.contains(self._cursor):
            self._cursor = max(state.window_start, min(self._cursor, state.window_end - 1))
            self._navigator.sync_to_line(self._cursor)

        return True

    def row_to_line(self, row: int) -> int:
        """
        Convert a row of the rendered text into an absolute document line.

        Marker rows map to the nearest real line.

        Args:
            row: 0-based row within the text returned by `render`

        Returns:
            Absolute document line
        """
        relative = max(0, row - self._window.marker_offset())
        relative = min(relative, max(0, self._window.state.size - 1))
        return self._window.to_absolute_position(relative)

    def line_to_row(self, absolute_line: int) -> int:
        """
        Convert an absolute document line into a row of the rendered text.

        Args:
            absolute_line: Absolute document line

        Returns:
            0-based row within the text returned by `render`, including any marker row
        """
        return self._window.to_relative_position(absolute_line) + self._window.marker_offset()

    def go_to_top(self) -> None:
        """Move the cursor to the first line."""
        self._cursor = self._navigator.go_to_top()

    def go_to_bottom(self) -> None:
        """Move the cursor to the last line."""
        self._cursor = self._navigator.go_to_bottom()

    def next_hunk(self) -> bool:
        """
        Move the cursor to the next hunk's header.

        Returns:
            True if the cursor moved
        """
        if not self._navigator.next():
            return False

        self._cursor = self._navigator.current_hunk.start_line  # type: ignore[union-attr]
        return True

    def previous_hunk(self) -> bool:
        """
        Move the cursor to the previous hunk's header.

        Returns:
            True if the cursor moved
        """
        if not self._navigator.previous():
            return False

        self._cursor = self._navigator.current_hunk.start_line  # type: ignore[union-attr]
        return True

    def can_stage(self) -> bool:
        """Check whether the current hunk can be staged."""
        return self._can_modify() and not self._file.staged  # type: ignore[union-attr]

    def can_unstage(self) -> bool:
        """Check whether the current hunk can be unstaged."""
        return self._can_modify() and self._file.staged  # type: ignore[union-attr]

    def can_discard(self) -> bool:
        """Check whether the current hunk can be discarded from the working tree."""
        return (
            self._can_modify()
            and not self._file.staged  # type: ignore[union-attr]
            and not self._file.is_untracked  # type: ignore[union-attr]
        )

    async def stage_current(self) -> bool:
        """
        Stage the current hunk.

        Returns:
            True if the hunk was staged
        """
        if not self.can_stage():
            return False

        return await self._apply_current(HunkIntent.STAGE)

    async def unstage_current(self) -> bool:
        """
        Unstage the current hunk.

        Returns:
            True if the hunk was unstaged
        """
        if not self.can_unstage():
            return False

        return await self._apply_current(HunkIntent.UNSTAGE)

    async def discard_current(self) -> bool:
        """
        Discard the current hunk from the working tree.  This cannot be undone.

        Returns:
            True if the hunk was discarded
        """
        if not self.can_discard():
            return False

        return await self._apply_current(HunkIntent.DISCARD)

    def render(self) -> DiffViewRender:
        """
        Get a snapshot of what should be on screen.

        Returns:
            Render snapshot for the current window
        """
        if self._mode == DiffViewMode.EMPTY:
            return DiffViewRender()

        return DiffViewRender(
            text=self._window.get_windowed_content(),
            cursor_line=self._cursor,
            cursor_row=self.line_to_row(self._cursor),
            window=self._window.state,
            current_hunk_index=self._navigator.current_index,
            hunk_count=self._navigator.hunk_count,
            mode=self._mode,
            file_path=self._file.path if self._file else None
        )

    def status_text(self) -> str:
        """Get a short description of the hunk position for a status line."""
        if self._mode == DiffViewMode.EMPTY:
            return ""

        suffix = " (full file)" if self._mode == DiffViewMode.FULL_FILE else ""
        if not self._navigator.hunk_count:
            return f"No hunks{suffix}"

        return f"Hunk {self._navigator.current_index + 1}/{self._navigator.hunk_count}{suffix}"

    def _can_modify(self) -> bool:
        if self._mode == DiffViewMode.EMPTY or self._file is None:
            return False

        if self._navigator.current_hunk is None:
            return False

        return not self._document.is_binary

    async def _apply_current(self, intent: HunkIntent) -> bool:
        hunk = self._navigator.current_hunk
        if hunk is None:
            return False

        token = self._begin_request()
        self._logger.debug("Requesting %s of hunk %d in %s", intent.value, hunk.index, self._file.path if self._file else "")
        result = await self._service.apply(hunk.patch, intent)

        # git has already acted, so the result is still reported to the caller
        if not self._is_current(token):
            self._logger.debug("View changed while %s of hunk %d was in flight", intent.value, hunk.index)

        return result

    def _load_document(self, document: DiffDocument) -> None:
        self._document = document
        self._window.set_lines(document.lines)
        self._navigator.set_document(document)
        self._cursor = 0

    def _begin_request(self) -> int:
        self._request_token += 1
        return self._request_token

    def _is_current(self, token: int) -> bool:
        return token > self._teardown_token

    def _teardown(self) -> None:
        self._request_token += 1
        self._teardown_token = self._request_token
