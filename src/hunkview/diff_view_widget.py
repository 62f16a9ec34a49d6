"""Widget that renders a diff view controller."""

import asyncio
import logging
from typing import Awaitable, Callable, Coroutine, Set

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFontDatabase, QKeyEvent, QTextCursor
from PySide6.QtWidgets import QMessageBox, QPlainTextEdit, QWidget

from diff_view.diff_view_controller import DiffViewController, DiffViewMode
from hunkview.diff_highlighter import DiffHighlighter
from hunkview.diff_view_keys import DiffViewAction, DiffViewKeyDispatcher
from hunkview.key_sequence import KeySequenceTracker


class DiffViewWidget(QPlainTextEdit):
    """
    Read-only text view over a DiffViewController.

    Only the controller's window is ever placed in the text document, so the
    cost of a render does not depend on the size of the diff.
    """

    # Emitted with the hunk position text whenever the view is re-rendered
    status_changed = Signal(str)

    # Emitted when a hunk operation completes: (succeeded, message)
    operation_finished = Signal(bool, str)

    _NAMED_KEYS = {
        Qt.Key.Key_Down: "down",
        Qt.Key.Key_Up: "up",
    }

    def __init__(self, controller: DiffViewController, parent: QWidget | None = None) -> None:
        """
        Initialize the widget.

        Args:
            controller: Controller holding the diff being displayed
            parent: Optional parent widget
        """
        super().__init__(parent)
        self._logger = logging.getLogger("DiffViewWidget")
        self._controller = controller
        self._dispatcher = DiffViewKeyDispatcher(KeySequenceTracker(controller.settings.key_sequence_timeout))
        self._highlighter = DiffHighlighter(self.document())
        self._tasks: Set[asyncio.Task] = set()

        # A hunk operation or full file fetch is in flight; further ones are ignored
        self._busy = False

        # Scroll signals raised by our own re-render must not move the cursor
        self._rendering = False

        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self.setPlaceholderText("Select a file to view diff")
        self.verticalScrollBar().valueChanged.connect(self._on_scroll)

    def refresh(self, top_line: int | None = None) -> None:
        """
        Re-render the controller's current window.

        Args:
            top_line: Absolute line to keep at the top of the viewport, or None to
                centre the cursor
        """
        render = self._controller.render()

        self._rendering = True
        try:
            self.setPlainText(render.text)
            self._place_cursor(render.cursor_row)
            if top_line is None:
                self.centerCursor()

            else:
                self.verticalScrollBar().setValue(self._controller.line_to_row(top_line))

        finally:
            self._rendering = False

        self.status_changed.emit(self._controller.status_text())

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Handle diff view key bindings."""
        key = self._NAMED_KEYS.get(Qt.Key(event.key()), event.text())
        action = self._dispatcher.dispatch(key) if key else None
        if action is None:
            super().keyPressEvent(event)
            return

        self._perform(action)

    def _perform(self, action: DiffViewAction) -> None:
        controller = self._controller
        settings = controller.settings

        if action == DiffViewAction.PENDING:
            return

        window_before = controller.window_state

        if action == DiffViewAction.LINE_DOWN:
            controller.scroll_by(settings.line_scroll)

        elif action == DiffViewAction.LINE_UP:
            controller.scroll_by(-settings.line_scroll)

        elif action == DiffViewAction.HALF_PAGE_DOWN:
            controller.scroll_by(settings.half_page_scroll)

        elif action == DiffViewAction.HALF_PAGE_UP:
            controller.scroll_by(-settings.half_page_scroll)

        elif action == DiffViewAction.GO_TO_TOP:
            controller.go_to_top()

        elif action == DiffViewAction.GO_TO_BOTTOM:
            controller.go_to_bottom()

        elif action == DiffViewAction.NEXT_HUNK:
            controller.next_hunk()

        elif action == DiffViewAction.PREVIOUS_HUNK:
            controller.previous_hunk()

        elif action == DiffViewAction.STAGE_HUNK:
            self._start_hunk_operation("stage", controller.stage_current)
            return

        elif action == DiffViewAction.UNSTAGE_HUNK:
            self._start_hunk_operation("unstage", controller.unstage_current)
            return

        elif action == DiffViewAction.DISCARD_HUNK:
            if controller.can_discard() and self._confirm_discard():
                self._start_hunk_operation("discard", controller.discard_current)

            return

        elif action == DiffViewAction.TOGGLE_FULL_FILE:
            self._start_full_file_toggle()
            return

        # Text is only replaced when the window moved
        if controller.window_state != window_before:
            self.refresh()
            return

        self._move_cursor()

    def _move_cursor(self) -> None:
        """Move the text cursor to the controller's cursor without re-rendering."""
        self._rendering = True
        try:
            self._place_cursor(self._controller.line_to_row(self._controller.cursor_line))
            self.ensureCursorVisible()

        finally:
            self._rendering = False

        self.status_changed.emit(self._controller.status_text())

    def _place_cursor(self, row: int) -> None:
        block = self.document().findBlockByNumber(row)
        if block.isValid():
            self.setTextCursor(QTextCursor(block))

    def _confirm_discard(self) -> bool:
        result = QMessageBox.question(
            self,
            "Discard hunk",
            "Discard this change from the working tree? This cannot be undone.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No
        )
        return result == QMessageBox.StandardButton.Yes

    def _start_hunk_operation(self, label: str, operation: Callable[[], Awaitable[bool]]) -> None:
        if self._busy:
            self._logger.debug("Ignoring %s request while another hunk operation is running", label)
            return

        self._busy = True
        self._create_tracked_task(self._run_hunk_operation(label, operation))

    async def _run_hunk_operation(self, label: str, operation: Callable[[], Awaitable[bool]]) -> None:
        try:
            cursor_line = self._controller.cursor_line
            succeeded = await operation()
            if succeeded:
                await self._reload(cursor_line)
                self.operation_finished.emit(True, f"Hunk {label}d")

            else:
                self.operation_finished.emit(False, f"Unable to {label} hunk")

        finally:
            self._busy = False

    async def _reload(self, cursor_line: int) -> None:
        """Fetch the diff again after a hunk operation and restore the cursor."""
        file = self._controller.file
        diff_text = await self._controller.fetch_current_diff()
        if diff_text is None or file is None:
            return

        self._controller.show_diff(diff_text, file)
        self._controller.scroll_to(cursor_line)
        self.refresh()

    def _start_full_file_toggle(self) -> None:
        if self._busy:
            self._logger.debug("Ignoring full file toggle while another operation is running")
            return

        self._busy = True
        self._create_tracked_task(self._toggle_full_file())

    async def _toggle_full_file(self) -> None:
        try:
            if await self._controller.toggle_full_file_view():
                self.refresh()

        finally:
            self._busy = False

    def _on_scroll(self, value: int) -> None:
        """Let the window follow the viewport when the user scrolls with the mouse."""
        if self._rendering or self._controller.mode == DiffViewMode.EMPTY:
            return

        top_line = self._controller.row_to_line(value)
        if self._controller.handle_scroll(top_line):
            self.refresh(top_line)

    def _create_tracked_task(self, coro: Coroutine) -> asyncio.Task:
        """
        Create a tracked asyncio task.

        Args:
            coro: Coroutine to create task from

        Returns:
            Created task
        """
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
