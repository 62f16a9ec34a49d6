"""Main window for the hunkview application."""

import logging

from PySide6.QtWidgets import QLabel, QMainWindow, QWidget

from diff_view.diff_view_controller import DiffViewController
from diff_view.diff_view_settings import DiffViewSettings
from hunkview.diff_view_widget import DiffViewWidget
from vcs.git_exceptions import GitError
from vcs.git_runner import GitRunner
from vcs.git_status import get_file_status
from vcs.patch_apply_service import PatchApplyService


class MainWindow(QMainWindow):
    """Top-level window showing the diff of a single file."""

    def __init__(
        self,
        runner: GitRunner,
        settings: DiffViewSettings,
        parent: QWidget | None = None
    ) -> None:
        """
        Initialize the main window.

        Args:
            runner: Runner used for every git command
            settings: Diff view settings
            parent: Optional parent widget
        """
        super().__init__(parent)
        self._logger = logging.getLogger("MainWindow")
        self._runner = runner

        self._service = PatchApplyService(runner, full_context_lines=settings.full_context_lines)
        self._controller = DiffViewController(self._service, settings)
        self._diff_view = DiffViewWidget(self._controller, self)
        self.setCentralWidget(self._diff_view)

        self._hunk_label = QLabel(self)
        self.statusBar().addPermanentWidget(self._hunk_label)
        self._diff_view.status_changed.connect(self._hunk_label.setText)
        self._diff_view.operation_finished.connect(self._on_operation_finished)

        self.setWindowTitle("hunkview")
        self.resize(1000, 800)

    async def open_file(self, path: str, staged: bool) -> None:
        """
        Show the diff of a file.

        Args:
            path: Repository-relative path
            staged: True to show the staged changes, False for the working tree
        """
        try:
            files = await get_file_status(self._runner, path)

        except GitError as e:
            self._logger.error("Unable to read status of %s: %s", path, e)
            self.statusBar().showMessage(f"Unable to read status of {path}")
            return

        matching = [f for f in files if f.staged == staged]
        if not matching:
            self._controller.clear()
            self._diff_view.refresh()
            self.statusBar().showMessage(f"No {'staged' if staged else 'unstaged'} changes in {path}")
            return

        file = matching[0]
        self.setWindowTitle(f"hunkview - {file.path} ({'staged' if staged else 'unstaged'})")

        diff_text = await self._service.fetch_diff(file)
        if diff_text is None:
            self.statusBar().showMessage(f"Unable to read diff of {path}")
            return

        self._controller.show_diff(diff_text, file)
        self._diff_view.refresh()
        self._diff_view.setFocus()

    def _on_operation_finished(self, succeeded: bool, message: str) -> None:
        if not succeeded:
            self._logger.warning(message)

        self.statusBar().showMessage(message, 3000)
