"""Diff highlighter."""

import logging
from typing import Dict

from PySide6.QtGui import QColor, QSyntaxHighlighter, QTextCharFormat, QTextDocument


def classify_diff_line(text: str) -> str:
    """
    Classify a rendered diff line for highlighting.

    Args:
        text: A line of the rendered window

    Returns:
        One of "marker", "metadata", "heading", "added", "removed" or "context"
    """
    if text.startswith("───"):
        return "marker"

    if text.startswith(("diff ", "index ", "+++", "---", "new file mode", "deleted file mode",
                        "old mode", "new mode", "similarity index", "rename from", "rename to",
                        "Binary files")):
        return "metadata"

    if text.startswith("@@"):
        return "heading"

    if text.startswith("+"):
        return "added"

    if text.startswith("-"):
        return "removed"

    return "context"


class DiffHighlighter(QSyntaxHighlighter):
    """Syntax highlighter for unified diff lines."""

    _COLOURS = {
        "marker": "#7f848e",
        "metadata": "#c678dd",
        "heading": "#61afef",
        "added": "#98c379",
        "removed": "#e06c75",
    }

    def __init__(self, parent: QTextDocument) -> None:
        """Initialize the highlighter."""
        super().__init__(parent)
        self._logger = logging.getLogger("DiffHighlighter")
        self._formats: Dict[str, QTextCharFormat] = {}
        for kind, colour in self._COLOURS.items():
            text_format = QTextCharFormat()
            text_format.setForeground(QColor(colour))
            self._formats[kind] = text_format

    def highlightBlock(self, text: str) -> None:
        """Apply highlighting to the given block of text."""
        try:
            text_format = self._formats.get(classify_diff_line(text))
            if text_format is not None:
                self.setFormat(0, len(text), text_format)

        except Exception:
            self._logger.exception("highlighting exception")
