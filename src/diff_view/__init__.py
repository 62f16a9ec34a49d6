"""Windowed, hunk-navigable view over a single file's diff."""

from diff_view.diff_view_controller import DiffViewController, DiffViewMode, DiffViewRender
from diff_view.diff_view_navigator import HunkNavigator, NavigatorState
from diff_view.diff_view_settings import DiffViewSettings
from diff_view.diff_view_window import DiffViewWindow, WindowState


__all__ = [
    "DiffViewController",
    "DiffViewMode",
    "DiffViewRender",
    "DiffViewSettings",
    "DiffViewWindow",
    "HunkNavigator",
    "NavigatorState",
    "WindowState"
]
