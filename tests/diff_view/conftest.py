"""Shared fixtures and utilities for diff view tests."""

import pytest

from diff_view.diff_view_controller import DiffViewController
from diff_view.diff_view_settings import DiffViewSettings
from diff_view.diff_view_window import DiffViewWindow


SMALL_DIFF = """diff --git a/app.py b/app.py
index 83db48f..bf269f4 100644
--- a/app.py
+++ b/app.py
@@ -1,3 +1,4 @@
 import os
+import sys

 def main():
@@ -10,2 +11,3 @@ def main():
     print("start")
+    print("middle")
     print("end")
@@ -30,2 +32,2 @@ def helper():
-    return 1
+    return 2
"""


class DiffViewTestHelpers:
    """Helper utilities for diff view tests."""

    @staticmethod
    def numbered_lines(count: int):
        """Create a list of distinct lines."""
        return [f"line {i}" for i in range(count)]

    @staticmethod
    def large_diff(hunk_count: int, lines_per_hunk: int) -> str:
        """Build a diff whose hunks are each `lines_per_hunk` document lines long."""
        lines = ["diff --git a/big.txt b/big.txt", "--- a/big.txt", "+++ b/big.txt"]
        for i in range(hunk_count):
            body = lines_per_hunk - 1
            lines.append(f"@@ -{1 + i * 1000},0 +{1 + i * 1000},{body} @@")
            lines.extend(f"+added {i}.{j}" for j in range(body))

        return "\n".join(lines) + "\n"


@pytest.fixture
def small_diff():
    """A three-hunk diff."""
    return SMALL_DIFF


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return DiffViewTestHelpers


@pytest.fixture
def window():
    """Create a small window for fast tests."""
    return DiffViewWindow(window_size=10, buffer_threshold=2, buffer_size=3)


@pytest.fixture
def controller(patch_service):
    """Create a controller with default settings."""
    return DiffViewController(patch_service)


@pytest.fixture
def small_window_controller(patch_service):
    """Create a controller whose window is much smaller than the test documents."""
    settings = DiffViewSettings(window_size=20, buffer_threshold=4, buffer_size=6)
    return DiffViewController(patch_service, settings)
