"""Shared fixtures and utilities for diff tests."""

import pytest

from diff.diff_parser import DiffParser


TWO_HUNK_DIFF = """diff --git a/src/app.py b/src/app.py
index 83db48f..bf269f4 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@
 import os
+import sys

 def main():
@@ -10,2 +11,3 @@ def main():
     print("start")
+    print("middle")
     print("end")
"""


RENAME_ONLY_DIFF = """diff --git a/old_name.txt b/new_name.txt
similarity index 100%
rename from old_name.txt
rename to new_name.txt
"""


NEW_FILE_DIFF = """diff --git a/notes.md b/notes.md
new file mode 100644
index 0000000..3b18e51
--- /dev/null
+++ b/notes.md
@@ -0,0 +1,2 @@
+# Notes
+first line
"""


class DiffTestHelpers:
    """Helper utilities for diff testing."""

    @staticmethod
    def make_diff(hunk_count: int, path: str = "file.txt") -> str:
        """Build a diff with the given number of single-line replacement hunks."""
        lines = [
            f"diff --git a/{path} b/{path}",
            "index 1111111..2222222 100644",
            f"--- a/{path}",
            f"+++ b/{path}",
        ]
        for i in range(hunk_count):
            start = 1 + i * 10
            lines.extend([
                f"@@ -{start},3 +{start},3 @@",
                f" context {i} a",
                f"-old {i}",
                f"+new {i}",
                f" context {i} b",
            ])

        return "\n".join(lines) + "\n"


@pytest.fixture
def parser():
    """Create a diff parser."""
    return DiffParser()


@pytest.fixture
def two_hunk_diff():
    """A diff with two hunks and a full git preamble."""
    return TWO_HUNK_DIFF


@pytest.fixture
def rename_only_diff():
    """A pure rename diff with no hunks."""
    return RENAME_ONLY_DIFF


@pytest.fixture
def new_file_diff():
    """A diff that creates a file."""
    return NEW_FILE_DIFF


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return DiffTestHelpers
