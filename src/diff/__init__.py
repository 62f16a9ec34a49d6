"""
Unified diff parsing into standalone, independently appliable hunks.

A diff for a single file is parsed into a `DiffDocument`: the file-level
preamble plus an ordered list of `DiffHunk` objects, each carrying a patch that
can be handed to `git apply` without any other hunk present.
"""

from diff.diff_exceptions import (
    DiffError,
    DiffParseError,
)
from diff.diff_parser import (
    DiffParser,
    parse_hunk_header,
    parse_hunk_header_strict,
    split_diff_lines,
)
from diff.diff_types import (
    DiffDocument,
    DiffHunk,
    DiffLine,
    HunkHeader,
)

__all__ = [
    # Exceptions
    'DiffError',
    'DiffParseError',
    # Types
    'DiffLine',
    'DiffHunk',
    'DiffDocument',
    'HunkHeader',
    # Core classes and helpers
    'DiffParser',
    'parse_hunk_header',
    'parse_hunk_header_strict',
    'split_diff_lines',
]
