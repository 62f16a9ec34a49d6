"""Shared dataclasses for diff documents."""

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class DiffLine:
    """Represents a single line in a diff hunk."""

    type: str  # ' ' for context, '-' for deletion, '+' for addition, '\\' for no-newline marker
    content: str  # The actual line content (without the prefix character)

    @classmethod
    def from_text(cls, line: str) -> "DiffLine":
        """Classify a raw hunk body line by its prefix."""
        if line.startswith((' ', '-', '+', '\\')):
            return cls(line[0], line[1:])

        # Some tools drop the space prefix on empty context lines
        return cls(' ', line)


@dataclass(frozen=True)
class HunkHeader:
    """Line ranges parsed from an `@@ -l,s +l,s @@` header."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    section: str = ""  # Function context git prints after the closing @@


@dataclass(frozen=True)
class DiffHunk:
    """
    A single independently appliable hunk of a diff document.

    `start_line` and `end_line` are inclusive, 0-based indices into the owning
    document's lines.  `start_line` always holds the `@@` header.
    """

    index: int
    start_line: int
    end_line: int
    header: str
    body: Tuple[str, ...]
    patch: str
    header_range: HunkHeader | None = None

    @property
    def old_start(self) -> int | None:
        """Starting line in the original file (1-indexed), if the header parsed."""
        return self.header_range.old_start if self.header_range else None

    @property
    def old_count(self) -> int | None:
        """Line count in the original file, if the header parsed."""
        return self.header_range.old_count if self.header_range else None

    @property
    def new_start(self) -> int | None:
        """Starting line in the new file (1-indexed), if the header parsed."""
        return self.header_range.new_start if self.header_range else None

    @property
    def new_count(self) -> int | None:
        """Line count in the new file, if the header parsed."""
        return self.header_range.new_count if self.header_range else None

    @property
    def section(self) -> str:
        """Function context text following the header."""
        return self.header_range.section if self.header_range else ""

    @property
    def line_count(self) -> int:
        """Number of document lines this hunk occupies, header included."""
        return self.end_line - self.start_line + 1

    @property
    def lines(self) -> List[DiffLine]:
        """Classified body lines."""
        return [DiffLine.from_text(line) for line in self.body]

    @property
    def added_count(self) -> int:
        """Number of added lines."""
        return sum(1 for line in self.body if line.startswith('+'))

    @property
    def removed_count(self) -> int:
        """Number of removed lines."""
        return sum(1 for line in self.body if line.startswith('-'))

    def contains(self, line: int) -> bool:
        """Check whether an absolute document line belongs to this hunk."""
        return self.start_line <= line <= self.end_line


def _strip_path_prefix(path: str) -> str | None:
    """Convert a `---`/`+++` path into a repository path."""
    # Git appends a tab and timestamp for some external diff drivers
    path = path.split('\t', 1)[0].strip()
    if path == '/dev/null':
        return None

    if path.startswith(('a/', 'b/')):
        return path[2:]

    return path


@dataclass(frozen=True)
class DiffDocument:
    """
    Parsed representation of one file's unified diff.

    Documents are never mutated; any change of content produces a new one.
    """

    full_text: str
    lines: Tuple[str, ...]
    preamble: Tuple[str, ...]
    hunks: Tuple[DiffHunk, ...]
    _hunk_starts: Tuple[int, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, '_hunk_starts', tuple(hunk.start_line for hunk in self.hunks))

    @classmethod
    def empty(cls) -> "DiffDocument":
        """Create a document with no content."""
        return cls(full_text="", lines=(), preamble=(), hunks=())

    @property
    def total_lines(self) -> int:
        """Number of lines in the document."""
        return len(self.lines)

    @property
    def hunk_count(self) -> int:
        """Number of hunks in the document."""
        return len(self.hunks)

    @property
    def has_hunks(self) -> bool:
        """True if the document has at least one hunk."""
        return bool(self.hunks)

    @property
    def old_path(self) -> str | None:
        """Path of the original file, or None for a newly added file."""
        for line in self.preamble:
            if line.startswith('--- '):
                return _strip_path_prefix(line[4:])

        return self._git_header_paths()[0]

    @property
    def new_path(self) -> str | None:
        """Path of the new file, or None for a deleted file."""
        for line in self.preamble:
            if line.startswith('+++ '):
                return _strip_path_prefix(line[4:])

        return self._git_header_paths()[1]

    @property
    def is_new_file(self) -> bool:
        """True if the diff creates the file."""
        return any(line.startswith('new file mode') or line == '--- /dev/null' for line in self.preamble)

    @property
    def is_deleted_file(self) -> bool:
        """True if the diff deletes the file."""
        return any(line.startswith('deleted file mode') or line == '+++ /dev/null' for line in self.preamble)

    @property
    def is_binary(self) -> bool:
        """True if git reported the file as binary."""
        return any(
            line.startswith('Binary files ') or line == 'GIT binary patch'
            for line in self.preamble
        )

    def hunk_at_line(self, line: int) -> DiffHunk | None:
        """
        Find the hunk containing an absolute document line.

        Args:
            line: 0-based document line

        Returns:
            The hunk covering that line, or None if the line is in the preamble
            or outside the document
        """
        if line < 0 or line >= len(self.lines):
            return None

        pos = bisect_right(self._hunk_starts, line) - 1
        if pos < 0:
            return None

        return self.hunks[pos]

    def _git_header_paths(self) -> Tuple[str | None, str | None]:
        """Extract paths from a `diff --git a/x b/x` line when there are no ---/+++ lines."""
        for line in self.preamble:
            if line.startswith('diff --git '):
                parts = line[len('diff --git '):].split(' b/', 1)
                if len(parts) == 2:
                    return _strip_path_prefix(parts[0]), parts[1]

        return None, None
