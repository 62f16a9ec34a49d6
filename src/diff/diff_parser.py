"""Unified diff parsing."""

import re
from typing import List, Tuple

from diff.diff_exceptions import DiffParseError
from diff.diff_types import DiffDocument, DiffHunk, HunkHeader


_HUNK_HEADER_RE = re.compile(r'^@@\s+-(\d+)(?:,(\d+))?\s+\+(\d+)(?:,(\d+))?\s+@@(.*)$')


def split_diff_lines(diff_text: str) -> Tuple[str, ...]:
    """
    Split diff text into lines.

    Only '\\n' separates lines so a carriage return belonging to a CRLF file
    stays part of its line.  The empty element produced by a terminating
    newline is dropped.

    Args:
        diff_text: Raw diff text

    Returns:
        Tuple of lines without their terminating newlines
    """
    if not diff_text:
        return ()

    lines = diff_text.split('\n')
    if lines[-1] == '':
        lines.pop()

    return tuple(lines)


def parse_hunk_header(header: str) -> HunkHeader | None:
    """
    Parse the line ranges from a hunk header.

    Args:
        header: A line of the form `@@ -old_start,old_count +new_start,new_count @@ section`

    Returns:
        Parsed header, or None if the line is not a well formed hunk header
    """
    match = _HUNK_HEADER_RE.match(header.rstrip('\r'))
    if not match:
        return None

    return HunkHeader(
        old_start=int(match.group(1)),
        old_count=int(match.group(2)) if match.group(2) is not None else 1,
        new_start=int(match.group(3)),
        new_count=int(match.group(4)) if match.group(4) is not None else 1,
        section=match.group(5).strip()
    )


def parse_hunk_header_strict(header: str) -> HunkHeader:
    """
    Parse the line ranges from a hunk header, rejecting malformed input.

    Args:
        header: Hunk header line

    Returns:
        Parsed header

    Raises:
        DiffParseError: If the header is not well formed
    """
    parsed = parse_hunk_header(header)
    if parsed is None:
        raise DiffParseError(f"Invalid hunk header format: {header}", {'header': header})

    return parsed


class DiffParser:
    """
    Parser that splits a unified diff into a preamble and standalone hunks.

    Parsing never fails: text without any `@@` line produces a document with no
    hunks, which callers render like any other document.
    """

    def parse(self, diff_text: str) -> DiffDocument:
        """
        Parse unified diff text into a document.

        Args:
            diff_text: Unified diff format text for a single file

        Returns:
            Parsed document
        """
        lines = split_diff_lines(diff_text)

        hunk_starts = [i for i, line in enumerate(lines) if line.startswith('@@')]
        if not hunk_starts:
            return DiffDocument(full_text=diff_text, lines=lines, preamble=lines, hunks=())

        preamble = lines[:hunk_starts[0]]
        hunks: List[DiffHunk] = []

        for index, start in enumerate(hunk_starts):
            end = hunk_starts[index + 1] - 1 if index + 1 < len(hunk_starts) else len(lines) - 1
            hunks.append(self._build_hunk(index, lines, start, end, preamble))

        return DiffDocument(full_text=diff_text, lines=lines, preamble=preamble, hunks=tuple(hunks))

    def _build_hunk(
        self,
        index: int,
        lines: Tuple[str, ...],
        start: int,
        end: int,
        preamble: Tuple[str, ...]
    ) -> DiffHunk:
        """
        Build a hunk covering lines[start:end + 1].

        Args:
            index: Position of the hunk within the document
            lines: All document lines
            start: Index of the `@@` line
            end: Index of the last line belonging to the hunk
            preamble: File-level header lines preceding the first hunk

        Returns:
            The hunk, with its standalone patch text
        """
        header = lines[start]
        body = lines[start + 1:end + 1]
        patch = '\n'.join(preamble + lines[start:end + 1]) + '\n'

        return DiffHunk(
            index=index,
            start_line=start,
            end_line=end,
            header=header,
            body=body,
            patch=patch,
            header_range=parse_hunk_header(header)
        )
