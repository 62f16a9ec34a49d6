"""Types describing files in a git working tree."""

from dataclasses import dataclass
from enum import Enum


class GitFileStatus(Enum):
    """Single-letter change status as reported by git."""

    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    TYPE_CHANGED = "T"
    UNTRACKED = "?"

    @classmethod
    def from_code(cls, code: str) -> "GitFileStatus":
        """
        Convert a git status letter into a status.

        Rename and copy codes carry a similarity score (e.g. "R085"); only the
        first character is significant.  Unknown codes are treated as modified.

        Args:
            code: Status code from `git diff --name-status` or `git status --porcelain`

        Returns:
            The matching status
        """
        if not code:
            return cls.MODIFIED

        try:
            return cls(code[0])

        except ValueError:
            return cls.MODIFIED


@dataclass(frozen=True)
class GitFile:
    """A changed file, viewed either from the index (staged) or the working tree."""

    path: str
    status: GitFileStatus = GitFileStatus.MODIFIED
    staged: bool = False

    @property
    def is_untracked(self) -> bool:
        """True if git does not track the file yet."""
        return self.status == GitFileStatus.UNTRACKED
