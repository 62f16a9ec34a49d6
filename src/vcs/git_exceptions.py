"""Custom exceptions for git operations."""

from typing import Sequence


class GitError(Exception):
    """Base exception for git operations."""


class GitNotFoundError(GitError):
    """Raised when the git executable cannot be started."""


class GitCommandError(GitError):
    """Raised when a git command exits with an unexpected status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str):
        """
        Initialize the exception.

        Args:
            args: Arguments passed to git (without the executable)
            returncode: Exit status of the git process
            stderr: Error output captured from git
        """
        super().__init__(f"git {' '.join(args)} failed with exit status {returncode}: {stderr.strip()}")
        self.git_args = list(args)
        self.returncode = returncode
        self.stderr = stderr
