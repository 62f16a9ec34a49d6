"""Git process plumbing and hunk patch application."""

from vcs.git_exceptions import GitCommandError, GitError, GitNotFoundError
from vcs.git_runner import GitCommandResult, GitRunner, SubprocessGitRunner
from vcs.git_status import get_file_status, parse_porcelain_status
from vcs.git_types import GitFile, GitFileStatus
from vcs.patch_apply_service import HunkIntent, PatchApplyService


__all__ = [
    "GitCommandError",
    "GitCommandResult",
    "GitError",
    "GitFile",
    "GitFileStatus",
    "GitNotFoundError",
    "GitRunner",
    "HunkIntent",
    "PatchApplyService",
    "SubprocessGitRunner",
    "get_file_status",
    "parse_porcelain_status"
]
