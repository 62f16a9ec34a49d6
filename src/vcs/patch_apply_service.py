"""Application of single-hunk patches through `git apply`."""

from enum import Enum
import logging
from typing import Dict, List, Tuple

from vcs.git_exceptions import GitCommandError, GitError
from vcs.git_runner import GitRunner
from vcs.git_types import GitFile


class HunkIntent(Enum):
    """What the user wants to happen to a hunk."""

    STAGE = "stage"
    UNSTAGE = "unstage"
    DISCARD = "discard"


# `git apply` flags for each intent.  The patch is always read from stdin.
_APPLY_FLAGS: Dict[HunkIntent, Tuple[str, ...]] = {
    HunkIntent.STAGE: ("--cached",),
    HunkIntent.UNSTAGE: ("--cached", "--reverse"),
    HunkIntent.DISCARD: ("--reverse",),
}

# Keep `git diff` output parseable whatever the user's diff, colour and prefix config says.
_DIFF_FLAGS: Tuple[str, ...] = ("--no-color", "--no-ext-diff", "--src-prefix=a/", "--dst-prefix=b/")


class PatchApplyService:
    """
    Patch application primitive backed by git.

    The service does not inspect file state.  Callers decide whether an intent
    is legal for the file being viewed; the only failure the service reports
    is git rejecting the patch, and it reports it as a return value.
    """

    DEFAULT_FULL_CONTEXT_LINES = 1_000_000

    def __init__(
        self,
        runner: GitRunner,
        full_context_lines: int = DEFAULT_FULL_CONTEXT_LINES,
        logger: logging.Logger | None = None
    ) -> None:
        """
        Initialize the service.

        Args:
            runner: Runner used to invoke git
            full_context_lines: Context lines requested for a full-file diff
            logger: Optional logger, defaults to a logger named after the class
        """
        self._runner = runner
        self._full_context_lines = full_context_lines
        self._logger = logger or logging.getLogger("PatchApplyService")

    @staticmethod
    def apply_args(intent: HunkIntent) -> List[str]:
        """
        Build the git arguments used to apply a patch with the given intent.

        Args:
            intent: Requested hunk operation

        Returns:
            Argument list for git
        """
        return ["apply", *_APPLY_FLAGS[intent], "--whitespace=nowarn", "-"]

    async def apply(self, patch: str, intent: HunkIntent) -> bool:
        """
        Apply a standalone hunk patch.

        Args:
            patch: Self-contained patch text (preamble plus one hunk)
            intent: Whether to stage, unstage or discard the hunk

        Returns:
            True if git accepted the patch, False if it rejected it
        """
        if not patch.strip():
            self._logger.warning("Refusing to %s an empty patch", intent.value)
            return False

        try:
            await self._runner.run(self.apply_args(intent), input_text=patch)

        except GitCommandError as e:
            self._logger.warning("git rejected %s patch (exit %d): %s", intent.value, e.returncode, e.stderr.strip())
            return False

        except GitError as e:
            self._logger.warning("Unable to %s patch: %s", intent.value, e)
            return False

        self._logger.debug("Applied %s patch", intent.value)
        return True

    @staticmethod
    def diff_args(file: GitFile, context_lines: int | None = None) -> Tuple[List[str], Tuple[int, ...]]:
        """
        Build the git arguments that render the diff for a file.

        Args:
            file: File to diff, in its staged or unstaged view
            context_lines: Context lines around each change, or None for git's default

        Returns:
            Tuple of (argument list, exit statuses that mean success)
        """
        unified = [f"--unified={context_lines}"] if context_lines is not None else []

        # Untracked files have nothing to diff against, so compare with an empty file.
        # --no-index exits with status 1 when the files differ.
        if file.is_untracked:
            return ["diff", "--no-index", *_DIFF_FLAGS, *unified, "--", "/dev/null", file.path], (0, 1)

        cached = ["--cached"] if file.staged else []
        return ["diff", *_DIFF_FLAGS, *cached, *unified, "--", file.path], (0,)

    async def fetch_diff(self, file: GitFile, context_lines: int | None = None) -> str | None:
        """
        Fetch the unified diff for a file.

        Args:
            file: File to diff, in its staged or unstaged view
            context_lines: Context lines around each change, or None for git's default

        Returns:
            Diff text, or None if git could not produce it
        """
        args, ok_returncodes = self.diff_args(file, context_lines)

        try:
            result = await self._runner.run(args, ok_returncodes=ok_returncodes)

        except GitError as e:
            self._logger.warning("Unable to fetch diff for %s: %s", file.path, e)
            return None

        return result.stdout

    async def fetch_full_context(self, file: GitFile) -> str | None:
        """
        Fetch the same comparison as `fetch_diff` with no hidden context.

        Args:
            file: File to diff, in its staged or unstaged view

        Returns:
            Full-context diff text, or None if it is unavailable
        """
        diff_text = await self.fetch_diff(file, self._full_context_lines)
        if not diff_text:
            return None

        return diff_text
