"""Shared fixtures and utilities for tests that talk to git."""

import asyncio
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import pytest

from vcs.git_exceptions import GitCommandError
from vcs.git_runner import GitCommandResult, GitRunner
from vcs.patch_apply_service import PatchApplyService


@dataclass
class QueuedResult:
    """Result the recording runner hands back for one command."""
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class RecordingGitRunner(GitRunner):
    """Git runner double that records commands and replays queued results."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Tuple[str, ...], str | None]] = []
        self._results: List[QueuedResult] = []
        self.gate: asyncio.Event | None = None

    def queue(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        """Queue the result of the next command; commands default to success."""
        self._results.append(QueuedResult(returncode, stdout, stderr))

    @property
    def commands(self) -> List[Tuple[str, ...]]:
        """Arguments of every command run so far."""
        return [args for args, _ in self.calls]

    async def run(
        self,
        args: Sequence[str],
        input_text: str | None = None,
        ok_returncodes: Sequence[int] = (0,)
    ) -> GitCommandResult:
        self.calls.append((tuple(args), input_text))
        if self.gate is not None:
            await self.gate.wait()

        result = self._results.pop(0) if self._results else QueuedResult()
        if result.returncode not in ok_returncodes:
            raise GitCommandError(args, result.returncode, result.stderr)

        return GitCommandResult(tuple(args), result.returncode, result.stdout, result.stderr)


@pytest.fixture
def git_runner():
    """Create a recording git runner."""
    return RecordingGitRunner()


@pytest.fixture
def patch_service(git_runner):
    """Create a patch apply service backed by the recording runner."""
    return PatchApplyService(git_runner)
