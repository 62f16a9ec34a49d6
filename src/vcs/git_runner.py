"""Asynchronous execution of git commands."""

from abc import ABC, abstractmethod
import asyncio
from dataclasses import dataclass
import logging
from typing import Sequence, Tuple

from vcs.git_exceptions import GitCommandError, GitNotFoundError


@dataclass(frozen=True)
class GitCommandResult:
    """Captured outcome of a git command."""

    args: Tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


class GitRunner(ABC):
    """Abstract base class for anything that can run git commands."""

    @abstractmethod
    async def run(
        self,
        args: Sequence[str],
        input_text: str | None = None,
        ok_returncodes: Sequence[int] = (0,)
    ) -> GitCommandResult:
        """
        Run a git command.

        Args:
            args: Arguments to pass to git (without the executable)
            input_text: Optional text written to the process's stdin
            ok_returncodes: Exit statuses that count as success

        Returns:
            Result of the command

        Raises:
            GitNotFoundError: If git cannot be started
            GitCommandError: If git exits with a status not in ok_returncodes
        """


class SubprocessGitRunner(GitRunner):
    """Runs git as a child process of the current interpreter."""

    def __init__(
        self,
        working_directory: str,
        git_executable: str = "git",
        logger: logging.Logger | None = None
    ) -> None:
        """
        Initialize the runner.

        Args:
            working_directory: Repository directory every command runs in
            git_executable: Name or path of the git executable
            logger: Optional logger, defaults to a logger named after the class
        """
        self._working_directory = working_directory
        self._git_executable = git_executable
        self._logger = logger or logging.getLogger("SubprocessGitRunner")

    @property
    def working_directory(self) -> str:
        """Repository directory commands run in."""
        return self._working_directory

    async def run(
        self,
        args: Sequence[str],
        input_text: str | None = None,
        ok_returncodes: Sequence[int] = (0,)
    ) -> GitCommandResult:
        self._logger.debug("Running git %s", " ".join(args))

        try:
            process = await asyncio.create_subprocess_exec(
                self._git_executable,
                "-C",
                self._working_directory,
                *args,
                stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )

        except OSError as e:
            raise GitNotFoundError(f"Unable to start {self._git_executable}: {e}") from e

        stdin_data = input_text.encode("utf-8") if input_text is not None else None
        stdout, stderr = await process.communicate(stdin_data)
        returncode = process.returncode if process.returncode is not None else -1

        result = GitCommandResult(
            args=tuple(args),
            returncode=returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace")
        )

        if returncode not in ok_returncodes:
            raise GitCommandError(args, returncode, result.stderr)

        return result
