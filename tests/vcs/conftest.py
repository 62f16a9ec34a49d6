"""Fixtures for tests that run against a real git repository."""

import subprocess

import pytest

from vcs.git_runner import SubprocessGitRunner
from vcs.patch_apply_service import PatchApplyService


ORIGINAL_LINES = [f"line {i}" for i in range(1, 21)]


class GitRepo:
    """Throwaway repository with a single committed file."""

    def __init__(self, path):
        self.path = path

    def git(self, *args: str) -> str:
        """Run git synchronously in the repository."""
        result = subprocess.run(
            ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
            cwd=self.path,
            check=True,
            capture_output=True,
            text=True
        )
        return result.stdout

    def write(self, name: str, lines) -> None:
        """Write a file with a trailing newline."""
        (self.path / name).write_text("\n".join(lines) + "\n", encoding="utf-8")

    def read(self, name: str):
        """Read a file's lines."""
        return (self.path / name).read_text(encoding="utf-8").splitlines()


@pytest.fixture
def repo(tmp_path):
    """Create a repository whose `a.txt` has two separate unstaged changes."""
    repo = GitRepo(tmp_path)
    repo.git("init", "-q")
    repo.git("config", "core.autocrlf", "false")
    repo.write("a.txt", ORIGINAL_LINES)
    repo.git("add", "a.txt")
    repo.git("commit", "-q", "-m", "initial")

    modified = list(ORIGINAL_LINES)
    modified[1] = "line 2 changed"
    modified[17] = "line 18 changed"
    repo.write("a.txt", modified)
    return repo


@pytest.fixture
def original_lines():
    """Committed content of `a.txt`."""
    return list(ORIGINAL_LINES)


@pytest.fixture
def real_service(repo):
    """Create a patch apply service that runs git in the test repository."""
    return PatchApplyService(SubprocessGitRunner(str(repo.path)))
