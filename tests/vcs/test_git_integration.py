"""Integration tests that stage, unstage and discard hunks in a real repository."""

import asyncio
import shutil

import pytest

from diff.diff_parser import DiffParser
from vcs.git_exceptions import GitCommandError, GitNotFoundError
from vcs.git_runner import SubprocessGitRunner
from vcs.git_status import get_file_status
from vcs.git_types import GitFile, GitFileStatus
from vcs.patch_apply_service import HunkIntent

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


UNSTAGED = GitFile("a.txt", GitFileStatus.MODIFIED, staged=False)
STAGED = GitFile("a.txt", GitFileStatus.MODIFIED, staged=True)


def parse(diff_text):
    """Parse diff text."""
    return DiffParser().parse(diff_text)


class TestSubprocessGitRunner:
    """Test running git as a child process."""

    def test_missing_executable(self, tmp_path):
        """Test that an unknown executable raises GitNotFoundError."""
        runner = SubprocessGitRunner(str(tmp_path), git_executable="no-such-git-executable")

        with pytest.raises(GitNotFoundError):
            asyncio.run(runner.run(["status"]))

    @requires_git
    def test_command_error(self, tmp_path):
        """Test that a failing command raises GitCommandError."""
        runner = SubprocessGitRunner(str(tmp_path))

        with pytest.raises(GitCommandError) as exc_info:
            asyncio.run(runner.run(["rev-parse", "--verify", "no-such-ref"]))

        assert exc_info.value.returncode != 0
        assert exc_info.value.git_args == ["rev-parse", "--verify", "no-such-ref"]

    @requires_git
    def test_ok_returncodes(self, tmp_path):
        """Test that extra exit statuses can be accepted."""
        runner = SubprocessGitRunner(str(tmp_path))

        result = asyncio.run(runner.run(["rev-parse", "--verify", "no-such-ref"], ok_returncodes=(0, 128)))

        assert result.returncode == 128


@requires_git
class TestHunkOperations:
    """Test hunk operations against a real repository."""

    def test_unstaged_diff_has_two_hunks(self, real_service):
        """Test the starting point of the other tests."""
        document = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))

        assert document.hunk_count == 2
        assert document.new_path == "a.txt"

    def test_stage_one_hunk(self, repo, real_service):
        """Test that staging a hunk moves only that change into the index."""
        document = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))

        assert asyncio.run(real_service.apply(document.hunks[0].patch, HunkIntent.STAGE))

        staged = parse(asyncio.run(real_service.fetch_diff(STAGED)))
        unstaged = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))
        assert staged.hunk_count == 1
        assert "+line 2 changed" in staged.hunks[0].body
        assert unstaged.hunk_count == 1
        assert "+line 18 changed" in unstaged.hunks[0].body

    def test_stage_twice_is_rejected(self, real_service):
        """Test that git rejects a hunk that is already staged."""
        document = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))
        patch = document.hunks[0].patch

        assert asyncio.run(real_service.apply(patch, HunkIntent.STAGE))
        assert not asyncio.run(real_service.apply(patch, HunkIntent.STAGE))

    def test_unstage_hunk(self, real_service):
        """Test that unstaging returns a hunk to the working tree."""
        document = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))
        asyncio.run(real_service.apply(document.hunks[1].patch, HunkIntent.STAGE))

        staged = parse(asyncio.run(real_service.fetch_diff(STAGED)))
        assert asyncio.run(real_service.apply(staged.hunks[0].patch, HunkIntent.UNSTAGE))

        assert asyncio.run(real_service.fetch_diff(STAGED)) == ""
        assert parse(asyncio.run(real_service.fetch_diff(UNSTAGED))).hunk_count == 2

    def test_discard_hunk(self, repo, real_service, original_lines):
        """Test that discarding a hunk restores that part of the file only."""
        document = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))

        assert asyncio.run(real_service.apply(document.hunks[0].patch, HunkIntent.DISCARD))

        lines = repo.read("a.txt")
        assert lines[1] == original_lines[1]
        assert lines[17] == "line 18 changed"

    def test_full_context(self, real_service, original_lines):
        """Test that the full-context diff holds the whole file in one hunk."""
        document = parse(asyncio.run(real_service.fetch_full_context(UNSTAGED)))

        assert document.hunk_count == 1
        assert document.hunks[0].header_range.new_count == len(original_lines)

    def test_file_status(self, repo, real_service):
        """Test status lookup after staging one of two hunks."""
        runner = SubprocessGitRunner(str(repo.path))
        document = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))
        asyncio.run(real_service.apply(document.hunks[0].patch, HunkIntent.STAGE))

        files = asyncio.run(get_file_status(runner, "a.txt"))

        assert files == [STAGED, UNSTAGED]

    def test_stage_untracked_file(self, repo, real_service):
        """Test staging the single hunk of an untracked file."""
        repo.write("notes.md", ["first", "second"])
        runner = SubprocessGitRunner(str(repo.path))
        untracked = asyncio.run(get_file_status(runner, "notes.md"))
        assert untracked == [GitFile("notes.md", GitFileStatus.UNTRACKED, staged=False)]

        document = parse(asyncio.run(real_service.fetch_diff(untracked[0])))
        assert document.is_new_file
        assert document.hunk_count == 1

        assert asyncio.run(real_service.apply(document.hunks[0].patch, HunkIntent.STAGE))
        assert asyncio.run(get_file_status(runner, "notes.md")) == [
            GitFile("notes.md", GitFileStatus.ADDED, staged=True)
        ]


@requires_git
class TestUserDiffConfig:
    """Test that the user's diff configuration does not change what is parsed."""

    @pytest.mark.parametrize("key, value", [
        ("color.ui", "always"),
        ("color.diff", "always"),
        ("diff.mnemonicPrefix", "true"),
        ("diff.noprefix", "true"),
    ])
    def test_stage_hunk_with_config(self, repo, real_service, key, value):
        """Test fetching, parsing and staging under a config that alters diff output."""
        repo.git("config", key, value)

        document = parse(asyncio.run(real_service.fetch_diff(UNSTAGED)))

        assert document.hunk_count == 2
        assert document.new_path == "a.txt"
        assert asyncio.run(real_service.apply(document.hunks[0].patch, HunkIntent.STAGE))
        assert parse(asyncio.run(real_service.fetch_diff(STAGED))).hunk_count == 1

    def test_untracked_file_with_colour(self, repo, real_service):
        """Test the empty-file comparison with colour forced on."""
        repo.git("config", "color.ui", "always")
        repo.write("notes.md", ["first", "second"])

        document = parse(asyncio.run(real_service.fetch_diff(GitFile("notes.md", GitFileStatus.UNTRACKED))))

        assert document.is_new_file
        assert document.hunk_count == 1
        assert document.hunks[0].body == ("+first", "+second")
