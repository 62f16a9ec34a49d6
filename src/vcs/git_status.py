"""Single-path status lookup."""

from typing import List

from vcs.git_runner import GitRunner
from vcs.git_types import GitFile, GitFileStatus


def parse_porcelain_status(text: str) -> List[GitFile]:
    """
    Parse `git status --porcelain=v1 -z` output.

    Each entry yields at most two files: the staged view (from the index
    column) and the unstaged view (from the worktree column).  Untracked
    entries yield a single unstaged file.

    Args:
        text: Raw NUL-separated porcelain output

    Returns:
        Files in the order git reported them, staged view first
    """
    files: List[GitFile] = []
    entries = text.split('\0')
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue

        index_code, worktree_code, path = entry[0], entry[1], entry[3:]

        # Renames and copies are followed by the original path
        if index_code in ('R', 'C'):
            i += 1

        if index_code == '?' and worktree_code == '?':
            files.append(GitFile(path, GitFileStatus.UNTRACKED, staged=False))
            continue

        if index_code not in (' ', '!'):
            files.append(GitFile(path, GitFileStatus.from_code(index_code), staged=True))

        if worktree_code not in (' ', '!'):
            files.append(GitFile(path, GitFileStatus.from_code(worktree_code), staged=False))

    return files


async def get_file_status(runner: GitRunner, path: str) -> List[GitFile]:
    """
    Look up the staged and unstaged views of a single path.

    Args:
        runner: Runner used to invoke git
        path: Repository-relative path

    Returns:
        Zero, one or two files depending on where the path has changes

    Raises:
        GitError: If git cannot be run
    """
    result = await runner.run(["status", "--porcelain=v1", "-z", "--untracked-files=all", "--", path])
    return parse_porcelain_status(result.stdout)
