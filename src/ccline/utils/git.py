"""Git command execution utilities."""

import subprocess

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .debug import debug_log

GIT_TIMEOUT_SECONDS = 5

# Runs one git query in a directory; returns stdout, or None on any failure
GitRunner = Callable[[list[str], str], Optional[str]]

CONFLICT_CODES = {("U", "U"), ("A", "A"), ("D", "D")}


class GitStatus(str, Enum):
    CLEAN = "Clean"
    DIRTY = "Dirty"
    CONFLICTS = "Conflicts"


@dataclass
class GitStatusCounts:
    added: int = 0
    modified: int = 0
    deleted: int = 0

    @property
    def total(self) -> int:
        return self.added + self.modified + self.deleted


@dataclass
class GitInfo:
    """Git repository state for the working directory."""

    branch: str
    status: GitStatus = GitStatus.CLEAN
    status_counts: GitStatusCounts = field(default_factory=GitStatusCounts)
    ahead: int = 0
    behind: int = 0
    sha: Optional[str] = None
    stash_count: Optional[int] = None
    tag: Optional[str] = None


def run_git(args: list[str], cwd: str) -> Optional[str]:
    """Run git command and return stdout, or None on error.

    Args:
        args: Git command arguments
        cwd: Working directory for git command

    Returns:
        Command stdout or None if the command failed, timed out, was not
        found, or produced output that is not valid UTF-8
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=GIT_TIMEOUT_SECONDS,
            cwd=cwd,
        )
    except (
        subprocess.TimeoutExpired,
        FileNotFoundError,
        OSError,
        UnicodeDecodeError,
    ) as e:
        debug_log(f"git {' '.join(args)} failed: {e}")
        return None
    return result.stdout if result.returncode == 0 else None


def _non_empty(output: Optional[str]) -> Optional[str]:
    if output is None:
        return None
    value = output.strip()
    return value or None


def is_git_repository(cwd: str, runner: GitRunner = run_git) -> bool:
    return runner(["rev-parse", "--git-dir"], cwd) is not None


def get_branch(cwd: str, runner: GitRunner = run_git) -> Optional[str]:
    """Current branch name, or None when HEAD is detached."""
    branch = _non_empty(runner(["branch", "--show-current"], cwd))
    if branch:
        return branch
    return _non_empty(runner(["symbolic-ref", "--short", "HEAD"], cwd))


def parse_porcelain_status(output: str) -> tuple[GitStatus, GitStatusCounts]:
    """Classify ``git status --porcelain`` output.

    Conflict codes (UU, AA, DD) are not counted but make the whole status
    Conflicts. Codes other than A, M and D count as modified.
    """
    counts = GitStatusCounts()

    if not output.strip():
        return GitStatus.CLEAN, counts

    has_conflicts = False

    for line in output.splitlines():
        if len(line) < 2:
            continue

        staged, unstaged = line[0], line[1]

        if (staged, unstaged) in CONFLICT_CODES:
            has_conflicts = True
            continue

        if staged == "A" or unstaged == "A":
            counts.added += 1
        elif staged == "M" or unstaged == "M":
            counts.modified += 1
        elif staged == "D" or unstaged == "D":
            counts.deleted += 1
        elif staged != " " or unstaged != " ":
            counts.modified += 1

    status = GitStatus.CONFLICTS if has_conflicts else GitStatus.DIRTY
    return status, counts


def get_status_with_counts(
    cwd: str, runner: GitRunner = run_git
) -> tuple[GitStatus, GitStatusCounts]:
    output = runner(["status", "--porcelain"], cwd)
    if output is None:
        return GitStatus.CLEAN, GitStatusCounts()
    return parse_porcelain_status(output)


def get_commit_count(cwd: str, revision_range: str, runner: GitRunner = run_git) -> int:
    output = _non_empty(runner(["rev-list", "--count", revision_range], cwd))
    if output is None:
        return 0
    try:
        return int(output)
    except ValueError:
        return 0


def get_ahead_behind(cwd: str, runner: GitRunner = run_git) -> tuple[int, int]:
    """Commits ahead of and behind the upstream branch."""
    ahead = get_commit_count(cwd, "@{u}..HEAD", runner)
    behind = get_commit_count(cwd, "HEAD..@{u}", runner)
    return ahead, behind


def get_sha(cwd: str, length: int, runner: GitRunner = run_git) -> Optional[str]:
    return _non_empty(runner(["rev-parse", f"--short={length}", "HEAD"], cwd))


def get_stash_count(cwd: str, runner: GitRunner = run_git) -> Optional[int]:
    output = runner(["stash", "list"], cwd)
    if output is None:
        return None
    count = len(output.splitlines())
    return count if count > 0 else None


def get_latest_tag(cwd: str, runner: GitRunner = run_git) -> Optional[str]:
    return _non_empty(runner(["describe", "--tags", "--abbrev=0"], cwd))


def get_git_info(
    cwd: str,
    runner: GitRunner = run_git,
    sha_length: Optional[int] = None,
    include_stash: bool = False,
    include_tag: bool = False,
) -> Optional[GitInfo]:
    """Collect repository state with one git invocation per fact.

    Args:
        cwd: Working directory to inspect
        runner: Git command runner, replaceable in tests
        sha_length: Abbreviated SHA length, or None to skip the SHA query
        include_stash: Whether to count stash entries
        include_tag: Whether to look up the latest tag

    Returns:
        GitInfo, or None if cwd is not inside a git repository
    """
    if not is_git_repository(cwd, runner):
        return None

    branch = get_branch(cwd, runner) or "detached"
    status, counts = get_status_with_counts(cwd, runner)
    ahead, behind = get_ahead_behind(cwd, runner)

    return GitInfo(
        branch=branch,
        status=status,
        status_counts=counts,
        ahead=ahead,
        behind=behind,
        sha=get_sha(cwd, sha_length, runner) if sha_length is not None else None,
        stash_count=get_stash_count(cwd, runner) if include_stash else None,
        tag=get_latest_tag(cwd, runner) if include_tag else None,
    )
