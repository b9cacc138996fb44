"""Git queries: subprocess-based repository root check, fetch and status."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Optional

DEFAULT_TIMEOUT = 60.0

# Prefix of the discovery failure when no repository encloses the directory.
# A broken .git file yields "not a git repository: <gitdir>" instead.
NOT_A_REPO = "not a git repository (or any"


class GitError(Exception):
    """A git command failed, timed out, or could not be started."""


@dataclass
class GitStatus:
    branch: str = ""
    upstream: Optional[str] = None
    ahead: int = 0
    behind: int = 0
    staged: int = 0
    unstaged: int = 0
    untracked: int = 0

    @property
    def clean(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked)


def _git_env() -> dict[str, str]:
    env = dict(os.environ)
    # Never block on a credential prompt
    env["GIT_TERMINAL_PROMPT"] = "0"
    # Untranslated messages, so stderr can be matched
    env["LC_ALL"] = "C"
    env["LANGUAGE"] = "C"
    return env


def _run_git(
    repo_path: str,
    args: list[str],
    timeout: float = DEFAULT_TIMEOUT,
) -> subprocess.CompletedProcess:
    """Run a git command in repo_path without checking the exit code."""
    try:
        return subprocess.run(
            ["git", "-C", repo_path] + args,
            capture_output=True,
            text=True,
            timeout=timeout,
            errors="replace",
            env=_git_env(),
        )
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"git {args[0]} timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise GitError(f"could not run git: {exc}") from exc


def _error_text(result: subprocess.CompletedProcess, args: list[str]) -> str:
    lines = [ln.strip() for ln in (result.stderr or result.stdout or "").splitlines() if ln.strip()]
    return " ".join(lines) or f"git {args[0]} exited with status {result.returncode}"


def _check_git(repo_path: str, args: list[str], timeout: float = DEFAULT_TIMEOUT) -> str:
    """Run a git command and return stdout, raising GitError on failure."""
    result = _run_git(repo_path, args, timeout=timeout)
    if result.returncode != 0:
        raise GitError(_error_text(result, args))
    return result.stdout


def is_repo_root(repo_path: str, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """True when repo_path is the top level of a git working tree.

    A directory inside some other repository, or in no repository at all, is
    not a root. Any other failure, including a .git file pointing at a missing
    gitdir, raises GitError.
    """
    args = ["rev-parse", "--show-toplevel"]
    result = _run_git(repo_path, args, timeout=timeout)
    if result.returncode != 0:
        if NOT_A_REPO in result.stderr:
            return False
        raise GitError(_error_text(result, args))

    toplevel = result.stdout.strip()
    if not toplevel:
        return False
    return os.path.realpath(toplevel) == os.path.realpath(repo_path)


def fetch(repo_path: str, timeout: float = DEFAULT_TIMEOUT) -> None:
    """Fetch from the default remote. Repos without remotes succeed trivially."""
    _check_git(repo_path, ["fetch", "--quiet"], timeout=timeout)


def parse_status(output: str) -> GitStatus:
    """Parse ``git status --porcelain=v2 --branch`` output."""
    status = GitStatus()
    for line in output.splitlines():
        if line.startswith("# branch.head "):
            status.branch = line[len("# branch.head "):]
        elif line.startswith("# branch.upstream "):
            status.upstream = line[len("# branch.upstream "):]
        elif line.startswith("# branch.ab "):
            # "# branch.ab +<ahead> -<behind>"
            parts = line.split()
            if len(parts) == 4:
                status.ahead = abs(int(parts[2]))
                status.behind = abs(int(parts[3]))
        elif line.startswith(("1 ", "2 ")):
            xy = line[2:4]
            if xy[0] != ".":
                status.staged += 1
            if xy[1] != ".":
                status.unstaged += 1
        elif line.startswith("u "):
            status.staged += 1
            status.unstaged += 1
        elif line.startswith("? "):
            status.untracked += 1
    return status


def get_status(repo_path: str, timeout: float = DEFAULT_TIMEOUT) -> GitStatus:
    """Working-tree cleanliness and ahead/behind counts in one git call."""
    output = _check_git(repo_path, ["status", "--porcelain=v2", "--branch"], timeout=timeout)
    return parse_status(output)
