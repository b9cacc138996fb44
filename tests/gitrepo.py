"""Helpers for building real git repositories in temp directories."""

import os
import subprocess


def git(path: str, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", path, *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def _set_identity(path: str) -> None:
    git(path, "config", "user.email", "test@test.com")
    git(path, "config", "user.name", "Test User")
    git(path, "config", "commit.gpgsign", "false")


def commit_file(path: str, name: str, content: str, message: str) -> None:
    with open(os.path.join(path, name), "w") as f:
        f.write(content)
    git(path, "add", name)
    git(path, "commit", "-m", message)


def init_repo(path: str) -> str:
    """Create a repo with one commit and a local identity."""
    os.makedirs(path, exist_ok=True)
    git(path, "init", "--quiet")
    _set_identity(path)
    commit_file(path, "README.md", "# Test\n", "Initial commit")
    return path


def clone_repo(remote: str, dest: str) -> str:
    """Clone remote into dest; the clone tracks the remote's default branch."""
    subprocess.run(["git", "clone", "--quiet", remote, dest], capture_output=True, check=True)
    _set_identity(dest)
    return dest


def make_bare_remote(remotes_dir: str, name: str) -> str:
    source = init_repo(os.path.join(remotes_dir, f"{name}-src"))
    bare = os.path.join(remotes_dir, f"{name}.git")
    subprocess.run(["git", "clone", "--quiet", "--bare", source, bare], capture_output=True, check=True)
    return bare
