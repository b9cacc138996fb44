"""Repo discovery — find git working copies under a directory, up to a depth."""

from __future__ import annotations

import logging
import os

from checkd.record import RepoRecord

logger = logging.getLogger(__name__)

GIT_MARKER = ".git"


def _list_subdirs(path: str) -> list[os.DirEntry]:
    """Immediate subdirectories of path, sorted by name, minus .git itself."""
    with os.scandir(path) as it:
        entries = list(it)

    subdirs: list[os.DirEntry] = []
    for entry in entries:
        if entry.name == GIT_MARKER:
            continue
        try:
            # Symlinks are never followed, so link cycles can't happen
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry)
        except OSError:
            continue
    subdirs.sort(key=lambda e: e.name)
    return subdirs


def _collect(path: str, subdirs: list[os.DirEntry], depth_left: int) -> list[RepoRecord]:
    """Candidates at this level first, then everything found below each one."""
    candidates = [
        RepoRecord(name=d.name, path=d.path, location=path) for d in subdirs
    ]
    depth_left -= 1

    deeper: list[RepoRecord] = []
    if depth_left > 0:
        for d in subdirs:
            deeper = deeper + _walk(d.path, depth_left)

    return [c for c in candidates if is_repo_candidate(c.path)] + deeper


def _walk(path: str, depth_left: int) -> list[RepoRecord]:
    try:
        subdirs = _list_subdirs(path)
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", path, exc)
        return []
    return _collect(path, subdirs, depth_left)


def is_repo_candidate(path: str) -> bool:
    """A directory holding a .git entry (directory for clones, file for worktrees)."""
    return os.path.lexists(os.path.join(path, GIT_MARKER))


def find_repos(root: str, recursive: bool = False, max_depth: int = 4) -> list[RepoRecord]:
    """Find directories under root that contain a .git marker.

    Only immediate children are considered unless ``recursive`` is set, in which
    case every subdirectory is descended into, repositories included, down to
    ``max_depth`` levels below root. Results come back in display order: a
    directory's own repo children before anything found deeper inside them.

    Raises OSError when root itself can't be listed; unreadable subdirectories
    are skipped with a warning.
    """
    root = os.path.expanduser(root)
    root = os.path.abspath(root)
    depth = max(max_depth, 1) if recursive else 1

    # Errors on the root propagate: there is nothing to scan
    repos = _collect(root, _list_subdirs(root), depth)
    logger.debug("Discovered %d repo candidates under %s (depth %d)", len(repos), root, depth)
    return repos
