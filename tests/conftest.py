import os

import pytest

from gitrepo import clone_repo, make_bare_remote


@pytest.fixture
def remotes_dir(tmp_path):
    path = tmp_path / "remotes"
    path.mkdir()
    return str(path)


@pytest.fixture
def scan_dir(tmp_path):
    path = tmp_path / "scan"
    path.mkdir()
    return str(path)


@pytest.fixture
def make_tracking_clone(remotes_dir):
    """Factory: clone of a fresh bare remote, clean and in sync with it."""

    def _make(dest: str) -> str:
        bare = make_bare_remote(remotes_dir, os.path.basename(dest))
        return clone_repo(bare, dest)

    return _make


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch):
    """Keep rich from forcing ANSI codes into captured output."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    monkeypatch.setenv("COLUMNS", "200")
