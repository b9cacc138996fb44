"""Tests for the per-repository status check."""

import os

import pytest

from checkd import checker
from checkd.checker import CheckOptions, check_repo
from checkd.git import GitError
from checkd.record import RepoRecord
from gitrepo import commit_file, git, init_repo


def _record(path: str) -> RepoRecord:
    return RepoRecord(name=os.path.basename(path), path=path, location=os.path.dirname(path))


def test_check_clean_synced(tmp_path, make_tracking_clone):
    repo = make_tracking_clone(str(tmp_path / "repo"))
    record = check_repo(_record(repo), CheckOptions())
    assert record.checked is True
    assert record.is_git is True
    assert record.error is False
    assert record.clean is True
    assert (record.ahead, record.behind) == (0, 0)
    assert record.synced is True
    assert record.upstream is not None


def test_check_returns_same_record(tmp_path):
    record = _record(init_repo(str(tmp_path / "repo")))
    assert check_repo(record, CheckOptions(use_fetch=False)) is record


def test_check_ahead(tmp_path, make_tracking_clone):
    repo = make_tracking_clone(str(tmp_path / "repo"))
    commit_file(repo, "a.txt", "a\n", "Local 1")
    commit_file(repo, "b.txt", "b\n", "Local 2")
    record = check_repo(_record(repo), CheckOptions())
    assert (record.ahead, record.behind) == (2, 0)
    assert record.synced is False
    assert record.clean is True


def test_check_dirty(tmp_path):
    repo = init_repo(str(tmp_path / "repo"))
    with open(os.path.join(repo, "dirty.txt"), "w") as f:
        f.write("uncommitted\n")
    record = check_repo(_record(repo), CheckOptions(use_fetch=False))
    assert record.clean is False
    assert record.synced is True


def test_check_not_a_repo(tmp_path):
    plain = tmp_path / "plain"
    plain.mkdir()
    record = check_repo(_record(str(plain)), CheckOptions())
    assert record.is_git is False
    assert record.checked is True
    assert record.error is False
    assert record.clean is None
    assert record.synced is None


def test_check_fetch_failure(tmp_path):
    repo = init_repo(str(tmp_path / "repo"))
    git(repo, "remote", "add", "origin", str(tmp_path / "nowhere.git"))
    record = check_repo(_record(repo), CheckOptions())
    assert record.is_git is True
    assert record.error is True
    assert record.error_msg
    assert record.checked is True
    assert record.clean is None
    assert record.synced is None


def test_check_fetch_disabled_skips_bad_remote(tmp_path):
    repo = init_repo(str(tmp_path / "repo"))
    git(repo, "remote", "add", "origin", str(tmp_path / "nowhere.git"))
    record = check_repo(_record(repo), CheckOptions(use_fetch=False))
    assert record.error is False
    assert record.clean is True


def test_check_list_only(tmp_path):
    repo = init_repo(str(tmp_path / "repo"))
    record = check_repo(_record(repo), CheckOptions(use_fetch=False, use_status=False))
    assert record.is_git is True
    assert record.checked is True
    assert record.clean is None
    assert record.ahead is None
    assert record.synced is None


def test_check_existence_error_is_an_error(tmp_path):
    record = check_repo(_record(str(tmp_path / "missing")), CheckOptions())
    assert record.error is True
    assert record.is_git is None
    assert record.checked is True


def test_check_status_error(tmp_path, monkeypatch):
    repo = init_repo(str(tmp_path / "repo"))

    def broken_status(path, timeout):
        raise GitError("index.lock exists")

    monkeypatch.setattr(checker, "get_status", broken_status)
    record = check_repo(_record(repo), CheckOptions(use_fetch=False))
    assert record.error is True
    assert record.error_msg == "index.lock exists"
    assert record.checked is True


def test_check_unexpected_exception_leaves_record_unchecked(tmp_path, monkeypatch):
    def explode(path, timeout):
        raise RuntimeError("boom")

    monkeypatch.setattr(checker, "is_repo_root", explode)
    record = _record(str(tmp_path))
    with pytest.raises(RuntimeError):
        check_repo(record, CheckOptions())
    assert record.checked is False


def test_check_broken_gitfile_is_an_error(tmp_path):
    moved = tmp_path / "moved"
    moved.mkdir()
    (moved / ".git").write_text(f"gitdir: {tmp_path / 'gone' / 'worktrees' / 'wt'}\n")
    record = check_repo(_record(str(moved)), CheckOptions())
    assert record.error is True
    assert record.is_git is None
    assert record.checked is True
    assert "not a git repository" in record.error_msg
