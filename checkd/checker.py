"""Per-repository status check: repository root check, optional fetch, optional status."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from checkd.git import DEFAULT_TIMEOUT, GitError, fetch, get_status, is_repo_root
from checkd.record import RepoRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOptions:
    use_fetch: bool = True
    use_status: bool = True
    timeout: float = DEFAULT_TIMEOUT  # per git call


def _run_steps(record: RepoRecord, options: CheckOptions) -> None:
    if not is_repo_root(record.path, timeout=options.timeout):
        record.is_git = False
        logger.debug("%s is not a repository root", record.path)
        return
    record.is_git = True

    if options.use_fetch:
        logger.debug("Fetching %s", record.path)
        fetch(record.path, timeout=options.timeout)

    if options.use_status:
        status = get_status(record.path, timeout=options.timeout)
        record.clean = status.clean
        record.ahead = status.ahead
        record.behind = status.behind
        record.upstream = status.upstream
        logger.debug(
            "%s: clean=%s ahead=%d behind=%d",
            record.path, status.clean, status.ahead, status.behind,
        )


def check_repo(record: RepoRecord, options: CheckOptions) -> RepoRecord:
    """Fill in a record's git state. Touches no record but the one given.

    Git failures at any step end up on the record as ``error``/``error_msg``
    instead of propagating, and the record is marked checked. Any other
    exception propagates with ``checked`` still False, leaving the caller to
    record the failure before the record can be reported.
    """
    try:
        _run_steps(record, options)
    except GitError as exc:
        record.error = True
        record.error_msg = str(exc)
        logger.debug("Check failed for %s: %s", record.path, exc)
    record.checked = True
    return record
