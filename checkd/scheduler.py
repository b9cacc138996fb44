"""Bounded-concurrency driver — run a check over every record, K at a time."""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Optional, Sequence

from checkd.record import RepoRecord

logger = logging.getLogger(__name__)

CheckFn = Callable[[RepoRecord], object]


def run_checks(
    records: Sequence[RepoRecord],
    check: CheckFn,
    max_concurrent: int = 4,
    on_complete: Optional[Callable[[RepoRecord], None]] = None,
) -> None:
    """Run ``check`` over records in order with at most max_concurrent in flight.

    A new record is admitted as soon as any running check finishes, not
    necessarily the oldest one. ``on_complete`` runs on the calling thread after
    each completion. Returns once every record is checked.
    """
    if max_concurrent < 1:
        raise ValueError(f"max_concurrent must be at least 1, got {max_concurrent}")
    if not records:
        return

    pending = iter(records)
    in_flight: dict[Future, RepoRecord] = {}

    with ThreadPoolExecutor(max_workers=max_concurrent) as executor:

        def admit() -> None:
            while len(in_flight) < max_concurrent:
                record = next(pending, None)
                if record is None:
                    return
                in_flight[executor.submit(check, record)] = record

        admit()
        while in_flight:
            done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
            for future in done:
                record = in_flight.pop(future)
                try:
                    future.result()
                except Exception as exc:
                    logger.error("Check crashed for %s: %s", record.path, exc)
                    record.error = True
                    record.error_msg = str(exc) or type(exc).__name__
                record.checked = True
                # Refill the freed slot before reporting
                admit()
                if on_complete is not None:
                    on_complete(record)
