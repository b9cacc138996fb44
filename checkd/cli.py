"""CLI entry point for checkd."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import Optional

from rich.console import Console

from checkd import __version__
from checkd.checker import check_repo
from checkd.config import DEFAULT_MAX_CONCURRENT, DEFAULT_MAX_DEPTH, ScanOptions
from checkd.git import DEFAULT_TIMEOUT
from checkd.record import RepoRecord
from checkd.reporter import Reporter, Summary, summarize
from checkd.scanner import find_repos
from checkd.scheduler import run_checks

logger = logging.getLogger("checkd")


class ScanError(Exception):
    """The search root could not be read."""


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def make_console(color: bool = True) -> Console:
    """Console for report output; long lines are never wrapped."""
    return Console(
        no_color=not color,
        color_system="auto" if color else None,
        highlight=False,
        soft_wrap=True,
    )


def run_scan(
    options: ScanOptions,
    reporter: Optional[Reporter] = None,
) -> tuple[list[RepoRecord], Summary]:
    """Discover and check every repo under options.path.

    With a reporter, lines are printed as checks complete and the summary is
    printed at the end. Raises ScanError when the search root can't be read.
    """
    start = time.monotonic()
    try:
        records = find_repos(options.path, recursive=options.recursive, max_depth=options.max_depth)
    except OSError as exc:
        raise ScanError(f"cannot scan {options.path}: {exc}") from exc
    if reporter is not None:
        reporter.announce(records)

    check_options = options.check_options()
    run_checks(
        records,
        lambda record: check_repo(record, check_options),
        max_concurrent=options.max_concurrent,
        on_complete=(lambda _: reporter.on_progress(records)) if reporter else None,
    )

    elapsed = time.monotonic() - start
    if reporter is not None:
        summary = reporter.finalize(records, elapsed)
    else:
        summary = summarize(records, elapsed)
    logger.debug("Checked %d repos in %.3fs", summary.total, elapsed)
    return records, summary


def print_report(options: ScanOptions) -> Summary:
    """Print incremental results and the summary to stdout."""
    reporter = Reporter(make_console(options.color), only_unclean=options.only_unclean)
    _, summary = run_scan(options, reporter)
    return summary


def print_json(options: ScanOptions) -> Summary:
    """Dump every record and the summary as JSON to stdout."""
    records, summary = run_scan(options)
    data = {
        "path": options.path,
        "summary": summary.to_dict(),
        "repos": [r.to_dict() for r in records],
    }
    print(json.dumps(data, indent=2))
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checkd",
        description="Find git repositories and report which are unclean or out of sync.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to search (default: current directory)",
    )
    parser.add_argument(
        "-p", "--path",
        dest="path_opt",
        metavar="PATH",
        help="Directory to search; same as the positional argument",
    )
    parser.add_argument(
        "-c", "--concurrency",
        metavar="N",
        help=f"Max repositories checked at once (default: {DEFAULT_MAX_CONCURRENT})",
    )
    parser.add_argument(
        "-a", "--all",
        action="store_true",
        dest="show_all",
        help="Show all repositories, even clean and synced ones",
    )
    parser.add_argument(
        "-l", "--list",
        action="store_true",
        dest="list_only",
        help="Only list repositories; don't fetch or read status",
    )
    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Search subdirectories recursively",
    )
    parser.add_argument(
        "--max-depth",
        metavar="N",
        help=f"Recursion depth with -r (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Don't fetch; still reads git status",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Don't use colors",
    )
    parser.add_argument(
        "--timeout",
        metavar="SECONDS",
        help=f"Per git command timeout (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each check to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"checkd {__version__}",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the checkd CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    options = ScanOptions.from_args(args)

    try:
        if options.json_output:
            print_json(options)
        else:
            print_report(options)
    except ScanError as exc:
        parser.exit(2, f"checkd: error: {exc}\n")


if __name__ == "__main__":
    main()
