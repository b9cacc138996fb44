"""Run configuration: argparse results → validated, immutable options."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Optional

from checkd.checker import CheckOptions
from checkd.git import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT = 4
DEFAULT_MAX_DEPTH = 4


def coerce_int(value: object, default: int, name: str = "value", minimum: int = 1) -> int:
    """Parse a numeric flag, falling back to default when invalid or below minimum."""
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        logger.warning("Invalid %s %r, using default %d", name, value, default)
        return default
    if number < minimum:
        logger.warning("%s must be at least %d (got %d), using default %d", name, minimum, number, default)
        return default
    return number


def coerce_float(value: object, default: float, name: str = "value") -> float:
    """Like coerce_int for positive, finite floats."""
    if value is None:
        return default
    try:
        number = float(str(value).strip())
    except ValueError:
        logger.warning("Invalid %s %r, using default %g", name, value, default)
        return default
    if not (0 < number < float("inf")):
        logger.warning("%s must be a positive number (got %r), using default %g", name, value, default)
        return default
    return number


@dataclass(frozen=True)
class ScanOptions:
    """Immutable settings for one scan."""

    path: str = "."
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    only_unclean: bool = True
    use_fetch: bool = True
    use_status: bool = True
    recursive: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    color: bool = True
    timeout: float = DEFAULT_TIMEOUT
    json_output: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.max_concurrent < 1:
            raise ValueError(f"max_concurrent must be at least 1, got {self.max_concurrent}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

    def check_options(self) -> CheckOptions:
        return CheckOptions(
            use_fetch=self.use_fetch,
            use_status=self.use_status,
            timeout=self.timeout,
        )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> ScanOptions:
        """Build options from parsed CLI args; bad numbers fall back to defaults."""
        path: Optional[str] = args.path_opt or args.path or "."
        list_only = bool(args.list_only)
        return cls(
            path=path,
            max_concurrent=coerce_int(args.concurrency, DEFAULT_MAX_CONCURRENT, "concurrency"),
            only_unclean=not args.show_all,
            use_fetch=not (args.no_fetch or list_only),
            use_status=not list_only,
            recursive=bool(args.recursive),
            max_depth=coerce_int(args.max_depth, DEFAULT_MAX_DEPTH, "max depth"),
            color=not args.no_color,
            timeout=coerce_float(args.timeout, DEFAULT_TIMEOUT, "timeout"),
            json_output=bool(args.json_output),
            verbose=bool(args.verbose),
        )
