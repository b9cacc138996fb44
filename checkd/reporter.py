"""Progress and summary output — order-stable lines as checks complete."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Sequence

from rich.console import Console
from rich.style import Style
from rich.text import Text

from checkd.record import RepoRecord
from checkd.theme import (
    LOCATION,
    NAME,
    PROGRESS,
    PROP_NAME,
    PROP_VALUE,
    label_value,
    status_color,
    status_text,
)


@dataclass
class Summary:
    synced: int = 0
    unsynced: int = 0
    unclean: int = 0
    errored: int = 0
    total: int = 0
    elapsed: float = 0.0

    def to_dict(self) -> dict:
        return {
            "synced": self.synced,
            "unsynced": self.unsynced,
            "unclean": self.unclean,
            "errored": self.errored,
            "total": self.total,
            "elapsed": round(self.elapsed, 3),
        }


def summarize(records: Sequence[RepoRecord], elapsed: float = 0.0) -> Summary:
    """Aggregate counts over checked records.

    Errored records only count as errored; their clean/synced state is unknown.
    """
    return Summary(
        synced=sum(1 for r in records if r.clean is True and r.synced is True),
        unsynced=sum(1 for r in records if r.synced is False),
        unclean=sum(1 for r in records if r.is_git and not r.error and r.clean is False),
        errored=sum(1 for r in records if r.error),
        total=sum(1 for r in records if r.checked),
        elapsed=elapsed,
    )


def is_hidden(record: RepoRecord, only_unclean: bool) -> bool:
    """Whether the only-unclean filter drops this record from progress output."""
    if not only_unclean or record.error:
        return False
    if not record.is_git:
        return True
    return bool(record.clean and record.synced)


def record_props(record: RepoRecord) -> list[tuple[str, object]]:
    if record.error:
        return [("Error", record.error_msg)]
    if not record.is_git:
        return [("isGit", False)]

    props: list[tuple[str, object]] = []
    if record.ahead is not None and record.behind is not None:
        if record.ahead > 0 or record.behind > 0:
            props.append(("Ahead", record.ahead))
            props.append(("Behind", record.behind))
    if record.clean is not None:
        props.append(("Clean", record.clean))
        props.append(("Synced", record.synced))
    return props


def format_record(record: RepoRecord) -> Text:
    """``<location>/<name> - <status>: <Prop>: <value> ...`` as styled text."""
    text = Text()
    text.append(os.path.join(record.location, ""), style=Style(color=LOCATION))
    text.append(record.name, style=Style(color=NAME))
    text.append(" - ")
    text.append(status_text(record), style=Style(color=status_color(record)))
    text.append(":")
    for prop, value in record_props(record):
        text.append(" ")
        text.append(prop, style=Style(color=PROP_NAME))
        text.append(": ")
        text.append(str(value), style=Style(color=PROP_VALUE))
    return text


class Reporter:
    """Writes per-record lines in discovery order, then the run summary.

    Checks finish in any order, but a record is only written once every
    record before it has been checked too, so output is the same on every run.
    """

    def __init__(self, console: Optional[Console] = None, only_unclean: bool = True):
        self.console = console or Console()
        self.only_unclean = only_unclean

    def announce(self, records: Sequence[RepoRecord]) -> None:
        self.console.print(label_value("Found candidates", len(records)))

    def on_progress(self, records: Sequence[RepoRecord]) -> list[RepoRecord]:
        """Emit every newly reportable record; returns the records emitted."""
        total = len(records)
        checked = sum(1 for r in records if r.checked)
        emitted: list[RepoRecord] = []

        for record in records:
            if not record.checked:
                break
            if record.seen:
                continue
            record.seen = True
            if is_hidden(record, self.only_unclean):
                continue
            line = Text(f"[{checked}/{total}]", style=Style(color=PROGRESS))
            line.append(" ")
            line.append_text(format_record(record))
            self.console.print(line)
            emitted.append(record)
        return emitted

    def finalize(self, records: Sequence[RepoRecord], elapsed: float) -> Summary:
        summary = summarize(records, elapsed)
        self.console.print()
        self.console.print(label_value("Synced repositories", summary.synced))
        self.console.print(label_value("Unsynced repositories", summary.unsynced))
        self.console.print(label_value("Unclean repositories", summary.unclean))
        self.console.print(label_value("Error repositories", summary.errored))
        self.console.print(label_value("Total checked", summary.total))
        self.console.print(label_value("Time taken", f"{summary.elapsed:.3f}s"))
        return summary
