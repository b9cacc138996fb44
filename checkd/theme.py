"""Shared visual constants and helpers for checkd output."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from checkd.record import RepoRecord

# ── Color Palette (GitHub Dark + Neon Accents) ──────────────────────────

MUTED = "#8b949e"
CYAN = "#58a6ff"
BLUE = "#1f6feb"
GREEN = "#39d353"
PURPLE = "#bc8cff"
YELLOW = "#e3b341"
RED = "#f85149"

LOCATION = MUTED
NAME = BLUE
PROP_NAME = GREEN
PROP_VALUE = PURPLE
PROGRESS = GREEN
LABEL = CYAN
VALUE = YELLOW

# ── Status Text ─────────────────────────────────────────────────────────

STATUS_ERROR = "Unexpected error occurred"
STATUS_NOT_GIT = "Directory is not git repository"
STATUS_SYNCED = "Repository is Synced"
STATUS_CLEAN = "Repository tree is clean"
STATUS_LISTED = "Repository found"
STATUS_DIRTY = "Repository tree is not clean"


def status_text(record: RepoRecord) -> str:
    """One-phrase verdict for a checked record."""
    if record.error:
        return STATUS_ERROR
    if not record.is_git:
        return STATUS_NOT_GIT
    if record.clean is None:
        return STATUS_LISTED
    if record.clean and record.synced:
        return STATUS_SYNCED
    if record.clean:
        return STATUS_CLEAN
    return STATUS_DIRTY


def status_color(record: RepoRecord) -> str:
    if not record.checked:
        return BLUE
    if record.error:
        return RED
    if not record.is_git:
        return MUTED
    if record.clean and record.synced:
        return GREEN
    if record.clean:
        return CYAN
    return YELLOW


# ── Line Helpers ────────────────────────────────────────────────────────

def label_value(label: str, value: object) -> Text:
    """Render ``label: value`` with the summary colors."""
    text = Text()
    text.append(f"{label}:", style=Style(color=LABEL))
    text.append(f" {value}", style=Style(color=VALUE, bold=True))
    return text
