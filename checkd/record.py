"""Per-directory state carried through discovery, checking and reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RepoRecord:
    name: str
    path: str
    location: str
    is_git: Optional[bool] = None   # None until checked
    checked: bool = False
    seen: bool = False              # emitted (or filtered out) by the reporter
    clean: Optional[bool] = None
    ahead: Optional[int] = None
    behind: Optional[int] = None
    upstream: Optional[str] = None
    error: bool = False
    error_msg: str = ""

    @property
    def synced(self) -> Optional[bool]:
        """True when there are no commits ahead of or behind the upstream.

        None when the status was never computed (list-only mode, non-git
        directory, or a failed check).
        """
        if self.error or self.ahead is None or self.behind is None:
            return None
        return self.ahead == 0 and self.behind == 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "location": self.location,
            "is_git": self.is_git,
            "checked": self.checked,
            "clean": None if self.error else self.clean,
            "synced": self.synced,
            "ahead": None if self.error else self.ahead,
            "behind": None if self.error else self.behind,
            "upstream": self.upstream,
            "error": self.error,
            "error_msg": self.error_msg,
        }
