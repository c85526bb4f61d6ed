"""
Sort engine for panel listings.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable

from .listing import Entry


class SortKey(str, Enum):
    """Per-panel sort criterion."""

    NAME = "name"
    SIZE = "size"
    MODIFIED = "modified"

    @property
    def label(self) -> str:
        return _LABELS[self]

    def next(self) -> "SortKey":
        """Cycle Name -> Size -> Modified -> Name."""
        order = list(SortKey)
        return order[(order.index(self) + 1) % len(order)]


_LABELS = {
    SortKey.NAME: "Name",
    SortKey.SIZE: "Size",
    SortKey.MODIFIED: "Date",
}


def _key_value(entry: Entry, key: SortKey):
    if key is SortKey.SIZE:
        return entry.size
    if key is SortKey.MODIFIED:
        return entry.modified_time
    # Exact name breaks case-only ties so descending is the exact reverse.
    return entry.name.casefold(), entry.name


def sort_entries(
    entries: Iterable[Entry],
    key: SortKey = SortKey.NAME,
    descending: bool = False,
) -> list[Entry]:
    """Return a new, stably sorted list.

    ``..`` is pinned first and never compared. Directories always precede
    files; ``descending`` only inverts the key comparison inside each group.
    """
    parents = []
    directories = []
    files = []
    for entry in entries:
        if entry.is_parent:
            parents.append(entry)
        elif entry.is_directory:
            directories.append(entry)
        else:
            files.append(entry)

    # sorted(reverse=True) keeps ties in their original order.
    directories = sorted(directories, key=lambda e: _key_value(e, key), reverse=descending)
    files = sorted(files, key=lambda e: _key_value(e, key), reverse=descending)
    return parents[:1] + directories + files
