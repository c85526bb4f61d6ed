"""
Directory listing: one bounded snapshot of a directory's entries.
"""
from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime

from ..constants import DEFAULT_MAX_ENTRIES
from .errors import DirectoryUnreadable

LOGGER = logging.getLogger(__name__)

PARENT_ENTRY_NAME = ".."


@dataclass(frozen=True)
class Entry:
    """One filesystem object as observed at listing time."""

    name: str
    size: int = 0
    mode: int = 0
    modified_time: float = 0.0
    is_directory: bool = False

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_ENTRY_NAME

    @property
    def is_executable(self) -> bool:
        return not self.is_directory and bool(self.mode & stat.S_IXUSR)

    @property
    def permissions(self) -> str:
        return format_permissions(self.mode, self.is_directory)


def format_permissions(mode: int, is_directory: bool = False) -> str:
    """Return the 10-character ``ls -l`` style permission string."""
    text = stat.filemode(mode)
    if is_directory and text[0] != "d":
        # The synthesized ".." may carry no type bits when its stat failed.
        text = "d" + text[1:]
    return text


def format_size(size: int, is_directory: bool = False) -> str:
    """Compact size column: ``<DIR>``, bytes, kibibytes or mebibytes."""
    if is_directory:
        return "<DIR>"
    if size < 1024:
        return f"{size:>5}B"
    if size < 1024 * 1024:
        return f"{size // 1024:>5}K"
    return f"{size // (1024 * 1024):>5}M"


def format_mtime(timestamp: float) -> str:
    try:
        return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        return "????-??-?? ??:??"


def _parent_entry(path: str) -> Entry:
    try:
        st = os.stat(path)
    except OSError:
        return Entry(PARENT_ENTRY_NAME, is_directory=True)
    return Entry(
        PARENT_ENTRY_NAME,
        size=st.st_size,
        mode=st.st_mode,
        modified_time=st.st_mtime,
        is_directory=True,
    )


def _stat_entry(path: str, name: str) -> Entry | None:
    full_path = os.path.join(path, name)
    try:
        st = os.stat(full_path)
    except OSError:
        # Vanished or dangling entries are not listed.
        return None
    return Entry(
        name,
        size=st.st_size,
        mode=st.st_mode,
        modified_time=st.st_mtime,
        is_directory=stat.S_ISDIR(st.st_mode),
    )


def list_directory(path: str, max_entries: int = DEFAULT_MAX_ENTRIES) -> list[Entry]:
    """Read ``path`` and return its entries, ``..`` first, unsorted.

    At most ``max_entries`` entries are returned (``..`` included); anything
    beyond the ceiling is dropped without error. Entries whose metadata
    cannot be read are skipped. Raises :class:`DirectoryUnreadable` when the
    directory itself cannot be enumerated.
    """
    if max_entries < 1:
        raise ValueError("max_entries must be at least 1")

    entries = [_parent_entry(path)]
    truncated = False
    try:
        with os.scandir(path) as scan:
            for item in scan:
                if item.name in (".", PARENT_ENTRY_NAME):
                    continue
                if len(entries) >= max_entries:
                    truncated = True
                    break
                entry = _stat_entry(path, item.name)
                if entry is not None:
                    entries.append(entry)
    except OSError as exc:
        raise DirectoryUnreadable(path, exc.strerror or None) from exc

    if truncated:
        LOGGER.warning("listing of %s truncated at %d entries", path, max_entries)
    else:
        LOGGER.debug("listed %s: %d entries", path, len(entries))
    return entries
