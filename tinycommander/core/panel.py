"""
Panel state: one directory view with its cursor and sort settings.
"""
from __future__ import annotations

import logging
import os

from ..constants import DEFAULT_MAX_ENTRIES
from .errors import DirectoryUnreachable, DirectoryUnreadable
from .listing import Entry, list_directory
from .sorting import SortKey, sort_entries

LOGGER = logging.getLogger(__name__)


def compute_scroll_offset(selected_index: int, scroll_offset: int, viewport_height: int) -> int:
    """Return the scroll offset that keeps ``selected_index`` on screen.

    The previous offset is kept when the selection is already visible, so the
    view only moves when the cursor leaves it.
    """
    if viewport_height <= 0:
        return max(0, selected_index)
    if selected_index < scroll_offset:
        return max(0, selected_index)
    if selected_index >= scroll_offset + viewport_height:
        return selected_index - viewport_height + 1
    return max(0, scroll_offset)


class Panel:
    """One half of the dual-panel view."""

    def __init__(
        self,
        path: str,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        sort_key: SortKey = SortKey.NAME,
        sort_descending: bool = False,
    ) -> None:
        self.current_path = os.path.realpath(path)
        self.max_entries = max_entries
        self.sort_key = sort_key
        self.sort_descending = sort_descending
        self.entries: list[Entry] = []
        self.selected_index = 0
        self.scroll_offset = 0

    def __repr__(self) -> str:
        return f"Panel({self.current_path!r}, {len(self.entries)} entries)"

    # --- Selection ---

    @property
    def selected_entry(self) -> Entry | None:
        if 0 <= self.selected_index < len(self.entries):
            return self.entries[self.selected_index]
        return None

    @property
    def selected_path(self) -> str | None:
        entry = self.selected_entry
        if entry is None:
            return None
        return self.path_for(entry.name)

    def path_for(self, name: str) -> str:
        return os.path.join(self.current_path, name)

    def _clamp_selection(self) -> None:
        if not self.entries:
            self.selected_index = 0
            self.scroll_offset = 0
            return
        self.selected_index = max(0, min(self.selected_index, len(self.entries) - 1))

    def select_name(self, name: str) -> bool:
        """Move the cursor onto ``name``; return False when it is not listed."""
        for index, entry in enumerate(self.entries):
            if entry.name == name:
                self.selected_index = index
                return True
        return False

    def move_selection(self, delta: int) -> None:
        if not self.entries:
            return
        self.selected_index += delta
        self._clamp_selection()

    def select_first(self) -> None:
        self.move_selection(-len(self.entries))

    def select_last(self) -> None:
        self.move_selection(len(self.entries))

    def page(self, pages: int, viewport_height: int) -> None:
        self.move_selection(pages * max(1, viewport_height - 1))

    def visible_entries(self, viewport_height: int) -> list[Entry]:
        """Recompute the scroll offset and return the rows to draw."""
        self._clamp_selection()
        self.scroll_offset = compute_scroll_offset(
            self.selected_index, self.scroll_offset, viewport_height
        )
        return self.entries[self.scroll_offset:self.scroll_offset + max(0, viewport_height)]

    # --- Listing ---

    def _install(self, entries: list[Entry], keep_name: str | None) -> None:
        self.entries = sort_entries(entries, self.sort_key, self.sort_descending)
        if keep_name is None or not self.select_name(keep_name):
            self._clamp_selection()

    def _resort(self) -> None:
        entry = self.selected_entry
        self._install(self.entries, entry.name if entry else None)

    def refresh(self) -> None:
        """Re-read ``current_path``, keeping sort settings and the selection.

        On :class:`DirectoryUnreadable` the previous listing stays in place.
        """
        entry = self.selected_entry
        entries = list_directory(self.current_path, self.max_entries)
        self._install(entries, entry.name if entry else None)

    def navigate(self, target: str) -> None:
        """Change directory to ``target`` (absolute, or relative to this panel).

        Raises :class:`DirectoryUnreachable` and leaves the panel untouched
        when the target cannot be resolved or listed.
        """
        candidate = target if os.path.isabs(target) else os.path.join(self.current_path, target)
        resolved = os.path.realpath(candidate)
        if not os.path.isdir(resolved):
            raise DirectoryUnreachable(resolved)
        try:
            entries = list_directory(resolved, self.max_entries)
        except DirectoryUnreadable as exc:
            raise DirectoryUnreachable(resolved, exc.message) from exc

        previous = self.current_path
        self.current_path = resolved
        self.selected_index = 0
        self.scroll_offset = 0
        self._install(entries, None)
        LOGGER.debug("panel moved %s -> %s", previous, resolved)

    # --- Sorting ---

    def toggle_sort_key(self) -> None:
        self.sort_key = self.sort_key.next()
        self._resort()

    def toggle_sort_direction(self) -> None:
        self.sort_descending = not self.sort_descending
        self._resort()
