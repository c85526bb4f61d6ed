"""
Command dispatcher: applies one logical input event to the panel pair.
"""
from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Callable, Optional

from .actions import ActionResult, ActionType, AppAction
from .clipboard import copy_text
from .config import AppConfig
from .errors import DirectoryUnreadable, FileOperationError, TinyCommanderError
from .external import SHELL_BANNER, build_command
from .file_operations import copy_file, delete_path, make_directory, move_file
from .listing import PARENT_ENTRY_NAME
from .panel import Panel

LOGGER = logging.getLogger(__name__)


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def other(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class PanelPair:
    """Exactly two panels and the selector of the active one."""

    def __init__(self, left: Panel, right: Panel, active: Side = Side.LEFT) -> None:
        self.left = left
        self.right = right
        self.active = active

    def panel(self, side: Side) -> Panel:
        return self.left if side is Side.LEFT else self.right

    @property
    def active_panel(self) -> Panel:
        return self.panel(self.active)

    @property
    def inactive_panel(self) -> Panel:
        return self.panel(self.active.other)

    def __iter__(self):
        return iter((self.left, self.right))


class CommandDispatcher:
    """Maps logical events to panel mutations and file operations.

    ``run_external(argv, cwd=None, *, wait_for_enter=False, banner=None)``
    runs a foreground program and returns its exit status, or ``None`` when
    it could not be started. The dispatcher is the only owner of
    ``panels.active``.
    """

    def __init__(
        self,
        panels: PanelPair,
        *,
        config: AppConfig,
        run_external: Callable[..., Optional[int]],
        clipboard: Callable[[str], bool] = copy_text,
    ) -> None:
        self.panels = panels
        self.config = config
        self.run_external = run_external
        self.clipboard = clipboard
        self.viewport_height = 20
        self._handlers = {
            AppAction.MOVE_UP: lambda _: self._move(-1),
            AppAction.MOVE_DOWN: lambda _: self._move(1),
            AppAction.PAGE_UP: lambda _: self._page(-1),
            AppAction.PAGE_DOWN: lambda _: self._page(1),
            AppAction.HOME: lambda _: self._jump(last=False),
            AppAction.END: lambda _: self._jump(last=True),
            AppAction.SWITCH_PANEL: lambda _: self.switch_panel(),
            AppAction.OPEN: lambda _: self.open_selected(),
            AppAction.PARENT: lambda _: self._navigate(PARENT_ENTRY_NAME),
            AppAction.VIEW: lambda _: self.view_selected(),
            AppAction.EDIT: lambda _: self.edit_selected(),
            AppAction.COPY: lambda _: self.copy_selected(),
            AppAction.MOVE: lambda _: self.move_selected(),
            AppAction.DELETE: lambda _: self.delete_selected(),
            AppAction.MKDIR: self.make_directory,
            AppAction.CYCLE_SORT: lambda _: self._sort(self.panels.active_panel.toggle_sort_key),
            AppAction.INVERT_SORT: lambda _: self._sort(self.panels.active_panel.toggle_sort_direction),
            AppAction.REFRESH: lambda _: self.refresh_all(),
            AppAction.SHELL: lambda _: self.open_shell(),
            AppAction.COPY_PATH: lambda _: self.copy_selected_path(),
            AppAction.HELP: lambda _: ActionResult(ActionType.SHOW_HELP),
            AppAction.QUIT: lambda _: ActionResult(ActionType.EXIT),
        }

    def dispatch(self, action: AppAction, payload=None) -> Optional[ActionResult]:
        handler = self._handlers.get(action)
        if handler is None:
            LOGGER.debug("no handler for %r", action)
            return None
        return handler(payload)

    # --- Helpers ---

    @staticmethod
    def _error(exc: TinyCommanderError) -> ActionResult:
        return ActionResult(ActionType.ERROR, str(exc))

    def _refresh(self, *panels: Panel) -> list[str]:
        problems = []
        for panel in panels:
            try:
                panel.refresh()
            except DirectoryUnreadable as exc:
                LOGGER.warning("refresh failed: %s", exc)
                problems.append(str(exc))
        return problems

    def _after_operation(self, result: ActionResult, *panels: Panel) -> ActionResult:
        problems = self._refresh(*panels)
        if not problems:
            return result
        messages = [result.payload, *problems] if result.payload else problems
        kind = result.type if result.type in (ActionType.ERROR, ActionType.WARNING) else ActionType.ERROR
        return ActionResult(kind, "\n".join(messages))

    def _operation_source(self, verb: str):
        entry = self.panels.active_panel.selected_entry
        if entry is None:
            return None, ActionResult(ActionType.ERROR, "No item selected.")
        if entry.is_parent:
            return None, ActionResult(ActionType.ERROR, f"Cannot {verb} the parent entry.")
        return entry, None

    @staticmethod
    def _check_destination(entry, src: str, dst: str) -> Optional[ActionResult]:
        real_src = os.path.normcase(os.path.realpath(src))
        real_dst = os.path.normcase(os.path.realpath(dst))
        if real_src == real_dst:
            return ActionResult(ActionType.ERROR, "Source and destination are the same.")
        if entry.is_directory and real_dst.startswith(real_src + os.sep):
            return ActionResult(ActionType.ERROR, "Cannot move a directory into itself.")
        if os.path.lexists(dst):
            return ActionResult(ActionType.ERROR, f"Destination exists: {entry.name}")
        return None

    # --- Navigation ---

    def switch_panel(self) -> ActionResult:
        self.panels.active = self.panels.active.other
        return ActionResult(ActionType.REFRESH)

    def _move(self, delta: int) -> ActionResult:
        self.panels.active_panel.move_selection(delta)
        return ActionResult(ActionType.REFRESH)

    def _page(self, pages: int) -> ActionResult:
        self.panels.active_panel.page(pages, self.viewport_height)
        return ActionResult(ActionType.REFRESH)

    def _jump(self, last: bool) -> ActionResult:
        panel = self.panels.active_panel
        if last:
            panel.select_last()
        else:
            panel.select_first()
        return ActionResult(ActionType.REFRESH)

    def _navigate(self, target: str) -> ActionResult:
        try:
            self.panels.active_panel.navigate(target)
        except FileOperationError as exc:
            return self._error(exc)
        return ActionResult(ActionType.REFRESH)

    def _sort(self, toggle: Callable[[], None]) -> ActionResult:
        toggle()
        return ActionResult(ActionType.REFRESH)

    def refresh_all(self) -> ActionResult:
        return self._after_operation(ActionResult(ActionType.REFRESH), *self.panels)

    def open_selected(self) -> Optional[ActionResult]:
        entry = self.panels.active_panel.selected_entry
        if entry is None:
            return None
        if entry.is_directory:
            return self._navigate(entry.name)
        return self.view_selected()

    # --- External programs ---

    def _run_on_selection(self, program: str, label: str, *refresh: Panel) -> Optional[ActionResult]:
        panel = self.panels.active_panel
        entry = panel.selected_entry
        if entry is None or entry.is_directory:
            return None
        argv = build_command(program, panel.path_for(entry.name))
        status = self.run_external(argv, cwd=panel.current_path)
        if status is None:
            return ActionResult(ActionType.ERROR, f"Cannot start {label}: {program}")
        return self._after_operation(ActionResult(ActionType.REFRESH), *refresh)

    def view_selected(self) -> Optional[ActionResult]:
        return self._run_on_selection(self.config.pager, "viewer")

    def edit_selected(self) -> Optional[ActionResult]:
        return self._run_on_selection(self.config.editor, "editor", self.panels.active_panel)

    def open_shell(self) -> ActionResult:
        cwd = self.panels.active_panel.current_path
        status = self.run_external(
            build_command(self.config.shell),
            cwd=cwd,
            wait_for_enter=True,
            banner=SHELL_BANNER,
        )
        if status is None:
            return ActionResult(ActionType.ERROR, f"Cannot start shell: {self.config.shell}")
        return self.refresh_all()

    # --- File operations ---

    def copy_selected(self) -> ActionResult:
        entry, error = self._operation_source("copy")
        if error:
            return error
        if entry.is_directory:
            return ActionResult(ActionType.ERROR, f"Cannot copy directories: {entry.name}")
        source_panel = self.panels.active_panel
        target_panel = self.panels.inactive_panel
        src = source_panel.path_for(entry.name)
        dst = target_panel.path_for(entry.name)
        error = self._check_destination(entry, src, dst)
        if error:
            return error

        try:
            copy_file(src, dst)
        except FileOperationError as exc:
            result = self._error(exc)
        else:
            result = ActionResult(ActionType.REFRESH, f"Copied {entry.name}")
        return self._after_operation(result, target_panel)

    def move_selected(self) -> ActionResult:
        entry, error = self._operation_source("move")
        if error:
            return error
        source_panel = self.panels.active_panel
        target_panel = self.panels.inactive_panel
        src = source_panel.path_for(entry.name)
        dst = target_panel.path_for(entry.name)
        error = self._check_destination(entry, src, dst)
        if error:
            return error

        try:
            outcome = move_file(src, dst)
        except FileOperationError as exc:
            result = self._error(exc)
        else:
            if outcome.source_removed:
                result = ActionResult(ActionType.REFRESH, f"Moved {entry.name}")
            else:
                result = ActionResult(
                    ActionType.WARNING,
                    f"Copied {entry.name}, but the source could not be removed:\n{outcome.source_error}",
                )
        return self._after_operation(result, source_panel, target_panel)

    def delete_selected(self) -> ActionResult:
        entry, error = self._operation_source("delete")
        if error:
            return error
        panel = self.panels.active_panel
        try:
            delete_path(panel.path_for(entry.name))
        except FileOperationError as exc:
            result = self._error(exc)
        else:
            result = ActionResult(ActionType.REFRESH, f"Deleted {entry.name}")
        return self._after_operation(result, panel)

    def make_directory(self, name=None) -> ActionResult:
        if name is None:
            return ActionResult(ActionType.REQUEST_MKDIR)
        panel = self.panels.active_panel
        try:
            path = make_directory(panel.current_path, name)
        except FileOperationError as exc:
            return self._after_operation(self._error(exc), panel)
        result = self._after_operation(ActionResult(ActionType.REFRESH, f"Created {name.strip()}"), panel)
        panel.select_name(os.path.basename(path))
        return result

    def copy_selected_path(self) -> Optional[ActionResult]:
        panel = self.panels.active_panel
        entry = panel.selected_entry
        if entry is None:
            return None
        path = panel.current_path if entry.is_parent else panel.path_for(entry.name)
        if not self.clipboard(path):
            return ActionResult(ActionType.ERROR, "System clipboard is not available.")
        return ActionResult(ActionType.REFRESH, f"Copied path: {path}")
