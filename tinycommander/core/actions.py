"""
Typed action contract between the key router, the dispatcher and the app.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    """Outcome kinds returned by the dispatcher to the app."""

    REFRESH = "refresh"
    ERROR = "error"
    WARNING = "warning"
    EXIT = "exit"
    SHOW_HELP = "show_help"
    REQUEST_MKDIR = "request_mkdir"


class AppAction(str, Enum):
    """Logical input events, already resolved from raw key codes."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    SWITCH_PANEL = "switch_panel"
    OPEN = "open"
    PARENT = "parent"
    VIEW = "view"
    EDIT = "edit"
    COPY = "copy"
    MOVE = "move"
    DELETE = "delete"
    MKDIR = "mkdir"
    CYCLE_SORT = "cycle_sort"
    INVERT_SORT = "invert_sort"
    REFRESH = "refresh"
    SHELL = "shell"
    COPY_PATH = "copy_path"
    HELP = "help"
    QUIT = "quit"


@dataclass(frozen=True)
class ActionResult:
    """Action message emitted by the dispatcher."""

    type: ActionType
    payload: Any = None
