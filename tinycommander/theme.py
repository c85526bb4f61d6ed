"""Theme definitions and lookup helpers for Tiny Commander."""

from dataclasses import dataclass
import curses
from typing import Optional

from .constants import (
    C_BUTTON,
    C_BUTTON_SEL,
    C_DIALOG,
    C_DIRECTORY,
    C_ERROR,
    C_EXECUTABLE,
    C_HEADER,
    C_PANEL,
    C_PANEL_TITLE,
    C_PANEL_TITLE_INACTIVE,
    C_SELECTED,
    C_STATUS,
)

# Test doubles may expose only a subset of color constants.
for _name, _fallback in {
    "COLOR_BLACK": 0,
    "COLOR_RED": 1,
    "COLOR_BLUE": 4,
    "COLOR_CYAN": 6,
    "COLOR_GREEN": 2,
    "COLOR_WHITE": 7,
    "COLOR_YELLOW": 3,
}.items():
    if not hasattr(curses, _name):
        setattr(curses, _name, _fallback)

DEFAULT_THEME = "classic"

ROLE_TO_PAIR_ID = {
    "panel": C_PANEL,
    "header": C_HEADER,
    "directory": C_DIRECTORY,
    "executable": C_EXECUTABLE,
    "error": C_ERROR,
    "selected": C_SELECTED,
    "panel_title": C_PANEL_TITLE,
    "panel_title_inactive": C_PANEL_TITLE_INACTIVE,
    "dialog": C_DIALOG,
    "button": C_BUTTON,
    "button_selected": C_BUTTON_SEL,
    "status": C_STATUS,
}


def _mk_pairs(fg_bg):
    return {
        "panel": fg_bg[0],
        "header": fg_bg[1],
        "directory": fg_bg[2],
        "executable": fg_bg[3],
        "error": fg_bg[4],
        "selected": fg_bg[5],
        "panel_title": fg_bg[1],
        "panel_title_inactive": fg_bg[0],
        "dialog": fg_bg[6],
        "button": fg_bg[6],
        "button_selected": fg_bg[5],
        "status": fg_bg[7],
    }


@dataclass(frozen=True)
class Theme:
    """Named mapping of UI roles to (foreground, background) pairs."""

    key: str
    label: str
    pairs_base: dict[str, tuple[int, int]]


THEMES = {
    "classic": Theme(
        key="classic",
        label="Classic Blue",
        pairs_base=_mk_pairs(
            (
                (curses.COLOR_WHITE, curses.COLOR_BLUE),
                (curses.COLOR_BLACK, curses.COLOR_CYAN),
                (curses.COLOR_YELLOW, curses.COLOR_BLUE),
                (curses.COLOR_GREEN, curses.COLOR_BLUE),
                (curses.COLOR_WHITE, curses.COLOR_RED),
                (curses.COLOR_BLACK, curses.COLOR_WHITE),
                (curses.COLOR_BLACK, curses.COLOR_WHITE),
                (curses.COLOR_WHITE, curses.COLOR_BLACK),
            )
        ),
    ),
    "mono": Theme(
        key="mono",
        label="Monochrome",
        pairs_base=_mk_pairs(
            (
                (curses.COLOR_WHITE, curses.COLOR_BLACK),
                (curses.COLOR_BLACK, curses.COLOR_WHITE),
                (curses.COLOR_WHITE, curses.COLOR_BLACK),
                (curses.COLOR_WHITE, curses.COLOR_BLACK),
                (curses.COLOR_BLACK, curses.COLOR_WHITE),
                (curses.COLOR_BLACK, curses.COLOR_WHITE),
                (curses.COLOR_WHITE, curses.COLOR_BLACK),
                (curses.COLOR_BLACK, curses.COLOR_WHITE),
            )
        ),
    ),
    "hacker": Theme(
        key="hacker",
        label="Hacker",
        pairs_base=_mk_pairs(
            (
                (curses.COLOR_GREEN, curses.COLOR_BLACK),
                (curses.COLOR_BLACK, curses.COLOR_GREEN),
                (curses.COLOR_CYAN, curses.COLOR_BLACK),
                (curses.COLOR_YELLOW, curses.COLOR_BLACK),
                (curses.COLOR_BLACK, curses.COLOR_RED),
                (curses.COLOR_BLACK, curses.COLOR_GREEN),
                (curses.COLOR_GREEN, curses.COLOR_BLACK),
                (curses.COLOR_BLACK, curses.COLOR_GREEN),
            )
        ),
    ),
}


def list_themes():
    """Return themes in deterministic UI order."""
    order = ("classic", "mono", "hacker")
    return [THEMES[key] for key in order]


def get_theme(theme_key: Optional[str]) -> Theme:
    """Resolve theme by key with fallback to default."""
    if not theme_key:
        return THEMES[DEFAULT_THEME]
    return THEMES.get(theme_key, THEMES[DEFAULT_THEME])
