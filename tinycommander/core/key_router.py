"""Keyboard routing helpers for Tiny Commander."""

import curses

from ..utils import normalize_key_code
from .actions import AppAction

CTRL_R = 18


def _key(name):
    return getattr(curses, name, -1)


def build_key_map():
    """Return the key-code to AppAction table for the panel view."""
    table = {
        _key('KEY_UP'): AppAction.MOVE_UP,
        _key('KEY_DOWN'): AppAction.MOVE_DOWN,
        _key('KEY_PPAGE'): AppAction.PAGE_UP,
        _key('KEY_NPAGE'): AppAction.PAGE_DOWN,
        _key('KEY_HOME'): AppAction.HOME,
        _key('KEY_END'): AppAction.END,
        9: AppAction.SWITCH_PANEL,  # Tab
        _key('KEY_LEFT'): AppAction.SWITCH_PANEL,
        10: AppAction.OPEN,
        13: AppAction.OPEN,
        _key('KEY_ENTER'): AppAction.OPEN,
        _key('KEY_BACKSPACE'): AppAction.PARENT,
        127: AppAction.PARENT,
        8: AppAction.PARENT,
        _key('KEY_F1'): AppAction.HELP,
        _key('KEY_F3'): AppAction.VIEW,
        _key('KEY_F4'): AppAction.EDIT,
        _key('KEY_F5'): AppAction.COPY,
        _key('KEY_F6'): AppAction.MOVE,
        _key('KEY_F7'): AppAction.MKDIR,
        _key('KEY_F8'): AppAction.DELETE,
        _key('KEY_F9'): AppAction.SHELL,
        _key('KEY_F10'): AppAction.QUIT,
        ord('q'): AppAction.QUIT,
        ord('Q'): AppAction.QUIT,
        ord('s'): AppAction.CYCLE_SORT,
        ord('r'): AppAction.INVERT_SORT,
        CTRL_R: AppAction.REFRESH,
        ord('y'): AppAction.COPY_PATH,
    }
    table.pop(-1, None)
    return table


def action_for_key(key, key_map=None):
    """Translate a raw get_wch()/getch() value into an AppAction or None."""
    key_code = normalize_key_code(key)
    if key_code is None:
        return None
    if key_map is None:
        key_map = build_key_map()
    return key_map.get(key_code)


def handle_key_event(app, key):
    """Handle keyboard input."""
    if app._handle_dialog_key(key):
        return

    action = action_for_key(key, app.key_map)
    if action is None:
        return
    app.execute_action(action)
