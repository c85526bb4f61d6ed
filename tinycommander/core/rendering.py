"""Rendering helpers for Tiny Commander."""

import curses

from ..constants import (
    APP_NAME,
    APP_VERSION,
    FOOTER_HEIGHT,
    HEADER_HEIGHT,
    KEY_BAR_LABELS,
    PANEL_CHROME_ROWS,
    SORT_ASCENDING_MARK,
    SORT_DESCENDING_MARK,
)
from ..utils import draw_box, fit_text_to_cells, safe_addstr, theme_attr
from .listing import format_mtime, format_size

SIZE_COLUMN = 6
DATE_COLUMN = 16
PERMS_COLUMN = 10
WIDE_PANEL_MIN = 48


def panel_height(screen_h):
    """Rows given to each panel box, borders included."""
    return max(0, screen_h - HEADER_HEIGHT - FOOTER_HEIGHT)


def panel_viewport_height(screen_h):
    """Entry rows visible inside a panel."""
    return max(1, panel_height(screen_h) - 2 - PANEL_CHROME_ROWS)


def sort_indicator(panel, use_unicode=True):
    """Return e.g. ``Name ▲`` for the panel's current ordering."""
    if use_unicode:
        mark = SORT_DESCENDING_MARK if panel.sort_descending else SORT_ASCENDING_MARK
    else:
        mark = 'v' if panel.sort_descending else '^'
    return f'{panel.sort_key.label} {mark}'


def format_entry_row(entry, width):
    """Lay out one entry as ``name  size  date  perms`` in ``width`` cells."""
    if width >= WIDE_PANEL_MIN:
        tail = ' '.join((
            format_size(entry.size, entry.is_directory).rjust(SIZE_COLUMN),
            format_mtime(entry.modified_time),
            entry.permissions,
        ))
    else:
        tail = format_size(entry.size, entry.is_directory).rjust(SIZE_COLUMN)
    name_w = max(1, width - len(tail) - 1)
    name = entry.name + '/' if entry.is_directory and not entry.is_parent else entry.name
    return fit_text_to_cells(fit_text_to_cells(name, name_w) + ' ' + tail, width)


def column_header(width):
    if width >= WIDE_PANEL_MIN:
        tail = 'Size'.rjust(SIZE_COLUMN) + ' ' + 'Modified'.ljust(DATE_COLUMN) + ' ' + 'Perms'.ljust(PERMS_COLUMN)
    else:
        tail = 'Size'.rjust(SIZE_COLUMN)
    name_w = max(1, width - len(tail) - 1)
    return fit_text_to_cells(fit_text_to_cells('Name', name_w) + ' ' + tail, width)


def _entry_attr(entry, selected, active):
    if selected and active:
        return theme_attr('selected') | curses.A_BOLD
    if selected:
        attr = curses.A_REVERSE
    else:
        attr = 0
    if entry.is_directory:
        return attr | theme_attr('directory') | curses.A_BOLD
    if entry.is_executable:
        return attr | theme_attr('executable')
    return attr | theme_attr('panel')


def draw_panel(stdscr, panel, y, x, h, w, active, use_unicode=True):
    """Draw one panel box with its path, sort mark and visible entries."""
    if h < 3 or w < 4:
        return
    body_attr = theme_attr('panel')
    for row in range(h):
        safe_addstr(stdscr, y + row, x, ' ' * w, body_attr)
    draw_box(stdscr, y, x, h, w, body_attr, double=active)

    inner_w = w - 2
    title_attr = theme_attr('panel_title' if active else 'panel_title_inactive')
    if active:
        title_attr |= curses.A_BOLD
    indicator = sort_indicator(panel, use_unicode)
    path_w = max(1, inner_w - len(indicator) - 1)
    path = panel.current_path
    if len(path) > path_w:
        path = '...' + path[-(path_w - 3):] if path_w > 3 else path[-path_w:]
    safe_addstr(stdscr, y + 1, x + 1, fit_text_to_cells(path, path_w) + ' ' + indicator, title_attr)
    safe_addstr(stdscr, y + 2, x + 1, column_header(inner_w), body_attr | curses.A_BOLD)

    viewport = max(1, h - 2 - PANEL_CHROME_ROWS)
    rows = panel.visible_entries(viewport)
    for offset, entry in enumerate(rows):
        index = panel.scroll_offset + offset
        attr = _entry_attr(entry, index == panel.selected_index, active)
        safe_addstr(stdscr, y + 1 + PANEL_CHROME_ROWS + offset, x + 1, format_entry_row(entry, inner_w), attr)


def draw_header(app):
    """Draw the top title bar."""
    _, w = app.stdscr.getmaxyx()
    attr = theme_attr('header') | curses.A_BOLD
    safe_addstr(app.stdscr, 0, 0, fit_text_to_cells(f' {APP_NAME} {APP_VERSION}', w), attr)


def draw_panels(app):
    """Draw both panels side by side."""
    h, w = app.stdscr.getmaxyx()
    top = HEADER_HEIGHT
    box_h = panel_height(h)
    left_w = w // 2
    right_w = w - left_w
    panels = app.dispatcher.panels
    draw_panel(app.stdscr, panels.left, top, 0, box_h, left_w,
               panels.active_panel is panels.left, app.use_unicode)
    draw_panel(app.stdscr, panels.right, top, left_w, box_h, right_w,
               panels.active_panel is panels.right, app.use_unicode)


def draw_key_bar(app):
    """Draw the function-key legend."""
    h, w = app.stdscr.getmaxyx()
    y = h - FOOTER_HEIGHT
    safe_addstr(app.stdscr, y, 0, ' ' * w, theme_attr('status'))
    x = 0
    for key, label in KEY_BAR_LABELS:
        if x + len(key) + len(label) + 1 >= w:
            break
        safe_addstr(app.stdscr, y, x, key, theme_attr('status') | curses.A_BOLD)
        safe_addstr(app.stdscr, y, x + len(key), label, theme_attr('button'))
        x += len(key) + len(label) + 1


def draw_statusbar(app):
    """Draw the active path and the last message."""
    h, w = app.stdscr.getmaxyx()
    attr = theme_attr('status')
    panel = app.dispatcher.panels.active_panel
    entry = panel.selected_entry
    count = max(0, len(panel.entries) - 1)
    status = f' {panel.current_path} | {count} items'
    if entry is not None and not entry.is_parent:
        status += f' | {entry.name}'
    safe_addstr(app.stdscr, h - 2, 0, fit_text_to_cells(status, w), attr)
    safe_addstr(app.stdscr, h - 1, 0, fit_text_to_cells(f' {app.message}', w), attr)
