"""Main loop helpers for Tiny Commander."""

import curses

from .rendering import (
    draw_header,
    draw_key_bar,
    draw_panels,
    draw_statusbar,
    panel_viewport_height,
)


def draw_frame(app):
    """Render a full frame before reading input."""
    app.stdscr.erase()
    h, _ = app.stdscr.getmaxyx()
    app.dispatcher.viewport_height = panel_viewport_height(h)

    draw_header(app)
    draw_panels(app)
    draw_key_bar(app)
    draw_statusbar(app)

    if app.dialog:
        app.dialog.draw(app.stdscr)

    app.stdscr.noutrefresh()
    curses.doupdate()


def read_input_key(stdscr):
    """Read one key from curses, returning None on timeout/no input."""
    try:
        return stdscr.get_wch()
    except curses.error:
        return None


def dispatch_input(app, key):
    """Dispatch one input event."""
    if key is None:
        return

    if isinstance(key, int) and key == curses.KEY_RESIZE:
        update = getattr(curses, 'update_lines_cols', None)
        if callable(update):
            update()
        return

    app.handle_key(key)


def run_app_loop(app):
    """Run main draw/input loop with terminal cleanup on exit."""
    try:
        while app.running:
            draw_frame(app)
            key = read_input_key(app.stdscr)
            dispatch_input(app, key)
    finally:
        app.cleanup()
