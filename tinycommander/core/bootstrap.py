"""Terminal bootstrap helpers for Tiny Commander startup."""

import curses
import logging

from ..constants import INPUT_TIMEOUT_MS, MIN_TERM_HEIGHT, MIN_TERM_WIDTH

LOGGER = logging.getLogger(__name__)


def configure_terminal(stdscr, timeout_ms=INPUT_TIMEOUT_MS):
    """Apply core curses terminal setup."""
    try:
        curses.curs_set(0)
    except curses.error:
        LOGGER.debug('terminal does not support hiding the cursor')
    curses.noecho()
    curses.cbreak()
    stdscr.keypad(True)
    stdscr.nodelay(False)
    stdscr.timeout(timeout_ms)


def validate_terminal_size(stdscr):
    """Fail fast when the terminal cannot fit two panels and the key bar."""
    h, w = stdscr.getmaxyx()
    if h < MIN_TERM_HEIGHT or w < MIN_TERM_WIDTH:
        raise ValueError(
            f'Terminal too small ({w}x{h}). '
            f'Minimum supported size is {MIN_TERM_WIDTH}x{MIN_TERM_HEIGHT}.'
        )
