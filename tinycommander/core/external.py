"""Hand the terminal to an external viewer, editor or shell.

Curses program mode is saved and released before the child starts and is
restored on every exit path, including when the program cannot be launched.
"""

from __future__ import annotations

import contextlib
import curses
import logging
import shlex
import subprocess

LOGGER = logging.getLogger(__name__)

SHELL_BANNER = "Starting shell. Type 'exit' to return to Tiny Commander."
SHELL_RESUME_PROMPT = "Press Enter to return to Tiny Commander..."


def build_command(program, path=None):
    """Split a configured program (``"less -R"``) and append ``path``.

    The path is one argv element, so no quoting or shell is involved.
    """
    try:
        argv = shlex.split(program)
    except ValueError:
        argv = program.split()
    if path is not None:
        argv.append(path)
    return argv


@contextlib.contextmanager
def suspended_terminal(stdscr):
    """Leave curses mode for the duration of the block."""
    curses.def_prog_mode()
    curses.endwin()
    try:
        yield
    finally:
        try:
            curses.reset_prog_mode()
            if stdscr is not None:
                stdscr.refresh()
        except curses.error:
            LOGGER.exception("failed to restore terminal mode")


def run_external(stdscr, argv, cwd=None, *, wait_for_enter=False, banner=None):
    """Run ``argv`` in the foreground; return its exit status.

    Returns ``None`` when the program could not be started. Non-zero and
    signal exits are reported, not raised.
    """
    LOGGER.debug("running %s (cwd=%s)", argv, cwd)
    with suspended_terminal(stdscr):
        if banner:
            print(banner, flush=True)
        try:
            completed = subprocess.run(argv, cwd=cwd, check=False)
        except OSError as exc:
            LOGGER.warning("could not start %s: %s", argv[:1], exc)
            return None
        finally:
            if wait_for_enter:
                _wait_for_enter()
    if completed.returncode != 0:
        LOGGER.info("%s exited with status %s", argv[0], completed.returncode)
    return completed.returncode


def _wait_for_enter():
    try:
        input(SHELL_RESUME_PROMPT)
    except EOFError:
        pass
