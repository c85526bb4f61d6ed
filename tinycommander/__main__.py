"""
Entry point for Tiny Commander.
"""
import argparse
import curses
import locale
import logging
import os
from pathlib import Path

from . import __version__
from .core.app import TinyCommander
from .core.config import load_config
from .theme import list_themes

DEFAULT_LOG_PATH = Path('~/.cache/tinycommander/debug.log')

# Ensure UTF-8
try:
    locale.setlocale(locale.LC_ALL, '')
except locale.Error:
    pass


def configure_logging(environ=None):
    """Send DEBUG logs to a file when TINYCOMMANDER_DEBUG is set.

    The curses screen owns the terminal, so nothing is logged to stderr.
    Returns the log path, or None when logging stays disabled.
    """
    env = os.environ if environ is None else environ
    if not env.get('TINYCOMMANDER_DEBUG'):
        return None
    log_path = Path(env.get('TINYCOMMANDER_LOG') or DEFAULT_LOG_PATH).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG,
        filename=str(log_path),
        format='[%(levelname)s] %(name)s: %(message)s'
    )
    return log_path


def build_parser():
    parser = argparse.ArgumentParser(
        prog='tinycommander',
        description='Dual-panel terminal file manager.',
    )
    parser.add_argument('left', nargs='?', help='directory for the left panel')
    parser.add_argument('right', nargs='?', help='directory for the right panel')
    parser.add_argument('--max-entries', type=int, metavar='N',
                        help='maximum entries listed per panel')
    parser.add_argument('--theme', choices=[theme.key for theme in list_themes()],
                        help='color theme')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def run(argv=None):
    """Run Tiny Commander and return process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()
    config = load_config(
        left_path=args.left,
        right_path=args.right,
        max_entries=args.max_entries,
        theme=args.theme,
    )
    try:
        curses.wrapper(lambda stdscr: TinyCommander(stdscr, config).run())
        return 0
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        # Top-level crash guard is intentionally broad to restore terminal state.
        try:
            curses.endwin()
        except curses.error:
            pass
        print(f'\nError: {e}')
        import traceback
        traceback.print_exc()
        return 1


def main_cli():
    """Console script entrypoint."""
    return run()


if __name__ == '__main__':
    raise SystemExit(main_cli())
