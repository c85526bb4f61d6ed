"""
Main Tiny Commander application class.
"""
import functools
import logging

from ..theme import get_theme
from ..ui.dialog import (
    InputDialog,
    make_error_dialog,
    make_help_dialog,
    make_mkdir_dialog,
    make_warning_dialog,
)
from ..utils import check_unicode_support, init_colors
from .actions import ActionResult, ActionType, AppAction
from .bootstrap import configure_terminal, validate_terminal_size
from .config import AppConfig, load_config
from .dispatcher import CommandDispatcher, PanelPair
from .event_loop import run_app_loop
from .external import run_external
from .key_router import build_key_map, handle_key_event
from .panel import Panel

LOGGER = logging.getLogger(__name__)


class TinyCommander:
    """Main application class: two panels, one modal dialog at most."""

    def __init__(self, stdscr, config: AppConfig = None):
        self.stdscr = stdscr
        self.config = config or load_config()
        self.running = True
        self.dialog = None
        self.message = ''
        self.use_unicode = check_unicode_support()
        self.key_map = build_key_map()
        self.theme = get_theme(self.config.theme)

        configure_terminal(stdscr)
        validate_terminal_size(stdscr)
        init_colors(self.theme)

        panels = PanelPair(
            Panel(self.config.left_path, max_entries=self.config.max_entries),
            Panel(self.config.right_path, max_entries=self.config.max_entries),
        )
        self.dispatcher = CommandDispatcher(
            panels,
            config=self.config,
            run_external=functools.partial(run_external, stdscr),
        )
        self._dispatch_result(self.dispatcher.refresh_all())

    def execute_action(self, action, payload=None):
        """Run one logical event through the dispatcher."""
        LOGGER.debug('execute_action: %s', action)
        self._dispatch_result(self.dispatcher.dispatch(action, payload))

    def _dispatch_result(self, result):
        """Turn an ActionResult into dialogs, messages or shutdown."""
        if not isinstance(result, ActionResult):
            return

        LOGGER.debug('Dispatching result: type=%s payload=%r', result.type, result.payload)

        if result.type == ActionType.EXIT:
            self.running = False
        elif result.type == ActionType.ERROR:
            self.message = ''
            self.dialog = make_error_dialog(result.payload or 'Operation failed.')
        elif result.type == ActionType.WARNING:
            self.message = ''
            self.dialog = make_warning_dialog(result.payload or '')
        elif result.type == ActionType.SHOW_HELP:
            self.dialog = make_help_dialog()
        elif result.type == ActionType.REQUEST_MKDIR:
            dialog = make_mkdir_dialog()
            dialog.callback = functools.partial(self.dispatcher.dispatch, AppAction.MKDIR)
            self.dialog = dialog
        elif result.type == ActionType.REFRESH:
            if result.payload:
                self.message = str(result.payload)

    def _resolve_dialog_result(self, result_idx):
        """Apply dialog button result and run dialog callback when needed."""
        if result_idx < 0 or not self.dialog:
            return

        dialog = self.dialog
        callback_result = None
        if result_idx == 0:
            callback = dialog.callback
            if callable(callback):
                if isinstance(dialog, InputDialog):
                    callback_result = callback(dialog.value)
                else:
                    callback_result = callback()

        if self.dialog is dialog:
            self.dialog = None
        self._dispatch_result(callback_result)

    def _handle_dialog_key(self, key):
        """Handle keyboard events when a modal dialog is open."""
        if not self.dialog:
            return False
        result = self.dialog.handle_key(key)
        self._resolve_dialog_result(result)
        return True

    def handle_key(self, key):
        """Handle keyboard input."""
        return handle_key_event(self, key)

    def cleanup(self):
        """Release per-run state before curses restores the terminal."""
        LOGGER.debug('shutting down (left=%s, right=%s)',
                     self.dispatcher.panels.left.current_path,
                     self.dispatcher.panels.right.current_path)
        self.dialog = None

    def run(self):
        """Main event loop."""
        return run_app_loop(self)
