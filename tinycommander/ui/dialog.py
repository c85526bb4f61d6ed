"""
Dialog Component.
"""
import curses

from ..constants import APP_NAME, APP_VERSION
from ..utils import draw_box, normalize_key_code, safe_addstr, theme_attr

HELP_TEXT = (
    "Up/Down PgUp/PgDn Home/End  move the cursor\n"
    "Tab / Left  switch panel\n"
    "Enter  open directory or view file\n"
    "Backspace  go to the parent directory\n"
    "F3 view   F4 edit   F9 shell\n"
    "F5 copy   F6 move   F7 mkdir   F8 delete\n"
    "s  cycle sort key   r  invert order\n"
    "Ctrl+R  refresh   y  copy path to clipboard\n"
    "F10 / q  quit"
)


def _wrap_dialog_message(message, inner_w):
    """Word-wrap a dialog message into a list of lines."""
    lines = []
    for paragraph in str(message).split('\n'):
        words = paragraph.split()
        if not words:
            lines.append('')
            continue
        line = ''
        for word in words:
            needs_space = 1 if line else 0
            if len(line) + len(word) + needs_space <= inner_w:
                line = f'{line} {word}' if line else word
            else:
                if line:
                    lines.append(line)
                line = word[:inner_w]
        lines.append(line)
    return lines or ['']


class Dialog:
    """Modal dialog box."""

    def __init__(self, title, message, buttons=None, width=50, error=False):
        self.title = title
        self.message = message
        self.buttons = buttons or ['OK']
        self.selected = 0
        self.error = error
        self.callback = None
        self.width = max(width, len(title) + 8)

        inner_w = self.width - 6
        self.lines = _wrap_dialog_message(message, inner_w)

        self.height = len(self.lines) + 7

    def _origin(self, stdscr):
        max_h, max_w = stdscr.getmaxyx()
        return max(0, (max_w - self.width) // 2), max(0, (max_h - self.height) // 2)

    def draw(self, stdscr):
        x, y = self._origin(stdscr)

        attr = theme_attr('dialog')
        title_attr = theme_attr('error' if self.error else 'panel_title') | curses.A_BOLD

        # Shadow
        for row in range(self.height):
            safe_addstr(stdscr, y + row + 1, x + 2, ' ' * self.width, curses.A_DIM)

        for row in range(self.height):
            safe_addstr(stdscr, y + row, x, ' ' * self.width, attr)

        draw_box(stdscr, y, x, self.height, self.width, attr, double=True)

        title_text = f' {self.title} '
        safe_addstr(stdscr, y, x + 1, title_text.ljust(self.width - 2), title_attr)

        for i, line in enumerate(self.lines):
            safe_addstr(stdscr, y + 2 + i, x + 3, line, attr)

        btn_y = y + self.height - 3
        total_btn_width = sum(len(b) + 6 for b in self.buttons) + (len(self.buttons) - 1) * 2
        btn_x = x + (self.width - total_btn_width) // 2

        for i, btn_text in enumerate(self.buttons):
            btn_w = len(btn_text) + 4
            if i == self.selected:
                btn_attr = theme_attr('button_selected') | curses.A_BOLD
                label = f'> {btn_text} <'
            else:
                btn_attr = theme_attr('button')
                label = f'[ {btn_text} ]'
            safe_addstr(stdscr, btn_y, btn_x, label, btn_attr)
            btn_x += btn_w + 2

    def handle_key(self, key):
        """Handle keyboard input. Returns button index or -1."""
        key_code = normalize_key_code(key)

        if key_code == curses.KEY_LEFT:
            self.selected = (self.selected - 1) % len(self.buttons)
        elif key_code in (curses.KEY_RIGHT, 9):
            self.selected = (self.selected + 1) % len(self.buttons)
        elif key_code in (curses.KEY_ENTER, 10, 13):
            return self.selected
        elif key_code == 27:  # Escape
            return len(self.buttons) - 1  # Last button (usually Cancel)
        return -1


class InputDialog(Dialog):
    """Modal dialog with a single-line text field."""

    def __init__(self, title, message, initial_value='', width=50):
        super().__init__(title, message, ['OK', 'Cancel'], width)
        self.value = initial_value
        self.height += 3
        self.cursor_pos = len(initial_value)

    def draw(self, stdscr):
        super().draw(stdscr)

        x, y = self._origin(stdscr)
        # Buttons sit at height - 3; the field goes two rows above them.
        input_y = y + self.height - 5
        input_x = x + 4
        input_w = self.width - 8

        attr = theme_attr('panel')
        safe_addstr(stdscr, input_y, input_x, ' ' * input_w, attr)

        start = max(0, self.cursor_pos - (input_w - 1))
        display_val = self.value[start:start + input_w]
        safe_addstr(stdscr, input_y, input_x, display_val, attr)

        cursor_x = input_x + self.cursor_pos - start
        under = self.value[self.cursor_pos:self.cursor_pos + 1] or ' '
        safe_addstr(stdscr, input_y, cursor_x, under, attr | curses.A_REVERSE)

    def handle_key(self, key):
        key_code = normalize_key_code(key)

        if key_code in (curses.KEY_ENTER, 10, 13):
            return 0
        elif key_code == 27:  # Esc
            return 1

        elif key_code in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor_pos > 0:
                self.value = self.value[:self.cursor_pos - 1] + self.value[self.cursor_pos:]
                self.cursor_pos -= 1
        elif key_code == curses.KEY_DC:
            if self.cursor_pos < len(self.value):
                self.value = self.value[:self.cursor_pos] + self.value[self.cursor_pos + 1:]
        elif key_code == curses.KEY_LEFT:
            if self.cursor_pos > 0:
                self.cursor_pos -= 1
        elif key_code == curses.KEY_RIGHT:
            if self.cursor_pos < len(self.value):
                self.cursor_pos += 1
        elif key_code == curses.KEY_HOME:
            self.cursor_pos = 0
        elif key_code == curses.KEY_END:
            self.cursor_pos = len(self.value)
        elif isinstance(key, str) and key.isprintable():
            self.value = self.value[:self.cursor_pos] + key + self.value[self.cursor_pos:]
            self.cursor_pos += 1
        elif isinstance(key, int) and 32 <= key <= 126:
            self.value = self.value[:self.cursor_pos] + chr(key) + self.value[self.cursor_pos:]
            self.cursor_pos += 1

        return -1


def make_error_dialog(message):
    return Dialog('Error', message, ['OK'], width=56, error=True)


def make_warning_dialog(message):
    return Dialog('Warning', message, ['OK'], width=56)


def make_help_dialog():
    return Dialog(f'{APP_NAME} {APP_VERSION} - Help', HELP_TEXT, ['OK'], width=54)


def make_mkdir_dialog():
    return InputDialog('Make Directory', 'Name of the new directory:', width=50)
