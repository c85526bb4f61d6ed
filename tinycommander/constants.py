"""Constants and configuration defaults for Tiny Commander."""

from . import __version__

APP_NAME = "Tiny Commander"
APP_VERSION = __version__

# Listing and transfer limits.
DEFAULT_MAX_ENTRIES = 1000   # Ceiling on entries per panel, ".." included
COPY_CHUNK_SIZE = 4096       # Bytes per read/write while copying

# External programs (overridable through the environment).
DEFAULT_PAGER = "less"
DEFAULT_EDITOR = "vi"
DEFAULT_SHELL = "/bin/sh"

# Color pair IDs.
C_PANEL = 1
C_HEADER = 2
C_DIRECTORY = 3
C_EXECUTABLE = 4
C_ERROR = 5
C_SELECTED = 6
C_PANEL_TITLE = 7
C_PANEL_TITLE_INACTIVE = 8
C_DIALOG = 9
C_BUTTON = 10
C_BUTTON_SEL = 11
C_STATUS = 12

# Layout constants
HEADER_HEIGHT = 1            # Row 0 is the title bar
FOOTER_HEIGHT = 3            # Key bar + status line + message line
PANEL_CHROME_ROWS = 2        # Path row + column header row inside a panel
MIN_TERM_WIDTH = 40
MIN_TERM_HEIGHT = 10
INPUT_TIMEOUT_MS = 500

# Box drawing characters (Unicode).
BOX_TL = "\u2554"
BOX_TR = "\u2557"
BOX_BL = "\u255a"
BOX_BR = "\u255d"
BOX_H = "\u2550"
BOX_V = "\u2551"

# Single-line box characters.
SB_TL = "\u250c"
SB_TR = "\u2510"
SB_BL = "\u2514"
SB_BR = "\u2518"
SB_H = "\u2500"
SB_V = "\u2502"

SORT_ASCENDING_MARK = "\u25b2"
SORT_DESCENDING_MARK = "\u25bc"

KEY_BAR_LABELS = (
    ("F1", "Help"),
    ("F3", "View"),
    ("F4", "Edit"),
    ("F5", "Copy"),
    ("F6", "Move"),
    ("F7", "Mkdir"),
    ("F8", "Delete"),
    ("F9", "Shell"),
    ("F10", "Quit"),
)
