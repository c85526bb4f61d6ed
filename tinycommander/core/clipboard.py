"""
System clipboard access for copying entry paths.
"""
from __future__ import annotations

import logging

import pyperclip

LOGGER = logging.getLogger(__name__)


def copy_text(text: str) -> bool:
    """Put ``text`` on the system clipboard; return False when unavailable."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        LOGGER.info("clipboard unavailable: %s", exc)
        return False
    return True
