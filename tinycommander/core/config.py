"""Runtime configuration for Tiny Commander.

Nothing is persisted: settings come from the environment and the command
line, for the lifetime of the process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from ..constants import DEFAULT_EDITOR, DEFAULT_MAX_ENTRIES, DEFAULT_PAGER, DEFAULT_SHELL
from ..theme import DEFAULT_THEME, THEMES


@dataclass(frozen=True)
class AppConfig:
    """Process-wide settings."""

    pager: str = DEFAULT_PAGER
    editor: str = DEFAULT_EDITOR
    shell: str = DEFAULT_SHELL
    max_entries: int = DEFAULT_MAX_ENTRIES
    theme: str = DEFAULT_THEME
    left_path: str = "."
    right_path: str = "."


def _coerce_program(value, default):
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _coerce_positive_int(value, default):
    if isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def _coerce_theme(value, default=DEFAULT_THEME):
    key = str(value or "").strip().lower()
    return key if key in THEMES else default


def load_config(environ: Mapping[str, str] | None = None, **overrides) -> AppConfig:
    """Build config from ``environ`` (defaults to ``os.environ``).

    Keyword overrides (typically parsed CLI flags) win over the environment;
    ``None`` values are ignored.
    """
    env = os.environ if environ is None else environ
    cwd = os.getcwd()
    config = AppConfig(
        pager=_coerce_program(env.get("PAGER"), DEFAULT_PAGER),
        editor=_coerce_program(env.get("EDITOR"), DEFAULT_EDITOR),
        shell=_coerce_program(env.get("SHELL"), DEFAULT_SHELL),
        max_entries=_coerce_positive_int(env.get("TINYCOMMANDER_MAX_ENTRIES"), DEFAULT_MAX_ENTRIES),
        theme=_coerce_theme(env.get("TINYCOMMANDER_THEME")),
        left_path=cwd,
        right_path=cwd,
    )

    changes = {key: value for key, value in overrides.items() if value is not None}
    if "max_entries" in changes:
        changes["max_entries"] = _coerce_positive_int(changes["max_entries"], config.max_entries)
    if "theme" in changes:
        changes["theme"] = _coerce_theme(changes["theme"], config.theme)
    return replace(config, **changes)
