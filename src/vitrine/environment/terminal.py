"""ANSI styling for template and build diagnostics.

Colour is on when stdout is a TTY. ``NO_COLOR`` turns it off and
``FORCE_COLOR`` turns it back on regardless of the TTY check.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_SGR = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
}

ColorName = Literal["reset", "bold", "dim", "red", "green", "yellow", "cyan", "bright_red"]
Role = Literal["code", "location", "lineno", "error", "hint", "muted"]

# Diagnostic roles and the SGR codes they render with.
_ROLES: dict[str, tuple[ColorName, ...]] = {
    "code": ("bright_red", "bold"),
    "location": ("cyan",),
    "lineno": ("yellow",),
    "error": ("bright_red",),
    "hint": ("green",),
    "muted": ("dim",),
}

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap ``text`` in the given SGR codes, or return it unchanged when colour is off.

    Example:
        >>> colorize("Error", "red", "bold")  # with colour on
        '\033[31m\033[1mError\033[0m'
    """
    if not _USE_COLORS or not colors:
        return text
    prefix = "".join(_SGR[color] for color in colors)
    return f"{prefix}{text}{_SGR['reset']}"


def style(role: Role, text: str) -> str:
    """Colour ``text`` for a diagnostic role such as ``"location"`` or ``"hint"``."""
    return colorize(text, *_ROLES[role])


def strip_colors(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def format_error_header(code: str | None, message: str) -> str:
    """``V-RUN-002: message`` with the code highlighted; just ``message`` without a code."""
    if code:
        return f"{style('code', code)}: {message}"
    return message


def format_source_line(lineno: int, content: str, is_error: bool = False) -> str:
    """One gutter-numbered source line; the error line gets a ``>`` marker."""
    marker = ">" if is_error else " "
    gutter = style("lineno", f"{marker}{lineno:>3}")
    return f"{gutter} | {style('error' if is_error else 'muted', content)}"
