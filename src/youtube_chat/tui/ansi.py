"""
ANSI escape sequence utilities for terminal rendering.

Provides the small set of colors, text styling, relative cursor movement and
erase primitives the chat screen is painted with.  Nothing here queries the
terminal; every function just returns the sequence as a string.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

# SGR (styling) and other CSI sequences, used to measure painted text.
_ANSI_RE = re.compile(r"\033\[[0-9;?]*[ -/]*[@-~]|\033[78]")


# ---------------------------------------------------------------------------
# Foreground colors
# ---------------------------------------------------------------------------

class FG:
    """Standard ANSI foreground colors used by the chat screen."""

    RED = f"{CSI}31m"
    GREEN = f"{CSI}32m"
    YELLOW = f"{CSI}33m"
    BLUE = f"{CSI}34m"
    CYAN = f"{CSI}36m"
    BRIGHT_BLACK = f"{CSI}90m"


# ---------------------------------------------------------------------------
# Text styling
# ---------------------------------------------------------------------------

_STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
}


def style(
    text: str,
    *,
    fg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    italic: bool = False,
    underline: bool = False,
) -> str:
    """
    Apply ANSI styling to *text*.

    Parameters
    ----------
    text:
        The string to style.
    fg:
        Foreground color, an already-formed ANSI sequence (e.g. ``FG.CYAN``).
    bold, dim, italic, underline:
        Boolean attribute flags.

    Returns
    -------
    str
        The text wrapped in the appropriate escape sequences with a trailing
        ``RESET``, or *text* unchanged when no styling was requested.
    """
    parts: list[str] = []

    if fg is not None:
        parts.append(fg)

    attrs = {
        "bold": bold,
        "dim": dim,
        "italic": italic,
        "underline": underline,
    }
    for attr_name, enabled in attrs.items():
        if enabled:
            parts.append(f"{CSI}{_STYLE_CODES[attr_name]}m")

    if not parts:
        return text

    prefix = "".join(parts)
    return f"{prefix}{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Remove escape sequences from *text* so it can be measured."""
    return _ANSI_RE.sub("", text)


# ---------------------------------------------------------------------------
# Cursor movement
# ---------------------------------------------------------------------------

def cursor_up(n: int = 1) -> str:
    """Move cursor up by *n* rows.  ``n <= 0`` is a no-op."""
    if n <= 0:
        return ""
    return f"{CSI}{n}A"


def cursor_down(n: int = 1) -> str:
    """Move cursor down by *n* rows.  ``n <= 0`` is a no-op."""
    if n <= 0:
        return ""
    return f"{CSI}{n}B"


def cursor_column(col: int) -> str:
    """Move cursor to absolute column *col* (1-based) on the current row."""
    return f"{CSI}{max(1, col)}G"


def carriage_return() -> str:
    """Move cursor to column 1 of the current row."""
    return "\r"


# ---------------------------------------------------------------------------
# Erasing
# ---------------------------------------------------------------------------

def clear_below() -> str:
    """Clear from cursor to the end of the display."""
    return f"{CSI}0J"


# ---------------------------------------------------------------------------
# Cursor visibility
# ---------------------------------------------------------------------------

def hide_cursor() -> str:
    """Hide the terminal cursor."""
    return f"{CSI}?25l"


def show_cursor() -> str:
    """Show the terminal cursor."""
    return f"{CSI}?25h"
