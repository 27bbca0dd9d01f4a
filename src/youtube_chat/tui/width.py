"""
Terminal geometry and visual-width helpers.

Column widths are measured in terminal cells, not code points: CJK and most
emoji take two cells, combining marks none.  Geometry is queried on every
call so a resize is picked up by the next paint.
"""

from __future__ import annotations

import shutil

from rich.cells import cell_len

from youtube_chat.tui.ansi import strip_ansi

DEFAULT_COLUMNS = 115
DEFAULT_ROWS = 24


def visual_width(text: str) -> int:
    """Return the number of terminal cells *text* occupies when printed."""
    return cell_len(strip_ansi(text))


def pad_to_visual_width(text: str, width: int, pad_char: str = " ") -> str:
    """
    Pad *text* on the right with *pad_char* until it is *width* cells wide.

    Text that is already at least *width* cells wide is returned unchanged.
    """
    current = visual_width(text)
    if current >= width:
        return text
    return text + pad_char * (width - current)


def usable_columns() -> int:
    """Current output width, or ``DEFAULT_COLUMNS`` when none is reported."""
    columns = shutil.get_terminal_size((0, 0)).columns
    return columns if columns > 0 else DEFAULT_COLUMNS


def usable_rows() -> int:
    """Current output height, or ``DEFAULT_ROWS`` when none is reported."""
    rows = shutil.get_terminal_size((0, 0)).lines
    return rows if rows > 0 else DEFAULT_ROWS


def line_rows(line: str, columns: int) -> int:
    """
    Number of terminal rows *line* occupies once the terminal wraps it.

    A line exactly *columns* cells wide still fits on one row (the cursor
    waits in the last column until the next character is written).
    """
    width = visual_width(line)
    if width == 0 or columns <= 0:
        return 1
    return (width + columns - 1) // columns
