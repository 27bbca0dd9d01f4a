"""
Anchor-relative screen renderer.

The chat screen is the block of rows below an *anchor* captured once before
the first paint.  Every :meth:`ScreenRenderer.render` call moves back to the
anchor, erases everything below it and reprints the whole block, top to
bottom: transcript, separator rule, input line, separator rule and either
the command palette or the hint line.  There is no diffing.

The anchor is tracked as a row distance from the cursor rather than with
the terminal's single save/restore slot, so a modal prompt can capture an
anchor of its own without clobbering the chat screen's.  For relative
movement to stay valid the painted block never exceeds the screen height;
the transcript is trimmed from the top to make it fit.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from io import StringIO

from youtube_chat.messages import get_message
from youtube_chat.transcript import Message, Transcript
from youtube_chat.tui.ansi import (
    carriage_return,
    clear_below,
    cursor_column,
    cursor_down,
    cursor_up,
    hide_cursor,
    show_cursor,
    style,
)
from youtube_chat.tui.input_buffer import InputBuffer
from youtube_chat.tui.markdown import render_markdown
from youtube_chat.tui.width import line_rows, usable_columns, usable_rows, visual_width

INPUT_PREFIX = "> "
RULE_CHAR = "─"
THINKING_LEAD = "└ "
INPUT_PREFIX_WIDTH = visual_width(INPUT_PREFIX)


def cursor_column_for(prefix_length: int, cursor_offset: int) -> int:
    """
    1-based terminal column of the input cursor.

    The ``+ 1`` puts the cursor in the cell after the last inserted
    character rather than on top of it.
    """
    return prefix_length + cursor_offset + 1


class Anchor:
    """
    A restore point: the row the cursor was on when the anchor was captured.

    ``rows_below`` is how many rows the cursor currently sits below that
    row; whoever writes below the anchor keeps it up to date.
    """

    def __init__(self) -> None:
        self.rows_below: int = 0

    def restore(self) -> str:
        """Control sequence moving the cursor back to column 1 of the anchor row."""
        seq = carriage_return() + cursor_up(self.rows_below)
        self.rows_below = 0
        return seq


def _write_block(lines: Sequence[str], columns: int) -> tuple[str, int]:
    """Join *lines* for output; returns the text and its height in rows."""
    rows = sum(line_rows(line, columns) for line in lines)
    return "\r\n".join(lines), rows


class ScreenRenderer:
    """
    Paints the chat screen below its anchor.

    Parameters
    ----------
    write:
        Callable receiving the control sequences and text to output.
    columns:
        Returns the current terminal width; queried on every paint.
    rows:
        Returns the current terminal height; queried on every paint.
    locale:
        Locale for the placeholder and hint strings.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        columns: Callable[[], int] = usable_columns,
        rows: Callable[[], int] = usable_rows,
        locale: str | None = None,
    ) -> None:
        self._write = write
        self._columns = columns
        self._rows = rows
        self.locale = locale
        self._anchor: Anchor | None = None
        self._input_row: int = 0

    # ------------------------------------------------------------------
    # Anchor
    # ------------------------------------------------------------------

    @property
    def anchor(self) -> Anchor | None:
        return self._anchor

    def capture_anchor(self) -> None:
        """Use the cursor's current row as the top of the chat screen."""
        self._write(carriage_return())
        self._anchor = Anchor()

    def _require_anchor(self) -> Anchor:
        if self._anchor is None:
            raise RuntimeError("capture_anchor() must be called before rendering")
        return self._anchor

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def render(
        self,
        transcript: Transcript,
        buffer: InputBuffer,
        suggestions: Sequence[str] | None = None,
    ) -> int:
        """
        Repaint the whole screen block.

        *suggestions* are pre-rendered palette rows; when empty the static
        hint line is shown instead.  Returns the number of rows painted
        below the anchor.  The cursor is left on the last painted row.
        """
        anchor = self._require_anchor()
        columns = self._columns()
        rule = RULE_CHAR * columns

        footer = [rule, self._input_line(buffer), rule]
        if suggestions:
            footer.extend(suggestions)
        else:
            footer.append(style(f"  {get_message('chat_hint', self.locale)}", dim=True))

        footer_rows = sum(line_rows(line, columns) for line in footer)
        room = max(0, self._rows() - 1 - footer_rows)
        history = self._fit(self._transcript_lines(transcript, columns), room, columns)

        out = StringIO()
        out.write(hide_cursor())
        out.write(anchor.restore())
        out.write(clear_below())
        text, total_rows = _write_block(history + footer, columns)
        out.write(text)
        self._write(out.getvalue())

        history_rows = sum(line_rows(line, columns) for line in history)
        self._input_row = history_rows + line_rows(rule, columns)
        anchor.rows_below = total_rows - 1
        return total_rows

    def place_cursor(self, lines_painted: int, prefix_length: int, cursor_offset: int) -> None:
        """
        Move from the bottom of the painted block to the input cursor.

        *cursor_offset* is measured in cells from the start of the input
        text.  Input longer than the screen width wraps, so the target row
        and column are derived from the absolute cell position.
        """
        anchor = self._require_anchor()
        columns = self._columns()
        cell = prefix_length + cursor_offset
        row = self._input_row + cell // columns
        column = cursor_column_for(prefix_length, cursor_offset)
        if column > columns:
            column = cell % columns + 1

        bottom = lines_painted - 1
        seq = cursor_up(bottom - row) if bottom >= row else cursor_down(row - bottom)
        self._write(seq + cursor_column(column) + show_cursor())
        anchor.rows_below = row

    def erase(self) -> None:
        """Remove the painted block, leaving the cursor on the anchor row."""
        anchor = self._require_anchor()
        self._write(anchor.restore() + clear_below() + show_cursor())

    def finish(self, transcript: Transcript) -> None:
        """Replace the block with the full transcript and leave the cursor below it."""
        if self._anchor is None:
            return
        lines = self._transcript_lines(transcript, self._columns())
        self._write(
            self._anchor.restore()
            + clear_below()
            + "".join(line + "\r\n" for line in lines)
            + show_cursor()
        )
        self._anchor = None

    # ------------------------------------------------------------------
    # Line building
    # ------------------------------------------------------------------

    def _input_line(self, buffer: InputBuffer) -> str:
        if buffer.show_placeholder:
            return INPUT_PREFIX + style(get_message("chat_placeholder", self.locale), dim=True)
        # Trailing cell keeps the cursor visible after the last character
        return INPUT_PREFIX + buffer.text + " "

    def _transcript_lines(self, transcript: Transcript, columns: int) -> list[str]:
        lines: list[str] = []
        for message in transcript:
            lines.extend(self._message_lines(message, columns))
        return lines

    @staticmethod
    def _message_lines(message: Message, columns: int) -> list[str]:
        if message.role == "user":
            return [INPUT_PREFIX + line for line in message.content.split("\n")]
        if message.role == "thinking":
            return [style(THINKING_LEAD + message.content, dim=True)]
        # Assistant replies and notices are set off by a blank line
        if message.is_markup:
            return [""] + render_markdown(message.content, columns)
        return [""] + message.content.split("\n")

    @staticmethod
    def _fit(lines: list[str], room: int, columns: int) -> list[str]:
        """Drop lines from the top until the rest fits in *room* rows."""
        kept: list[str] = []
        used = 0
        for line in reversed(lines):
            height = line_rows(line, columns)
            if used + height > room:
                break
            kept.append(line)
            used += height
        kept.reverse()
        return kept
