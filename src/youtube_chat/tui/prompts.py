"""
Modal prompts.

A modal prompt takes exclusive ownership of the keystroke stream until it
resolves.  It paints its own block below its own anchor and, on every
resolution path, erases that block and leaves the cursor back on the
anchor row.

Results are delivered through an :class:`asyncio.Future`:

* a value (selected index or entered text) on Enter,
* ``None`` on Escape,
* :class:`~youtube_chat.errors.PromptInterrupted` on Ctrl+C.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Generic, TypeVar

from youtube_chat.errors import PromptInterrupted
from youtube_chat.logging import get_logger
from youtube_chat.messages import get_message
from youtube_chat.tui.ansi import FG, clear_below, cursor_column, cursor_up, style
from youtube_chat.tui.input_buffer import InputBuffer
from youtube_chat.tui.keybindings import KeybindingsManager
from youtube_chat.tui.keys import Key
from youtube_chat.tui.renderer import Anchor
from youtube_chat.tui.terminal import KeyHandler, Terminal
from youtube_chat.tui.width import (
    line_rows,
    pad_to_visual_width,
    usable_columns,
    usable_rows,
    visual_width,
)

logger = get_logger("tui.prompts")

T = TypeVar("T")


@dataclass
class PromptOption:
    """
    One choice of a :class:`SelectPrompt`.

    Attributes
    ----------
    label:
        Display text for the option.
    description:
        Optional secondary text shown dimmed after the label.
    """

    label: str
    description: str = ""


class ModalPrompt(Generic[T]):
    """
    Base class: anchored painting and one-shot resolution.

    Parameters
    ----------
    write:
        Output callable.
    keybindings:
        Supplies the interrupt, cancel and navigation keys.
    columns:
        Returns the current terminal width.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        keybindings: KeybindingsManager | None = None,
        columns: Callable[[], int] = usable_columns,
        locale: str | None = None,
    ) -> None:
        self._write = write
        self._keybindings = keybindings or KeybindingsManager()
        self._columns = columns
        self.locale = locale
        self._anchor = Anchor()
        self._future: asyncio.Future[T | None] | None = None
        self._painted = False
        self.late_interrupt = False

    @property
    def result(self) -> asyncio.Future[T | None]:
        if self._future is None:
            raise RuntimeError("Prompt has not been opened")
        return self._future

    @property
    def resolved(self) -> bool:
        return self._future is not None and self._future.done()

    def open(self) -> asyncio.Future[T | None]:
        """Capture the anchor at the cursor, paint, and return the result future."""
        self._future = asyncio.get_running_loop().create_future()
        self._write("\r")
        self._anchor = Anchor()
        self.paint()
        return self._future

    def close(self) -> None:
        """Erase the block if it is still on screen."""
        if self._painted:
            self._write(self._anchor.restore() + clear_below())
            self._painted = False

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def render(self, width: int) -> list[str]:
        raise NotImplementedError

    def paint(self) -> None:
        columns = self._columns()
        lines = self.render(columns)
        rows = sum(line_rows(line, columns) for line in lines)
        self._write(self._anchor.restore() + clear_below() + "\r\n".join(lines))
        self._anchor.rows_below = rows - 1
        self._painted = True
        self._after_paint(columns)

    def _after_paint(self, columns: int) -> None:
        """Hook for positioning the cursor once the block is painted."""

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _resolve(self, value: T | None) -> None:
        if self.resolved:
            return
        self.close()
        self.result.set_result(value)

    def _interrupt(self) -> None:
        if self.resolved:
            return
        self.close()
        self.result.set_exception(PromptInterrupted())

    def handle_input(self, key: Key) -> None:
        if self.resolved:
            # Ctrl+C typed in the same read as the resolving key
            if self._keybindings.matches(key, "interrupt"):
                self.late_interrupt = True
            return
        if self._keybindings.matches(key, "interrupt"):
            self._interrupt()
            return
        if self._keybindings.matches(key, "cancel"):
            self._resolve(None)
            return
        self._handle_key(key)

    def _handle_key(self, key: Key) -> None:
        raise NotImplementedError


class SelectPrompt(ModalPrompt[int]):
    """
    Pick one of several options with the arrow keys.

    Resolves with the selected index, or ``None`` when cancelled.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        options: Sequence[PromptOption],
        title: str = "",
        default_index: int = 0,
        rows: Callable[[], int] = usable_rows,
        **kwargs,
    ) -> None:
        super().__init__(write, **kwargs)
        if not options:
            raise ValueError("SelectPrompt needs at least one option")
        self.options = list(options)
        self.title = title
        self.selected_index = default_index if 0 <= default_index < len(options) else 0
        self._rows = rows
        self._scroll_offset = 0

    def move(self, delta: int) -> None:
        self.selected_index = (self.selected_index + delta) % len(self.options)

    def _window(self) -> tuple[int, int]:
        """First index and count of the options that fit on screen."""
        # Title, footer, two scroll markers and one spare row
        count = max(1, min(len(self.options), self._rows() - 5))
        if self.selected_index < self._scroll_offset:
            self._scroll_offset = self.selected_index
        elif self.selected_index >= self._scroll_offset + count:
            self._scroll_offset = self.selected_index - count + 1
        self._scroll_offset = max(0, min(self._scroll_offset, len(self.options) - count))
        return self._scroll_offset, count

    def _handle_key(self, key: Key) -> None:
        bindings = self._keybindings
        if bindings.matches(key, "palette_up") or (key.printable and key.char == "k"):
            self.move(-1)
            self.paint()
        elif bindings.matches(key, "palette_down") or (key.printable and key.char == "j"):
            self.move(1)
            self.paint()
        elif key.name == "enter":
            self._resolve(self.selected_index)

    def render(self, width: int) -> list[str]:
        lines: list[str] = []
        if self.title:
            lines.append(style(self.title, bold=True))

        label_width = max(visual_width(o.label) for o in self.options)
        start, count = self._window()
        if start > 0:
            lines.append(style("  ▲ more above", dim=True))
        for i in range(start, start + count):
            option = self.options[i]
            is_selected = i == self.selected_index
            indicator = style("❯", fg=FG.CYAN) if is_selected else " "
            label = pad_to_visual_width(option.label, label_width)
            if is_selected:
                label = style(label, fg=FG.CYAN, bold=True)
            line = f"{indicator} {label}"
            if option.description:
                line += "  " + style(option.description, dim=True)
            lines.append(line)
        if start + count < len(self.options):
            lines.append(style("  ▼ more below", dim=True))

        lines.append(style(get_message("prompt_select_footer", self.locale), dim=True))
        return lines


class TextPrompt(ModalPrompt[str]):
    """
    Ask for a line of text.

    Resolves with the trimmed input, or *default_value* when the input is
    blank, or ``None`` when cancelled.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        label: str,
        default_value: str = "",
        hint: str = "",
        **kwargs,
    ) -> None:
        super().__init__(write, **kwargs)
        self.label = label
        self.default_value = default_value
        self.hint = hint
        self.buffer = InputBuffer(self._keybindings)

    def _prefix(self) -> str:
        prefix = style("? ", fg=FG.GREEN) + style(self.label, bold=True)
        if self.hint:
            prefix += style(f" ({self.hint})", dim=True)
        return prefix + ": "

    def _handle_key(self, key: Key) -> None:
        if key.name == "enter":
            self._resolve(self.buffer.text.strip() or self.default_value)
            return
        if self.buffer.handle_input(key):
            self.paint()

    def render(self, width: int) -> list[str]:
        return [
            self._prefix() + self.buffer.text,
            style(get_message("prompt_text_footer", self.locale), dim=True),
        ]

    def _after_paint(self, columns: int) -> None:
        # Cursor goes back to the input row, after the text before the cursor
        footer_rows = line_rows(self.render(columns)[-1], columns)
        before = self.buffer.text[: self.buffer.cursor_offset]
        cell = visual_width(self._prefix()) + visual_width(before)
        input_rows = line_rows(self._prefix() + self.buffer.text, columns)
        row = cell // columns
        up = (input_rows - 1 - row) + footer_rows
        self._write(cursor_up(up) + cursor_column(cell % columns + 1))
        self._anchor.rows_below = row


class ModalPromptController:
    """
    Runs modal prompts for command flows.

    Parameters
    ----------
    terminal:
        The terminal device; each prompt runs in raw mode.
    claim:
        Supplied by the session orchestrator.  ``claim(handler)`` returns a
        context manager that gives *handler* the keystroke listener and
        removes it again on exit.
    """

    def __init__(
        self,
        terminal: Terminal,
        claim: Callable[[KeyHandler], AbstractContextManager[None]],
        keybindings: KeybindingsManager | None = None,
        locale: str | None = None,
        columns: Callable[[], int] = usable_columns,
        rows: Callable[[], int] = usable_rows,
    ) -> None:
        self._terminal = terminal
        self._claim = claim
        self._keybindings = keybindings or KeybindingsManager()
        self.locale = locale
        self._columns = columns
        self._rows = rows
        self.active: ModalPrompt | None = None

    async def select(
        self,
        options: Sequence[PromptOption],
        title: str = "",
        default_index: int = 0,
    ) -> int | None:
        prompt = SelectPrompt(
            self._terminal.write,
            options,
            title=title,
            default_index=default_index,
            rows=self._rows,
            keybindings=self._keybindings,
            columns=self._columns,
            locale=self.locale,
        )
        return await self._run(prompt)

    async def text(self, label: str, default_value: str = "", hint: str = "") -> str | None:
        prompt = TextPrompt(
            self._terminal.write,
            label,
            default_value=default_value,
            hint=hint,
            keybindings=self._keybindings,
            columns=self._columns,
            locale=self.locale,
        )
        return await self._run(prompt)

    async def _run(self, prompt: ModalPrompt[T]) -> T | None:
        if self._terminal.take_interrupt():
            raise PromptInterrupted()
        with self._terminal.raw_mode():
            future = prompt.open()
            self.active = prompt
            try:
                with self._claim(prompt.handle_input):
                    value = await future
            finally:
                prompt.close()
                self.active = None
                logger.debug("%s closed", type(prompt).__name__)
        if prompt.late_interrupt:
            raise PromptInterrupted()
        return value
