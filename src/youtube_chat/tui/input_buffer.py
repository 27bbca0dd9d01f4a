"""
Single-line input buffer with cursor control.

Holds the text being edited, the cursor offset within it and the
``typed_once`` flag that hides the cold-start placeholder.  Every operation
is total: out-of-range moves are clamped, deletes at the start are no-ops.
"""

from __future__ import annotations

from youtube_chat.tui.keybindings import KeybindingsManager
from youtube_chat.tui.keys import Key


def _is_separator(ch: str) -> bool:
    return ch.isspace()


class InputBuffer:
    """
    Editable single line of text.

    Attributes
    ----------
    typed_once:
        Becomes ``True`` on the first inserted character and never resets.
    """

    def __init__(self, keybindings: KeybindingsManager | None = None) -> None:
        self._keybindings = keybindings or KeybindingsManager()
        self._chars: list[str] = []
        self._cursor: int = 0
        self.typed_once: bool = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        """Current text content of the buffer."""
        return "".join(self._chars)

    @property
    def cursor_offset(self) -> int:
        """Cursor position, ``0 <= cursor_offset <= len(text)``."""
        return self._cursor

    @property
    def show_placeholder(self) -> bool:
        """The placeholder is shown only before anything was ever typed."""
        return not self.typed_once and not self._chars

    def set_text(self, text: str) -> None:
        """Replace the content and move the cursor to its end."""
        self._chars = list(text)
        self._cursor = len(self._chars)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert_char(self, ch: str) -> None:
        self._chars.insert(self._cursor, ch)
        self._cursor += 1
        self.typed_once = True

    def delete_before_cursor(self) -> None:
        if self._cursor == 0:
            return
        self._cursor -= 1
        del self._chars[self._cursor]

    def move_left(self) -> None:
        self._cursor = max(0, self._cursor - 1)

    def move_right(self) -> None:
        self._cursor = min(len(self._chars), self._cursor + 1)

    def move_home(self) -> None:
        self._cursor = 0

    def move_end(self) -> None:
        self._cursor = len(self._chars)

    def move_word_left(self) -> None:
        """Skip separators, then the word before them, towards the start."""
        pos = self._cursor
        while pos > 0 and _is_separator(self._chars[pos - 1]):
            pos -= 1
        while pos > 0 and not _is_separator(self._chars[pos - 1]):
            pos -= 1
        self._cursor = pos

    def move_word_right(self) -> None:
        """Skip separators, then the word after them, towards the end."""
        pos = self._cursor
        length = len(self._chars)
        while pos < length and _is_separator(self._chars[pos]):
            pos += 1
        while pos < length and not _is_separator(self._chars[pos]):
            pos += 1
        self._cursor = pos

    def submit(self) -> str:
        """
        Return the trimmed text and clear the buffer.

        An empty (or whitespace-only) buffer is left untouched and ``""`` is
        returned, so callers can treat it as a no-op.
        """
        text = self.text.strip()
        if not text:
            return ""
        self._chars = []
        self._cursor = 0
        return text

    def clear(self) -> None:
        self._chars = []
        self._cursor = 0

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def handle_input(self, key: Key) -> bool:
        """
        Apply an editing key.

        Returns ``True`` if the key was consumed.  Enter, Escape, Tab and
        Up/Down are left to the caller.
        """
        bindings = self._keybindings

        if bindings.matches(key, "word_left"):
            self.move_word_left()
            return True

        if bindings.matches(key, "word_right"):
            self.move_word_right()
            return True

        if bindings.matches(key, "line_start"):
            self.move_home()
            return True

        if bindings.matches(key, "line_end"):
            self.move_end()
            return True

        name = key.name

        if name == "left" and not (key.ctrl or key.alt):
            self.move_left()
            return True

        if name == "right" and not (key.ctrl or key.alt):
            self.move_right()
            return True

        if name == "backspace":
            self.delete_before_cursor()
            return True

        if name == "delete":
            if self._cursor < len(self._chars):
                del self._chars[self._cursor]
            return True

        if key.printable:
            self.insert_char(key.char)
            return True

        return False
