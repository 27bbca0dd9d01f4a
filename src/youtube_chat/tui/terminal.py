"""
Terminal device access: output, raw mode and the keystroke listener.

There is exactly one keystroke listener slot.  Installing a listener
registers stdin with the asyncio event loop; every key read from it is
delivered to whichever handler holds the slot *at the moment the key is
processed*, so a handler may hand the slot to another owner mid-chunk.

Only the session orchestrator calls :meth:`Terminal.install_listener`,
:meth:`Terminal.transfer_listener` and :meth:`Terminal.remove_listener`.
"""

from __future__ import annotations

import asyncio
import os
import select
import signal
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, TextIO

from youtube_chat.logging import get_logger
from youtube_chat.tui.keys import KEY_CTRL_C, Key, parse_key, split_complete_keys

if os.name == "posix":
    import termios

logger = get_logger("tui.terminal")

KeyHandler = Callable[[Key], None]


class Owner(Enum):
    """Which component currently owns the keystroke listener."""

    MAIN_BUFFER = "main_buffer"
    PALETTE = "palette"
    MODAL_PROMPT = "modal_prompt"


class Terminal:
    """
    The controlling terminal.

    Parameters
    ----------
    stdin:
        Input stream; its file descriptor is read in raw mode.
    stdout:
        Output stream all painting goes to.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._saved_attrs: Any = None
        self._raw: bool = False
        self._owner: Owner | None = None
        self._handler: KeyHandler | None = None
        self._signals: list[int] = []
        self._pending: bytes = b""
        self._missed_interrupt: bool = False

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @property
    def interactive(self) -> bool:
        """Whether raw keystrokes and cursor control are available."""
        if os.name != "posix":
            return False
        try:
            return self._stdin.isatty() and self._stdout.isatty()
        except (AttributeError, ValueError):
            return False

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to the output stream and flush."""
        self._stdout.write(data)
        self._stdout.flush()

    # ------------------------------------------------------------------
    # Raw mode
    # ------------------------------------------------------------------

    @property
    def is_raw(self) -> bool:
        return self._raw

    def enter_raw_mode(self) -> None:
        """Deliver keys one at a time, unechoed, with Ctrl+C as a key."""
        if self._raw:
            return
        self._set_raw()
        self._raw = True
        logger.debug("Entered raw mode")

    def restore_mode(self) -> None:
        """Return the terminal to the mode it had before raw mode."""
        if not self._raw:
            return
        self._restore()
        self._raw = False
        logger.debug("Restored terminal mode")

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Run a block in raw mode, restoring the prior mode on any exit."""
        was_raw = self._raw
        self.enter_raw_mode()
        try:
            yield
        finally:
            if not was_raw:
                self.restore_mode()

    def _set_raw(self) -> None:
        fd = self._stdin.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        new = termios.tcgetattr(fd)
        # LFLAG: no canonical mode, no echo, no signal keys (Ctrl+C is read)
        new[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN | termios.ISIG)
        # IFLAG: no flow control, no CR/NL translation
        new[1] &= ~(termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR | termios.IGNCR)
        new[6][termios.VMIN] = 1
        new[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, new)

    def _restore(self) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)

    # ------------------------------------------------------------------
    # Keystroke listener
    # ------------------------------------------------------------------

    @property
    def owner(self) -> Owner | None:
        """Current listener owner, ``None`` when no listener is installed."""
        return self._owner

    @property
    def has_listener(self) -> bool:
        return self._handler is not None

    def install_listener(self, owner: Owner, handler: KeyHandler) -> None:
        """Install the keystroke listener.  The slot must be empty."""
        if self._handler is not None:
            raise RuntimeError(f"Listener already owned by {self._owner}")
        self._add_reader()
        self._owner = owner
        self._handler = handler
        logger.debug("Listener installed for %s", owner.value)

    def remove_listener(self) -> None:
        """Remove the keystroke listener, if any."""
        if self._handler is None:
            return
        self._remove_reader()
        logger.debug("Listener removed from %s", self._owner.value if self._owner else None)
        self._owner = None
        self._handler = None

    def transfer_listener(self, owner: Owner, handler: KeyHandler) -> None:
        """Hand the slot to *owner*: remove the old listener, install the new one."""
        self.remove_listener()
        self.install_listener(owner, handler)

    def feed(self, data: bytes) -> None:
        """
        Dispatch raw input bytes, key by key, to the current owner.

        A key cut off at the end of *data* is kept and completed by the
        next call.
        """
        chunks, self._pending = split_complete_keys(self._pending + data)
        for chunk in chunks:
            self.feed_key(parse_key(chunk))

    def feed_key(self, key: Key) -> None:
        """Deliver one key to the current owner, dropping it when there is none."""
        handler = self._handler
        if handler is None:
            logger.debug("Dropped key %s with no listener installed", key.name)
            if key == KEY_CTRL_C:
                self._missed_interrupt = True
            return
        handler(key)

    def take_interrupt(self) -> bool:
        """Whether Ctrl+C arrived while no listener was installed; clears the flag."""
        missed, self._missed_interrupt = self._missed_interrupt, False
        return missed

    def drain_input(self) -> bool:
        """
        Discard keystrokes typed but not yet read.

        Returns ``True`` when a Ctrl+C was among the discarded input, or was
        dropped earlier for want of a listener.
        """
        pending, self._pending = self._pending, b""
        if self._raw:
            pending += self._read_available()
            self._flush_input()
        interrupted = self.take_interrupt() or b"\x03" in pending
        if interrupted:
            logger.debug("Ctrl+C found in discarded input")
        return interrupted

    def _read_available(self) -> bytes:
        fd = self._stdin.fileno()
        chunks: list[bytes] = []
        while select.select([fd], [], [], 0)[0]:
            data = os.read(fd, 1024)
            if not data:
                break
            chunks.append(data)
        return b"".join(chunks)

    def _flush_input(self) -> None:
        termios.tcflush(self._stdin.fileno(), termios.TCIFLUSH)

    def _on_readable(self) -> None:
        try:
            data = os.read(self._stdin.fileno(), 1024)
        except BlockingIOError:
            return
        if data:
            self.feed(data)

    def _add_reader(self) -> None:
        asyncio.get_running_loop().add_reader(self._stdin.fileno(), self._on_readable)

    def _remove_reader(self) -> None:
        asyncio.get_running_loop().remove_reader(self._stdin.fileno())

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------

    def add_signal_handler(self, signum: int, callback: Callable[[], None]) -> None:
        """Route *signum* to *callback* on the running event loop."""
        asyncio.get_running_loop().add_signal_handler(signum, callback)
        self._signals.append(signum)

    def remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for signum in self._signals:
            loop.remove_signal_handler(signum)
        self._signals.clear()


TERMINATION_SIGNALS: tuple[int, ...] = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)
RESIZE_SIGNAL: int | None = getattr(signal, "SIGWINCH", None)
