"""
Key parsing for terminal input.

Translates raw bytes read from stdin into structured ``Key`` objects that
the session can dispatch on.  A single ``os.read`` may return several key
presses at once (fast typing, pastes), so :func:`split_keys` cuts a chunk
into per-key byte sequences first.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (e.g. ``'enter'``, ``'up'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl:
        ``True`` when Ctrl was held.
    alt:
        ``True`` when Alt (Meta/Option) was held.
    shift:
        ``True`` when Shift was held (only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def printable(self) -> bool:
        """Whether this key inserts its character into a text field."""
        return bool(self.char) and self.char.isprintable() and not self.ctrl and not self.alt


# ---------------------------------------------------------------------------
# Common key constants
# ---------------------------------------------------------------------------

KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")

KEY_HOME = Key(name="home")
KEY_END = Key(name="end")

KEY_SPACE = Key(name="space", char=" ")
KEY_CTRL_C = Key(name="ctrl+c", char="c", ctrl=True)
KEY_UNKNOWN = Key(name="unknown")


# ---------------------------------------------------------------------------
# CSI (Control Sequence Introducer) lookup tables
# ---------------------------------------------------------------------------

_CSI_SIMPLE: dict[bytes, Key] = {
    b"A": KEY_UP,
    b"B": KEY_DOWN,
    b"C": KEY_RIGHT,
    b"D": KEY_LEFT,
    b"H": KEY_HOME,
    b"F": KEY_END,
    b"Z": Key(name="tab", char="\t", shift=True),  # Shift+Tab
}

# Sequences of the form CSI <number> ~ (e.g. \x1b[3~  for delete)
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    3: KEY_DELETE,
    4: KEY_END,
    7: KEY_HOME,
    8: KEY_END,
}

# SS3 sequences (ESC O <letter>), sent by terminals in application mode
_SS3: dict[bytes, Key] = {
    b"A": KEY_UP,
    b"B": KEY_DOWN,
    b"C": KEY_RIGHT,
    b"D": KEY_LEFT,
    b"H": KEY_HOME,
    b"F": KEY_END,
}


# ---------------------------------------------------------------------------
# Modifier bit handling (xterm-style ;N suffixes)
# ---------------------------------------------------------------------------

def _modifier_flags(code: int) -> tuple[bool, bool, bool]:
    """
    Decode an xterm modifier code into ``(shift, alt, ctrl)`` booleans.

    The modifier value is 1-based: ``value = 1 + (shift) + 2*(alt) + 4*(ctrl)``.
    """
    code -= 1
    shift = bool(code & 1)
    alt = bool(code & 2)
    ctrl = bool(code & 4)
    return shift, alt, ctrl


# ---------------------------------------------------------------------------
# Splitting
# ---------------------------------------------------------------------------

def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _split(data: bytes) -> tuple[list[bytes], int]:
    """Cut *data* into keys; also return where an unfinished trailing key starts."""
    keys: list[bytes] = []
    i = 0
    n = len(data)
    while i < n:
        byte = data[i]
        if byte == 0x1B:
            if i + 1 >= n:
                keys.append(data[i:i + 1])
                i += 1
                continue
            second = data[i + 1]
            if second == 0x5B:  # '['
                j = i + 2
                # Parameter/intermediate bytes run until a final byte 0x40-0x7E
                while j < n and not 0x40 <= data[j] <= 0x7E:
                    j += 1
                if j >= n:
                    return keys, i
                keys.append(data[i:j + 1])
                i = j + 1
                continue
            if second == 0x4F:  # 'O'
                if i + 3 > n:
                    return keys, i
                keys.append(data[i:i + 3])
                i += 3
                continue
            if second == 0x1B:
                # Double escape: the first is a bare Escape key
                keys.append(data[i:i + 1])
                i += 1
                continue
            length = _utf8_length(second)
            if i + 1 + length > n:
                return keys, i
            keys.append(data[i:i + 1 + length])
            i += 1 + length
            continue

        length = _utf8_length(byte)
        if i + length > n:
            return keys, i
        keys.append(data[i:i + length])
        i += length
    return keys, n


def split_keys(data: bytes) -> list[bytes]:
    """
    Split a chunk of terminal input into one byte sequence per key press.

    Order is preserved.  An ``ESC`` followed by ``[`` or ``O`` starts an
    escape sequence that runs to its final byte; ``ESC`` followed by any
    other byte is an Alt combination; a trailing lone ``ESC`` is the Escape
    key.  Multi-byte UTF-8 characters are kept together.  An unfinished
    sequence at the end is returned as one last item.

    >>> split_keys(b"ab\\x1b[Dc")
    [b'a', b'b', b'\\x1b[D', b'c']
    """
    keys, end = _split(data)
    if end < len(data):
        keys.append(data[end:])
    return keys


def split_complete_keys(data: bytes) -> tuple[list[bytes], bytes]:
    """
    Split *data* like :func:`split_keys`, holding back an unfinished tail.

    A read can end in the middle of a UTF-8 character or an escape
    sequence.  The returned tail should be prepended to the next read.

    >>> split_complete_keys(b"caf\\xc3")
    ([b'c', b'a', b'f'], b'\\xc3')
    """
    keys, end = _split(data)
    return keys, data[end:]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_key(data: bytes) -> Key:
    """
    Parse raw terminal input bytes for a single key press into a ``Key``.

    Handles:
    * Printable ASCII and UTF-8 characters
    * Ctrl+letter combinations (bytes 0x01-0x1a)
    * Alt+letter (ESC followed by a character), e.g. ``alt+b`` for word-left
    * CSI sequences (arrow keys, home/end, delete)
    * SS3 sequences (application-mode arrows)
    * xterm-style modifier suffixes (e.g. ``CSI 1;5C`` for Ctrl+Right)

    Parameters
    ----------
    data:
        Raw bytes of one key, as produced by :func:`split_keys`.

    Returns
    -------
    Key
        Structured representation of the key press.
    """
    if not data:
        return KEY_UNKNOWN

    if data[0:1] == b"\x1b":
        if len(data) == 1:
            return KEY_ESCAPE

        second = data[1:2]

        if second == b"[":
            return _parse_csi(data[2:])

        if second == b"O":
            return _SS3.get(data[2:3], KEY_UNKNOWN)

        # Alt+character: ESC followed by a printable character
        try:
            rest = data[1:].decode("utf-8")
        except UnicodeDecodeError:
            return KEY_UNKNOWN
        if len(rest) == 1:
            if rest.isprintable():
                return Key(name=f"alt+{rest}", char=rest, alt=True)
            if rest in ("\x7f", "\x08"):
                return Key(name="backspace", alt=True)
            if 1 <= ord(rest) <= 26:
                letter = chr(ord(rest) + 96)
                return Key(name=f"ctrl+{letter}", char=letter, ctrl=True, alt=True)

        return KEY_UNKNOWN

    byte = data[0]

    if byte == 0x0d or byte == 0x0a:  # CR or LF
        return KEY_ENTER

    if byte == 0x09:
        return KEY_TAB

    if byte == 0x7f or byte == 0x08:  # DEL or BS
        return KEY_BACKSPACE

    if byte == 0x00:
        return Key(name="ctrl+space", char=" ", ctrl=True)

    if 1 <= byte <= 26:
        letter = chr(byte + 96)  # 1 -> 'a', 2 -> 'b', ...
        return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)

    if byte < 0x20:
        return KEY_UNKNOWN

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    if len(ch) == 1 and ch.isprintable():
        if ch == " ":
            return KEY_SPACE
        return Key(name=ch, char=ch)

    return KEY_UNKNOWN


def iter_keys(data: bytes) -> list[Key]:
    """Split *data* and parse every key, preserving arrival order."""
    return [parse_key(chunk) for chunk in split_keys(data)]


# ---------------------------------------------------------------------------
# Internal CSI parser
# ---------------------------------------------------------------------------

def _parse_csi(payload: bytes) -> Key:
    """
    Parse the bytes *after* ``ESC [`` in a CSI sequence.

    Supports:
    * Simple final-byte sequences (e.g. ``A`` for Up)
    * ``<number> ~`` sequences (e.g. ``3~`` for Delete)
    * ``1;<mod> <letter>`` modifier sequences (e.g. ``1;5C`` for Ctrl+Right)
    """
    if not payload:
        return KEY_UNKNOWN

    if len(payload) == 1 and payload in _CSI_SIMPLE:
        return _CSI_SIMPLE[payload]

    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    if text.endswith("~"):
        parts = text[:-1].split(";")
        num = _safe_int(parts[0])
        base_key = _CSI_TILDE.get(num) if num is not None else None
        if base_key is None:
            return KEY_UNKNOWN
        if len(parts) == 2:
            mod = _safe_int(parts[1])
            if mod is not None:
                shift, alt, ctrl = _modifier_flags(mod)
                return Key(name=base_key.name, char=base_key.char, ctrl=ctrl, alt=alt, shift=shift)
        return base_key

    final_char = text[-1:]
    if final_char.isalpha() and ";" in text:
        parts = text[:-1].split(";")
        if len(parts) == 2:
            mod = _safe_int(parts[1])
            base = _CSI_SIMPLE.get(final_char.encode("ascii"))
            if mod is not None and base is not None:
                shift, alt, ctrl = _modifier_flags(mod)
                return Key(name=base.name, char=base.char, ctrl=ctrl, alt=alt, shift=shift)

    return KEY_UNKNOWN


def _safe_int(s: str) -> int | None:
    """Return ``int(s)`` or ``None`` if *s* is not a valid integer."""
    try:
        return int(s)
    except (ValueError, TypeError):
        return None
