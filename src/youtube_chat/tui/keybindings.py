"""
Keybinding management.

Stores the mapping from logical actions (interrupt, word movement, palette
navigation) to key descriptors, and supports user overrides loaded from a
JSON configuration file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from youtube_chat.logging import get_logger
from youtube_chat.tui.keys import Key

logger = get_logger("tui.keybindings")

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "interrupt": ["ctrl+c"],
    "word_left": ["alt+b", "ctrl+left", "alt+left"],
    "word_right": ["alt+f", "ctrl+right", "alt+right"],
    "line_start": ["home", "ctrl+a"],
    "line_end": ["end", "ctrl+e"],
    "palette_up": ["up", "ctrl+p"],
    "palette_down": ["down", "ctrl+n"],
    "palette_accept": ["tab"],
    "cancel": ["escape"],
}


# ---------------------------------------------------------------------------
# Normalised key descriptor parsing
# ---------------------------------------------------------------------------

def _normalise_key_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to a canonical form.

    ``"Ctrl+Shift+Left"`` -> ``"ctrl+shift+left"``
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    modifiers = sorted(p for p in parts[:-1])
    base = parts[-1] if parts else ""
    return "+".join(modifiers + [base])


def _key_to_descriptor(key: Key) -> str:
    """
    Convert a parsed :class:`Key` into a canonical descriptor string.

    Examples
    --------
    >>> _key_to_descriptor(Key(name="ctrl+c", char="c", ctrl=True))
    'ctrl+c'
    >>> _key_to_descriptor(Key(name="left", alt=True))
    'alt+left'
    """
    mods: list[str] = []
    if key.alt:
        mods.append("alt")
    if key.ctrl:
        mods.append("ctrl")
    if key.shift:
        mods.append("shift")

    # ctrl+<letter> and alt+<letter> names already carry their modifier
    base = key.name
    if "+" in base and len(base) > 1:
        base = base.rsplit("+", 1)[-1]

    return "+".join(sorted(mods) + [base.lower()])


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class KeybindingsManager:
    """
    Manages the mapping from logical action names to key descriptors.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to key descriptor lists that
        replace the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        self._normalised: dict[str, list[str]] = {
            action: [_normalise_key_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> KeybindingsManager:
        """
        Load keybindings from a JSON file.

        When *config_path* is ``None`` the file
        ``~/.youtube-chat/keybindings.json`` is used if it exists.  The file
        maps action names to lists of key descriptors, e.g.::

            {
                "word_left": ["alt+b"],
                "palette_down": ["down", "ctrl+j"]
            }
        """
        if config_path is not None:
            path = Path(config_path)
        else:
            path = Path.home() / ".youtube-chat" / "keybindings.json"

        overrides: dict[str, list[str]] | None = None

        if path.is_file():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Ignoring keybindings file %s: %s", path, exc)
                raw = None
            if isinstance(raw, dict):
                overrides = {}
                for key, val in raw.items():
                    if isinstance(val, list) and all(isinstance(v, str) for v in val):
                        overrides[key] = val

        return cls(user_overrides=overrides)

    def matches(self, key: Key | str, action: str) -> bool:
        """
        Test whether *key* matches any binding for *action*.

        Parameters
        ----------
        key:
            Either a :class:`Key` instance or a raw key descriptor string
            (e.g. ``"ctrl+c"``).
        action:
            Logical action name (e.g. ``"interrupt"``).
        """
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False

        if isinstance(key, str):
            normalised = _normalise_key_descriptor(key)
        else:
            normalised = _key_to_descriptor(key)

        return normalised in descriptors
