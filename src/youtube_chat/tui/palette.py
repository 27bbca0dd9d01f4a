"""
Command palette.

A filtered, navigable list of slash commands shown under the input line
while the buffer looks like a command (non-empty and starting with ``/``).
Candidates are always recomputed from the buffer text and the static
registry; the palette keeps only the selection and the dismissed flag.
"""

from __future__ import annotations

from enum import Enum

from youtube_chat.commands import COMMAND_PREFIX, CommandEntry, CommandRegistry
from youtube_chat.tui.ansi import FG, style
from youtube_chat.tui.keybindings import KeybindingsManager
from youtube_chat.tui.keys import Key
from youtube_chat.tui.width import pad_to_visual_width, visual_width

# Characters after the prefix before a unique match may dispatch by itself
AUTO_DISPATCH_MIN_CHARS = 2

_NAME_COLUMN = 12


class PaletteAction(Enum):
    """What a key did to the palette."""

    MOVED = "moved"
    ACCEPT = "accept"  # Fill the buffer with the selection
    SUBMIT = "submit"  # Fill the buffer and run the command
    CANCEL = "cancel"


def is_command_text(text: str) -> bool:
    """Whether *text* activates the palette."""
    return bool(text) and text.startswith(COMMAND_PREFIX)


def filter_candidates(registry: CommandRegistry, text: str) -> tuple[CommandEntry, ...]:
    """Commands whose name starts with the lower-cased *text*, registry order."""
    query = text.lower()
    return tuple(c for c in registry if c.name.startswith(query))


class CommandPalette:
    """
    Palette state: visibility, candidates and the selected row.

    Parameters
    ----------
    registry:
        The commands to offer.
    keybindings:
        Supplies the navigation, accept and cancel keys.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self._registry = registry
        self._keybindings = keybindings or KeybindingsManager()
        self.filter_text: str = ""
        self.candidates: tuple[CommandEntry, ...] = ()
        self.selected_index: int = 0
        self._dismissed: bool = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def visible(self) -> bool:
        return bool(self.candidates) and not self._dismissed

    @property
    def selected(self) -> CommandEntry | None:
        if not self.candidates:
            return None
        return self.candidates[self.selected_index]

    def update(self, text: str) -> None:
        """Recompute the palette from the current buffer *text*."""
        if not is_command_text(text):
            self.close()
            return

        if text != self.filter_text:
            self._dismissed = False
        self.filter_text = text

        candidates = filter_candidates(self._registry, text)
        if candidates != self.candidates:
            self.selected_index = 0
        self.candidates = candidates

    def close(self) -> None:
        self.filter_text = ""
        self.candidates = ()
        self.selected_index = 0
        self._dismissed = False

    def auto_dispatch_candidate(self) -> CommandEntry | None:
        """
        The command to run without Enter, if the typed text is unambiguous.

        Requires a single candidate, at least ``AUTO_DISPATCH_MIN_CHARS``
        typed after the prefix, and no other command whose alias also starts
        with the text (so ``/ex`` waits, it could still become ``/exit``).
        """
        if len(self.candidates) != 1:
            return None
        text = self.filter_text.lower()
        if len(text) - len(COMMAND_PREFIX) < AUTO_DISPATCH_MIN_CHARS:
            return None
        only = self.candidates[0]
        if any(
            name.startswith(text) and self._registry.get(name) is not only
            for name in self._registry.all_names()
        ):
            return None
        return only

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move(self, delta: int) -> None:
        """Move the selection by *delta* rows, wrapping around."""
        if not self.candidates:
            self.selected_index = 0
            return
        self.selected_index = (self.selected_index + delta) % len(self.candidates)

    def accept(self) -> CommandEntry | None:
        """Close the palette and return the selected command."""
        command = self.selected
        self.close()
        return command

    def cancel(self) -> None:
        """Hide the palette until the buffer text changes."""
        self._dismissed = True

    def handle_input(self, key: Key) -> PaletteAction | None:
        """
        Handle a palette key.

        Returns ``None`` when the key is not a palette key and should be
        applied to the input buffer instead.
        """
        bindings = self._keybindings

        if bindings.matches(key, "palette_up"):
            self.move(-1)
            return PaletteAction.MOVED

        if bindings.matches(key, "palette_down"):
            self.move(1)
            return PaletteAction.MOVED

        if bindings.matches(key, "palette_accept"):
            return PaletteAction.ACCEPT

        if key.name == "enter":
            return PaletteAction.SUBMIT

        if bindings.matches(key, "cancel"):
            self.cancel()
            return PaletteAction.CANCEL

        return None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, width: int, footer: str = "") -> list[str]:
        """Render one row per candidate plus an optional dim footer."""
        lines: list[str] = []
        for i, command in enumerate(self.candidates):
            is_selected = i == self.selected_index
            indicator = style("❯", fg=FG.CYAN) + " " if is_selected else "  "
            name = pad_to_visual_width(command.name, _NAME_COLUMN)
            name = style(name, fg=FG.CYAN, bold=is_selected)
            room = width - 2 - _NAME_COLUMN - 1
            description = _truncate(command.description, room)
            lines.append(f"{indicator}{name} {style(description, dim=True)}")
        if footer:
            lines.append(style(footer, dim=True))
        return lines


def _truncate(text: str, width: int) -> str:
    if width <= 0:
        return ""
    if visual_width(text) <= width:
        return text
    out = ""
    for ch in text:
        if visual_width(out + ch) > width - 1:
            break
        out += ch
    return out + "…"
