"""
Slash command registry.

The registry is a static, ordered list of commands.  Lookup accepts either
the command name or one of its aliases; the palette filters on names only.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

COMMAND_PREFIX = "/"


@dataclass(frozen=True)
class CommandEntry:
    """A slash command shown in the palette."""

    name: str  # Includes the prefix, e.g. "/export"
    description: str = ""
    aliases: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, text: str) -> bool:
        """Whether *text* names this command exactly (name or alias)."""
        normalized = text.strip().lower()
        return normalized == self.name or normalized in self.aliases


class CommandRegistry:
    """
    Ordered collection of :class:`CommandEntry`, unique by name.

    Example:
        registry = CommandRegistry([CommandEntry("/quit", "Exit", ("/exit",))])
        registry.get("/EXIT").name  # "/quit"
    """

    def __init__(self, commands: Iterable[CommandEntry] = ()) -> None:
        self._commands: dict[str, CommandEntry] = {}
        for command in commands:
            self.register(command)

    def register(self, command: CommandEntry) -> None:
        """Add a command; names must carry the prefix and be unique."""
        if not command.name.startswith(COMMAND_PREFIX):
            raise ValueError(f"Command name must start with {COMMAND_PREFIX!r}: {command.name}")
        if command.name in self._commands:
            raise ValueError(f"Duplicate command: {command.name}")
        self._commands[command.name] = command

    def get(self, text: str) -> CommandEntry | None:
        """Return the command named by *text* (name or alias), or ``None``."""
        for command in self._commands.values():
            if command.matches(text):
                return command
        return None

    def all_names(self) -> list[str]:
        """All names and aliases, for completion."""
        names: list[str] = []
        for command in self._commands.values():
            names.append(command.name)
            names.extend(command.aliases)
        return names

    def __iter__(self) -> Iterator[CommandEntry]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


def default_registry() -> CommandRegistry:
    """The built-in commands of the chat session."""
    return CommandRegistry([
        CommandEntry("/summarize", "Generate video summary"),
        CommandEntry("/export", "Export conversation to file or clipboard"),
        CommandEntry("/lang", "Change UI and transcript language"),
        CommandEntry("/model", "Select AI model"),
        CommandEntry("/quit", "Exit application (Ctrl+C)", ("/exit",)),
    ])
