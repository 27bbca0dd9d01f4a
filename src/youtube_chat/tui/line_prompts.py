"""
Line-based prompts for non-interactive terminals.

Same contract as :class:`~youtube_chat.tui.prompts.ModalPromptController`
(``int | None`` from :meth:`LinePrompts.select`, ``str | None`` from
:meth:`LinePrompts.text`), read a line at a time through ``rich``.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console

from youtube_chat.errors import PromptInterrupted
from youtube_chat.messages import get_message
from youtube_chat.tui.prompts import PromptOption


class LinePrompts:
    """Numbered choice lists and plain questions on a line-buffered console."""

    def __init__(self, console: Console | None = None, locale: str | None = None) -> None:
        self.console = console or Console()
        self.locale = locale

    def _read(self, prompt: str) -> str | None:
        try:
            return self.console.input(prompt)
        except EOFError:
            return None
        except KeyboardInterrupt as exc:
            raise PromptInterrupted() from exc

    async def select(
        self,
        options: Sequence[PromptOption],
        title: str = "",
        default_index: int = 0,
    ) -> int | None:
        if title:
            self.console.print(f"\n[bold]{title}[/bold]")
        for i, option in enumerate(options, start=1):
            marker = "[cyan]❯[/cyan]" if i - 1 == default_index else " "
            line = f"{marker} {i}. {option.label}"
            if option.description:
                line += f" [dim]- {option.description}[/dim]"
            self.console.print(line, highlight=False)

        prompt = get_message("line_choice_prompt", self.locale, max=len(options))
        while True:
            answer = self._read(prompt)
            if answer is None or not answer.strip():
                return None
            try:
                choice = int(answer.strip())
            except ValueError:
                choice = 0
            if 1 <= choice <= len(options):
                return choice - 1
            self.console.print(get_message("line_invalid_choice", self.locale, max=len(options)))

    async def text(self, label: str, default_value: str = "", hint: str = "") -> str | None:
        suffix = f" [dim]({hint})[/dim]" if hint else ""
        answer = self._read(f"[green]?[/green] [bold]{label}[/bold]{suffix}: ")
        if answer is None:
            return None
        return answer.strip() or default_value
