"""
Markdown rendering for assistant replies.

Uses the ``rich`` library to turn Markdown into ANSI-styled lines at a given
width.  Replies are stored raw and rendered on every paint so a resize
reflows them; results are cached per ``(text, width)``.
"""

from __future__ import annotations

from functools import lru_cache
from io import StringIO

from rich.console import Console
from rich.markdown import Markdown as RichMarkdown
from rich.theme import Theme as RichTheme

_RICH_THEME = RichTheme({
    "markdown.h1": "bold bright_white",
    "markdown.h2": "bold bright_cyan",
    "markdown.h3": "bold cyan",
    "markdown.link": "bright_blue underline",
    "markdown.link_url": "dim blue",
    "markdown.code": "bright_green",
    "markdown.item.bullet": "bright_yellow",
})


@lru_cache(maxsize=128)
def _render(text: str, width: int) -> tuple[str, ...]:
    # force_terminal so ANSI is produced even though the target is a StringIO
    buf = StringIO()
    console = Console(
        file=buf,
        width=width,
        force_terminal=True,
        no_color=False,
        highlight=False,
        theme=_RICH_THEME,
    )
    console.print(RichMarkdown(text, code_theme="monokai"))

    lines = buf.getvalue().split("\n")
    if lines and lines[-1] == "":
        lines = lines[:-1]
    return tuple(line.rstrip() for line in lines) or ("",)


def render_markdown(text: str, width: int) -> list[str]:
    """Render *text* as Markdown into styled lines at most *width* cells wide."""
    if not text.strip():
        return [""]
    return list(_render(text, max(10, width)))
