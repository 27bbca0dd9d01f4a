"""Line-based chat for terminals without raw keystroke support."""

from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown

from youtube_chat.commands import COMMAND_PREFIX, CommandRegistry, default_registry
from youtube_chat.config import AppConfig, ConfigStore
from youtube_chat.errors import PromptInterrupted
from youtube_chat.flows import CommandFlows
from youtube_chat.logging import get_logger
from youtube_chat.messages import get_message
from youtube_chat.services.reply import ReplyService, last_summary, summary_prompt
from youtube_chat.services.video import VideoMetadata
from youtube_chat.transcript import Message, Transcript
from youtube_chat.tui.line_prompts import LinePrompts
from youtube_chat.tui.palette import is_command_text

logger = get_logger("modes.line")


class LineSession:
    """Read a question per line, print the answer below it.

    Same commands as the interactive screen; side flows use numbered line
    prompts instead of modal overlays, and there is no command palette.
    """

    def __init__(
        self,
        reply_service: ReplyService,
        metadata: VideoMetadata,
        config: AppConfig | None = None,
        store: ConfigStore | None = None,
        registry: CommandRegistry | None = None,
        console: Console | None = None,
        locale: str | None = None,
    ) -> None:
        self.reply_service = reply_service
        self.metadata = metadata
        self.registry = registry or default_registry()
        self.console = console or Console()
        self.locale = locale
        self.transcript = Transcript()
        self.prompts = LinePrompts(self.console, locale)
        self.flows = CommandFlows(
            self.prompts,
            self.transcript,
            metadata,
            config or AppConfig(),
            store or ConfigStore(),
            self.notify,
            locale,
        )
        self._running = False

    def notify(self, text: str) -> None:
        self.transcript.append_message(Message("assistant", text, notice=True))
        self.console.print(text, markup=False, highlight=False)

    async def run(self) -> int:
        """Run until quit, end of input or interrupt; returns the exit status."""
        self._running = True
        # Replies already in the transcript, such as the opening summary
        for message in self.transcript:
            if message.role == "assistant":
                self.console.print(Markdown(message.content))
                self.console.print()

        while self._running:
            try:
                user_input = self.console.input("[bold]>[/bold] ").strip()
            except (EOFError, KeyboardInterrupt):
                break

            if not user_input:
                continue

            try:
                if is_command_text(user_input):
                    await self._run_command(user_input)
                    continue
                if COMMAND_PREFIX in user_input:
                    self.notify(get_message("chat_command_hint", self.locale))
                await self._ask(user_input, user_input)
            except PromptInterrupted:
                break

        self.console.print(f"[dim]{get_message('chat_goodbye', self.locale)}[/dim]")
        return 0

    async def _run_command(self, text: str) -> None:
        command = self.registry.get(text)
        name = command.name if command else None

        if name == "/quit":
            self._running = False
        elif name == "/summarize":
            intro = get_message("summary_intro", self.locale, title=self.metadata.display_title)
            await self._ask(
                "/summarize",
                summary_prompt(self.metadata, self.locale),
                remember=False,
                thinking=get_message("summary_generating", self.locale),
                finish=lambda content: last_summary(content, intro),
            )
        elif name == "/export":
            await self.flows.export()
        elif name == "/lang":
            await self.flows.change_language()
        elif name == "/model":
            self.flows.model()
        else:
            self.notify(get_message("chat_unknown_command", self.locale, command=text))

    async def _ask(
        self,
        shown_text: str,
        request: str,
        remember: bool = True,
        thinking: str | None = None,
        finish=None,
    ) -> None:
        self.transcript.append_message(Message("user", shown_text))
        self.console.print(f"[dim]└ {thinking or get_message('chat_thinking', self.locale)}[/dim]")

        try:
            reply = await self.reply_service.invoke(request, remember=remember)
        except Exception as exc:
            logger.debug("Reply service failed", exc_info=True)
            error = get_message("chat_reply_error", self.locale, error=exc)
            self.transcript.append_message(Message("assistant", error))
            self.console.print(error, style="red", markup=False, highlight=False)
            return

        content = finish(reply) if finish else reply
        self.transcript.append_message(Message("assistant", content, is_markup=True))
        self.console.print()
        self.console.print(Markdown(content))
