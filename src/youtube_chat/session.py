"""
Interactive chat session.

:class:`SessionOrchestrator` owns the transcript, the input buffer, the
command palette and the terminal's keystroke listener.  It is the only
component that installs, transfers or removes the listener, so exactly one
of the main buffer, the palette or a modal prompt receives keys at a time.

States::

    COLD_START -> TYPING <-> PALETTE_OPEN
                    |  \\
                    |   -> MODAL_ACTIVE -> TYPING   (command flows)
                    -> PROCESSING -> TYPING         (reply service)
    any -> TERMINATED                               (/quit, Ctrl+C, SIGTERM)

All screen updates happen synchronously in key handlers and task
continuations; the only suspension points are the reply call and the short
drain pause after a modal flow.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from enum import Enum

from youtube_chat.commands import COMMAND_PREFIX, CommandEntry, CommandRegistry, default_registry
from youtube_chat.config import AppConfig, ConfigStore
from youtube_chat.errors import PromptInterrupted
from youtube_chat.flows import CommandFlows
from youtube_chat.logging import get_logger
from youtube_chat.messages import get_message
from youtube_chat.services.reply import ReplyService, last_summary, summary_prompt
from youtube_chat.services.video import VideoMetadata
from youtube_chat.transcript import Message, Transcript
from youtube_chat.tui.input_buffer import InputBuffer
from youtube_chat.tui.keybindings import KeybindingsManager
from youtube_chat.tui.keys import Key
from youtube_chat.tui.palette import CommandPalette, PaletteAction, is_command_text
from youtube_chat.tui.prompts import ModalPromptController
from youtube_chat.tui.renderer import INPUT_PREFIX_WIDTH, ScreenRenderer
from youtube_chat.tui.terminal import (
    RESIZE_SIGNAL,
    TERMINATION_SIGNALS,
    KeyHandler,
    Owner,
    Terminal,
)
from youtube_chat.tui.width import usable_columns, usable_rows, visual_width

logger = get_logger("session")

# Seconds to let keys typed during a modal arrive before they are discarded
DRAIN_PAUSE = 0.05


class SessionState(Enum):
    COLD_START = "cold_start"
    TYPING = "typing"
    PALETTE_OPEN = "palette_open"
    MODAL_ACTIVE = "modal_active"
    PROCESSING = "processing"
    TERMINATED = "terminated"


_INPUT_STATES = (SessionState.COLD_START, SessionState.TYPING, SessionState.PALETTE_OPEN)


class SessionOrchestrator:
    """
    Drives one interactive chat session on a raw-mode terminal.

    Parameters
    ----------
    terminal:
        The terminal device.
    reply_service:
        Answers the user's questions.
    metadata:
        The video being discussed.
    config, store:
        Current preferences and where ``/lang`` saves them.
    drain_pause:
        Delay before input is drained after a modal flow.
    """

    def __init__(
        self,
        terminal: Terminal,
        reply_service: ReplyService,
        metadata: VideoMetadata,
        config: AppConfig | None = None,
        store: ConfigStore | None = None,
        registry: CommandRegistry | None = None,
        keybindings: KeybindingsManager | None = None,
        locale: str | None = None,
        columns: Callable[[], int] = usable_columns,
        rows: Callable[[], int] = usable_rows,
        drain_pause: float = DRAIN_PAUSE,
    ) -> None:
        self.terminal = terminal
        self.reply_service = reply_service
        self.metadata = metadata
        self.registry = registry or default_registry()
        self.keybindings = keybindings or KeybindingsManager()
        self.locale = locale
        self._columns = columns
        self.drain_pause = drain_pause

        self.transcript = Transcript()
        self.buffer = InputBuffer(self.keybindings)
        self.palette = CommandPalette(self.registry, self.keybindings)
        self.renderer = ScreenRenderer(terminal.write, columns, rows, locale)
        self.prompts = ModalPromptController(
            terminal, self._claim_for_prompt, self.keybindings, locale, columns, rows
        )
        self.flows = CommandFlows(
            self.prompts,
            self.transcript,
            metadata,
            config or AppConfig(),
            store or ConfigStore(),
            self.notify,
            locale,
        )

        self.state = SessionState.COLD_START
        self._task: asyncio.Task | None = None
        self._done: asyncio.Future[int] | None = None
        self._cleaned_up = False

        self._handlers: dict[str, Callable[[], None]] = {
            "/summarize": self._start_summary,
            "/export": lambda: self._start_modal(self.flows.export),
            "/lang": lambda: self._start_modal(self.flows.change_language),
            "/model": lambda: self._run_inline(self.flows.model),
            "/quit": self.terminate,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def run(self) -> int:
        """Run until the session terminates; returns the exit status."""
        self._done = asyncio.get_running_loop().create_future()
        self.terminal.enter_raw_mode()
        try:
            for signum in TERMINATION_SIGNALS:
                self.terminal.add_signal_handler(signum, self.terminate)
            if RESIZE_SIGNAL is not None:
                self.terminal.add_signal_handler(RESIZE_SIGNAL, self.handle_resize)

            self.renderer.capture_anchor()
            self.paint()
            self.terminal.install_listener(Owner.MAIN_BUFFER, self._on_buffer_key)
            return await self._done
        finally:
            self._cleanup()

    def terminate(self, exit_code: int = 0) -> None:
        """End the session: clean up the terminal and resolve :meth:`run`."""
        if self.state is SessionState.TERMINATED:
            return
        self._set_state(SessionState.TERMINATED)
        task = self._task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
        self._cleanup()
        if self._done is not None and not self._done.done():
            self._done.set_result(exit_code)

    def _cleanup(self) -> None:
        if self._cleaned_up:
            return
        self._cleaned_up = True
        active = self.prompts.active
        if active is not None:
            active.close()
        self.terminal.remove_listener()
        self.renderer.finish(self.transcript)
        self.terminal.write(get_message("chat_goodbye", self.locale) + "\r\n")
        self.terminal.restore_mode()
        self.terminal.remove_signal_handlers()
        logger.debug("Session cleaned up")

    def handle_resize(self) -> None:
        """Repaint at the new width; a pending reply repaints when it arrives."""
        if self.state in _INPUT_STATES:
            self.paint()
        elif self.prompts.active is not None:
            self.prompts.active.paint()

    # ------------------------------------------------------------------
    # State and ownership
    # ------------------------------------------------------------------

    def _set_state(self, state: SessionState) -> None:
        if state is not self.state:
            logger.debug("State %s -> %s", self.state.value, state.value)
            self.state = state

    @contextmanager
    def _claim_for_prompt(self, handler: KeyHandler) -> Iterator[None]:
        """Give a modal prompt the listener for the duration of the block."""
        self.terminal.transfer_listener(Owner.MODAL_PROMPT, handler)
        try:
            yield
        finally:
            self.terminal.remove_listener()

    def _sync_palette(self) -> None:
        """Open or close the palette to match the buffer text."""
        if self.terminal.owner is Owner.MODAL_PROMPT or self.state not in _INPUT_STATES:
            self.palette.close()
            return
        self.palette.update(self.buffer.text)
        if self.palette.visible and self.terminal.owner is not Owner.PALETTE:
            self.terminal.transfer_listener(Owner.PALETTE, self._on_palette_key)
            self._set_state(SessionState.PALETTE_OPEN)
        elif not self.palette.visible and self.terminal.owner is Owner.PALETTE:
            self.terminal.transfer_listener(Owner.MAIN_BUFFER, self._on_buffer_key)
            self._set_state(SessionState.TYPING)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paint(self) -> None:
        """Full repaint of the chat screen with the cursor in the input line."""
        suggestions = None
        if self.palette.visible:
            footer = get_message("palette_footer", self.locale)
            suggestions = self.palette.render(self._columns(), footer)
        painted = self.renderer.render(self.transcript, self.buffer, suggestions)
        offset = visual_width(self.buffer.text[: self.buffer.cursor_offset])
        self.renderer.place_cursor(painted, INPUT_PREFIX_WIDTH, offset)

    def notify(self, text: str) -> None:
        """Add a status line to the transcript."""
        self.transcript.append_message(Message("assistant", text, notice=True))
        if self.state in _INPUT_STATES:
            self.paint()

    # ------------------------------------------------------------------
    # Key handling
    # ------------------------------------------------------------------

    def dispatch(self, key: Key) -> None:
        """Deliver *key* to whichever component owns the listener."""
        self.terminal.feed_key(key)

    def _on_buffer_key(self, key: Key) -> None:
        if self.state is SessionState.TERMINATED:
            return
        if self.keybindings.matches(key, "interrupt"):
            self.terminate()
            return
        if self.state is SessionState.PROCESSING:
            return
        if key.name == "enter":
            self._submit()
            return
        self._edit(key)

    def _on_palette_key(self, key: Key) -> None:
        if self.keybindings.matches(key, "interrupt"):
            self.terminate()
            return

        action = self.palette.handle_input(key)
        if action is None:
            self._edit(key)
            return

        if action is PaletteAction.MOVED:
            self.paint()
        elif action is PaletteAction.ACCEPT:
            self._accept_selection()
            self.paint()
        elif action is PaletteAction.SUBMIT:
            self._accept_selection()
            self._submit()
        elif action is PaletteAction.CANCEL:
            self._sync_palette()
            self.paint()

    def _accept_selection(self) -> None:
        command = self.palette.accept()
        if command is not None:
            self.buffer.set_text(command.name)
        self.terminal.transfer_listener(Owner.MAIN_BUFFER, self._on_buffer_key)
        self._set_state(SessionState.TYPING)

    def _edit(self, key: Key) -> None:
        before = self.buffer.text
        if not self.buffer.handle_input(key):
            return
        if self.state is SessionState.COLD_START and self.buffer.typed_once:
            self._set_state(SessionState.TYPING)
        self._sync_palette()

        command = None
        if self.palette.visible and self.buffer.text != before:
            command = self.palette.auto_dispatch_candidate()
        if command is not None:
            logger.debug("Auto-dispatching %s", command.name)
            self.buffer.clear()
            self._leave_palette()
            self._run_command(command)
            return
        self.paint()

    def _leave_palette(self) -> None:
        self.palette.close()
        if self.terminal.owner is Owner.PALETTE:
            self.terminal.transfer_listener(Owner.MAIN_BUFFER, self._on_buffer_key)
        self._set_state(SessionState.TYPING)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _submit(self) -> None:
        text = self.buffer.submit()
        if not text:
            return
        self._leave_palette()

        if is_command_text(text):
            command = self.registry.get(text)
            if command is None:
                self.notify(get_message("chat_unknown_command", self.locale, command=text))
                return
            self._run_command(command)
            return

        if COMMAND_PREFIX in text:
            self.notify(get_message("chat_command_hint", self.locale))
        self._start_processing(text, text)

    def _run_command(self, command: CommandEntry) -> None:
        handler = self._handlers.get(command.name)
        if handler is None:
            self.notify(get_message("chat_unknown_command", self.locale, command=command.name))
            return
        logger.debug("Running command %s", command.name)
        handler()

    def _run_inline(self, action: Callable[[], None]) -> None:
        action()
        self.paint()

    def _start_task(self, coro: Awaitable[None]) -> None:
        self._task = asyncio.ensure_future(coro)
        self._task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Future) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Session task failed", exc_info=exc)
            self.terminate(exit_code=1)

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def _start_processing(
        self,
        shown_text: str,
        request: str,
        *,
        thinking: str | None = None,
        remember: bool = True,
        finish: Callable[[str], str] | None = None,
    ) -> None:
        self.transcript.append_message(Message("user", shown_text))
        thinking = thinking or get_message("chat_thinking", self.locale)
        self.transcript.append_message(Message("thinking", thinking))
        self._set_state(SessionState.PROCESSING)
        self.paint()
        self._start_task(self._process(request, remember, finish))

    def _start_summary(self) -> None:
        intro = get_message("summary_intro", self.locale, title=self.metadata.display_title)
        self._start_processing(
            "/summarize",
            summary_prompt(self.metadata, self.locale),
            thinking=get_message("summary_generating", self.locale),
            remember=False,
            finish=lambda content: last_summary(content, intro),
        )

    async def _process(
        self,
        request: str,
        remember: bool,
        finish: Callable[[str], str] | None,
    ) -> None:
        try:
            reply = await self.reply_service.invoke(request, remember=remember)
        except Exception as exc:
            logger.debug("Reply service failed", exc_info=True)
            result = Message("assistant", get_message("chat_reply_error", self.locale, error=exc))
        else:
            result = Message("assistant", finish(reply) if finish else reply, is_markup=True)

        if self.state is SessionState.TERMINATED:
            return
        self.transcript.pop_message()
        self.transcript.append_message(result)
        self._set_state(SessionState.TYPING)
        self.paint()

    # ------------------------------------------------------------------
    # Modal flows
    # ------------------------------------------------------------------

    def _start_modal(self, flow: Callable[[], Awaitable[object]]) -> None:
        self._set_state(SessionState.MODAL_ACTIVE)
        self.terminal.remove_listener()
        self.palette.close()
        self.buffer.clear()
        self.renderer.erase()
        self._start_task(self._run_modal(flow))

    async def _run_modal(self, flow: Callable[[], Awaitable[object]]) -> None:
        try:
            await flow()
        except PromptInterrupted:
            logger.debug("Interrupted during a modal prompt")
            self.terminate()
            return

        if self.state is SessionState.TERMINATED:
            return
        # Keys typed while the prompt was closing are dropped; a Ctrl+C among them still quits
        await asyncio.sleep(self.drain_pause)
        if self.state is SessionState.TERMINATED:
            return
        if self.terminal.drain_input():
            self.terminate()
            return

        self._set_state(SessionState.TYPING)
        self.terminal.install_listener(Owner.MAIN_BUFFER, self._on_buffer_key)
        self.paint()
