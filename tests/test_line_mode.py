"""Tests for the line-based fallback: prompts and chat loop."""

import io

import pytest
from rich.console import Console

from youtube_chat.config import AppConfig
from youtube_chat.errors import PromptInterrupted
from youtube_chat.modes.line_mode import LineSession
from youtube_chat.transcript import Message
from youtube_chat.tui.line_prompts import LinePrompts
from youtube_chat.tui.prompts import PromptOption


def scripted_input(monkeypatch, *lines):
    """Make ``input()`` return *lines* in order, then raise EOFError."""
    pending = list(lines)

    def fake_input(prompt=""):
        if not pending:
            raise EOFError
        value = pending.pop(0)
        if isinstance(value, BaseException):
            raise value
        return value

    monkeypatch.setattr("builtins.input", fake_input)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=100, color_system=None)


def output(console: Console) -> str:
    return console.file.getvalue()


class TestLinePrompts:
    """Tests for LinePrompts."""

    @pytest.mark.asyncio
    async def test_select_by_number(self, console, monkeypatch) -> None:
        scripted_input(monkeypatch, "2")
        prompts = LinePrompts(console, "en")

        choice = await prompts.select([PromptOption("A"), PromptOption("B", "second")], title="Pick")

        assert choice == 1
        assert "2. B" in output(console)

    @pytest.mark.asyncio
    async def test_select_reasks_on_invalid_input(self, console, monkeypatch) -> None:
        scripted_input(monkeypatch, "9", "x", "1")
        prompts = LinePrompts(console, "en")

        assert await prompts.select([PromptOption("A"), PromptOption("B")]) == 0
        assert output(console).count("Invalid choice") == 2

    @pytest.mark.asyncio
    async def test_blank_or_eof_cancels(self, console, monkeypatch) -> None:
        prompts = LinePrompts(console, "en")

        scripted_input(monkeypatch, "")
        assert await prompts.select([PromptOption("A")]) is None

        scripted_input(monkeypatch)
        assert await prompts.text("Name") is None

    @pytest.mark.asyncio
    async def test_text_default(self, console, monkeypatch) -> None:
        scripted_input(monkeypatch, "   ", " notes.txt ")
        prompts = LinePrompts(console, "en")

        assert await prompts.text("File", default_value="chat.txt") == "chat.txt"
        assert await prompts.text("File", default_value="chat.txt") == "notes.txt"

    @pytest.mark.asyncio
    async def test_ctrl_c_raises_prompt_interrupted(self, console, monkeypatch) -> None:
        scripted_input(monkeypatch, KeyboardInterrupt())
        prompts = LinePrompts(console, "en")

        with pytest.raises(PromptInterrupted):
            await prompts.text("File")


class TestLineSession:
    """Tests for LineSession."""

    def make(self, console, reply_service, metadata, config_store) -> LineSession:
        return LineSession(
            reply_service,
            metadata,
            config=AppConfig(language="en", locale="en"),
            store=config_store,
            console=console,
            locale="en",
        )

    @pytest.mark.asyncio
    async def test_question_and_answer(
        self, console, monkeypatch, reply_service, metadata, config_store
    ) -> None:
        scripted_input(monkeypatch, "what is it?", "/quit", "never read")
        session = self.make(console, reply_service, metadata, config_store)

        assert await session.run() == 0

        assert reply_service.calls == [("what is it?", True)]
        assert [m.role for m in session.transcript] == ["user", "assistant"]
        assert "testing" in output(console)
        assert "Goodbye" in output(console)

    @pytest.mark.asyncio
    async def test_opening_summary_is_printed_first(
        self, console, monkeypatch, reply_service, metadata, config_store
    ) -> None:
        scripted_input(monkeypatch)
        session = self.make(console, reply_service, metadata, config_store)
        session.transcript.append_message(Message("assistant", "Main topics: **testing**", is_markup=True))

        await session.run()

        assert output(console).index("Main topics: testing") < output(console).index("Goodbye")
        assert reply_service.calls == []

    @pytest.mark.asyncio
    async def test_eof_ends_session(
        self, console, monkeypatch, reply_service, metadata, config_store
    ) -> None:
        scripted_input(monkeypatch)
        session = self.make(console, reply_service, metadata, config_store)

        assert await session.run() == 0

    @pytest.mark.asyncio
    async def test_summarize_is_not_remembered(
        self, console, monkeypatch, reply_service, metadata, config_store
    ) -> None:
        scripted_input(monkeypatch, "/summarize")
        session = self.make(console, reply_service, metadata, config_store)

        await session.run()

        assert reply_service.calls[0][1] is False
        assert session.transcript.messages[0].content == "/summarize"

    @pytest.mark.asyncio
    async def test_unknown_command_and_error(
        self, console, monkeypatch, reply_service, metadata, config_store
    ) -> None:
        reply_service.error = RuntimeError("down")
        scripted_input(monkeypatch, "/nope", "hi")
        session = self.make(console, reply_service, metadata, config_store)

        await session.run()

        text = output(console)
        assert "Unknown command: /nope" in text
        assert "Error: down" in text

    @pytest.mark.asyncio
    async def test_export_through_line_prompts(
        self, console, monkeypatch, reply_service, metadata, config_store, tmp_path
    ) -> None:
        target = tmp_path / "chat.txt"
        scripted_input(monkeypatch, "hi", "/export", "2", str(target))
        session = self.make(console, reply_service, metadata, config_store)

        await session.run()

        assert "You: hi" in target.read_text(encoding="utf-8")
