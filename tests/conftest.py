"""Shared pytest fixtures for youtube-chat tests."""

import asyncio
import io

import pytest

from youtube_chat.config import AppConfig, ConfigStore
from youtube_chat.services.video import VideoMetadata
from youtube_chat.session import SessionOrchestrator
from youtube_chat.tui.terminal import Terminal


class FakeTerminal(Terminal):
    """Terminal writing into a StringIO, with no termios or event-loop reader."""

    def __init__(self) -> None:
        self.output = io.StringIO()
        super().__init__(stdin=io.StringIO(), stdout=self.output)
        self.flushes = 0
        self.unread = b""
        self.signal_handlers: dict[int, object] = {}

    @property
    def interactive(self) -> bool:
        return True

    def _set_raw(self) -> None:
        pass

    def _restore(self) -> None:
        pass

    def _add_reader(self) -> None:
        pass

    def _remove_reader(self) -> None:
        pass

    def _read_available(self) -> bytes:
        data, self.unread = self.unread, b""
        return data

    def _flush_input(self) -> None:
        self.flushes += 1

    def add_signal_handler(self, signum, callback) -> None:
        self.signal_handlers[signum] = callback

    def remove_signal_handlers(self) -> None:
        self.signal_handlers.clear()


class FakeReplyService:
    """Reply service returning a fixed answer or raising a fixed error."""

    def __init__(self, reply: str = "The video is about **testing**.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, bool]] = []
        self.gate: asyncio.Event | None = None

    async def invoke(self, user_text: str, *, remember: bool = True) -> str:
        self.calls.append((user_text, remember))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


async def _settle(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def settle():
    """Coroutine function that lets scheduled tasks and callbacks run."""
    return _settle


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def metadata() -> VideoMetadata:
    return VideoMetadata.from_url("https://youtu.be/bZQun8Y4L2A")


@pytest.fixture
def reply_service() -> FakeReplyService:
    return FakeReplyService()


@pytest.fixture
def config_store(tmp_path) -> ConfigStore:
    return ConfigStore(tmp_path / "config.yaml")


@pytest.fixture
def make_session(fake_terminal, reply_service, metadata, config_store):
    """Build a session on the fake terminal with a fixed 80x24 geometry."""

    def _make(**kwargs) -> SessionOrchestrator:
        options = {
            "config": AppConfig(language="en", locale="en"),
            "store": config_store,
            "locale": "en",
            "columns": lambda: 80,
            "rows": lambda: 24,
            "drain_pause": 0,
        }
        options.update(kwargs)
        return SessionOrchestrator(fake_terminal, reply_service, metadata, **options)

    return _make
