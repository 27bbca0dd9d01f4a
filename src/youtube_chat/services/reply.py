"""
Reply services: turn a user question into an assistant answer.

``OpenAIReplyService`` talks to any OpenAI-compatible endpoint and keeps the
chat history.  ``SimulatedReplyService`` answers offline and is used when
no API key is configured, so the terminal UI stays usable for demos and
tests.

Environment variables (a ``.env`` file is honoured):
    OPENAI_API_KEY: API key; without it the simulated service is used.
    OPENAI_BASE_URL: Alternative endpoint, e.g. a local server.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Protocol

from dotenv import load_dotenv

from youtube_chat.config import AppConfig
from youtube_chat.logging import get_logger
from youtube_chat.messages import get_language_name, get_message
from youtube_chat.services.video import VideoMetadata

load_dotenv()

logger = get_logger("services.reply")


class ReplyService(Protocol):
    """Anything that can answer a question about the video."""

    async def invoke(self, user_text: str, *, remember: bool = True) -> str:
        """
        Return the assistant's answer to *user_text*.

        With ``remember=False`` the exchange runs without, and is not added
        to, the conversation history.  Raises on failure.
        """
        ...


class OpenAIReplyService:
    """
    Chat completions with a running history.

    Example:
        service = OpenAIReplyService(model="gpt-4o-mini", system_prompt="...")
        answer = await service.invoke("What is the video about?")
    """

    def __init__(
        self,
        model: str,
        system_prompt: str,
        client: Any = None,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 120.0,
    ) -> None:
        self.model = model
        self.system_prompt = system_prompt
        self._client = client
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self._base_url = base_url or os.environ.get("OPENAI_BASE_URL")
        self._timeout = timeout
        self._history: list[dict[str, str]] = []

    @property
    def client(self) -> Any:
        """Get or create the OpenAI client."""
        if self._client is None:
            import httpx
            from openai import AsyncOpenAI

            http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout, connect=30.0),
            )
            self._client = AsyncOpenAI(
                base_url=self._base_url,
                api_key=self._api_key,
                http_client=http_client,
            )
        return self._client

    @property
    def history(self) -> list[dict[str, str]]:
        return list(self._history)

    async def invoke(self, user_text: str, *, remember: bool = True) -> str:
        messages = [{"role": "system", "content": self.system_prompt}]
        if remember:
            messages.extend(self._history)
        messages.append({"role": "user", "content": user_text})

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
        )
        content = response.choices[0].message.content or ""

        if remember:
            self._history.append({"role": "user", "content": user_text})
            self._history.append({"role": "assistant", "content": content})
        return content


class SimulatedReplyService:
    """Offline stand-in that explains how to enable real answers."""

    def __init__(self, metadata: VideoMetadata, delay: float = 0.4) -> None:
        self.metadata = metadata
        self.delay = delay

    async def invoke(self, user_text: str, *, remember: bool = True) -> str:
        if self.delay:
            await asyncio.sleep(self.delay)
        question = user_text.strip().splitlines()[0] if user_text.strip() else ""
        return (
            f"**Offline mode.** No language model is configured, so I can't answer "
            f"questions about *{self.metadata.display_title}* yet.\n\n"
            f"- You asked: {question}\n"
            f"- Set `OPENAI_API_KEY` (and optionally `OPENAI_BASE_URL`) to get real answers."
        )


def summary_prompt(metadata: VideoMetadata, locale: str | None = None) -> str:
    """The request sent by ``/summarize``."""
    intro = get_message("summary_intro", locale, title=metadata.display_title)
    return (
        f'Based on the video "{metadata.display_title}", what are the main topics covered?\n\n'
        f'IMPORTANT: Start your response IMMEDIATELY with "{intro}" followed by a numbered '
        "list. Do NOT include any other text before or after. Be direct and user-centric.\n\n"
        f"Format:\n{intro}\n\n"
        "1. **Topic Name**: Brief description\n"
        "2. **Topic Name**: Brief description\n"
        "3. **Topic Name**: Brief description\n\n"
        "Identify 5-8 main topics."
    )


def last_summary(content: str, intro: str) -> str:
    """Keep only the last summary when the model repeated itself."""
    parts = content.split(intro)
    if len(parts) > 2:
        return f"{intro}\n\n{parts[-1].strip()}"
    return content


async def generate_summary(
    reply_service: ReplyService,
    metadata: VideoMetadata,
    locale: str | None = None,
) -> str:
    """The topic summary shown before the first question."""
    intro = get_message("summary_intro", locale, title=metadata.display_title)
    content = await reply_service.invoke(summary_prompt(metadata, locale), remember=False)
    return last_summary(content, intro)


def create_reply_service(
    config: AppConfig,
    metadata: VideoMetadata,
    locale: str | None = None,
) -> ReplyService:
    """OpenAI-backed service when an API key is set, the simulated one otherwise."""
    if not os.environ.get("OPENAI_API_KEY"):
        logger.warning("OPENAI_API_KEY is not set; using simulated replies")
        return SimulatedReplyService(metadata)

    language = config.language or (locale or "en").split("-")[0]
    system_prompt = get_message(
        "system_prompt",
        locale,
        video=metadata.display_title,
        language_name=get_language_name(language),
    )
    logger.debug("Using model %s", config.model)
    return OpenAIReplyService(model=config.model, system_prompt=system_prompt)
