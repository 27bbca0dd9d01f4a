"""
Command flows.

Each flow is a short sequence of awaited prompt steps.  Flows talk to a
:class:`Prompts` implementation, so the same code drives the modal prompts
of the interactive screen and the line prompts of the fallback mode.
Outcomes (success, failure, cancellation) are reported through ``notify``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

import pyperclip

from youtube_chat.config import AppConfig, ConfigStore
from youtube_chat.logging import get_logger
from youtube_chat.messages import get_language_name, get_message, language_entries
from youtube_chat.services.export import (
    default_export_filename,
    format_transcript,
    write_to_clipboard,
    write_to_file,
)
from youtube_chat.services.video import VideoMetadata
from youtube_chat.transcript import Transcript
from youtube_chat.tui.prompts import PromptOption
from youtube_chat.tui.width import pad_to_visual_width, visual_width

logger = get_logger("flows")


class Prompts(Protocol):
    """Interactive questions a flow can ask."""

    async def select(
        self,
        options: Sequence[PromptOption],
        title: str = "",
        default_index: int = 0,
    ) -> int | None: ...

    async def text(self, label: str, default_value: str = "", hint: str = "") -> str | None: ...


class CommandFlows:
    """
    The side flows behind ``/export``, ``/lang`` and ``/model``.

    Parameters
    ----------
    prompts:
        Where questions are asked.
    transcript:
        The conversation being exported.
    notify:
        Receives one user-facing status line per outcome.
    """

    def __init__(
        self,
        prompts: Prompts,
        transcript: Transcript,
        metadata: VideoMetadata,
        config: AppConfig,
        store: ConfigStore,
        notify: Callable[[str], None],
        locale: str | None = None,
    ) -> None:
        self.prompts = prompts
        self.transcript = transcript
        self.metadata = metadata
        self.config = config
        self.store = store
        self.notify = notify
        self.locale = locale

    def _msg(self, key: str, **params: object) -> str:
        return get_message(key, self.locale, **params)

    # ------------------------------------------------------------------
    # /export
    # ------------------------------------------------------------------

    async def export(self) -> None:
        """Copy the conversation to the clipboard or save it to a file."""
        options = [
            PromptOption(self._msg("export_option_clipboard"), self._msg("export_option_clipboard_desc")),
            PromptOption(self._msg("export_option_file"), self._msg("export_option_file_desc")),
        ]
        choice = await self.prompts.select(options, title=self._msg("export_header"))
        if choice is None:
            self.notify(self._msg("prompt_cancelled"))
            return

        text = format_transcript(self.transcript, self.metadata, self.locale)

        if choice == 0:
            try:
                write_to_clipboard(text)
            except pyperclip.PyperclipException as exc:
                logger.debug("Clipboard export failed: %s", exc)
                self.notify(self._msg("error_clipboard_copy", error=exc))
                return
            self.notify(self._msg("export_clipboard_success"))
            return

        default = default_export_filename()
        filename = await self.prompts.text(
            self._msg("export_file_prompt"),
            default_value=default,
            hint=self._msg("export_file_hint", filename=default),
        )
        if filename is None:
            self.notify(self._msg("prompt_cancelled"))
            return
        try:
            path = write_to_file(text, filename)
        except OSError as exc:
            logger.debug("File export failed: %s", exc)
            self.notify(self._msg("error_file_save", error=exc))
            return
        self.notify(self._msg("export_file_success", filename=path))

    # ------------------------------------------------------------------
    # /lang
    # ------------------------------------------------------------------

    def language_options(self) -> tuple[list[PromptOption], list[str | None]]:
        """Options for the language picker and the code behind each one."""
        entries = language_entries()
        name_width = max(visual_width(name) for _, name in entries) + 2
        options = [
            PromptOption(pad_to_visual_width(name, name_width) + code)
            for code, name in entries
        ]
        codes: list[str | None] = [code for code, _ in entries]
        options.append(PromptOption(self._msg("lang_auto_detect")))
        codes.append(None)
        return options, codes

    async def change_language(self) -> bool:
        """
        Pick a language, then a transcript preference, then save.

        Cancelling either step leaves the config untouched.  Returns
        ``True`` when the new settings were saved.
        """
        options, codes = self.language_options()
        current = self.config.language
        current_name = get_language_name(current) if current else self._msg("lang_auto_detect")
        default_index = codes.index(current) if current in codes else len(codes) - 1

        choice = await self.prompts.select(
            options,
            title=self._msg("lang_header", language=current_name),
            default_index=default_index,
        )
        if choice is None:
            self.notify(self._msg("prompt_cancelled"))
            return False
        language = codes[choice]

        preference = await self.prompts.select(
            [
                PromptOption(self._msg("lang_prefer_native"), self._msg("lang_prefer_native_desc")),
                PromptOption(self._msg("lang_prefer_accurate"), self._msg("lang_prefer_accurate_desc")),
            ],
            title=self._msg("lang_transcript_header"),
            default_index=1 if self.config.prefer_accurate_transcript else 0,
        )
        if preference is None:
            self.notify(self._msg("prompt_cancelled"))
            return False

        updated = AppConfig(
            language=language,
            locale=language,
            prefer_accurate_transcript=preference == 1,
            model=self.config.model,
        )
        try:
            self.store.save_config(updated)
        except OSError as exc:
            logger.debug("Saving config failed: %s", exc)
            self.notify(self._msg("error_save_config", error=exc))
            return False

        self.config = updated
        if language is None:
            self.notify(self._msg("lang_set_auto"))
        else:
            self.notify(self._msg("lang_set_to", name=get_language_name(language), code=language))
        self.notify(self._msg("lang_saved", path=self.store.path))
        self.notify(self._msg("lang_effect_notice"))
        return True

    # ------------------------------------------------------------------
    # /model
    # ------------------------------------------------------------------

    def model(self) -> None:
        """Model selection is not implemented; report the current model."""
        self.notify(self._msg("model_stub", model=self.config.model))
