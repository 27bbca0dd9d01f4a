"""
Conversation export.

The transcript is formatted as plain text (a header with the video details,
then one ``[time] Role: content`` paragraph per message) and written to the
system clipboard or to a file.  Notices and the transient thinking entry
are not part of the export.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pyperclip

from youtube_chat.logging import get_logger
from youtube_chat.messages import get_message
from youtube_chat.services.video import VideoMetadata, format_timestamp
from youtube_chat.transcript import Transcript

logger = get_logger("services.export")

RULE = "=" * 60


def format_transcript(
    transcript: Transcript,
    metadata: VideoMetadata,
    locale: str | None = None,
    now: datetime | None = None,
) -> str:
    """Render the conversation in *transcript* as export text."""
    now = now or datetime.now()
    parts = [
        get_message("export_title", locale),
        RULE,
        "",
        f"Video: {metadata.display_title}",
        f"Author: {metadata.author or '-'}",
        f"URL: {metadata.url}",
        f"Duration: {format_timestamp(metadata.duration)}",
        f"Export Date: {now.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        RULE,
        "",
    ]
    output = "\n".join(parts) + "\n"

    conversation = transcript.conversation()
    if not conversation:
        return output + get_message("export_no_history", locale) + "\n"

    for message in conversation:
        role_key = "role_you" if message.role == "user" else "role_assistant"
        time_str = message.timestamp.strftime("%H:%M:%S")
        output += f"[{time_str}] {get_message(role_key, locale)}: {message.content}\n\n"
    return output


def write_to_clipboard(text: str) -> None:
    """
    Copy *text* to the system clipboard.

    Raises:
        pyperclip.PyperclipException: No clipboard mechanism is available.
    """
    pyperclip.copy(text)
    logger.debug("Copied %d characters to the clipboard", len(text))


def write_to_file(text: str, filename: str | Path) -> Path:
    """Write *text* to *filename* (UTF-8) and return the path written."""
    path = Path(filename).expanduser()
    path.write_text(text, encoding="utf-8")
    logger.debug("Exported conversation to %s", path)
    return path


def default_export_filename(now: datetime | None = None) -> str:
    """``conversation-YYYY-MM-DD-HH-MM-SS.txt`` for *now*."""
    now = now or datetime.now()
    return now.strftime("conversation-%Y-%m-%d-%H-%M-%S.txt")
