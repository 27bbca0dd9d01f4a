"""Exception types raised by youtube-chat."""

from __future__ import annotations


class YoutubeChatError(Exception):
    """Base class for errors reported to the user by the CLI."""


class InvalidVideoUrlError(YoutubeChatError):
    """The command-line argument is not a YouTube URL or video id."""


class PromptInterrupted(YoutubeChatError):
    """Ctrl+C was pressed while a prompt owned the keyboard."""
