"""
youtube-chat - chat with a YouTube video from your terminal.

The interactive screen is a scrolling conversation above a one-line input
with a slash-command palette, drawn with plain cursor-movement sequences on
a raw-mode terminal.  Without a TTY it falls back to line-based prompts.

Example:
    youtube-chat https://youtu.be/bZQun8Y4L2A
"""

from youtube_chat.commands import CommandEntry, CommandRegistry, default_registry
from youtube_chat.config import AppConfig, ConfigStore
from youtube_chat.errors import InvalidVideoUrlError, PromptInterrupted, YoutubeChatError
from youtube_chat.session import SessionOrchestrator, SessionState
from youtube_chat.transcript import Message, Transcript

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "CommandEntry",
    "CommandRegistry",
    "ConfigStore",
    "InvalidVideoUrlError",
    "Message",
    "PromptInterrupted",
    "SessionOrchestrator",
    "SessionState",
    "Transcript",
    "YoutubeChatError",
    "default_registry",
]
