"""
Logging utilities for youtube-chat.

Provides a centralized logging configuration for the entire package.  While
the chat screen owns the terminal, log records must not be written to it,
so the CLI routes them to a file whenever the screen is interactive.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("youtube_chat")


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
    console: bool = True,
) -> None:
    """
    Configure logging for youtube-chat.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs
        console: Attach the stream handler.  Pass ``False`` to log only to
            *file*, e.g. while the interactive screen is active.

    Example:
        from youtube_chat.logging import setup_logging

        setup_logging("DEBUG")
        setup_logging("DEBUG", file="youtube-chat.log", console=False)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    if console or not file:
        stream_handler = logging.StreamHandler(stream or sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(level)
        _root_logger.addHandler(stream_handler)

    if file:
        Path(file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "session", "tui.renderer")

    Returns:
        Logger instance
    """
    if name.startswith("youtube_chat."):
        return logging.getLogger(name)
    return logging.getLogger(f"youtube_chat.{name}")

