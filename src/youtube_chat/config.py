"""
Configuration for youtube-chat.

User preferences (language, transcript preference, model) live in a YAML
file under ``~/.youtube-chat``.  The file is optional: a missing or
unreadable file yields the defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from youtube_chat.logging import get_logger

logger = get_logger("config")

DEFAULT_MODEL = "gpt-4o-mini"


def default_config_path() -> Path:
    """Config file location, overridable with ``YOUTUBE_CHAT_CONFIG``."""
    override = os.environ.get("YOUTUBE_CHAT_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".youtube-chat" / "config.yaml"


@dataclass
class AppConfig:
    """
    Saved user preferences.

    Example YAML:
        language: es
        locale: es
        prefer_accurate_transcript: false
        model: gpt-4o-mini
    """

    language: str | None = None  # None = auto-detect from the system locale
    locale: str | None = None
    prefer_accurate_transcript: bool = False  # Always use the English transcript
    model: str = DEFAULT_MODEL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Create config from a dictionary."""
        return cls(
            language=data.get("language"),
            locale=data.get("locale"),
            prefer_accurate_transcript=bool(data.get("prefer_accurate_transcript", False)),
            model=data.get("model") or os.environ.get("YOUTUBE_CHAT_MODEL", DEFAULT_MODEL),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> AppConfig:
        """Load config from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "language": self.language,
            "locale": self.locale,
            "prefer_accurate_transcript": self.prefer_accurate_transcript,
            "model": self.model,
        }


class ConfigStore:
    """Loads and saves :class:`AppConfig` at a fixed path."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_config_path()

    def load_config(self) -> AppConfig:
        """Return the saved config, or defaults when none can be read."""
        if not self.path.is_file():
            return AppConfig.from_dict({})
        try:
            return AppConfig.from_yaml(self.path)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Could not read config %s: %s", self.path, exc)
            return AppConfig.from_dict({})

    def save_config(self, config: AppConfig) -> None:
        """
        Write *config* to disk.

        Raises:
            OSError: The file or its directory could not be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, sort_keys=False, allow_unicode=True)
        logger.debug("Saved config to %s", self.path)
