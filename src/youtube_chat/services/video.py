"""YouTube video identifiers and metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass

from youtube_chat.errors import InvalidVideoUrlError

_VIDEO_ID_PATTERNS = (
    re.compile(r"^(?:https?://)?youtu\.be/([A-Za-z0-9_-]{11})(?:[?&#/]|$)"),
    re.compile(
        r"^(?:https?://)?(?:www\.|m\.)?(?:youtube\.com|youtube-nocookie\.com)"
        r"(?:/watch\?(?:[^#]*&)?v=|/(?:embed|v|e|shorts|live)/)"
        r"([A-Za-z0-9_-]{11})(?:[?&#/]|$)"
    ),
    re.compile(r"^([A-Za-z0-9_-]{11})$"),
)


def extract_video_id(url: str) -> str:
    """
    Return the 11-character video id from a YouTube URL or a bare id.

    Raises:
        InvalidVideoUrlError: *url* is neither.
    """
    url = url.strip()
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.match(url)
        if match:
            return match.group(1)
    raise InvalidVideoUrlError(url)


def format_timestamp(seconds: float | None) -> str:
    """``MM:SS``, or ``HH:MM:SS`` from one hour up."""
    if not seconds:
        return "00:00"
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


@dataclass
class VideoMetadata:
    """What the session knows about the video being discussed."""

    video_id: str
    url: str
    title: str = ""
    author: str = ""
    duration: float | None = None  # Seconds

    @classmethod
    def from_url(cls, url: str) -> VideoMetadata:
        video_id = extract_video_id(url)
        return cls(video_id=video_id, url=url.strip(), title=video_id)

    @property
    def display_title(self) -> str:
        return self.title or self.video_id
