"""Tests for video metadata and conversation export."""

from datetime import datetime

import pyperclip
import pytest

from youtube_chat.errors import InvalidVideoUrlError
from youtube_chat.services.export import (
    RULE,
    default_export_filename,
    format_transcript,
    write_to_clipboard,
    write_to_file,
)
from youtube_chat.services.video import VideoMetadata, extract_video_id, format_timestamp
from youtube_chat.transcript import Message, Transcript

EXPORT_TIME = datetime(2024, 3, 5, 14, 7, 9)


class TestVideo:
    """Tests for video id extraction and formatting."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=bZQun8Y4L2A",
            "https://youtube.com/watch?feature=share&v=bZQun8Y4L2A",
            "https://youtu.be/bZQun8Y4L2A",
            "https://m.youtube.com/watch?v=bZQun8Y4L2A",
            "https://www.youtube.com/embed/bZQun8Y4L2A",
            "https://www.youtube.com/shorts/bZQun8Y4L2A",
            "youtube.com/watch?v=bZQun8Y4L2A",
            "https://youtu.be/bZQun8Y4L2A?t=42",
            "https://www.youtube-nocookie.com/embed/bZQun8Y4L2A",
            "https://www.youtube.com/live/bZQun8Y4L2A?si=abc",
            "bZQun8Y4L2A",
        ],
    )
    def test_extract_video_id(self, url) -> None:
        assert extract_video_id(url) == "bZQun8Y4L2A"

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "hello world",
            "https://example.com/watch?v=bZQun8Y4L2A",
            "youtube.com/watchxxxxxx",
            "https://www.youtube.com/channelabcdef",
            "https://youtu.be/bZQun8Y4L2Aextra",
        ],
    )
    def test_invalid_urls(self, url) -> None:
        with pytest.raises(InvalidVideoUrlError):
            extract_video_id(url)

    def test_format_timestamp(self) -> None:
        assert format_timestamp(None) == "00:00"
        assert format_timestamp(75) == "01:15"
        assert format_timestamp(3725) == "01:02:05"

    def test_metadata_from_url(self) -> None:
        metadata = VideoMetadata.from_url(" https://youtu.be/bZQun8Y4L2A ")

        assert metadata.video_id == "bZQun8Y4L2A"
        assert metadata.url == "https://youtu.be/bZQun8Y4L2A"
        assert metadata.display_title == "bZQun8Y4L2A"


class TestFormatTranscript:
    """Tests for the export text."""

    def test_header(self, metadata) -> None:
        metadata.title = "Intro to Testing"
        metadata.author = "Test Channel"
        metadata.duration = 600

        text = format_transcript(Transcript(), metadata, "en", now=EXPORT_TIME)
        lines = text.splitlines()

        assert lines[0] == "YouTube Chat Conversation Export"
        assert lines[1] == RULE
        assert "Video: Intro to Testing" in lines
        assert "Author: Test Channel" in lines
        assert "URL: https://youtu.be/bZQun8Y4L2A" in lines
        assert "Duration: 10:00" in lines
        assert "Export Date: 2024-03-05 14:07:09" in lines

    def test_empty_history(self, metadata) -> None:
        text = format_transcript(Transcript(), metadata, now=EXPORT_TIME)

        assert text.endswith("No conversation history available.\n")

    def test_messages_with_roles_and_times(self, metadata) -> None:
        transcript = Transcript([
            Message("user", "What is it about?", timestamp=datetime(2024, 3, 5, 9, 0, 1)),
            Message("assistant", "Testing.", is_markup=True, timestamp=datetime(2024, 3, 5, 9, 0, 5)),
        ])

        text = format_transcript(transcript, metadata, "en", now=EXPORT_TIME)

        assert "[09:00:01] You: What is it about?\n\n" in text
        assert "[09:00:05] Assistant: Testing.\n\n" in text
        assert text.index("You:") < text.index("Assistant:")

    def test_notices_and_thinking_excluded(self, metadata) -> None:
        transcript = Transcript([
            Message("assistant", "Cancelled.", notice=True),
            Message("user", "hi"),
            Message("thinking", "Thinking..."),
        ])

        text = format_transcript(transcript, metadata, now=EXPORT_TIME)

        assert "Cancelled." not in text
        assert "Thinking..." not in text
        assert "You: hi" in text

    def test_localized_roles(self, metadata) -> None:
        transcript = Transcript([Message("user", "hola")])

        text = format_transcript(transcript, metadata, "es", now=EXPORT_TIME)

        assert "Tú: hola" in text


class TestWriters:
    """Tests for clipboard and file output."""

    def test_default_filename(self) -> None:
        assert default_export_filename(EXPORT_TIME) == "conversation-2024-03-05-14-07-09.txt"

    def test_write_to_file(self, tmp_path) -> None:
        path = write_to_file("héllo", tmp_path / "out.txt")

        assert path.read_text(encoding="utf-8") == "héllo"

    def test_write_to_missing_directory_raises(self, tmp_path) -> None:
        with pytest.raises(OSError):
            write_to_file("x", tmp_path / "missing" / "out.txt")

    def test_write_to_clipboard(self, monkeypatch) -> None:
        copied = []
        monkeypatch.setattr(pyperclip, "copy", copied.append)

        write_to_clipboard("text")

        assert copied == ["text"]
