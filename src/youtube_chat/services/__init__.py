"""External collaborators of the chat session: reply, export and video metadata."""

from youtube_chat.services.export import (
    default_export_filename,
    format_transcript,
    write_to_clipboard,
    write_to_file,
)
from youtube_chat.services.reply import (
    OpenAIReplyService,
    ReplyService,
    SimulatedReplyService,
    create_reply_service,
)
from youtube_chat.services.video import VideoMetadata, extract_video_id, format_timestamp

__all__ = [
    "OpenAIReplyService",
    "ReplyService",
    "SimulatedReplyService",
    "VideoMetadata",
    "create_reply_service",
    "default_export_filename",
    "extract_video_id",
    "format_timestamp",
    "format_transcript",
    "write_to_clipboard",
    "write_to_file",
]
