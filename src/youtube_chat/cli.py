"""
Command-line interface for youtube-chat.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from rich.console import Console

from youtube_chat.config import ConfigStore
from youtube_chat.errors import YoutubeChatError
from youtube_chat.logging import get_logger, setup_logging
from youtube_chat.messages import detect_locale, get_message
from youtube_chat.modes.line_mode import LineSession
from youtube_chat.services.reply import ReplyService, create_reply_service, generate_summary
from youtube_chat.services.video import VideoMetadata
from youtube_chat.session import SessionOrchestrator
from youtube_chat.transcript import Message
from youtube_chat.tui.keybindings import KeybindingsManager
from youtube_chat.tui.terminal import Terminal

console = Console()
logger = get_logger("cli")

DEFAULT_LOG_NAME = "youtube-chat.log"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Chat with a YouTube video in your terminal",
        prog="youtube-chat",
    )
    parser.add_argument(
        "video",
        nargs="?",
        help="YouTube URL or 11-character video id",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "--log-file",
        help=(
            "Write log records to this file instead of stderr "
            "(the chat screen defaults to ~/.youtube-chat/youtube-chat.log)"
        ),
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Skip the video summary shown before the first question",
    )
    return parser


def print_usage(locale: str | None = None) -> None:
    for key in ("usage_header", "usage_examples", "usage_example_1", "usage_note"):
        console.print(get_message(key, locale), markup=False, highlight=False)


async def run_session(
    session: SessionOrchestrator | LineSession,
    reply_service: ReplyService,
    metadata: VideoMetadata,
    locale: str | None = None,
    summarize: bool = True,
) -> int:
    """Open the session with the video summary, then hand over to it."""
    if summarize:
        with console.status(get_message("summary_generating", locale)):
            try:
                summary = await generate_summary(reply_service, metadata, locale)
            except Exception as exc:
                logger.debug("Summary failed", exc_info=True)
                summary = None
                console.print(
                    get_message("error_generating_summary", locale, error=exc),
                    style="red",
                    markup=False,
                )
        if summary:
            session.transcript.append_message(Message("assistant", summary, is_markup=True))
    return await session.run()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    store = ConfigStore()
    terminal = Terminal()

    # The chat screen owns stderr while it runs, so records go to a file
    log_file = args.log_file
    if log_file is None and terminal.interactive:
        log_file = str(store.path.parent / DEFAULT_LOG_NAME)
    setup_logging(
        "DEBUG" if args.verbose else "WARNING",
        file=log_file,
        console=log_file is None,
    )

    config = store.load_config()
    _, locale = detect_locale(config.language, config.locale)

    if not args.video:
        print_usage(locale)
        sys.exit(1)

    try:
        metadata = VideoMetadata.from_url(args.video)
    except YoutubeChatError:
        console.print(
            get_message("error_general", locale, error=get_message("error_invalid_url", locale)),
            style="red",
            markup=False,
        )
        sys.exit(1)

    reply_service = create_reply_service(config, metadata, locale)

    if terminal.interactive:
        console.print(f"[bold]YouTube Chat[/bold] [dim]{metadata.url}[/dim]")
        session = SessionOrchestrator(
            terminal,
            reply_service,
            metadata,
            config=config,
            store=store,
            keybindings=KeybindingsManager.load(),
            locale=locale,
        )
    else:
        logger.debug("No TTY on stdin/stdout, using line mode")
        session = LineSession(
            reply_service,
            metadata,
            config=config,
            store=store,
            console=console,
            locale=locale,
        )

    summarize = not args.no_summary
    sys.exit(asyncio.run(run_session(session, reply_service, metadata, locale, summarize)))


if __name__ == "__main__":
    main()
