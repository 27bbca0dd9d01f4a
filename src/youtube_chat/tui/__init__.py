"""
Terminal UI for the chat session.

Built directly on ANSI control sequences and a raw keystroke stream:
visual-width helpers, key parsing, keybindings, the single-line input
buffer, the command palette, modal prompts and the anchor-relative screen
renderer.
"""
from __future__ import annotations

from youtube_chat.tui.input_buffer import InputBuffer
from youtube_chat.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from youtube_chat.tui.keys import Key, iter_keys, parse_key
from youtube_chat.tui.palette import CommandPalette, PaletteAction
from youtube_chat.tui.prompts import ModalPromptController, PromptOption, SelectPrompt, TextPrompt
from youtube_chat.tui.renderer import ScreenRenderer
from youtube_chat.tui.terminal import Owner, Terminal
from youtube_chat.tui.width import pad_to_visual_width, usable_columns, visual_width

__all__ = [
    # Terminal
    "Owner",
    "Terminal",
    "ScreenRenderer",
    # Keys
    "Key",
    "iter_keys",
    "parse_key",
    "DEFAULT_KEYBINDINGS",
    "KeybindingsManager",
    # Widgets
    "CommandPalette",
    "InputBuffer",
    "ModalPromptController",
    "PaletteAction",
    "PromptOption",
    "SelectPrompt",
    "TextPrompt",
    # Width
    "pad_to_visual_width",
    "usable_columns",
    "visual_width",
]
