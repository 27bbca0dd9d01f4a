"""Tests for keybinding management."""

import json

from youtube_chat.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from youtube_chat.tui.keys import Key, parse_key


class TestKeybindingsManager:
    """Tests for KeybindingsManager."""

    def test_defaults_loaded(self) -> None:
        """All default actions should be present in a fresh manager."""
        manager = KeybindingsManager()

        for action, descriptors in DEFAULT_KEYBINDINGS.items():
            for descriptor in descriptors:
                assert manager.matches(descriptor, action)

    def test_matches_with_string_descriptor(self) -> None:
        manager = KeybindingsManager()

        assert manager.matches("ctrl+c", "interrupt") is True
        assert manager.matches("ctrl+d", "interrupt") is False

    def test_matches_parsed_keys(self) -> None:
        """Raw bytes from the terminal map onto the expected actions."""
        manager = KeybindingsManager()

        assert manager.matches(parse_key(b"\x03"), "interrupt")
        assert manager.matches(parse_key(b"\x1bb"), "word_left")
        assert manager.matches(parse_key(b"\x1bf"), "word_right")
        assert manager.matches(parse_key(b"\x1b[1;5D"), "word_left")
        assert manager.matches(parse_key(b"\x1b"), "cancel")
        assert manager.matches(parse_key(b"\t"), "palette_accept")

    def test_plain_arrow_is_not_word_move(self) -> None:
        manager = KeybindingsManager()

        assert not manager.matches(Key(name="left"), "word_left")

    def test_descriptor_case_and_order_are_normalised(self) -> None:
        manager = KeybindingsManager(user_overrides={"word_left": ["Ctrl+Left"]})

        assert manager.matches(Key(name="left", ctrl=True), "word_left")

    def test_user_overrides_replace_defaults(self) -> None:
        manager = KeybindingsManager(user_overrides={"interrupt": ["ctrl+x"]})

        assert manager.matches("ctrl+x", "interrupt") is True
        assert manager.matches("ctrl+c", "interrupt") is False

    def test_user_overrides_preserve_other_defaults(self) -> None:
        manager = KeybindingsManager(user_overrides={"interrupt": ["ctrl+x"]})

        assert manager.matches("escape", "cancel") is True


class TestKeybindingsLoad:
    """Tests for loading overrides from JSON."""

    def test_load_from_file(self, tmp_path) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text(json.dumps({"palette_down": ["down", "ctrl+j"]}))

        manager = KeybindingsManager.load(path)

        assert manager.matches("ctrl+j", "palette_down")
        assert manager.matches("down", "palette_down")

    def test_missing_file_uses_defaults(self, tmp_path) -> None:
        manager = KeybindingsManager.load(tmp_path / "missing.json")

        assert manager.matches("ctrl+c", "interrupt")
        assert not manager.matches("ctrl+j", "palette_down")

    def test_invalid_json_is_ignored(self, tmp_path) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text("{not json")

        manager = KeybindingsManager.load(path)

        assert manager.matches("ctrl+c", "interrupt")

    def test_invalid_entries_are_skipped(self, tmp_path) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text(json.dumps({"interrupt": "ctrl+x", "cancel": ["ctrl+g"]}))

        manager = KeybindingsManager.load(path)

        assert manager.matches("ctrl+c", "interrupt")
        assert manager.matches("ctrl+g", "cancel")
