"""Tests for raw key parsing."""

from youtube_chat.tui.keys import (
    KEY_BACKSPACE,
    KEY_CTRL_C,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_UP,
    iter_keys,
    parse_key,
    split_complete_keys,
    split_keys,
)


class TestParseKey:
    """Tests for parse_key."""

    def test_printable_character(self) -> None:
        key = parse_key(b"a")
        assert key.name == "a"
        assert key.char == "a"
        assert key.printable

    def test_utf8_character(self) -> None:
        key = parse_key("日".encode())
        assert key.char == "日"
        assert key.printable

    def test_enter_and_backspace(self) -> None:
        assert parse_key(b"\r") == KEY_ENTER
        assert parse_key(b"\x7f") == KEY_BACKSPACE

    def test_ctrl_c(self) -> None:
        key = parse_key(b"\x03")
        assert key == KEY_CTRL_C
        assert key.name == "ctrl+c"
        assert key.ctrl
        assert not key.printable

    def test_lone_escape(self) -> None:
        assert parse_key(b"\x1b") == KEY_ESCAPE

    def test_arrows(self) -> None:
        assert parse_key(b"\x1b[A") == KEY_UP
        assert parse_key(b"\x1bOB") == KEY_DOWN

    def test_alt_letter_for_word_moves(self) -> None:
        """Option+b / Option+f arrive as ESC b / ESC f."""
        key = parse_key(b"\x1bb")
        assert key.name == "alt+b"
        assert key.alt
        assert not key.printable

    def test_ctrl_arrow_modifier(self) -> None:
        key = parse_key(b"\x1b[1;5C")
        assert key.name == "right"
        assert key.ctrl

    def test_delete_tilde_sequence(self) -> None:
        assert parse_key(b"\x1b[3~").name == "delete"

    def test_empty_is_unknown(self) -> None:
        assert parse_key(b"").name == "unknown"


class TestSplitKeys:
    """Tests for splitting a read chunk into keys."""

    def test_preserves_order(self) -> None:
        assert split_keys(b"ab\x1b[Dc") == [b"a", b"b", b"\x1b[D", b"c"]

    def test_keeps_utf8_together(self) -> None:
        assert split_keys("é日".encode()) == ["é".encode(), "日".encode()]

    def test_trailing_escape_is_a_key(self) -> None:
        assert split_keys(b"x\x1b") == [b"x", b"\x1b"]

    def test_double_escape(self) -> None:
        assert split_keys(b"\x1b\x1b[A") == [b"\x1b", b"\x1b[A"]

    def test_iter_keys_names(self) -> None:
        names = [k.name for k in iter_keys(b"hi\r\x03")]
        assert names == ["h", "i", "enter", "ctrl+c"]

    def test_unfinished_tail_stays_in_split_keys(self) -> None:
        assert split_keys(b"a\x1b[1;5") == [b"a", b"\x1b[1;5"]


class TestSplitCompleteKeys:
    """Tests for holding back a key cut off at the end of a read."""

    def test_complete_input_has_no_tail(self) -> None:
        assert split_complete_keys(b"ab\x1b[D") == ([b"a", b"b", b"\x1b[D"], b"")

    def test_partial_utf8_is_held_back(self) -> None:
        assert split_complete_keys(b"caf\xc3") == ([b"c", b"a", b"f"], b"\xc3")
        assert split_complete_keys("x日".encode()[:3]) == ([b"x"], "日".encode()[:2])

    def test_partial_csi_is_held_back(self) -> None:
        assert split_complete_keys(b"a\x1b[") == ([b"a"], b"\x1b[")
        assert split_complete_keys(b"\x1b[1;5") == ([], b"\x1b[1;5")

    def test_partial_ss3_and_alt_are_held_back(self) -> None:
        assert split_complete_keys(b"\x1bO") == ([], b"\x1bO")
        assert split_complete_keys(b"\x1b\xc3") == ([], b"\x1b\xc3")

    def test_lone_escape_is_not_held_back(self) -> None:
        assert split_complete_keys(b"x\x1b") == ([b"x", b"\x1b"], b"")
