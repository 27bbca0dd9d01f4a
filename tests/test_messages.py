"""Tests for the message catalog and the transcript."""

import re

import pytest

from youtube_chat.messages import _TRANSLATIONS, detect_locale, get_language_name, get_message
from youtube_chat.transcript import Message, Transcript


class TestGetMessage:
    """Tests for get_message."""

    def test_english(self) -> None:
        assert get_message("chat_placeholder") == "Type your question..."

    def test_region_uses_language_table(self) -> None:
        assert get_message("chat_placeholder", "es-MX") == "Escribe tu pregunta..."
        assert get_message("chat_placeholder", "es_ES") == "Escribe tu pregunta..."

    def test_missing_translation_falls_back_to_english(self) -> None:
        assert get_message("export_file_prompt", "it") == "Enter filename"
        assert get_message("chat_hint", "xx") == "/ for commands"

    @pytest.mark.parametrize("language", ["es", "fr", "de"])
    def test_offered_languages_are_fully_translated(self, language) -> None:
        """Every English message exists with the same placeholders."""
        english = _TRANSLATIONS["en"]
        table = _TRANSLATIONS[language]

        assert set(table) == set(english)
        for key, text in english.items():
            assert set(re.findall(r"\{(\w+)\}", table[key])) == set(re.findall(r"\{(\w+)\}", text)), key

    def test_translated_parameters(self) -> None:
        assert get_message("lang_set_to", "fr", name="Deutsch", code="de") == "✅ Langue définie sur: Deutsch (de)"
        assert get_message("role_you", "de") == "Sie"

    def test_unknown_key_returns_key(self) -> None:
        assert get_message("no_such_key") == "no_such_key"

    def test_parameters(self) -> None:
        assert get_message("lang_set_to", name="English", code="en") == "✅ Language set to: English (en)"


class TestLocale:
    def test_language_name(self) -> None:
        assert get_language_name("ja") == "日本語"
        assert get_language_name("xx") == "XX"

    def test_saved_preference_wins(self) -> None:
        assert detect_locale("es", None) == ("es", "es")
        assert detect_locale("pt", "pt-BR") == ("pt", "pt-BR")

    def test_system_locale(self, monkeypatch) -> None:
        monkeypatch.setattr("youtube_chat.messages._locale.getlocale", lambda: ("de_DE", "UTF-8"))

        assert detect_locale() == ("de", "de-DE")

    def test_c_locale_is_english(self, monkeypatch) -> None:
        monkeypatch.setattr("youtube_chat.messages._locale.getlocale", lambda: (None, None))

        assert detect_locale() == ("en", "en-US")


class TestTranscript:
    """Tests for Transcript."""

    def test_append_and_order(self) -> None:
        transcript = Transcript()
        transcript.append_message(Message("user", "a"))
        transcript.append_message(Message("assistant", "b"))

        assert [m.content for m in transcript] == ["a", "b"]
        assert len(transcript) == 2

    def test_messages_is_a_copy(self) -> None:
        transcript = Transcript([Message("user", "a")])
        transcript.messages.clear()

        assert len(transcript) == 1

    def test_pop_message(self) -> None:
        transcript = Transcript([Message("user", "a"), Message("thinking", "…")])

        assert transcript.pop_message().role == "thinking"
        assert len(transcript) == 1

    def test_pop_empty_raises(self) -> None:
        with pytest.raises(IndexError):
            Transcript().pop_message()

    def test_conversation_filters_notices_and_thinking(self) -> None:
        transcript = Transcript([
            Message("assistant", "note", notice=True),
            Message("user", "q"),
            Message("thinking", "…"),
            Message("assistant", "a"),
        ])

        assert [m.content for m in transcript.conversation()] == ["q", "a"]
