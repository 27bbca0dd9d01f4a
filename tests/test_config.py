"""Tests for configuration loading and saving."""

import pytest
import yaml

from youtube_chat.config import DEFAULT_MODEL, AppConfig, ConfigStore, default_config_path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self) -> None:
        config = AppConfig()

        assert config.language is None
        assert config.locale is None
        assert config.prefer_accurate_transcript is False
        assert config.model == DEFAULT_MODEL

    def test_from_dict(self) -> None:
        config = AppConfig.from_dict({
            "language": "es",
            "locale": "es-MX",
            "prefer_accurate_transcript": True,
            "model": "gpt-4o",
        })

        assert config.language == "es"
        assert config.locale == "es-MX"
        assert config.prefer_accurate_transcript is True
        assert config.model == "gpt-4o"

    def test_model_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("YOUTUBE_CHAT_MODEL", "local-model")

        assert AppConfig.from_dict({}).model == "local-model"

    def test_to_dict_round_trip(self) -> None:
        config = AppConfig(language="ja", locale="ja", prefer_accurate_transcript=True)

        assert AppConfig.from_dict(config.to_dict()) == config


class TestConfigStore:
    """Tests for ConfigStore."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        store = ConfigStore(tmp_path / "missing.yaml")

        assert store.load_config() == AppConfig.from_dict({})

    def test_save_then_load(self, tmp_path) -> None:
        store = ConfigStore(tmp_path / "nested" / "config.yaml")
        store.save_config(AppConfig(language="fr", locale="fr"))

        loaded = store.load_config()

        assert loaded.language == "fr"
        assert loaded.locale == "fr"

    def test_saved_file_is_yaml(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        ConfigStore(path).save_config(AppConfig(language="ru", locale="ru"))

        data = yaml.safe_load(path.read_text(encoding="utf-8"))

        assert data["language"] == "ru"
        assert data["prefer_accurate_transcript"] is False

    def test_invalid_yaml_gives_defaults(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("language: [unclosed\n", encoding="utf-8")

        assert ConfigStore(path).load_config().language is None

    def test_save_failure_raises_oserror(self, tmp_path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        store = ConfigStore(blocker / "config.yaml")

        with pytest.raises(OSError):
            store.save_config(AppConfig())

    def test_path_override(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("YOUTUBE_CHAT_CONFIG", str(tmp_path / "custom.yaml"))

        assert default_config_path() == tmp_path / "custom.yaml"
        assert ConfigStore().path == tmp_path / "custom.yaml"
