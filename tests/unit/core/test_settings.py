"""Tests for Settings loading from the environment."""

from kepixel.core.config import LogFormat, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("KEPIXEL_TRACKER_URL", raising=False)
        monkeypatch.delenv("KEPIXEL_LOG_LEVEL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.TRACKER_URL == "https://edge.kepixel.com"
        assert settings.LANGUAGE == "en"
        assert settings.LIBRARY_NAME == "http"
        assert settings.HTTP_TIMEOUT == 10.0
        assert settings.HEARTBEAT_ACTIVE_TIME == 15.0
        assert settings.LOG_FORMAT == LogFormat.TEXT
        assert settings.LOG_LEVEL == "INFO"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("KEPIXEL_APP_ID", "env-app")
        monkeypatch.setenv("KEPIXEL_DISABLED", "true")
        monkeypatch.setenv("KEPIXEL_LOG_FORMAT", "json")

        settings = Settings(_env_file=None)

        assert settings.APP_ID == "env-app"
        assert settings.DISABLED is True
        assert settings.LOG_FORMAT == LogFormat.JSON

    def test_trailing_slash_is_stripped(self):
        settings = Settings(_env_file=None, TRACKER_URL="https://c.test/")

        assert settings.TRACKER_URL == "https://c.test"

    def test_log_level_is_upper_cased(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
