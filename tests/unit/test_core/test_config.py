"""Tests for library settings."""

from statement_parser.core.config import Settings, get_settings


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("YEAR_PREFIX", "DEBUG", "LOG_LEVEL", "LOG_FILE", "MAX_WORKERS"):
            monkeypatch.delenv(f"STATEMENT_PARSER_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.YEAR_PREFIX == 20
        assert settings.DEBUG is False
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FILE is None
        assert settings.MAX_WORKERS == 4

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STATEMENT_PARSER_YEAR_PREFIX", "19")
        monkeypatch.setenv("statement_parser_debug", "true")

        settings = Settings(_env_file=None)

        assert settings.YEAR_PREFIX == 19
        assert settings.DEBUG is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
