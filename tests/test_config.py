import pytest

from logbook.config import Settings, StorageSettings, load_settings
from logbook.errors import ConfigurationError, ConfigurationMissing

ENV_VARS = [
    "DATABASE_URL", "HOST", "PORT", "LOG_LEVEL", "TELEGRAM_USERNAME", "TELEGRAM_SECRET",
    "REQUIRE_WEBHOOK_KEY", "OWNER_NAME", "DISPLAY_TIMEZONE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Loading settings from the environment"""

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        monkeypatch.setenv("TELEGRAM_SECRET", "k")
        settings = load_settings(_env_file=None)

        assert settings.PORT == 8080
        assert settings.OWNER_NAME == "John Doe"
        assert settings.DISPLAY_TIMEZONE == "America/Toronto"
        assert settings.REQUIRE_WEBHOOK_KEY is True
        assert settings.DATABASE_URL == "sqlite:///./logbook.db"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        monkeypatch.setenv("TELEGRAM_SECRET", "k")
        monkeypatch.setenv("PORT", "11108")
        monkeypatch.setenv("OWNER_NAME", "Morgan")
        monkeypatch.setenv("DISPLAY_TIMEZONE", "America/Vancouver")
        settings = load_settings(_env_file=None)

        assert settings.PORT == 11108
        assert settings.OWNER_NAME == "Morgan"
        assert settings.display_tz.key == "America/Vancouver"

    def test_missing_username(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_SECRET", "k")
        with pytest.raises(ConfigurationMissing, match="TELEGRAM_USERNAME"):
            load_settings(_env_file=None)

    def test_missing_secret(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        with pytest.raises(ConfigurationMissing, match="TELEGRAM_SECRET"):
            load_settings(_env_file=None)

    def test_secret_optional_without_key_check(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        monkeypatch.setenv("REQUIRE_WEBHOOK_KEY", "false")
        settings = load_settings(_env_file=None)
        assert settings.REQUIRE_WEBHOOK_KEY is False
        assert settings.TELEGRAM_SECRET is None

    def test_unknown_timezone(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        monkeypatch.setenv("TELEGRAM_SECRET", "k")
        monkeypatch.setenv("DISPLAY_TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ConfigurationError, match="timezone"):
            load_settings(_env_file=None)

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        monkeypatch.setenv("TELEGRAM_SECRET", "k")
        monkeypatch.setenv("PORT", "not-a-port")
        with pytest.raises(ConfigurationError) as exc:
            load_settings(_env_file=None)
        assert not isinstance(exc.value, ConfigurationMissing)

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        monkeypatch.setenv("TELEGRAM_SECRET", "k")
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ConfigurationError, match="unknown log level 'verbose'") as exc:
            load_settings(_env_file=None)
        assert not isinstance(exc.value, ConfigurationMissing)

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_USERNAME", "alice")
        monkeypatch.setenv("TELEGRAM_SECRET", "k")
        monkeypatch.setenv("LOG_LEVEL", " debug")
        assert load_settings(_env_file=None).LOG_LEVEL == "DEBUG"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TELEGRAM_USERNAME=carol\nTELEGRAM_SECRET=abc\nUNRELATED=1\n")
        settings = Settings(_env_file=str(env_file))
        assert settings.TELEGRAM_USERNAME == "carol"
        assert settings.TELEGRAM_SECRET == "abc"

    def test_storage_settings_need_no_webhook_values(self, tmp_path):
        """The CLI reads storage settings without a Telegram username"""
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=/srv/logs.db\nDISPLAY_TIMEZONE=UTC\n")
        settings = StorageSettings(_env_file=str(env_file))
        assert settings.DATABASE_URL == "/srv/logs.db"
        assert settings.display_tz.key == "UTC"
