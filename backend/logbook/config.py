from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from logbook.errors import ConfigurationError, ConfigurationMissing

VERSION = "1.0.0"

# Levels understood by both the logging module and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class StorageSettings(BaseSettings):
    """Where logs live and how their times are shown.

    The CLI reads these on their own, without the webhook settings.
    """
    # Database configuration (SQLAlchemy URL or a bare SQLite path)
    DATABASE_URL: str = "sqlite:///./logbook.db"

    # Rendering
    DISPLAY_TIMEZONE: str = "America/Toronto"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def display_tz(self) -> ZoneInfo:
        return ZoneInfo(self.DISPLAY_TIMEZONE)


class Settings(StorageSettings):
    """Service settings loaded from environment or .env file."""
    APP_NAME: str = "Logbook"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Telegram webhook
    TELEGRAM_USERNAME: str
    TELEGRAM_SECRET: Optional[str] = None
    REQUIRE_WEBHOOK_KEY: bool = True

    OWNER_NAME: str = "John Doe"


def load_settings(**overrides) -> Settings:
    """Build and validate settings once at startup.

    Raises ConfigurationMissing when a required value is absent and
    ConfigurationError when a value is present but unusable.
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        missing = [
            ".".join(str(part) for part in err["loc"])
            for err in e.errors()
            if err["type"] == "missing"
        ]
        if missing:
            raise ConfigurationMissing(
                "missing environment variable " + ", ".join(missing)
            ) from e
        raise ConfigurationError(f"invalid configuration: {e}") from e

    if settings.REQUIRE_WEBHOOK_KEY and not settings.TELEGRAM_SECRET:
        raise ConfigurationMissing("missing environment variable TELEGRAM_SECRET")

    level = settings.LOG_LEVEL.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"unknown log level {settings.LOG_LEVEL!r} "
            f"(expected one of {', '.join(LOG_LEVELS)})"
        )
    settings.LOG_LEVEL = level

    try:
        settings.display_tz
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            f"unknown timezone {settings.DISPLAY_TIMEZONE!r}"
        ) from e

    return settings
