"""Shared base classes and settings for the test suites."""
import shutil
import tempfile
from pathlib import Path

from fastapi.testclient import TestClient

from logbook.config import Settings
from logbook.main import create_app
from logbook.store import LogStore

OWNER = "alice"
SECRET = "s3cret-key"


def make_settings(database_url: str, **overrides) -> Settings:
    """Settings for tests, ignoring any .env file on disk."""
    values = {
        "DATABASE_URL": database_url,
        "TELEGRAM_USERNAME": OWNER,
        "TELEGRAM_SECRET": SECRET,
        "OWNER_NAME": "Alice",
        "DISPLAY_TIMEZONE": "America/Toronto",
        "REQUIRE_WEBHOOK_KEY": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class StoreTestCase:
    """Base class giving each test a fresh SQLite file."""

    def setup_method(self):
        self.tmpdir = Path(tempfile.mkdtemp(prefix="logbook-test-"))
        self.database_url = f"sqlite:///{self.tmpdir / 'logs.db'}"
        self.store = LogStore(self.database_url)
        self.store.ensure_schema()

    def teardown_method(self):
        self.store.dispose()
        shutil.rmtree(self.tmpdir, ignore_errors=True)


class AppTestCase(StoreTestCase):
    """Base class with a TestClient bound to the per-test store."""
    settings_overrides = {}

    def setup_method(self):
        super().setup_method()
        self.settings = make_settings(self.database_url, **self.settings_overrides)
        self.app = create_app(self.settings, self.store)
        self.client = TestClient(self.app)
