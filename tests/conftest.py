"""
Shared pytest fixtures for the quote API tests.

Every test gets its own SQLite file and explicit settings, so nothing leaks
between tests and no .env file is read. Outbound email/SMS are replaced by
recording senders unless a test builds the real ones.
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import Settings
from errors import StorageError
from main import create_app
from Notification_module.Notification_dispatcher import NotificationDispatcher
from Quote_module.Quote_store import SqliteQuoteStore

ADMIN_PASSWORD = "correct horse battery staple"
# HS256 keys shorter than 32 bytes trigger warnings in PyJWT
TOKEN_SECRET = "test-admin-token-secret-0123456789abcdef"

VALID_QUOTE = {
    "eventName": "Launch",
    "eventDate": "2024-05-01",
    "eventPlace": "Seoul",
    "contactName": "Kim",
    "contactPhone": "010-1111-2222",
    "contactEmail": "a@b.com",
}

REQUIRED_API_FIELDS = list(VALID_QUOTE)


def make_settings(tmp_path: Path, **overrides) -> Settings:
    values = dict(
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_TOKEN_SECRET=TOKEN_SECRET,
        ALLOWED_ORIGINS="",
        DATABASE_URL=None,
        SQLITE_PATH=str(tmp_path / "quotes.sqlite"),
        SMTP_HOST=None,
        SMTP_USER=None,
        SMTP_PASS=None,
        SMTP_FROM=None,
        ADMIN_EMAIL=None,
        SENS_SERVICE_ID=None,
        SENS_ACCESS_KEY=None,
        SENS_SECRET_KEY=None,
        SENS_FROM_NUMBER=None,
        ADMIN_PHONE=None,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class RecordingSender:
    """Stands in for EmailSender/SmsSender and remembers what it was asked to send."""

    def __init__(self, result: bool = True, error: Exception = None):
        self.result = result
        self.error = error
        self.calls = []

    def send(self, quote) -> bool:
        self.calls.append(quote)
        if self.error:
            raise self.error
        return self.result


class BrokenStore(SqliteQuoteStore):
    """SQLite store whose data operations fail as if the engine were unreachable."""

    def insert(self, values):
        raise StorageError("database is locked")

    def list_all(self):
        raise StorageError("database is locked")

    def delete_by_id(self, quote_id):
        raise StorageError("database is locked")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def store(settings: Settings) -> SqliteQuoteStore:
    """Initialized SQLite store in a temporary directory."""
    quote_store = SqliteQuoteStore(settings.SQLITE_PATH)
    quote_store.initialize()
    yield quote_store
    quote_store.dispose()


@pytest.fixture
def email_sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def sms_sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def dispatcher(settings, email_sender, sms_sender) -> NotificationDispatcher:
    return NotificationDispatcher(settings, email_sender=email_sender, sms_sender=sms_sender)


@pytest.fixture
def client(settings, store, dispatcher):
    """TestClient running the full app (lifespan included) against the temp store."""
    app = create_app(settings, store=store, dispatcher=dispatcher)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client) -> dict:
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
