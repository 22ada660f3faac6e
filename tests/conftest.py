"""Shared fixtures for the notifier test suite."""

from unittest.mock import Mock

import pytest

from project_notifier.config.models import SenderConfig
from project_notifier.domain.models import Credentials
from project_notifier.logging.context import clear_log_context
from project_notifier.notifications.dispatcher import Dispatcher
from project_notifier.notifications.service import NotificationHandler
from project_notifier.notifications.templates import TemplateRenderer


@pytest.fixture(autouse=True)
def clean_log_context():
    """Isolate logging context between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def credentials():
    """Fully resolved credentials."""
    return Credentials(
        sender_user="ops@rolling-translations.com",
        sender_pass="app-password",
        admin_recipient="info@rolling-translations.com",
    )


@pytest.fixture
def sender():
    return SenderConfig(
        display_name="Rolling Translations",
        fallback_address="no-reply@rolling-translations.com",
    )


@pytest.fixture
def renderer(credentials, sender):
    return TemplateRenderer(credentials, sender=sender)


@pytest.fixture
def transport():
    """Mail transport that accepts every message."""
    mock_transport = Mock()
    mock_transport.send.return_value = None
    return mock_transport


@pytest.fixture
def handler(renderer, transport):
    return NotificationHandler(renderer=renderer, dispatcher=Dispatcher(transport))


@pytest.fixture
def new_request():
    """Snapshot of a freshly created project request."""
    return {
        "projectId": "RT-1042",
        "fullname": "Jane Doe",
        "email": "jane@x.com",
        "sourceLang": "EN",
        "targetLang": "ES",
        "rush": True,
        "files": ["brief.pdf"],
        "notes": "Legal terminology",
        "status": "pending",
    }


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the notifier reads."""
    for name in (
        "EMAIL_USER",
        "EMAIL_PASS",
        "ADMIN_EMAIL",
        "SMTP_HOST",
        "SMTP_PORT",
        "LOG_LEVEL",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
