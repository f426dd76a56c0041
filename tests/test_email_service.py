"""
Tests for the email delivery channel.
"""
from types import SimpleNamespace

import pytest

from config import EmailConfig
from services import email_service
from services.auth_service import AuthService
from services.email_service import EmailChannel, send_reminder_email
from services.notifications import Notification
from services.settings_service import SettingsService

class FakeSMTP:
    instances = []

    def __init__(self, server, port):
        self.server = server
        self.port = port
        self.sent = []
        self.logged_in = None
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, message):
        self.sent.append(message)

@pytest.fixture
def smtp(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(email_service.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP

CONFIGURED = EmailConfig(sender_email="bot@example.com", sender_password="app-pass")
NOTE = Notification(title="Morning Water", body="Drink up", tag="reminder-1")

def test_unconfigured_email_is_not_sent(smtp):
    assert send_reminder_email(EmailConfig(), "Sam", "sam@example.com", "s", "m") is False
    assert smtp.instances == []

def test_send_reminder_email(smtp):
    assert send_reminder_email(CONFIGURED, "Sam", "sam@example.com", "Reminder", "Drink up") is True

    client = smtp.instances[0]
    assert (client.server, client.port) == ("smtp.gmail.com", 587)
    assert client.logged_in == ("bot@example.com", "app-pass")
    message = client.sent[0]
    assert message["To"] == "sam@example.com"
    assert message["Subject"] == "Reminder"

def test_smtp_failure_returns_false(monkeypatch):
    def refuse(server, port):
        raise OSError("connection refused")

    monkeypatch.setattr(email_service.smtplib, "SMTP", refuse)
    assert send_reminder_email(CONFIGURED, "Sam", "sam@example.com", "s", "m") is False

def test_channel_requires_setting_and_session(smtp, storage):
    settings = SettingsService(storage)
    auth = AuthService(storage)
    channel = EmailChannel(CONFIGURED, settings, auth)
    reminder = SimpleNamespace(id="1")

    assert channel.send(reminder, NOTE) is False

    settings.update_settings(email_notifications=True)
    assert channel.send(reminder, NOTE) is False

    auth.signup("Sam", "sam@example.com", "pw")
    assert channel.send(reminder, NOTE) is True
    assert smtp.instances[-1].sent[0]["Subject"] == "Reminder: Morning Water"
