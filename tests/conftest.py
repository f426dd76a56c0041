"""
Test configuration and fixtures for the HealthMate tests.
Stores run on in-memory storage; the scheduler is never started and platform
capabilities (notifications, speech) are replaced with recording fakes.
"""
from datetime import datetime

import pytest
import pytz
from apscheduler.schedulers.background import BackgroundScheduler

from config import load_config
from core.database import MemoryStorage
from services import HealthMateApp
from services.notifications import NotificationPermission, NotificationService
from services.reminder_service import ReminderService

class FixedClock:
    """Callable clock whose time tests can move"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

class FakeNotifier:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.permission = NotificationPermission.DEFAULT
        self.shown = []

    def request_permission(self) -> bool:
        if self.permission == NotificationPermission.DEFAULT:
            self.permission = (
                NotificationPermission.GRANTED if self.enabled else NotificationPermission.DENIED
            )
        return self.permission == NotificationPermission.GRANTED

    def show(self, note) -> bool:
        if self.permission != NotificationPermission.GRANTED:
            return False
        self.shown.append(note)
        return True

class FakeAnnouncer:
    def __init__(self, supported: bool = True):
        self.supported = supported
        self.spoken = []
        self.stops = 0

    def speak(self, text: str, rate: float = 1.0) -> bool:
        self.spoken.append(text)
        return True

    def stop_speaking(self) -> None:
        self.stops += 1

    def is_supported(self) -> bool:
        return self.supported

@pytest.fixture
def storage():
    """Fresh in-memory storage."""
    return MemoryStorage()

@pytest.fixture
def clock():
    """Monday 2024-01-15 07:00 UTC."""
    return FixedClock(pytz.utc.localize(datetime(2024, 1, 15, 7, 0)))

@pytest.fixture
def scheduler():
    """Scheduler that holds jobs without running them."""
    return BackgroundScheduler(timezone=pytz.utc)

@pytest.fixture
def notifier():
    return FakeNotifier()

@pytest.fixture
def announcer():
    return FakeAnnouncer()

@pytest.fixture
def notifications(notifier, scheduler, clock):
    return NotificationService(notifier, scheduler=scheduler, tz=pytz.utc, clock=clock)

@pytest.fixture
def reminder_service(storage, notifications):
    return ReminderService(storage, notifications)

@pytest.fixture
def app_config(monkeypatch, tmp_path):
    """Configuration isolated to a temporary directory."""
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_TO_FILE", "false")
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.delenv("STORAGE_FILE", raising=False)
    monkeypatch.delenv("SENDER_EMAIL", raising=False)
    monkeypatch.delenv("SENDER_PASSWORD", raising=False)
    return load_config()

@pytest.fixture
def app(app_config, storage, notifier, scheduler, announcer, clock):
    """Application wired to fakes and in-memory storage."""
    with HealthMateApp(
        app_config,
        storage=storage,
        notifier=notifier,
        scheduler=scheduler,
        announcer=announcer,
        clock=clock
    ) as healthmate:
        yield healthmate
