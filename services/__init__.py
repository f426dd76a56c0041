# services/__init__.py

"""
HealthMate services

Stores, notification scheduling, speech and the helpers built on them.
``HealthMateApp`` wires them together over one storage instance.
"""

import logging
from typing import Optional

from config import AppConfig, get_config
from core.database import KeyValueStorage, FileStorage, create_storage
from ui.messages import COMPLETION_PRAISE, random_quote, reminders_due_message

from .auth_service import AuthService
from .settings_service import SettingsService
from .reminder_service import ReminderService
from .notifications import DesktopNotifier, NotificationService
from .speech import SpeechAnnouncer
from .assistant import AssistantService
from .email_service import EmailChannel
from .stats import build_stats

logger = logging.getLogger(__name__)

class HealthMateApp:
    """
    Composition root for the stores and services

    Provides:
    - construction in dependency order over a shared storage
    - the dashboard entry and completion flows that combine several stores
    - a health report and orderly shutdown
    """

    def __init__(self, app_config: Optional[AppConfig] = None,
                 storage: Optional[KeyValueStorage] = None,
                 notifier=None,
                 scheduler=None,
                 announcer=None,
                 clock=None):
        self.config = app_config or get_config()

        logger.info("🔧 Initializing HealthMate services...")

        self.storage = storage or create_storage(
            self.config.storage.path, key_prefix=self.config.storage.key_prefix
        )
        self.settings = SettingsService(self.storage)
        self.auth = AuthService(self.storage)

        self.notifications = NotificationService(
            notifier or DesktopNotifier(
                app_name=self.config.notifications.app_name,
                timeout=self.config.notifications.timeout,
                enabled=self.config.notifications.enabled
            ),
            scheduler=scheduler,
            tz=self.config.tzinfo,
            clock=clock
        )
        self.notifications.add_channel(EmailChannel(self.config.email, self.settings, self.auth))

        self.reminders = ReminderService(self.storage, self.notifications)
        self.speech = announcer or SpeechAnnouncer(
            language=self.config.speech.language, tld=self.config.speech.tld
        )
        self.assistant = AssistantService(announcer=self.speech)

        logger.info("✅ All services initialized")

    def enter_dashboard(self) -> str:
        """Request permission, announce pending reminders, hand back a quote"""
        self.notifications.request_permission()

        pending = self.reminders.get_uncompleted()
        if self.settings.settings.tts_enabled and pending:
            self.speech.speak(reminders_due_message(len(pending)))

        return random_quote()

    def complete_reminder(self, reminder_id: str) -> Optional[bool]:
        completed = self.reminders.toggle_complete(reminder_id)
        if completed and self.settings.settings.tts_enabled:
            self.speech.speak(COMPLETION_PRAISE)
        return completed

    def chat(self, text: str) -> Optional[str]:
        return self.assistant.reply(text, speak=self.settings.settings.tts_enabled)

    def arm_all(self) -> int:
        """Schedule every uncompleted reminder; returns how many were armed"""
        armed = 0
        for reminder in self.reminders.get_uncompleted():
            if self.notifications.schedule_reminder(reminder):
                armed += 1
        return armed

    def get_stats(self) -> dict:
        return build_stats(self.reminders)

    def health_check(self) -> dict:
        health = {
            "status": "healthy",
            "services": {
                "auth": {"status": "healthy", "accounts": self.auth.get_accounts_count()},
                "reminders": {"status": "healthy", "count": len(self.reminders.reminders)},
                "notifications": {
                    "status": "healthy",
                    "permission": self.notifications.notifier.permission.value,
                    "armed": len(self.notifications.armed)
                },
            }
        }

        if isinstance(self.storage, FileStorage):
            health["services"]["storage"] = dict(self.storage.get_stats(), status="healthy")

        if not self.speech.is_supported():
            health["services"]["speech"] = {"status": "warning"}
            health["status"] = "warning"

        return health

    def close(self) -> None:
        logger.info("🛑 Closing services...")
        self.speech.stop_speaking()
        self.notifications.shutdown()
        logger.info("✅ All services closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

__all__ = [
    'HealthMateApp',
    'AuthService',
    'SettingsService',
    'ReminderService',
    'NotificationService',
    'DesktopNotifier',
    'SpeechAnnouncer',
    'AssistantService',
    'EmailChannel',
]
