"""
Reminder notifications: next-occurrence scheduling and desktop delivery
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Dict, List, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger
from plyer import notification as plyer_notification

from core.models import Reminder, ValidationError
from utils.datetime_utils import UTC, epoch_millis, next_occurrence, now_in

logger = logging.getLogger('healthmate')

SCHEDULING_HORIZON = timedelta(hours=24)

class NotificationPermission(Enum):
    """Permission to show desktop notifications"""
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"

@dataclass
class Notification:
    """What gets shown when a reminder fires"""
    title: str
    body: str
    tag: str
    require_interaction: bool = True
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

@dataclass
class ScheduledDelivery:
    """One armed, one-shot delivery for a reminder"""
    reminder_id: str
    job_id: str
    run_at: datetime
    delay: timedelta

    @property
    def delay_ms(self) -> int:
        return int(self.delay.total_seconds() * 1000)

class DesktopNotifier:
    """Permission-gated wrapper over plyer's desktop notifications"""

    def __init__(self, app_name: str = "HealthMate", timeout: int = 0, enabled: bool = True):
        self.app_name = app_name
        self.timeout = timeout
        self.enabled = enabled
        self.permission = NotificationPermission.DEFAULT

    def request_permission(self) -> bool:
        """Idempotent; the desktop has no prompt, so configuration decides"""
        if self.permission == NotificationPermission.GRANTED:
            return True
        if self.permission == NotificationPermission.DENIED:
            return False

        self.permission = (
            NotificationPermission.GRANTED if self.enabled else NotificationPermission.DENIED
        )
        logger.info(f"🔔 Notification permission: {self.permission.value}")
        return self.permission == NotificationPermission.GRANTED

    def show(self, note: Notification) -> bool:
        if self.permission != NotificationPermission.GRANTED:
            logger.debug(f"Notification '{note.title}' skipped, permission {self.permission.value}")
            return False

        try:
            plyer_notification.notify(
                title=note.title,
                message=note.body,
                app_name=self.app_name,
                timeout=self.timeout
            )
        except NotImplementedError:
            logger.warning("⚠️ Desktop notifications are not supported on this platform")
            return False

        logger.info(f"📤 Notification shown [{note.tag}]: {note.title}")
        return True

class NotificationService:
    """
    Arms one one-shot job per reminder on an APScheduler scheduler.

    Jobs are not re-armed after they fire; repeat modes are not interpreted
    here. Each reminder id has at most one armed job so deletes and edits can
    cancel or replace it.
    """

    def __init__(self, notifier: DesktopNotifier,
                 scheduler: Optional[BaseScheduler] = None,
                 tz=UTC,
                 clock: Optional[Callable[[], datetime]] = None):
        self.notifier = notifier
        self.tz = tz
        self.scheduler = scheduler or AsyncIOScheduler(timezone=tz)
        self.clock = clock or (lambda: now_in(self.tz))
        self.channels: List = []
        self.armed: Dict[str, ScheduledDelivery] = {}

    def add_channel(self, channel) -> None:
        """Extra delivery channel called as channel.send(reminder, notification)"""
        self.channels.append(channel)

    @staticmethod
    def job_id_for(reminder_id: str) -> str:
        return f"reminder-{reminder_id}"

    def schedule_reminder(self, reminder: Reminder) -> Optional[ScheduledDelivery]:
        """Arm a single delivery at the reminder's next HH:MM, if within 24 hours"""
        try:
            at = reminder.time_of_day
        except ValidationError as e:
            logger.warning(f"⚠️ Reminder {reminder.id} not scheduled: {e}")
            return None

        now = self.clock()
        run_at = next_occurrence(at, now, self.tz)
        delay = run_at - now

        if not timedelta(0) < delay < SCHEDULING_HORIZON:
            logger.info(f"Reminder {reminder.id} not scheduled, delay {delay} outside 24h window")
            return None

        self.cancel(reminder.id)

        job_id = self.job_id_for(reminder.id)
        self.scheduler.add_job(
            self._deliver,
            DateTrigger(run_date=run_at),
            args=[reminder],
            id=job_id,
            misfire_grace_time=None
        )

        delivery = ScheduledDelivery(reminder_id=reminder.id, job_id=job_id, run_at=run_at, delay=delay)
        self.armed[reminder.id] = delivery
        logger.info(f"⏰ Reminder '{reminder.title}' armed for {run_at.isoformat()} (in {delay})")
        return delivery

    def cancel(self, reminder_id: str) -> bool:
        delivery = self.armed.pop(reminder_id, None)
        if delivery is None:
            return False

        try:
            self.scheduler.remove_job(delivery.job_id)
        except JobLookupError:
            logger.debug(f"Job {delivery.job_id} already gone")

        logger.info(f"⏹️ Delivery for reminder {reminder_id} cancelled")
        return True

    def reschedule(self, reminder: Reminder) -> Optional[ScheduledDelivery]:
        """Replace an armed delivery with one built from the updated reminder"""
        if reminder.id not in self.armed:
            return None
        self.cancel(reminder.id)
        return self.schedule_reminder(reminder)

    def is_armed(self, reminder_id: str) -> bool:
        return reminder_id in self.armed

    def build_notification(self, reminder: Reminder) -> Notification:
        return Notification(
            title=reminder.title,
            body=reminder.notification_body,
            tag=f"reminder-{epoch_millis(self.clock())}",
            require_interaction=True
        )

    def _deliver(self, reminder: Reminder) -> None:
        self.armed.pop(reminder.id, None)
        note = self.build_notification(reminder)
        self.notifier.show(note)

        for channel in self.channels:
            try:
                channel.send(reminder, note)
            except Exception as e:
                logger.error(f"❌ Delivery channel {type(channel).__name__} failed: {e}")

    def request_permission(self) -> bool:
        return self.notifier.request_permission()

    def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("📅 Notification scheduler started")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("📅 Notification scheduler stopped")
