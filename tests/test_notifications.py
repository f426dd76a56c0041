"""
Tests for reminder scheduling and notification delivery.
"""
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
import pytz

from core.models import Reminder
from services.notifications import (
    DesktopNotifier, Notification, NotificationPermission, NotificationService
)
from utils.datetime_utils import next_occurrence

def make_reminder(time="08:00", notes=None, reminder_id="r1"):
    return Reminder(id=reminder_id, title="Morning Water", time=time, type="water", notes=notes)

def test_delay_when_time_is_later_today(notifications):
    delivery = notifications.schedule_reminder(make_reminder("08:00"))
    assert delivery.delay == timedelta(hours=1)
    assert delivery.delay_ms == 3_600_000

def test_delay_rolls_over_to_tomorrow(notifications, clock):
    clock.now = clock.now.replace(hour=9)
    delivery = notifications.schedule_reminder(make_reminder("08:00"))
    assert delivery.delay == timedelta(hours=23)
    assert delivery.run_at.day == 16

def test_exactly_one_day_away_is_not_scheduled(notifications, scheduler):
    assert notifications.schedule_reminder(make_reminder("07:00")) is None
    assert scheduler.get_jobs() == []

def test_job_is_registered_with_run_date(notifications, scheduler):
    delivery = notifications.schedule_reminder(make_reminder("08:00"))
    job = scheduler.get_job(delivery.job_id)
    assert job.trigger.run_date == delivery.run_at

def test_rescheduling_keeps_one_job_per_reminder(notifications, scheduler):
    notifications.schedule_reminder(make_reminder("08:00"))
    notifications.schedule_reminder(make_reminder("10:00"))
    assert len(scheduler.get_jobs()) == 1
    assert notifications.armed["r1"].delay == timedelta(hours=3)

def test_cancel(notifications, scheduler):
    notifications.schedule_reminder(make_reminder())
    assert notifications.cancel("r1") is True
    assert scheduler.get_jobs() == []
    assert notifications.cancel("r1") is False

def test_reschedule_only_rearms_armed_reminders(notifications):
    assert notifications.reschedule(make_reminder("10:00")) is None

    notifications.schedule_reminder(make_reminder("08:00"))
    delivery = notifications.reschedule(make_reminder("10:00"))
    assert delivery.delay == timedelta(hours=3)

def test_delivery_shows_notification_when_permitted(notifications, notifier):
    notifications.request_permission()
    reminder = make_reminder(notes="Start your day with a glass of water")
    notifications.schedule_reminder(reminder)

    notifications._deliver(reminder)

    note = notifier.shown[0]
    assert note.title == "Morning Water"
    assert note.body == "Start your day with a glass of water"
    assert note.tag.startswith("reminder-")
    assert note.require_interaction is True
    assert not notifications.is_armed("r1")

def test_body_falls_back_to_type(notifications):
    note = notifications.build_notification(make_reminder())
    assert note.body == "Time for your water reminder!"

def test_delivery_without_permission_is_silent(notifications, notifier):
    notifier.enabled = False
    notifications.request_permission()
    notifications._deliver(make_reminder())
    assert notifier.shown == []
    assert notifier.permission == NotificationPermission.DENIED

def test_channel_failure_does_not_stop_delivery(notifications, notifier):
    class Broken:
        def send(self, reminder, note):
            raise RuntimeError("smtp down")

    class Recording:
        def __init__(self):
            self.sent = []

        def send(self, reminder, note):
            self.sent.append(reminder.id)

    recording = Recording()
    notifications.add_channel(Broken())
    notifications.add_channel(recording)
    notifications.request_permission()

    notifications._deliver(make_reminder())

    assert recording.sent == ["r1"]
    assert len(notifier.shown) == 1

def test_timezone_is_respected(notifier, scheduler):
    berlin = pytz.timezone("Europe/Berlin")
    now = pytz.utc.localize(datetime(2024, 1, 15, 6, 0))  # 07:00 in Berlin
    service = NotificationService(notifier, scheduler=scheduler, tz=berlin, clock=lambda: now)

    delivery = service.schedule_reminder(make_reminder("08:00"))

    assert delivery.delay == timedelta(hours=1)
    assert delivery.run_at.tzinfo.zone == "Europe/Berlin"

def test_next_occurrence_across_dst_change():
    berlin = pytz.timezone("Europe/Berlin")
    # Clocks go forward on 2024-03-31
    now = berlin.localize(datetime(2024, 3, 30, 9, 0))
    run_at = next_occurrence(datetime(2024, 1, 1, 8, 0).time(), now, berlin)
    assert run_at - now == timedelta(hours=22)

class TestDesktopNotifier:

    def test_permission_follows_configuration(self):
        assert DesktopNotifier(enabled=True).request_permission() is True
        denied = DesktopNotifier(enabled=False)
        assert denied.request_permission() is False
        assert denied.permission == NotificationPermission.DENIED

    def test_permission_request_is_idempotent(self):
        notifier = DesktopNotifier(enabled=True)
        notifier.request_permission()
        notifier.enabled = False
        assert notifier.request_permission() is True

    def test_show_calls_plyer(self, monkeypatch):
        calls = []
        monkeypatch.setattr("services.notifications.plyer_notification", SimpleNamespace(notify=lambda **kwargs: calls.append(kwargs)))
        notifier = DesktopNotifier(app_name="HealthMate", timeout=5)
        notifier.request_permission()

        assert notifier.show(Notification(title="T", body="B", tag="reminder-1")) is True
        assert calls == [{"title": "T", "message": "B", "app_name": "HealthMate", "timeout": 5}]

    def test_show_without_permission(self, monkeypatch):
        monkeypatch.setattr("services.notifications.plyer_notification", SimpleNamespace(notify=lambda **kwargs: pytest.fail("should not notify")))
        assert DesktopNotifier().show(Notification(title="T", body="B", tag="x")) is False

    def test_unsupported_platform_is_a_noop(self, monkeypatch):
        def unsupported(**kwargs):
            raise NotImplementedError

        monkeypatch.setattr("services.notifications.plyer_notification", SimpleNamespace(notify=unsupported))
        notifier = DesktopNotifier()
        notifier.request_permission()
        assert notifier.show(Notification(title="T", body="B", tag="x")) is False
