"""
Tests for progress statistics.
"""
from core.models import Reminder
from services.stats import (
    WEEKLY_BASELINE, build_stats, completion_rate, today_progress,
    type_distribution, weekly_progress
)

def reminder(reminder_id, type="water", repeat="daily", completed=False):
    return Reminder(id=reminder_id, title=f"R{reminder_id}", time="08:00",
                    type=type, repeat=repeat, completed=completed)

def test_completion_rate():
    assert completion_rate([]) == 0
    assert completion_rate([reminder("1", completed=True), reminder("2"), reminder("3")]) == 33
    assert completion_rate([reminder("1", completed=True), reminder("2", completed=True), reminder("3")]) == 67

def test_today_progress_counts_daily_only():
    reminders = [
        reminder("1", completed=True),
        reminder("2"),
        reminder("3", repeat="weekly", completed=True),
    ]
    assert today_progress(reminders) == 50
    assert today_progress([reminder("1", repeat="weekly")]) == 0

def test_type_distribution():
    reminders = [reminder("1"), reminder("2", type="sleep"), reminder("3")]
    assert type_distribution(reminders) == {"water": 2, "sleep": 1}

def test_weekly_progress_appends_today():
    reminders = [reminder("1", completed=True), reminder("2", completed=True), reminder("3")]
    assert weekly_progress(reminders) == WEEKLY_BASELINE + [2]
    assert len(weekly_progress([])) == 7

def test_build_stats(reminder_service):
    reminder_service.toggle_complete("1")

    stats = build_stats(reminder_service)

    assert stats["total"] == 3
    assert stats["completed"] == 1
    assert stats["streak"] == 1
    assert stats["completion_rate"] == 33
    assert stats["distribution"] == {"water": 1, "exercise": 1, "medication": 1}
