"""
Progress statistics derived from the reminder list
"""

from collections import Counter
from typing import Any, Dict, List

from core.models import Reminder, ReminderType, RepeatMode

# Placeholder history for the six days before today; there is no per-day log
WEEKLY_BASELINE = [3, 2, 4, 3, 5, 4]

def completion_rate(reminders: List[Reminder]) -> int:
    """Rounded percent of all reminders that are completed, 0 when empty"""
    if not reminders:
        return 0
    completed = len([r for r in reminders if r.completed])
    return round(completed / len(reminders) * 100)

def today_progress(reminders: List[Reminder]) -> int:
    today = [r for r in reminders if r.repeat == RepeatMode.DAILY]
    return completion_rate(today)

def type_distribution(reminders: List[Reminder]) -> Dict[str, int]:
    counts = Counter(r.type for r in reminders)
    return {t.value: counts[t] for t in ReminderType if counts[t]}

def weekly_progress(reminders: List[Reminder]) -> List[int]:
    completed_today = len([r for r in reminders if r.completed])
    return WEEKLY_BASELINE + [completed_today]

def build_stats(reminder_service) -> Dict[str, Any]:
    """Everything the stats view shows, in one dict"""
    reminders = reminder_service.reminders
    return {
        "total": len(reminders),
        "completed": reminder_service.get_completed_count(),
        "streak": reminder_service.get_streak(),
        "completion_rate": completion_rate(reminders),
        "today_progress": today_progress(reminders),
        "distribution": type_distribution(reminders),
        "weekly": weekly_progress(reminders),
    }
