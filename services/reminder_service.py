"""
Reminder store: the reminder collection and its derived aggregates
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.database import KeyValueStorage
from core.models import Reminder, RepeatMode, ValidationError

logger = logging.getLogger('healthmate')

REMINDERS_KEY = "reminders"

DEFAULT_REMINDERS = [
    {
        "id": "1",
        "title": "Morning Water",
        "time": "08:00",
        "type": "water",
        "repeat": "daily",
        "notes": "Start your day with a glass of water",
    },
    {
        "id": "2",
        "title": "Morning Exercise",
        "time": "09:00",
        "type": "exercise",
        "repeat": "daily",
        "notes": "30 minutes of cardio or yoga",
    },
    {
        "id": "3",
        "title": "Take Vitamins",
        "time": "12:00",
        "type": "medication",
        "repeat": "daily",
        "notes": "Don't forget your daily vitamins",
    },
]

def default_reminders() -> List[Reminder]:
    created_at = datetime.now().isoformat()
    return [
        Reminder.from_dict(dict(record, completed=False, createdAt=created_at))
        for record in DEFAULT_REMINDERS
    ]

class ReminderService:
    """
    Owns the reminder list. Every mutation rewrites the whole collection to
    storage; additions are handed to the notification scheduler.
    """

    def __init__(self, storage: KeyValueStorage, notifications=None):
        self.storage = storage
        self.notifications = notifications
        self.reminders: List[Reminder] = []
        self._load()

    def _load(self) -> None:
        records = self.storage.load_json(REMINDERS_KEY)

        if records is None:
            self.reminders = default_reminders()
            self._save()
            logger.info(f"🌱 Seeded {len(self.reminders)} default reminders")
            return

        if not isinstance(records, list):
            logger.warning("⚠️ Stored reminders are not a list, ignoring them")
            records = []

        loaded = []
        for record in records:
            try:
                loaded.append(Reminder.from_dict(record))
            except ValidationError as e:
                logger.warning(f"⚠️ Skipping invalid reminder record: {e}")
        self.reminders = loaded

    def _save(self) -> None:
        self._commit(self.reminders)

    def _commit(self, reminders: List[Reminder]) -> None:
        """Persist the new list first; memory keeps the old list if the write fails"""
        self.storage.save_json(REMINDERS_KEY, [r.to_dict() for r in reminders])
        self.reminders = reminders

    def _index_of(self, reminder_id: str) -> Optional[int]:
        for i, reminder in enumerate(self.reminders):
            if reminder.id == reminder_id:
                return i
        return None

    def get_reminder(self, reminder_id: str) -> Optional[Reminder]:
        index = self._index_of(reminder_id)
        return self.reminders[index] if index is not None else None

    def add_reminder(self, draft: Dict[str, Any]) -> Reminder:
        """Create a reminder from {title, time, type, repeat, notes?}; raises ValidationError"""
        reminder = Reminder.create(
            title=draft.get("title", ""),
            time=draft.get("time", ""),
            type=draft.get("type", ""),
            repeat=draft.get("repeat", RepeatMode.DAILY),
            notes=draft.get("notes")
        )

        self._commit(self.reminders + [reminder])
        logger.info(f"➕ Reminder added: {reminder.title} at {reminder.time}")

        if self.notifications is not None:
            self.notifications.schedule_reminder(reminder)

        return reminder

    def update_reminder(self, reminder_id: str, patch: Dict[str, Any]) -> Optional[Reminder]:
        index = self._index_of(reminder_id)
        if index is None:
            return None

        updated = self.reminders[index].updated(**patch)
        reminders = list(self.reminders)
        reminders[index] = updated
        self._commit(reminders)

        if self.notifications is not None:
            self.notifications.reschedule(updated)

        return updated

    def delete_reminder(self, reminder_id: str) -> bool:
        index = self._index_of(reminder_id)
        if index is None:
            return False

        removed = self.reminders[index]
        self._commit(self.reminders[:index] + self.reminders[index + 1:])
        logger.info(f"🗑️ Reminder deleted: {removed.title}")

        if self.notifications is not None:
            self.notifications.cancel(reminder_id)

        return True

    def toggle_complete(self, reminder_id: str) -> Optional[bool]:
        """Flip completion; returns the new value, None when the id is unknown"""
        index = self._index_of(reminder_id)
        if index is None:
            return None

        reminder = self.reminders[index]
        reminders = list(self.reminders)
        reminders[index] = reminder.updated(completed=not reminder.completed)
        self._commit(reminders)
        return reminders[index].completed

    def get_today_reminders(self) -> List[Reminder]:
        return [r for r in self.reminders if r.repeat == RepeatMode.DAILY]

    def get_completed_count(self) -> int:
        return sum(1 for r in self.reminders if r.completed)

    def get_streak(self) -> int:
        """Not a calendar streak: a step function of the completed count"""
        completed = self.get_completed_count()
        return completed // 2 + 1 if completed > 0 else 0

    def get_uncompleted(self) -> List[Reminder]:
        return [r for r in self.reminders if not r.completed]
