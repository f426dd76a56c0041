#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthMate v1.0 - Core Data Models
Data models with validation and typing

Version: 1.0.0
"""

import re
import uuid
from datetime import datetime, time
from typing import Dict, Optional, Any, Union
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
import logging

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class ReminderType(Enum):
    """Reminder categories"""
    WATER = "water"
    EXERCISE = "exercise"
    MEDICATION = "medication"
    SLEEP = "sleep"
    MEDITATION = "meditation"

class RepeatMode(Enum):
    """How often a reminder repeats"""
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Invalid data"""
    pass

TIME_OF_DAY_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

def validate_text(text: str, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Validate a text field"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} must be a string")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} must contain at least {min_length} characters")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} must contain at most {max_length} characters")

    return text

def validate_enum_value(value: Union[str, Enum], enum_class: type, field_name: str = "value") -> Enum:
    """Coerce a raw value into a member of enum_class"""
    if isinstance(value, enum_class):
        return value
    try:
        return enum_class(value)
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} must be one of: {valid_values}")

def parse_time_of_day(value: str) -> time:
    """Parse a 24-hour HH:MM string"""
    if not isinstance(value, str):
        raise ValidationError("time must be a string in HH:MM format")
    match = TIME_OF_DAY_RE.match(value)
    if not match:
        raise ValidationError(f"Invalid time of day: {value!r} (expected HH:MM)")
    return time(int(match.group(1)), int(match.group(2)))

# ===== CORE MODELS =====

@dataclass
class SessionUser:
    """Logged-in user as mirrored into storage (no password)"""
    id: str
    name: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionUser":
        try:
            return cls(id=data["id"], name=data["name"], email=data["email"])
        except (KeyError, TypeError) as e:
            raise ValidationError(f"Invalid session user record: {e}")

@dataclass
class Account:
    """Registered account in the local directory"""
    id: str
    name: str
    email: str
    password: str  # salted digest, see services.auth_service

    @property
    def session_user(self) -> SessionUser:
        return SessionUser(id=self.id, name=self.name, email=self.email)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        try:
            return cls(
                id=data["id"],
                name=data["name"],
                email=data["email"],
                password=data["password"]
            )
        except (KeyError, TypeError) as e:
            raise ValidationError(f"Invalid account record: {e}")

    @classmethod
    def create(cls, name: str, email: str, password: str) -> "Account":
        """Create a new account with a fresh id"""
        return cls(
            id=f"user_{uuid.uuid4().hex}",
            name=name,
            email=email,
            password=password
        )

@dataclass
class Reminder:
    """Timed wellness reminder"""
    id: str
    title: str
    time: str  # HH:MM, 24-hour
    type: ReminderType
    repeat: RepeatMode = RepeatMode.DAILY
    notes: Optional[str] = None
    completed: bool = False
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    EDITABLE_FIELDS = ("title", "time", "type", "repeat", "notes", "completed")

    def __post_init__(self):
        """Validate after construction"""
        self.title = validate_text(self.title, min_length=1, max_length=100, field_name="title")
        parse_time_of_day(self.time)
        self.type = validate_enum_value(self.type, ReminderType, field_name="type")
        self.repeat = validate_enum_value(self.repeat, RepeatMode, field_name="repeat")

        if self.notes is not None:
            self.notes = validate_text(self.notes, min_length=0, max_length=500, field_name="notes")

        if not isinstance(self.completed, bool):
            raise ValidationError("completed must be a boolean")

    @property
    def time_of_day(self) -> time:
        return parse_time_of_day(self.time)

    @property
    def notification_body(self) -> str:
        """Text shown in the notification body"""
        return self.notes or f"Time for your {self.type.value} reminder!"

    def updated(self, **changes) -> "Reminder":
        """Copy of this reminder with changes applied (validated)"""
        unknown = set(changes) - set(self.EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update reminder fields: {sorted(unknown)}")
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "time": self.time,
            "type": self.type.value,
            "repeat": self.repeat.value,
            "notes": self.notes,
            "completed": self.completed,
            "createdAt": self.created_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reminder":
        try:
            return cls(
                id=data["id"],
                title=data["title"],
                time=data["time"],
                type=data["type"],
                repeat=data.get("repeat", RepeatMode.DAILY.value),
                notes=data.get("notes"),
                completed=data.get("completed", False),
                created_at=data.get("createdAt", datetime.now().isoformat())
            )
        except (KeyError, TypeError) as e:
            raise ValidationError(f"Invalid reminder record: {e}")

    @classmethod
    def create(cls, title: str, time: str, type: Union[str, ReminderType],
               repeat: Union[str, RepeatMode] = RepeatMode.DAILY,
               notes: Optional[str] = None) -> "Reminder":
        """Create a new reminder from a user draft"""
        return cls(
            id=f"reminder_{uuid.uuid4().hex}",
            title=title,
            time=time,
            type=type,
            repeat=repeat,
            notes=notes or None
        )

@dataclass
class Settings:
    """User-facing preferences"""
    dark_mode: bool = False
    tts_enabled: bool = True
    ai_tips_enabled: bool = True
    email_notifications: bool = False
    sms_notifications: bool = False
    browser_notifications: bool = True

    # attribute name -> stored key
    STORAGE_KEYS = {
        "dark_mode": "darkMode",
        "tts_enabled": "ttsEnabled",
        "ai_tips_enabled": "aiTipsEnabled",
        "email_notifications": "emailNotifications",
        "sms_notifications": "smsNotifications",
        "browser_notifications": "browserNotifications",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {self.STORAGE_KEYS[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        if not isinstance(data, dict):
            raise ValidationError("Settings record must be an object")
        by_storage_key = {v: k for k, v in cls.STORAGE_KEYS.items()}
        values = {}
        for key, value in data.items():
            name = by_storage_key.get(key)
            if name is None:
                logger.debug(f"Ignoring unknown setting {key!r}")
                continue
            if not isinstance(value, bool):
                logger.warning(f"Stored setting {key!r} is not a boolean, using the default")
                continue
            values[name] = value
        return cls(**values)

# ===== EXPORT =====

__all__ = [
    # Enums
    'ReminderType', 'RepeatMode',

    # Exceptions
    'ValidationError',

    # Validation functions
    'validate_text', 'validate_enum_value', 'parse_time_of_day',

    # Models
    'SessionUser', 'Account', 'Reminder', 'Settings'
]
