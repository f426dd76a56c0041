#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthMate v1.0 - Configuration
Centralized, environment-driven configuration with validation

Version: 1.0.0
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Durable key-value storage"""
    path: Path
    key_prefix: str = "healthmate_"

@dataclass
class NotificationConfig:
    """Desktop notifications"""
    enabled: bool = True
    app_name: str = "HealthMate"
    timeout: int = 0  # seconds; 0 keeps the notification until dismissed
    timezone: str = "UTC"

@dataclass
class SpeechConfig:
    """Text-to-speech"""
    language: str = "en"
    tld: str = "us"

@dataclass
class EmailConfig:
    """SMTP settings for the optional email channel"""
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    sender_email: Optional[str] = None
    sender_password: Optional[str] = None

    @property
    def configured(self) -> bool:
        return bool(self.sender_email and self.sender_password)

class AppConfig:
    """Main configuration class"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Load configuration from environment variables"""

        # Directories
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        self.storage = StorageConfig(
            path=Path(os.getenv('STORAGE_FILE', str(self.data_dir / "healthmate.json"))),
        )

        self.notifications = NotificationConfig(
            enabled=os.getenv('NOTIFICATIONS_ENABLED', 'true').lower() == 'true',
            app_name=os.getenv('APP_NAME', 'HealthMate'),
            timeout=int(os.getenv('NOTIFICATION_TIMEOUT', 0)),
            timezone=os.getenv('TIMEZONE', 'UTC'),
        )

        self.speech = SpeechConfig(
            language=os.getenv('TTS_LANGUAGE', 'en'),
            tld=os.getenv('TTS_TLD', 'us'),
        )

        self.email = EmailConfig(
            smtp_server=os.getenv('SMTP_SERVER', 'smtp.gmail.com'),
            smtp_port=int(os.getenv('SMTP_PORT', 587)),
            sender_email=os.getenv('SENDER_EMAIL'),
            sender_password=os.getenv('SENDER_PASSWORD'),
        )

        # Logging
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO'))
        self.log_to_file = os.getenv('LOG_TO_FILE', 'true').lower() == 'true'
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Collect configuration errors and raise them together"""
        errors = []

        try:
            pytz.timezone(self.notifications.timezone)
        except pytz.UnknownTimeZoneError:
            errors.append(f"TIMEZONE '{self.notifications.timezone}' is not a known timezone")

        if self.notifications.timeout < 0:
            errors.append("NOTIFICATION_TIMEOUT must not be negative")

        if not 1 <= self.email.smtp_port <= 65535:
            errors.append(f"SMTP_PORT {self.email.smtp_port} is out of range (1-65535)")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Create the directories the application writes to"""
        directories = [self.data_dir, self.storage.path.parent]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def tzinfo(self):
        return pytz.timezone(self.notifications.timezone)

    def get_logging_config(self) -> Dict[str, Any]:
        """Build a dictConfig for the logging module"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_handlers = {
            'console': {
                'class': 'logging.StreamHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'stream': sys.stdout
            }
        }
        if self.log_to_file:
            logging_handlers['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"healthmate_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': logging_handlers,
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'apscheduler': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'gtts': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'urllib3': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration (secrets hidden)"""
        return {
            'environment': self.environment.value,
            'storage_path': str(self.storage.path),
            'timezone': self.notifications.timezone,
            'notifications_enabled': self.notifications.enabled,
            'email_configured': self.email.configured,
            'sender_email': self.email.sender_email,
            'log_level': self.log_level.value
        }

_config: Optional[AppConfig] = None

def load_config() -> AppConfig:
    """Build a fresh configuration from the current environment"""
    return AppConfig()

def get_config() -> AppConfig:
    """Shared configuration instance, created on first use"""
    global _config
    if _config is None:
        _config = load_config()
    return _config

__all__ = [
    'AppConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'NotificationConfig',
    'SpeechConfig',
    'EmailConfig',
    'load_config',
    'get_config'
]
