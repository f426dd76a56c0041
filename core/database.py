#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthMate v1.0 - Durable Key-Value Storage
String-keyed flat storage of serialized records, file-backed or in-memory

Version: 1.0.0
"""

import json
import shutil
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class DatabaseError(Exception):
    """Base storage error"""
    pass

class DatabaseCorruptionError(DatabaseError):
    """Storage file could not be parsed"""
    pass

# ===== STORAGE BACKENDS =====

class KeyValueStorage:
    """
    Flat namespace of string values, like a browser's local storage.

    Every key is stored under ``key_prefix`` so several applications can share
    one backend. Values are opaque strings; ``load_json``/``save_json`` add the
    JSON layer the stores use.
    """

    def __init__(self, key_prefix: str = "healthmate_"):
        self.key_prefix = key_prefix
        self._lock = threading.RLock()

    def _full_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    # Backend hooks
    def _read(self, full_key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, full_key: str, value: str) -> None:
        raise NotImplementedError

    def _delete(self, full_key: str) -> None:
        raise NotImplementedError

    def _all_keys(self) -> List[str]:
        raise NotImplementedError

    # Public API
    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read(self._full_key(key))

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("storage values must be strings")
        with self._lock:
            self._write(self._full_key(key), value)

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._delete(self._full_key(key))

    def keys(self) -> List[str]:
        with self._lock:
            prefix_len = len(self.key_prefix)
            return [k[prefix_len:] for k in self._all_keys() if k.startswith(self.key_prefix)]

    def clear(self) -> None:
        with self._lock:
            for key in self.keys():
                self._delete(self._full_key(key))

    def load_json(self, key: str, default: Any = None) -> Any:
        """Parse the record under key; default when missing or malformed"""
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed record under '{key}', using defaults: {e}")
            return default

    def save_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))

class MemoryStorage(KeyValueStorage):
    """Process-local storage (tests, dry runs)"""

    def __init__(self, key_prefix: str = "healthmate_", initial: Optional[Dict[str, str]] = None):
        super().__init__(key_prefix)
        self._data: Dict[str, str] = dict(initial or {})

    def _read(self, full_key: str) -> Optional[str]:
        return self._data.get(full_key)

    def _write(self, full_key: str, value: str) -> None:
        self._data[full_key] = value

    def _delete(self, full_key: str) -> None:
        self._data.pop(full_key, None)

    def _all_keys(self) -> List[str]:
        return list(self._data)

class FileStorage(KeyValueStorage):
    """Storage persisted as a single JSON document, rewritten on every change"""

    def __init__(self, data_file: Path, key_prefix: str = "healthmate_"):
        super().__init__(key_prefix)
        self.data_file = Path(data_file)
        self._data: Dict[str, str] = {}
        self.save_count = 0
        self.last_save: Optional[str] = None
        self._load()

    def _load(self) -> None:
        """Read the storage file into memory"""
        if not self.data_file.exists():
            logger.info(f"Storage file {self.data_file} does not exist, starting empty")
            return

        try:
            with open(self.data_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise DatabaseCorruptionError("top-level value is not an object")
        except (json.JSONDecodeError, DatabaseCorruptionError) as e:
            logger.error(f"Storage file is corrupted: {e}")
            self._handle_corruption()
            return
        except OSError as e:
            raise DatabaseError(f"Failed to read storage: {e}")

        self._data = {str(k): v for k, v in data.items() if isinstance(v, str)}
        logger.info(f"Loaded {len(self._data)} records from {self.data_file}")

    def _handle_corruption(self) -> None:
        """Move the unreadable file aside and start empty"""
        corrupt_copy = self.data_file.with_suffix(self.data_file.suffix + '.corrupt')
        try:
            shutil.move(str(self.data_file), str(corrupt_copy))
            logger.warning(f"Corrupted storage moved to {corrupt_copy}")
        except OSError as e:
            logger.error(f"Could not move corrupted storage aside: {e}")
        self._data = {}

    def _save(self) -> None:
        """Atomic save through a temporary file"""
        temp_file = self.data_file.with_suffix('.tmp')

        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)

            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)

            # Verify the written file parses before replacing
            with open(temp_file, 'r', encoding='utf-8') as f:
                json.load(f)

            shutil.move(str(temp_file), str(self.data_file))

            self.save_count += 1
            self.last_save = datetime.now().isoformat()

        except (OSError, ValueError) as e:
            if temp_file.exists():
                temp_file.unlink()
            raise DatabaseError(f"Failed to save storage: {e}")

    def _read(self, full_key: str) -> Optional[str]:
        return self._data.get(full_key)

    def _commit(self, data: Dict[str, str]) -> None:
        """Save data; memory is only replaced when the file write succeeded"""
        previous = self._data
        self._data = data
        try:
            self._save()
        except DatabaseError:
            self._data = previous
            raise

    def _write(self, full_key: str, value: str) -> None:
        self._commit(dict(self._data, **{full_key: value}))

    def _delete(self, full_key: str) -> None:
        if full_key in self._data:
            self._commit({k: v for k, v in self._data.items() if k != full_key})

    def _all_keys(self) -> List[str]:
        return list(self._data)

    def get_stats(self) -> Dict[str, Any]:
        size_bytes = self.data_file.stat().st_size if self.data_file.exists() else 0
        return {
            'path': str(self.data_file),
            'records': len(self._data),
            'size_kb': round(size_bytes / 1024, 2),
            'save_count': self.save_count,
            'last_save': self.last_save
        }

# ===== CONVENIENCE FUNCTIONS =====

def create_storage(data_file: Optional[Path] = None, key_prefix: str = "healthmate_") -> KeyValueStorage:
    """File storage when a path is given, memory storage otherwise"""
    if data_file is None:
        return MemoryStorage(key_prefix)
    return FileStorage(data_file, key_prefix)

# ===== EXPORT =====

__all__ = [
    'DatabaseError',
    'DatabaseCorruptionError',
    'KeyValueStorage',
    'MemoryStorage',
    'FileStorage',
    'create_storage'
]
