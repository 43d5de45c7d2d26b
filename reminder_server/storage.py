# -*- coding: utf-8 -*-
"""
Local key-value storage and the reminder persistence adapter.

LocalStorage keeps a flat string-to-string map in a single JSON file. The
reminder list lives under one fixed key as JSON text. The adapter functions
never raise: read and write failures are logged and the caller keeps its
in-memory state.
"""
from __future__ import annotations

import json
import logging
import typing as t
from pathlib import Path

from .errors import StorageError
from .models import Reminder

logger = logging.getLogger(__name__)


class LocalStorage:
    """A string-to-string key-value map persisted to one JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Error reading storage file {self.path}: {e}") from e
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not hold a key-value map")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Error writing storage file {self.path}: {e}") from e

    def get_item(self, key: str) -> t.Optional[str]:
        """Returns the value stored under key, or None if absent."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)


def load_reminders(storage: LocalStorage, key: str) -> list[Reminder]:
    """Loads the reminder list stored under key.

    Missing values load as an empty list. Unreadable or corrupt values are
    logged and also load as an empty list.

    :param storage: The storage to read from.
    :param key: The storage key holding the list.
    :return: The stored reminders, in stored order.
    """
    try:
        raw = storage.get_item(key)
    except StorageError:
        logger.exception("Failed to read reminders from local storage")
        return []
    if not raw:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        return [Reminder.from_dict(item) for item in data]
    except (ValueError, TypeError, KeyError, AttributeError):
        logger.exception("Failed to parse reminders from local storage")
        return []


def save_reminders(storage: LocalStorage, key: str, items: t.Sequence[Reminder]) -> None:
    """Serializes items to JSON and writes them under key. Failures are logged."""
    try:
        storage.set_item(key, json.dumps([item.to_dict() for item in items], ensure_ascii=False))
    except (StorageError, TypeError, ValueError):
        logger.exception("Failed to save reminders to local storage")
