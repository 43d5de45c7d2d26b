# -*- coding: utf-8 -*-
"""
JSON export and import of reminder lists.

The export format is the storage record shape, pretty-printed with a 2-space
indent. Imports accept any JSON array whose elements all carry a string
``text`` field; ``id``, ``when`` and ``done`` are taken from the file as-is.
"""
from __future__ import annotations

import json
import typing as t
from datetime import datetime, timezone

from .errors import ImportFormatError
from .models import Reminder, generate_id

INVALID_FORMAT_MESSAGE = "import failed: invalid format"


def export_reminders(items: t.Sequence[Reminder]) -> str:
    """Serializes reminders to pretty-printed JSON.

    :param items: The reminders to export.
    :return: JSON text of an array of {id, text, when, done} objects.
    """
    return json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)


def export_filename(now: t.Optional[datetime] = None) -> str:
    """Builds the download name, e.g. 'reminders-2025-03-01T09:30:00.000Z.json'."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return f"reminders-{stamp}.json"


def parse_import(
        contents: t.Union[str, bytes],
        id_factory: t.Callable[[], str] = generate_id,
) -> list[Reminder]:
    """Parses the contents of an import file into reminders.

    Items with no id, or with an id already used earlier in the same file,
    get a fresh id so that ids stay unique after the import. Non-string ids
    are kept in their string form.

    :param contents: Raw file contents.
    :param id_factory: Callable producing fresh ids.
    :return: The imported reminders, in file order.
    :raises ImportFormatError: If the contents are not a JSON array of
        objects with a string ``text`` field.
    """
    try:
        parsed = json.loads(contents)
    except (ValueError, TypeError) as e:
        raise ImportFormatError(INVALID_FORMAT_MESSAGE) from e

    if not isinstance(parsed, list):
        raise ImportFormatError(INVALID_FORMAT_MESSAGE)
    if not all(isinstance(item, dict) and isinstance(item.get("text"), str) for item in parsed):
        raise ImportFormatError(INVALID_FORMAT_MESSAGE)

    reminders: list[Reminder] = []
    seen: set[str] = set()
    for item in parsed:
        reminder = Reminder.from_dict(item)
        if reminder.id is not None and not isinstance(reminder.id, str):
            reminder.id = str(reminder.id)
        if not reminder.id or reminder.id in seen:
            reminder.id = id_factory()
            while reminder.id in seen:
                reminder.id = id_factory()
        seen.add(reminder.id)
        reminders.append(reminder)
    return reminders
