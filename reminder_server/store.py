# -*- coding: utf-8 -*-
"""
The reminder store: in-memory list, mutations and the read-side helpers.

The store is constructed once at startup with injected load/save callables.
It loads the list once and saves it after every mutation. Views read
``items``, ``pending_edit`` and the single ``error`` message slot.
"""
from __future__ import annotations

import asyncio
import logging
import typing as t
from datetime import datetime, timezone
from pathlib import Path

from .config import Settings, load_settings
from .errors import ExportError, ImportFormatError, ReminderError, ValidationError
from .models import FilterMode, PendingEdit, Reminder, generate_id
from .storage import LocalStorage, load_reminders, save_reminders
from .transfer import export_filename, export_reminders, parse_import

logger = logging.getLogger(__name__)

EMPTY_TEXT_MESSAGE = "text must not be empty"
EXPORT_FAILED_MESSAGE = "could not export reminders"
READ_FAILED_MESSAGE = "could not read file"

E = t.TypeVar("E", bound=ReminderError)


def filter_reminders(items: t.Iterable[Reminder], mode: t.Union[FilterMode, str]) -> list[Reminder]:
    """Selects the reminders shown for a filter mode, keeping their order.

    :param items: The reminders to filter.
    :param mode: 'all', 'active' (not done) or 'done'.
    :return: A new list; the input is never modified.
    :raises ValueError: If mode is not a known filter mode.
    """
    mode = FilterMode(mode)
    if mode is FilterMode.ACTIVE:
        return [item for item in items if not item.done]
    if mode is FilterMode.DONE:
        return [item for item in items if item.done]
    return list(items)


def parse_when(value: t.Optional[str]) -> t.Optional[datetime]:
    """Parses an ISO 8601 due time. Returns None when it cannot be parsed."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError, TypeError):
        return None


def is_overdue(item: Reminder, now: t.Optional[datetime] = None) -> bool:
    """True iff the reminder has a due time, is not done, and is past due."""
    if item.done or not item.when:
        return False
    due = parse_when(item.when)
    if due is None:
        return False
    now = now or datetime.now()
    if (due.tzinfo is None) != (now.tzinfo is None):
        # naive values are local time
        due, now = due.astimezone(), now.astimezone()
    return due < now


class ReminderStore:
    """Holds the reminder list and applies user actions to it."""

    def __init__(
            self,
            load: t.Callable[[], t.Iterable[Reminder]],
            save: t.Callable[[list[Reminder]], None],
            id_factory: t.Callable[[], str] = generate_id,
            clock: t.Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._save = save
        self._id_factory = id_factory
        self._clock = clock
        self.items: list[Reminder] = list(load())
        self.pending_edit: t.Optional[PendingEdit] = None
        self.error: str = ""

    def _report(self, exc: E) -> E:
        self.error = str(exc)
        return exc

    def _succeeded(self) -> None:
        self.error = ""

    def _persist(self) -> None:
        self._save(list(self.items))

    def _new_id(self) -> str:
        existing = {item.id for item in self.items}
        new_id = self._id_factory()
        while new_id in existing:
            new_id = self._id_factory()
        return new_id

    def _validated_text(self, text: t.Optional[str]) -> str:
        trimmed = (text or "").strip()
        if not trimmed:
            raise self._report(ValidationError(EMPTY_TEXT_MESSAGE))
        return trimmed

    def get(self, reminder_id: str) -> t.Optional[Reminder]:
        return next((item for item in self.items if item.id == reminder_id), None)

    def visible(self, mode: t.Union[FilterMode, str] = FilterMode.ALL) -> list[Reminder]:
        return filter_reminders(self.items, mode)

    def add(self, text: str, when: t.Optional[str] = None) -> Reminder:
        """Creates a reminder and puts it at the top of the list.

        :param text: Reminder text; surrounding whitespace is trimmed.
        :param when: Optional ISO due time. Empty values are stored as None.
        :return: The new reminder.
        :raises ValidationError: If the trimmed text is empty.
        """
        trimmed = self._validated_text(text)
        reminder = Reminder(id=self._new_id(), text=trimmed, when=when or None, done=False)
        self.items.insert(0, reminder)
        self._succeeded()
        self._persist()
        return reminder

    def start_edit(self, reminder_id: str) -> t.Optional[PendingEdit]:
        """Starts editing a reminder, seeding the drafts from its current fields."""
        item = self.get(reminder_id)
        if item is None:
            return None
        self.pending_edit = PendingEdit(id=item.id, draft_text=item.text, draft_when=item.when)
        self._succeeded()
        return self.pending_edit

    def commit_edit(self, reminder_id: str, text: str, when: t.Optional[str] = None) -> t.Optional[Reminder]:
        """Replaces text and when of a reminder in place.

        The pending edit is kept when validation fails so the user can fix
        the draft, and cleared otherwise.

        :raises ValidationError: If the trimmed text is empty.
        """
        trimmed = self._validated_text(text)
        item = self.get(reminder_id)
        self.pending_edit = None
        self._succeeded()
        if item is None:
            return None
        item.text = trimmed
        item.when = when or None
        self._persist()
        return item

    def cancel_edit(self) -> None:
        self.pending_edit = None
        self._succeeded()

    def remove(self, reminder_id: str) -> bool:
        """Deletes a reminder. Unknown ids are ignored.

        :return: True if a reminder was removed.
        """
        self._succeeded()
        remaining = [item for item in self.items if item.id != reminder_id]
        if len(remaining) == len(self.items):
            return False
        self.items = remaining
        if self.pending_edit is not None and self.pending_edit.id == reminder_id:
            self.pending_edit = None
        self._persist()
        return True

    def toggle_done(self, reminder_id: str) -> t.Optional[Reminder]:
        """Flips the done flag of a reminder. Unknown ids are ignored."""
        self._succeeded()
        item = self.get(reminder_id)
        if item is None:
            return None
        item.done = not item.done
        self._persist()
        return item

    def export_json(self) -> str:
        body = export_reminders(self.items)
        self._succeeded()
        return body

    def export_to(self, directory: t.Union[str, Path]) -> Path:
        """Writes the current list to a timestamped JSON file in directory.

        :return: Path of the written file.
        :raises ExportError: If the file cannot be built or written.
        """
        try:
            path = Path(directory) / export_filename(self._clock())
            path.write_text(self.export_json(), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Failed to export reminders")
            raise self._report(ExportError(EXPORT_FAILED_MESSAGE)) from e
        self._succeeded()
        logger.info("Exported %d reminder(s) to %s", len(self.items), path)
        return path

    def import_json(self, contents: t.Union[str, bytes]) -> list[Reminder]:
        """Replaces the whole list with the reminders in contents.

        :raises ImportFormatError: If contents are not a valid reminder list;
            the current list is left unchanged.
        """
        try:
            items = parse_import(contents, self._id_factory)
        except ImportFormatError as e:
            logger.error("Rejected reminder import: %s", e.__cause__ or e)
            self._report(e)
            raise
        self.items = items
        self.pending_edit = None
        self._succeeded()
        self._persist()
        logger.info("Imported %d reminder(s)", len(items))
        return items

    async def import_file(self, path: t.Union[str, Path]) -> list[Reminder]:
        """Reads an import file off the event loop, then applies it in one step."""
        try:
            contents = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.exception("Failed to read import file %s", path)
            raise self._report(ImportFormatError(READ_FAILED_MESSAGE)) from e
        return self.import_json(contents)


def build_store(settings: t.Optional[Settings] = None) -> ReminderStore:
    """Creates a store backed by the configured local storage file."""
    settings = settings or load_settings()
    storage = LocalStorage(settings.storage_path)
    key = settings.storage_key
    return ReminderStore(
        load=lambda: load_reminders(storage, key),
        save=lambda items: save_reminders(storage, key, items),
    )
