# -*- coding: utf-8 -*-
import typing as t

from fastmcp import FastMCP

from reminder_server.config import load_settings
from reminder_server.models import Reminder
from reminder_server.formatting import format_reminders
from reminder_server.logging_config import setup_logging
from reminder_server.store import ReminderStore, build_store

mcp = FastMCP("ReminderServer")

_store: t.Optional[ReminderStore] = None


def get_store() -> ReminderStore:
    """Returns the process-wide store, building it on first use."""
    global _store
    if _store is None:
        _store = build_store()
    return _store


def set_store(store: t.Optional[ReminderStore]) -> None:
    """Replaces the process-wide store (None rebuilds it on next use)."""
    global _store
    _store = store


def _add_reminder(text: str, when: t.Optional[str] = None) -> Reminder:
    return get_store().add(text, when)


def _edit_reminder(reminder_id: str, text: str, when: t.Optional[str] = None) -> t.Optional[Reminder]:
    store = get_store()
    store.start_edit(reminder_id)
    return store.commit_edit(reminder_id, text, when)


def _toggle_reminder(reminder_id: str) -> t.Optional[Reminder]:
    return get_store().toggle_done(reminder_id)


def _remove_reminder(reminder_id: str) -> bool:
    return get_store().remove(reminder_id)


def _list_reminders(filter_mode: str = "all") -> list[Reminder]:
    return get_store().visible(filter_mode)


def _export_reminders() -> str:
    return get_store().export_json()


def _import_reminders(contents: str) -> list[Reminder]:
    return get_store().import_json(contents)


@mcp.tool()
def add_reminder(text: str, when: t.Optional[str] = None) -> Reminder:
    """Adds a reminder to the top of the list.

    :param text: Reminder text. Must not be empty.
    :param when: Optional due time in ISO format.
    :return: The created Reminder.
    """
    return _add_reminder(text, when)


@mcp.tool()
def edit_reminder(reminder_id: str, text: str, when: t.Optional[str] = None) -> t.Optional[Reminder]:
    """Replaces the text and due time of a reminder, keeping its id and position.

    :param reminder_id: Id of the reminder to edit.
    :param text: New reminder text. Must not be empty.
    :param when: New due time in ISO format, or null to clear it.
    :return: The updated Reminder, or null if no reminder has that id.
    """
    return _edit_reminder(reminder_id, text, when)


@mcp.tool()
def toggle_reminder(reminder_id: str) -> t.Optional[Reminder]:
    """Marks a reminder done, or not done if it already was.

    :param reminder_id: Id of the reminder.
    :return: The updated Reminder, or null if no reminder has that id.
    """
    return _toggle_reminder(reminder_id)


@mcp.tool()
def remove_reminder(reminder_id: str) -> bool:
    """Deletes a reminder.

    :param reminder_id: Id of the reminder.
    :return: True if a reminder was deleted.
    """
    return _remove_reminder(reminder_id)


@mcp.tool()
def list_reminders(filter_mode: str = "all") -> list[Reminder]:
    """Lists reminders, newest first.

    :param filter_mode: 'all', 'active' or 'done'.
    :return: A list of reminder dictionaries.
    """
    return _list_reminders(filter_mode)


@mcp.tool()
def show_reminders(filter_mode: str = "all") -> str:
    """Displays reminders in a numbered table with due times and overdue markers.

    :param filter_mode: 'all', 'active' or 'done'.
    :return: Formatted string of the reminders, or a message if there are none.
    """
    return format_reminders(get_store(), filter_mode)


@mcp.tool()
def export_reminders() -> str:
    """Exports all reminders as pretty-printed JSON."""
    return _export_reminders()


@mcp.tool()
def import_reminders(contents: str) -> list[Reminder]:
    """Replaces all reminders with the ones in a JSON export.

    :param contents: JSON array of reminder objects, each with a string 'text'.
    :return: The imported reminders.
    """
    return _import_reminders(contents)


if __name__ == "__main__":
    settings = load_settings()
    setup_logging(settings)
    mcp.run()
