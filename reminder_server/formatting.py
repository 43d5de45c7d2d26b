# -*- coding: utf-8 -*-
"""Plain-text table rendering of a reminder list."""
import typing as t
from datetime import datetime

from reminder_server.models import FilterMode
from reminder_server.store import ReminderStore, is_overdue


def format_datetime(iso_string: t.Any) -> str:
    """Formats an ISO datetime string into a concise readable format.

    Converts ISO 8601 formatted datetime strings to format: 'Mon 1/15 2:30 PM'.
    If parsing fails, returns the value as text.

    :param iso_string: ISO 8601 formatted datetime string, or whatever an import stored.
    :return: Concise datetime string (e.g., 'Mon 1/15 2:30 PM').
    """
    if not iso_string:
        return "—"
    try:
        dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
        return dt.strftime("%a %-m/%-d %-I:%M %p")
    except (ValueError, AttributeError, TypeError):
        return str(iso_string)


def format_reminders(store: ReminderStore, filter_mode: str = "all", now: t.Optional[datetime] = None) -> str:
    """Formats the visible reminders as a clean table.

    :param store: The store to render.
    :param filter_mode: Which reminders to include: 'all', 'active' or 'done'.
    :param now: Reference time for the overdue marker.
    :return: Formatted table string.
    """
    if not store.items:
        return "✅ No reminders yet. Add the first one."

    items = store.visible(filter_mode)
    lines = []
    lines.append(f"✅ REMINDERS ({FilterMode(filter_mode).value})")
    lines.append("=" * 100)
    lines.append(f"{'#':<4} {'Done':<5} {'Text':<45} {'Due':<18} {'Status':<10} {'Id':<12}")
    lines.append("-" * 100)

    for idx, reminder in enumerate(items, 1):
        text = reminder.text[:44] if len(reminder.text) > 44 else reminder.text
        status = "overdue" if is_overdue(reminder, now) else ""
        lines.append(
            f"{idx:<4} {'[x]' if reminder.done else '[ ]':<5} {text:<45} "
            f"{format_datetime(reminder.when):<18} {status:<10} {str(reminder.id)[:12]:<12}"
        )

    lines.append("=" * 100)
    lines.append(f"Showing: {len(items)} of {len(store.items)} reminder(s)")
    return "\n".join(lines)
