"""Rendering helpers for the reminder CLI."""
import typing as t
from datetime import datetime

from rich.console import Console
from rich.table import Table
from rich.text import Text

from reminder_server.formatting import format_datetime
from reminder_server.models import FilterMode, Reminder
from reminder_server.store import is_overdue

console = Console()
err_console = Console(stderr=True)

EMPTY_LIST_MESSAGE = "No reminders yet. Add the first one."


def truncate_text(text: str, max_length: int = 60) -> str:
    """Truncate text to max_length characters, adding ellipsis if needed."""
    if len(text) <= max_length:
        return text
    return text[:max_length-3] + "..."


def create_reminder_table(
        items: t.Sequence[Reminder],
        total: int,
        filter_mode: FilterMode = FilterMode.ALL,
        now: t.Optional[datetime] = None,
) -> Table:
    """Create a table of reminders.

    Done reminders are dimmed and overdue ones highlighted in red.

    Args:
        items: The reminders to show, already filtered
        total: Size of the whole list, for the caption
        filter_mode: The active filter, shown in the title
        now: Reference time for the overdue check

    Returns:
        A rich Table ready to print
    """
    table = Table(
        title=f"Reminders ({filter_mode.value})",
        caption=f"{len(items)} of {total} shown",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("", width=3)
    table.add_column("Text", style="white")
    table.add_column("Due", style="yellow")
    table.add_column("Id", style="cyan", no_wrap=True)

    for item in items:
        style = None
        if item.done:
            style = "dim"
        elif is_overdue(item, now):
            style = "bold red"
        table.add_row(
            Text("[x]" if item.done else "[ ]"),
            Text(truncate_text(item.text)),
            Text(format_datetime(item.when)),
            Text(str(item.id)),
            style=style,
        )

    return table


def print_reminders(
        items: t.Sequence[Reminder],
        total: int,
        filter_mode: FilterMode = FilterMode.ALL,
) -> None:
    """Print the reminder list, or the empty-list hint."""
    if total == 0:
        console.print(f"[dim]{EMPTY_LIST_MESSAGE}[/dim]")
        return
    console.print(create_reminder_table(items, total, filter_mode))
