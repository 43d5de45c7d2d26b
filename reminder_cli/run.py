# -*- coding: utf-8 -*-
import asyncio
import typing as t
from dataclasses import dataclass
from pathlib import Path

import click
from rich.markup import escape

from reminder_cli.utils import console, err_console, print_reminders
from reminder_server.config import Settings, load_settings
from reminder_server.errors import ExportError, ImportFormatError, ValidationError
from reminder_server.logging_config import setup_logging
from reminder_server.models import FilterMode
from reminder_server.store import ReminderStore, build_store


@dataclass
class CliState:
    """Objects shared by every command of one invocation."""
    settings: Settings
    store: ReminderStore
    verbose: bool = False


def fail(message: str) -> t.NoReturn:
    """Print an error and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(1)


def show_list(state: CliState, filter_mode: FilterMode = FilterMode.ALL) -> None:
    store = state.store
    print_reminders(store.visible(filter_mode), len(store.items), filter_mode)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Show the list after every change.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Manage a local list of text reminders with optional due dates."""
    settings = load_settings()
    setup_logging(settings)
    ctx.obj = CliState(settings=settings, store=build_store(settings), verbose=verbose)


@main.command("add")
@click.argument("text")
@click.option("--when", "-w", default=None, help="Due time in ISO format, e.g. 2025-03-01T09:30.")
@click.pass_obj
def add_command(state: CliState, text: str, when: t.Optional[str]) -> None:
    """Add a reminder to the top of the list."""
    try:
        reminder = state.store.add(text, when)
    except ValidationError as e:
        fail(str(e))
    console.print(f"[green]✓[/green] Added reminder {reminder.id}")
    if state.verbose:
        show_list(state)


@main.command("list")
@click.option(
    "--filter", "-f", "filter_mode",
    type=click.Choice([mode.value for mode in FilterMode]),
    default=FilterMode.ALL.value,
    show_default=True,
    help="Which reminders to show.",
)
@click.pass_obj
def list_command(state: CliState, filter_mode: str) -> None:
    """Show reminders, newest first."""
    show_list(state, FilterMode(filter_mode))


@main.command("toggle")
@click.argument("reminder_id")
@click.pass_obj
def toggle_command(state: CliState, reminder_id: str) -> None:
    """Mark a reminder done, or not done again."""
    reminder = state.store.toggle_done(reminder_id)
    if reminder is None:
        console.print(f"[dim]No reminder with id {escape(reminder_id)}[/dim]")
        return
    console.print(f"[green]✓[/green] {reminder.id} is now {'done' if reminder.done else 'active'}")
    if state.verbose:
        show_list(state)


@main.command("edit")
@click.argument("reminder_id")
@click.option("--text", "-t", default=None, help="New text.")
@click.option("--when", "-w", default=None, help="New due time in ISO format.")
@click.option("--clear-when", is_flag=True, help="Remove the due time.")
@click.pass_obj
def edit_command(
        state: CliState,
        reminder_id: str,
        text: t.Optional[str],
        when: t.Optional[str],
        clear_when: bool,
) -> None:
    """Change the text or due time of a reminder."""
    if when is not None and clear_when:
        fail("--when and --clear-when cannot be used together")

    store = state.store
    pending = store.start_edit(reminder_id)
    if pending is None:
        fail(f"Reminder '{reminder_id}' not found")

    new_text = text if text is not None else pending.draft_text
    if clear_when:
        new_when = None
    else:
        new_when = when if when is not None else pending.draft_when

    try:
        reminder = store.commit_edit(reminder_id, new_text, new_when)
    except ValidationError as e:
        store.cancel_edit()
        fail(str(e))
    console.print(f"[green]✓[/green] Updated reminder {reminder.id}")
    if state.verbose:
        show_list(state)


@main.command("rm")
@click.argument("reminder_id")
@click.pass_obj
def remove_command(state: CliState, reminder_id: str) -> None:
    """Delete a reminder."""
    if state.store.remove(reminder_id):
        console.print(f"[green]✓[/green] Deleted reminder {reminder_id}")
    else:
        console.print(f"[dim]No reminder with id {escape(reminder_id)}[/dim]")
    if state.verbose:
        show_list(state)


@main.command("export")
@click.option(
    "--dir", "-d", "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write the export file to.",
)
@click.pass_obj
def export_command(state: CliState, directory: t.Optional[Path]) -> None:
    """Write all reminders to a timestamped JSON file."""
    try:
        path = state.store.export_to(directory or state.settings.export_dir)
    except ExportError as e:
        fail(str(e))
    console.print(f"[green]✓[/green] Exported {len(state.store.items)} reminder(s) to {escape(str(path))}")


@main.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_command(state: CliState, file: Path) -> None:
    """Replace all reminders with the ones in a JSON export file."""
    try:
        items = asyncio.run(state.store.import_file(file))
    except ImportFormatError as e:
        fail(str(e))
    console.print(f"[green]✓[/green] Imported {len(items)} reminder(s)")
    if state.verbose:
        show_list(state)


@main.command("serve")
@click.option("--host", default=None, help="Bind address (default from REMINDER_SERVICE_HOST).")
@click.option("--port", type=int, default=None, help="Port (default from REMINDER_SERVICE_PORT).")
@click.pass_obj
def serve_command(state: CliState, host: t.Optional[str], port: t.Optional[int]) -> None:
    """Run the REST service."""
    import uvicorn

    uvicorn.run(
        "services.reminder_service.app:app",
        host=host or state.settings.service_host,
        port=port or state.settings.service_port,
    )


@main.command("mcp")
@click.pass_obj
def mcp_command(state: CliState) -> None:
    """Run the MCP tool server over stdio."""
    from reminder_server.server import mcp, set_store

    set_store(state.store)
    mcp.run()


if __name__ == "__main__":
    main()
