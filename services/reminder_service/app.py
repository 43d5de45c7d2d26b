"""
FastAPI service for reminder list operations.

This service exposes the reminder store from reminder_server/store.py as REST
API endpoints. Each endpoint mirrors one control of the reminder list view:
the add form, the per-item toggle/edit/delete buttons, the filter buttons and
export/import.
"""
from __future__ import annotations

import logging
import typing as t
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Query, Request, Response

from reminder_server.config import load_settings
from reminder_server.errors import ImportFormatError, ValidationError
from reminder_server.formatting import format_reminders
from reminder_server.logging_config import setup_logging
from reminder_server.models import Reminder as ReminderRecord
from reminder_server.store import EXPORT_FAILED_MESSAGE, ReminderStore, build_store, is_overdue
from reminder_server.transfer import export_filename
from services.shared.models import (
    CreateReminderRequest,
    EditReminderRequest,
    FilterModeLiteral,
    ImportRemindersResponse,
    ListRemindersResponse,
    PendingEdit as PydanticPendingEdit,
    Reminder as PydanticReminder,
    ReminderView,
    ShowRemindersResponse,
    StateResponse,
)

logger = logging.getLogger("reminder_server.service")

# Global store - will be initialized on startup
store: t.Optional[ReminderStore] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    global store

    settings = load_settings()
    setup_logging(settings)
    store = build_store(settings)
    logger.info("Loaded %d reminder(s) from %s", len(store.items), settings.storage_path)

    yield

    store = None


app = FastAPI(
    title="Reminder Service",
    description="REST API for a single-user reminder list",
    version="1.0.0",
    lifespan=lifespan,
)


def _get_store() -> ReminderStore:
    if store is None:
        raise HTTPException(status_code=503, detail="Reminder store is not initialized")
    return store


def _to_pydantic(reminder: ReminderRecord) -> PydanticReminder:
    return PydanticReminder(**asdict(reminder))


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "reminder-service"}


@app.get("/reminders", response_model=ListRemindersResponse)
async def list_reminders(filter: FilterModeLiteral = Query("all")) -> ListRemindersResponse:
    """
    List reminders for a filter mode.

    Each reminder carries an overdue flag for display.
    """
    current = _get_store()
    return ListRemindersResponse(
        filter=filter,
        total=len(current.items),
        reminders=[
            ReminderView(**asdict(item), overdue=is_overdue(item))
            for item in current.visible(filter)
        ],
    )


@app.post("/reminders", response_model=PydanticReminder, status_code=201)
async def create_reminder(request: CreateReminderRequest) -> PydanticReminder:
    """
    Add a reminder to the top of the list.
    """
    try:
        return _to_pydantic(_get_store().add(request.text, request.when))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/reminders/{reminder_id}/edit", response_model=PydanticPendingEdit)
async def start_edit(reminder_id: str) -> PydanticPendingEdit:
    """
    Start editing a reminder. Returns the draft fields.
    """
    pending = _get_store().start_edit(reminder_id)
    if pending is None:
        raise HTTPException(status_code=404, detail=f"Reminder '{reminder_id}' not found")
    return PydanticPendingEdit(**asdict(pending))


@app.put("/reminders/{reminder_id}", response_model=t.Optional[PydanticReminder])
async def commit_edit(reminder_id: str, request: EditReminderRequest) -> t.Optional[PydanticReminder]:
    """
    Save an edit. Returns null when no reminder has that id.
    """
    try:
        updated = _get_store().commit_edit(reminder_id, request.text, request.when)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _to_pydantic(updated) if updated is not None else None


@app.delete("/edit", status_code=204)
async def cancel_edit() -> Response:
    """
    Discard the pending edit.
    """
    _get_store().cancel_edit()
    return Response(status_code=204)


@app.post("/reminders/{reminder_id}/toggle", response_model=t.Optional[PydanticReminder])
async def toggle_reminder(reminder_id: str) -> t.Optional[PydanticReminder]:
    """
    Flip the done flag. Returns null when no reminder has that id.
    """
    updated = _get_store().toggle_done(reminder_id)
    return _to_pydantic(updated) if updated is not None else None


@app.delete("/reminders/{reminder_id}", status_code=204)
async def remove_reminder(reminder_id: str) -> Response:
    """
    Delete a reminder. Unknown ids are ignored.
    """
    _get_store().remove(reminder_id)
    return Response(status_code=204)


@app.get("/state", response_model=StateResponse)
async def get_state() -> StateResponse:
    """
    The pending edit and the current error message.
    """
    current = _get_store()
    pending = current.pending_edit
    return StateResponse(
        pending_edit=PydanticPendingEdit(**asdict(pending)) if pending is not None else None,
        error=current.error,
        total=len(current.items),
    )


@app.get("/export")
async def export_reminders() -> Response:
    """
    Download all reminders as a timestamped JSON file.
    """
    current = _get_store()
    try:
        body = current.export_json()
        filename = export_filename()
    except (TypeError, ValueError) as e:
        logger.exception("Failed to build reminder export")
        current.error = EXPORT_FAILED_MESSAGE
        raise HTTPException(status_code=500, detail=current.error) from e
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/import", response_model=ImportRemindersResponse)
async def import_reminders(request: Request) -> ImportRemindersResponse:
    """
    Replace all reminders with the JSON array in the request body.
    """
    contents = await request.body()
    try:
        items = _get_store().import_json(contents)
    except ImportFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ImportRemindersResponse(imported=len(items), reminders=[_to_pydantic(item) for item in items])


@app.get("/show-reminders", response_model=ShowRemindersResponse)
async def show_reminders(filter: FilterModeLiteral = Query("all")) -> ShowRemindersResponse:
    """
    Show reminders in a formatted display.
    """
    return ShowRemindersResponse(formatted_reminders=format_reminders(_get_store(), filter))


if __name__ == "__main__":
    import uvicorn
    settings = load_settings()
    uvicorn.run(app, host=settings.service_host, port=settings.service_port)
