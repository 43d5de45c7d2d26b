"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
reminder_server.models, ensuring consistent JSON serialization for the
reminder service.
"""
from __future__ import annotations

import typing as t
from pydantic import BaseModel, Field


FilterModeLiteral = t.Literal["all", "active", "done"]


class Reminder(BaseModel):
    """A reminder as stored: id, text, optional due time and completion flag.

    when and done are untyped because imports keep the file's values as-is.
    """
    id: str
    text: str
    when: t.Any = None
    done: t.Any = False


class ReminderView(Reminder):
    """A reminder plus its display classification."""
    overdue: bool = False


class PendingEdit(BaseModel):
    """The reminder being edited and its draft fields."""
    id: str
    draft_text: str
    draft_when: t.Any = None


# Request/Response Models for API endpoints
class CreateReminderRequest(BaseModel):
    """Request model for adding a reminder."""
    text: str
    when: t.Optional[str] = None


class EditReminderRequest(BaseModel):
    """Request model for committing an edit."""
    text: str
    when: t.Optional[str] = None


class ListRemindersResponse(BaseModel):
    """Response model for the filtered reminder list."""
    filter: FilterModeLiteral = "all"
    total: int = 0
    reminders: list[ReminderView] = Field(default_factory=list)


class StateResponse(BaseModel):
    """Response model for the view state: pending edit and error slot."""
    pending_edit: t.Optional[PendingEdit] = None
    error: str = ""
    total: int = 0


class ImportRemindersResponse(BaseModel):
    """Response model for a successful import."""
    imported: int
    reminders: list[Reminder] = Field(default_factory=list)


class ShowRemindersResponse(BaseModel):
    """Response model for formatted reminders display."""
    formatted_reminders: str
