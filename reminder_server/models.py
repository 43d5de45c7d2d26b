"""
Data models for the reminder server.

This module contains the dataclasses used to represent reminders, the
pending in-place edit and the list filter modes.
"""
from __future__ import annotations

import typing as t
import uuid
from dataclasses import asdict, dataclass
from enum import Enum


def generate_id() -> str:
    """Returns a fresh opaque reminder id."""
    return uuid.uuid4().hex


class FilterMode(str, Enum):
    """Which subset of the reminder list is displayed."""
    ALL = "all"
    ACTIVE = "active"
    DONE = "done"


@dataclass
class Reminder:
    """Represents a reminder with text, optional due time, and completion flag."""
    id: str
    text: str
    when: t.Optional[str] = None
    done: bool = False

    def to_dict(self) -> dict[str, t.Any]:
        """Returns the storage record shape: {id, text, when, done}."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> Reminder:
        return cls(
            id=data.get("id"),
            text=data["text"],
            when=data.get("when"),
            done=data.get("done", False),
        )


@dataclass
class PendingEdit:
    """The single reminder currently being edited, with its draft fields."""
    id: str
    draft_text: str
    draft_when: t.Optional[str] = None
