"""Shared fixtures for the reminder tests."""
import itertools
import logging
import typing as t
from pathlib import Path

import pytest

from reminder_server.logging_config import LOGGER_NAME
from reminder_server.models import Reminder
from reminder_server.store import ReminderStore


class RecordingSaver:
    """Save collaborator that keeps every snapshot it was given."""

    def __init__(self) -> None:
        self.snapshots: list[list[Reminder]] = []

    def __call__(self, items: list[Reminder]) -> None:
        self.snapshots.append([Reminder(**item.to_dict()) for item in items])

    @property
    def last(self) -> list[Reminder]:
        return self.snapshots[-1]


@pytest.fixture
def saver() -> RecordingSaver:
    return RecordingSaver()


@pytest.fixture
def make_store(saver: RecordingSaver) -> t.Callable[..., ReminderStore]:
    """Build a store over an in-memory list with predictable ids."""
    def _make(initial: t.Optional[list[Reminder]] = None) -> ReminderStore:
        counter = itertools.count(1)
        return ReminderStore(
            load=lambda: list(initial or []),
            save=saver,
            id_factory=lambda: f"id-{next(counter)}",
        )
    return _make


@pytest.fixture
def store(make_store: t.Callable[..., ReminderStore]) -> ReminderStore:
    return make_store()


@pytest.fixture
def reminder_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point storage, exports and logs at a temporary directory."""
    monkeypatch.setenv("REMINDER_STORAGE_PATH", str(tmp_path / "local_storage.json"))
    monkeypatch.setenv("REMINDER_EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("REMINDER_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("REMINDER_STORAGE_KEY", raising=False)
    (tmp_path / "exports").mkdir()
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging() -> t.Iterator[None]:
    """Drop handlers installed by setup_logging so they don't outlive a test's streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
