"""Exceptions raised by the reminder store and its persistence layer."""


class ReminderError(Exception):
    """Base class for reminder errors."""


class ValidationError(ReminderError):
    """Reminder text was empty or whitespace-only."""


class StorageError(ReminderError):
    """Reading or writing the local storage file failed."""


class ImportFormatError(ReminderError):
    """An import file was unreadable or not a list of reminders."""


class ExportError(ReminderError):
    """The export file could not be built or written."""
