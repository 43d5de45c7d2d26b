"""
Logging for the reminder CLI, REST service and MCP server.

Everything under the ``reminder_server`` logger goes to a size-rotated
``reminders.log`` in the configured log directory; warnings and errors are
also echoed to stderr.
"""
import logging
from logging.handlers import RotatingFileHandler

from reminder_server.config import Settings

LOGGER_NAME = "reminder_server"
LOG_FILE_NAME = "reminders.log"

_formatter = logging.Formatter(
    "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    "%Y-%m-%d %H:%M:%S",
)


def setup_logging(settings: Settings, console_level: int = logging.WARNING) -> logging.Logger:
    """Attach the file and console handlers to the package logger.

    Calling it again replaces the handlers from the previous call.

    :param settings: Supplies the log directory and level.
    :param console_level: Minimum level echoed to stderr.
    :return: The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = logging.getLevelName(settings.log_level)
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.log_dir / LOG_FILE_NAME,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)

    for handler in (file_handler, console_handler):
        handler.setFormatter(_formatter)
        logger.addHandler(handler)
    return logger
