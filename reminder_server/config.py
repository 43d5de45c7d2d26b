"""Environment-driven settings for the reminder store, service and CLI."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOME = Path.home() / ".reminder_app"

# Fixed key the reminder list is stored under
STORAGE_KEY = "reminder_app_items_v1"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""
    storage_path: Path
    storage_key: str
    export_dir: Path
    log_dir: Path
    log_level: str
    service_host: str
    service_port: int


def load_settings() -> Settings:
    """Reads settings from the environment, falling back to defaults.

    :return: A Settings instance.
    """
    return Settings(
        storage_path=Path(os.getenv("REMINDER_STORAGE_PATH", str(DEFAULT_HOME / "local_storage.json"))),
        storage_key=os.getenv("REMINDER_STORAGE_KEY", STORAGE_KEY),
        export_dir=Path(os.getenv("REMINDER_EXPORT_DIR", ".")),
        log_dir=Path(os.getenv("REMINDER_LOG_DIR", str(DEFAULT_HOME / "logs"))),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        service_host=os.getenv("REMINDER_SERVICE_HOST", "127.0.0.1"),
        service_port=int(os.getenv("REMINDER_SERVICE_PORT", "8003")),
    )
