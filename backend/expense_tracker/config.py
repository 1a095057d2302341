import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

# Data directory: use EXPENSE_TRACKER_DATA_DIR env var if set (e.g. /data in Docker),
# otherwise fall back to ~/.config/expense-tracker for local use
_data_dir = os.environ.get("EXPENSE_TRACKER_DATA_DIR")
CONFIG_DIR = Path(_data_dir) if _data_dir else Path.home() / ".config" / "expense-tracker"
SETTINGS_FILE = CONFIG_DIR / "settings.json"
DEFAULT_DB_PATH = CONFIG_DIR / "expense_tracker.db"

# Utilization at or above this fraction of the budget is a warning
WARNING_THRESHOLD = 0.90


class Settings(BaseModel):
    """Application settings, persisted as JSON in the config directory."""
    database_path: Path = DEFAULT_DB_PATH
    warning_threshold: float = Field(default=WARNING_THRESHOLD, gt=0, le=1)
    log_level: str = "INFO"
    log_json: bool = False


def ensure_config_dir() -> None:
    """Ensure the config directory exists."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def load_settings(path: Path = SETTINGS_FILE) -> Settings:
    """
    Load settings from disk, falling back to defaults.

    A missing or unreadable file yields the defaults. EXPENSE_TRACKER_DB, when
    set, overrides the database path.
    """
    settings = Settings()
    if path.exists():
        try:
            with open(path, "r") as f:
                settings = Settings(**json.load(f))
        except (json.JSONDecodeError, TypeError, ValidationError):
            settings = Settings()

    db_override = os.environ.get("EXPENSE_TRACKER_DB")
    if db_override:
        settings = settings.model_copy(update={"database_path": Path(db_override)})
    return settings


def save_settings(settings: Settings, path: Path = SETTINGS_FILE) -> None:
    """Save settings to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings.model_dump(mode="json"), f, indent=2)
