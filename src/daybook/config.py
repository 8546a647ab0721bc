"""Configuration management for Daybook."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DATA_DIR = DAYBOOK_HOME / "data"


@dataclass
class Config:
    """Daybook configuration."""

    data_dir: str = ""
    seed_file: str = ""
    reminder_interval_seconds: int = 60
    default_reminder_minutes: int = 15
    notifier: str = "console"
    upcoming_window_days: int = 30
    log_level: str = "WARNING"

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser() if self.data_dir else DATA_DIR


def _unquote(value: str) -> str:
    # Quoted values may carry an inline comment after the closing quote
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from daybook.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "seed_file":
                config.seed_file = value
            case "reminder_interval_seconds":
                config.reminder_interval_seconds = _parse_int(key, value, config.reminder_interval_seconds)
            case "default_reminder_minutes":
                config.default_reminder_minutes = _parse_int(key, value, config.default_reminder_minutes)
            case "notifier":
                config.notifier = value.lower()
            case "upcoming_window_days":
                config.upcoming_window_days = _parse_int(key, value, config.upcoming_window_days)
            case "log_level":
                config.log_level = value.upper()

    return config
