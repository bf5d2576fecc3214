"""Configuration management for tasktrack."""

import logging
import os
from dataclasses import dataclass
from datetime import time, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.draft import DEFAULT_TIME, parse_time

logger = logging.getLogger(__name__)

TASKTRACK_HOME = Path(os.environ.get("TASKTRACK_HOME", Path.home() / "tasktrack"))
CONFIG_FILE = TASKTRACK_HOME / "config" / "tasktrack.conf"


@dataclass
class Config:
    """tasktrack configuration."""

    api_base: str = "http://localhost:8080"
    # Empty means the system local timezone
    timezone: str = ""
    default_time: time = DEFAULT_TIME

    def tzinfo(self) -> tzinfo | None:
        """Configured timezone, or None for the system local one."""
        if not self.timezone:
            return None
        return ZoneInfo(self.timezone)


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment on unquoted values."""
    if value.startswith(('"', "'")):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from tasktrack.conf file."""
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
            case "api_base":
                if value:
                    config.api_base = value.rstrip("/")
            case "timezone":
                try:
                    if value:
                        ZoneInfo(value)
                    config.timezone = value
                except (ZoneInfoNotFoundError, ValueError) as e:
                    logger.warning(f"Unknown TIMEZONE {value!r}, using system local time: {e}")
            case "default_time":
                try:
                    config.default_time = parse_time(value)
                except ValueError:
                    logger.warning(f"Invalid DEFAULT_TIME {value!r}, using {DEFAULT_TIME:%H:%M}")

    return config
