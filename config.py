# config.py

"""Settings loaded from environment variables.

One Settings object is built at startup and handed to ``app.build_context``;
nothing reads the environment after that.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TASKPILOT"

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "taskpilot"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    data_dir: Path
    database_url: str
    save_debounce_ms: int
    log_level: str
    log_dir: Path

    @property
    def save_delay(self) -> float:
        return max(0, self.save_debounce_ms) / 1000.0


def load_settings(data_dir: Optional[Path] = None) -> Settings:
    data_dir = data_dir or _env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR)
    database_url = os.getenv("DATABASE_URL") or f"sqlite:///{data_dir / 'taskpilot.db'}"
    return Settings(
        app_name=_env(_k("APP_NAME"), "TaskPilot"),
        data_dir=data_dir,
        database_url=database_url,
        save_debounce_ms=_env_int(_k("SAVE_DEBOUNCE_MS"), 250),
        log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
        log_dir=_env_path(_k("LOG_DIR"), data_dir / "logs"),
    )
