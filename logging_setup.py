# logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGERS = ("app", "db", "main", "notifications", "stores.", "viewmodels.", "utils.")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console shows our own modules at the configured level;
    third-party libraries (sqlalchemy, plotly) and captured warnings only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if any(name == p or name.startswith(p) for p in APP_LOGGERS):
            # debounce timers are chatty at DEBUG
            if name.startswith("utils.debounce"):
                return record.levelno >= logging.INFO
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskpilot",
    console_level: int | str = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Console handler (filtered) plus a file handler with everything.

    Call once, before the first store is built.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskpilot.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
