"""Logging shared by the Streamlit page and the ``run_apply.py`` CLI.

Records go to stdout and to ``logs/portal_<date>.log``. ``LOG_LEVEL`` sets the
console level and ``LOG_DIR`` moves the log folder. If the host process has
already attached root handlers (pytest, Streamlit), they are left alone.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_CONSOLE_HANDLER = "apply_portal.console"

_installed = False


def get_logger(name: str) -> logging.Logger:
    if not _installed:
        configure()
    return logging.getLogger(name)


def _level_from_env() -> int:
    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _daily_file_handler(formatter: logging.Formatter) -> logging.Handler:
    log_dir = Path(os.environ.get("LOG_DIR") or _DEFAULT_LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / f"portal_{date.today():%Y-%m-%d}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def configure(level: int | None = None) -> None:
    """Install the portal's handlers once; later calls only change the level."""
    global _installed
    root = logging.getLogger()
    level = _level_from_env() if level is None else level
    root.setLevel(level)

    if _installed:
        for handler in root.handlers:
            if handler.get_name() == _CONSOLE_HANDLER:
                handler.setLevel(level)
        return
    _installed = True

    if root.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console = logging.StreamHandler(sys.stdout)
    console.set_name(_CONSOLE_HANDLER)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    try:
        root.addHandler(_daily_file_handler(formatter))
    except OSError as exc:
        root.warning("File logging disabled: %s", exc)
