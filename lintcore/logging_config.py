"""Centralized logging configuration for the lintcore CLI."""

import logging
import logging.handlers
from pathlib import Path
from typing import Any

from lintcore.settings import get_setting


def _file_handler(project_root: Path, settings: dict[str, Any], level: int) -> logging.Handler:
    log_path = project_root / get_setting(settings, "logging.file")
    log_path.parent.mkdir(parents=True, exist_ok=True)
    h = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=int(get_setting(settings, "logging.max_bytes", 10 * 1024 * 1024)),
        backupCount=int(get_setting(settings, "logging.backup_count", 3)),
        encoding="utf-8",
    )
    h.setLevel(level)
    return h


def setup_logging(project_root: Path, settings: dict[str, Any]) -> None:
    """Configure the root logger from the logging section of settings.

    Console output is on by default; the rotating file handler is added only
    when logging.file is set.
    """
    level_name = str(get_setting(settings, "logging.level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)
    handlers: list[logging.Handler] = []
    if get_setting(settings, "logging.file"):
        handlers.append(_file_handler(project_root, settings, level))
    if get_setting(settings, "logging.log_to_console", True):
        console = logging.StreamHandler()
        console.setLevel(level)
        handlers.append(console)
    for h in handlers:
        h.setFormatter(formatter)
        root.addHandler(h)
