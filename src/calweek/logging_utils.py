"""Logger setup for calweek entry points.

Library modules only create module-level loggers; handlers are attached here,
by the CLI, so embedding applications keep control of their own logging.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import CalweekConfig


SYSTEM_FMT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_NAME = "calweek.log"


def _ensure_logs_dir(config: CalweekConfig) -> Optional[Path]:
    logs_dir = config.paths.logs_dir
    if not logs_dir:
        return None
    path = Path(logs_dir).expanduser().resolve()
    path.mkdir(parents=True, exist_ok=True)
    return path


def _safe_add_file_handler(logger: logging.Logger, path: Path, fmt: str, level: int) -> None:
    try:
        fh = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        logger.warning("[WARNING] Failed to attach file handler %s (%s)", str(path), exc)
        return
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(fmt))
    logger.addHandler(fh)


def get_logger(name: str, config: CalweekConfig) -> logging.Logger:
    """Return ``name``'s logger with a console handler and, if configured, a file handler.

    - File: ``<paths.logs_dir>/calweek.log``
    - Level: ``config.log_level``
    """
    level = logging.getLevelName(config.log_level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Reset handlers to avoid duplication across repeated initializations
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(SYSTEM_FMT))
    logger.addHandler(sh)

    try:
        logs_dir = _ensure_logs_dir(config)
    except OSError as exc:
        logger.warning("[WARNING] Failed to create logs dir %s (%s)", config.paths.logs_dir, exc)
        logs_dir = None
    if logs_dir is not None:
        _safe_add_file_handler(logger, logs_dir / LOG_FILE_NAME, SYSTEM_FMT, level)
    return logger
