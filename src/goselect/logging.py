"""Logging setup that keeps the terminal quiet while curses owns the screen.

The ``goselect`` logger always passes every record to its handlers. The
stderr handler filters to the requested level (WARN by default, so nothing
is written over the list while it is on screen); the log file is the DEBUG
sink that records the scan, the selection and the write of ``selected``.
"""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

LOGGER_NAME = "goselect"
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
DEFAULT_LEVEL = "WARN"
DEFAULT_LOG_PATH = Path("~/.config/goselect/logs/goselect.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def resolve_level(level: str) -> int:
    return LOG_LEVELS.get(level.upper(), LOG_LEVELS[DEFAULT_LEVEL])


def default_log_path() -> Path:
    try:
        return DEFAULT_LOG_PATH.expanduser().absolute()
    except RuntimeError:
        # No resolvable home directory.
        return (Path.cwd() / ".goselect" / "goselect.log").absolute()


def _open_file_handler(log_file: str | Path) -> py_logging.Handler | None:
    path = Path(log_file)
    try:
        path = path.expanduser()
    except RuntimeError:
        pass
    try:
        path.absolute().parent.mkdir(parents=True, exist_ok=True)
        return py_logging.FileHandler(path.absolute(), encoding="utf-8")
    except OSError:
        return None


def configure_logging(
    level: str = DEFAULT_LEVEL,
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    formatter = py_logging.Formatter(_FORMAT)
    logger = py_logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.setLevel(py_logging.DEBUG)
    logger.propagate = False

    console = py_logging.StreamHandler(stream or sys.stderr)
    console.setLevel(resolve_level(level))
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = _open_file_handler(log_file)
        if file_handler is not None:
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
    return logger


def console_level(logger: py_logging.Logger) -> int:
    for handler in logger.handlers:
        if type(handler) is py_logging.StreamHandler:
            return handler.level
    return LOG_LEVELS[DEFAULT_LEVEL]
