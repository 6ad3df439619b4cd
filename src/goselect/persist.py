"""Persist and restore the selected Go installation."""

from __future__ import annotations

import logging as py_logging
import re
from pathlib import Path

from goselect.catalog import Entry
from goselect.errors import PersistError

logger = py_logging.getLogger(__name__)

SELECTION_FILENAME = "selected"
ENV_VAR = "GOROOT"

_EXPORT_LINE = re.compile(rf"^export {ENV_VAR}=(?P<path>.+)$")


def _root_text(target_dir: str | Path) -> str:
    # "/" becomes "" so that joining with "/<name>" yields "/<name>".
    return str(target_dir).rstrip("/")


def selection_path(target_dir: str | Path) -> Path:
    return Path(target_dir) / SELECTION_FILENAME


def export_line(entry: Entry, target_dir: str | Path) -> str:
    return f"export {ENV_VAR}={entry.path(_root_text(target_dir))}"


def persist_selection(entry: Entry, target_dir: str | Path) -> Path:
    destination = selection_path(target_dir)
    line = export_line(entry, target_dir)
    try:
        destination.write_text(line, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write selection path=%s error=%s", destination, exc)
        raise PersistError(
            f"Failed to write {destination}: {exc.strerror or exc}",
            hint="Check that the installation root is writable.",
        ) from exc
    logger.info("Persisted selection name=%s path=%s", entry.name, destination)
    return destination


def read_current_selection(target_dir: str | Path) -> str:
    path = selection_path(target_dir)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return ""
    first_line, _, _ = content.partition("\n")
    match = _EXPORT_LINE.match(first_line.strip())
    if not match:
        return ""
    prefix = _root_text(target_dir) + "/"
    selected = match.group("path")
    if not selected.startswith(prefix):
        return ""
    return selected[len(prefix):]
