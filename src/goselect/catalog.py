"""Depth-bounded discovery of side-by-side Go installations."""

from __future__ import annotations

import logging as py_logging
import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from goselect.config import DEFAULT_MARKERS, DEFAULT_VERSION_FILE
from goselect.errors import ScanError

logger = py_logging.getLogger(__name__)

UNKNOWN_VERSION = "unknown"


@dataclass(frozen=True)
class Entry:
    name: str
    label: str = UNKNOWN_VERSION

    def path(self, root: str | Path) -> str:
        return f"{root}/{self.name}"


class Catalog(Sequence[Entry]):
    """Entries ordered by name, descending; read-only once built."""

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries = tuple(sorted(entries, key=lambda item: item.name, reverse=True))

    def __getitem__(self, index: int) -> Entry:  # type: ignore[override]
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Catalog({list(self._entries)!r})"

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]


def read_version_label(install_dir: str | Path, version_file: str = DEFAULT_VERSION_FILE) -> str:
    path = Path(install_dir) / version_file
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Version file unreadable path=%s error=%s", path, exc)
        return UNKNOWN_VERSION
    first_line, _, _ = content.partition("\n")
    return first_line.rstrip("\r")


def is_installation(candidate: str | Path, markers: Sequence[str] = DEFAULT_MARKERS) -> bool:
    base = Path(candidate)
    return any((base / marker).exists() for marker in markers)


def _ensure_listable(root: Path) -> None:
    if not root.exists():
        raise ScanError(
            f"Installation root does not exist: {root}",
            hint="Pass the directory that contains your Go installations.",
        )
    if not root.is_dir():
        raise ScanError(
            f"Installation root is not a directory: {root}",
            hint="Pass the directory that contains your Go installations.",
        )
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise ScanError(
            f"Failed to list installation root: {root}",
            hint=exc.strerror or str(exc),
        ) from exc


def build_catalog(
    root: str | Path,
    max_depth: int = 0,
    *,
    markers: Sequence[str] = DEFAULT_MARKERS,
    version_file: str = DEFAULT_VERSION_FILE,
) -> Catalog:
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    start = Path(root).expanduser()
    _ensure_listable(start)

    def _skip_unreadable(exc: OSError) -> None:
        logger.warning("Skipping unreadable directory path=%s error=%s", exc.filename, exc.strerror)

    entries: list[Entry] = []
    for dirpath, dirnames, _filenames in os.walk(start, topdown=True, onerror=_skip_unreadable):
        current = Path(dirpath)
        depth = len(current.relative_to(start).parts)
        descend: list[str] = []
        for name in sorted(dirnames):
            candidate = current / name
            if is_installation(candidate, markers):
                relative = PurePosixPath(*candidate.relative_to(start).parts).as_posix()
                label = read_version_label(candidate, version_file)
                logger.debug("Found installation name=%s label=%s", relative, label)
                entries.append(Entry(name=relative, label=label))
            elif depth < max_depth:
                descend.append(name)
        dirnames[:] = descend

    catalog = Catalog(entries)
    logger.info("Discovered %s installations under %s", len(catalog), start)
    return catalog
