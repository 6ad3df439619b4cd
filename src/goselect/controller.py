"""Interactive single-selection list state machine."""

from __future__ import annotations

import logging as py_logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from goselect.catalog import Catalog, Entry
from goselect.config import DEFAULT_PAGE_SIZE

logger = py_logging.getLogger(__name__)

# Title, spacer and pagination rows drawn around the list.
CHROME_ROWS = 3


class Action(str, Enum):
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    PAGE_UP = "page-up"
    PAGE_DOWN = "page-down"
    HOME = "home"
    END = "end"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    PERSIST_COMPLETED = "persist-completed"


@dataclass(frozen=True)
class Resize:
    width: int
    height: int = 0


@dataclass(frozen=True)
class PersistFailed:
    error: str


Event = Union[Action, Resize, PersistFailed]


@dataclass(frozen=True)
class PersistRequest:
    entry: Entry


class SessionState(str, Enum):
    BROWSING = "browsing"
    TERMINATED = "terminated"


class OutcomeKind(str, Enum):
    PENDING = "pending"
    SELECTED = "selected"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind = OutcomeKind.PENDING
    entry: Entry | None = None
    persisted: bool = False
    persist_error: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.PENDING

    @property
    def persist_failed(self) -> bool:
        return bool(self.persist_error)


class SelectionController:
    """Owns the cursor over a non-empty catalog and the session outcome.

    ``handle_event`` is the only way state changes. It returns a
    ``PersistRequest`` exactly once, on confirmation, and the driver reports
    the write result back with ``Action.PERSIST_COMPLETED`` or ``PersistFailed``.
    """

    def __init__(self, catalog: Catalog, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if len(catalog) == 0:
            raise ValueError("SelectionController requires a non-empty catalog")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.catalog = catalog
        self.page_size = page_size
        self.width = 0
        self.height = 0
        self._cursor = 0
        self._state = SessionState.BROWSING
        self._outcome = Outcome()

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def selected_entry(self) -> Entry:
        return self.catalog[self._cursor]

    @property
    def finished(self) -> bool:
        outcome = self._outcome
        if outcome.kind == OutcomeKind.CANCELLED:
            return True
        if outcome.kind == OutcomeKind.SELECTED:
            return outcome.persisted or outcome.persist_failed
        return False

    @property
    def effective_page_size(self) -> int:
        if self.height <= 0:
            return self.page_size
        return max(1, min(self.page_size, self.height - CHROME_ROWS))

    @property
    def page(self) -> int:
        return self._cursor // self.effective_page_size

    @property
    def page_count(self) -> int:
        size = self.effective_page_size
        return (len(self.catalog) + size - 1) // size

    @property
    def viewport(self) -> tuple[int, int]:
        size = self.effective_page_size
        start = self.page * size
        return start, min(start + size, len(self.catalog))

    def visible_entries(self) -> list[tuple[int, Entry]]:
        start, stop = self.viewport
        return [(index, self.catalog[index]) for index in range(start, stop)]

    def _move_to(self, index: int) -> None:
        self._cursor = max(0, min(index, len(self.catalog) - 1))

    def handle_event(self, event: Event) -> PersistRequest | None:
        if isinstance(event, Resize):
            self.width = max(0, event.width)
            self.height = max(0, event.height)
            if self._state == SessionState.BROWSING:
                logger.debug("Resized width=%s height=%s", self.width, self.height)
            return None

        if self._state == SessionState.TERMINATED:
            return self._handle_terminated(event)

        if isinstance(event, PersistFailed) or event == Action.PERSIST_COMPLETED:
            logger.debug("Ignoring persist result before confirmation event=%r", event)
            return None

        if event == Action.MOVE_DOWN:
            self._move_to(self._cursor + 1)
        elif event == Action.MOVE_UP:
            self._move_to(self._cursor - 1)
        elif event == Action.PAGE_DOWN:
            self._move_to(self._cursor + self.effective_page_size)
        elif event == Action.PAGE_UP:
            self._move_to(self._cursor - self.effective_page_size)
        elif event == Action.HOME:
            self._move_to(0)
        elif event == Action.END:
            self._move_to(len(self.catalog) - 1)
        elif event == Action.CONFIRM:
            entry = self.selected_entry
            self._state = SessionState.TERMINATED
            self._outcome = Outcome(kind=OutcomeKind.SELECTED, entry=entry)
            logger.info("Selected installation name=%s label=%s", entry.name, entry.label)
            return PersistRequest(entry=entry)
        elif event == Action.CANCEL:
            self._state = SessionState.TERMINATED
            self._outcome = Outcome(kind=OutcomeKind.CANCELLED)
            logger.info("Selection cancelled")
        return None

    def _handle_terminated(self, event: Event) -> None:
        if self._outcome.kind != OutcomeKind.SELECTED or self.finished:
            return None
        if event == Action.PERSIST_COMPLETED:
            self._outcome = replace(self._outcome, persisted=True)
        elif isinstance(event, PersistFailed):
            self._outcome = replace(self._outcome, persist_error=event.error or "unknown error")
        return None
