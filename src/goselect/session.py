"""Single-threaded event loop tying the controller to its side effects."""

from __future__ import annotations

import logging as py_logging
from collections import deque
from collections.abc import Callable
from pathlib import Path

from goselect.controller import (
    Action,
    Event,
    Outcome,
    PersistFailed,
    PersistRequest,
    SelectionController,
)
from goselect.errors import PersistError
from goselect.persist import persist_selection

logger = py_logging.getLogger(__name__)

EventSource = Callable[[], Event]
EffectRunner = Callable[[PersistRequest], Event]
Observer = Callable[[SelectionController], None]


def persist_runner(
    target_dir: str | Path,
    writer: Callable[..., object] = persist_selection,
) -> EffectRunner:
    def run(request: PersistRequest) -> Event:
        try:
            writer(request.entry, target_dir)
        except PersistError as exc:
            return PersistFailed(error=exc.message)
        return Action.PERSIST_COMPLETED

    return run


def run_session(
    controller: SelectionController,
    next_event: EventSource,
    perform: EffectRunner,
    *,
    on_update: Observer | None = None,
) -> Outcome:
    pending: deque[Event] = deque()
    if on_update is not None:
        on_update(controller)
    while not controller.finished:
        event = pending.popleft() if pending else next_event()
        effect = controller.handle_event(event)
        if effect is not None:
            logger.debug("Dispatching persist request name=%s", effect.entry.name)
            pending.append(perform(effect))
        if on_update is not None:
            on_update(controller)
    return controller.outcome
