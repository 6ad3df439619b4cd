"""Curses front end for the selection controller."""

from __future__ import annotations

import curses
import logging as py_logging
import sys
from dataclasses import dataclass
from pathlib import Path

from goselect.catalog import Catalog
from goselect.controller import Action, Event, Outcome, Resize, SelectionController
from goselect.errors import DriverError
from goselect.render import render_lines
from goselect.session import persist_runner, run_session

logger = py_logging.getLogger(__name__)

ESC = 27
CTRL_C = 3


@dataclass(frozen=True)
class Keybindings:
    NAV_UP = (curses.KEY_UP, ord("k"))
    NAV_DOWN = (curses.KEY_DOWN, ord("j"))
    PAGE_UP = (curses.KEY_PPAGE, curses.KEY_LEFT, ord("h"), ord("b"), ord("u"))
    PAGE_DOWN = (curses.KEY_NPAGE, curses.KEY_RIGHT, ord("l"), ord("f"), ord("d"))
    HOME = (curses.KEY_HOME, ord("g"))
    END = (curses.KEY_END, ord("G"))
    CONFIRM = (curses.KEY_ENTER, ord("\n"), ord("\r"))
    CANCEL = (ord("q"), ESC, CTRL_C)


KEYS = Keybindings()

_KEYMAP: dict[int, Action] = {}
for _keys, _action in (
    (KEYS.NAV_UP, Action.MOVE_UP),
    (KEYS.NAV_DOWN, Action.MOVE_DOWN),
    (KEYS.PAGE_UP, Action.PAGE_UP),
    (KEYS.PAGE_DOWN, Action.PAGE_DOWN),
    (KEYS.HOME, Action.HOME),
    (KEYS.END, Action.END),
    (KEYS.CONFIRM, Action.CONFIRM),
    (KEYS.CANCEL, Action.CANCEL),
):
    for _key in _keys:
        _KEYMAP[_key] = _action


def key_to_action(key: int) -> Action | None:
    return _KEYMAP.get(key)


def _safe_curs_set(visibility: int) -> None:
    try:
        curses.curs_set(visibility)
    except curses.error:
        pass


def _init_colors() -> int:
    if not curses.has_colors():
        return curses.A_REVERSE
    try:
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(1, curses.COLOR_YELLOW, -1)
    except curses.error:
        return curses.A_REVERSE
    return curses.color_pair(1) | curses.A_BOLD


def _draw(stdscr: "curses._CursesWindow", controller: SelectionController, current: str, accent: int) -> None:
    height, width = stdscr.getmaxyx()
    stdscr.erase()
    attrs = {
        "title": accent,
        "selected": accent,
        "pagination": curses.A_DIM,
        "spacer": curses.A_NORMAL,
        "item": curses.A_NORMAL,
    }
    for row, line in enumerate(render_lines(controller, current=current)):
        if row >= height:
            break
        try:
            stdscr.addnstr(row, 2, line.text, max(1, width - 3), attrs.get(line.role, curses.A_NORMAL))
        except curses.error:
            break
    stdscr.refresh()


def _session(
    stdscr: "curses._CursesWindow",
    controller: SelectionController,
    root: str | Path,
    current: str,
) -> Outcome:
    curses.raw()
    stdscr.keypad(True)
    if hasattr(curses, "set_escdelay"):
        curses.set_escdelay(25)
    _safe_curs_set(0)
    accent = _init_colors()
    height, width = stdscr.getmaxyx()
    controller.handle_event(Resize(width=width, height=height))

    def next_event() -> Event:
        while True:
            key = stdscr.getch()
            if key == curses.KEY_RESIZE:
                rows, cols = stdscr.getmaxyx()
                return Resize(width=cols, height=rows)
            action = key_to_action(key)
            if action is not None:
                return action

    return run_session(
        controller,
        next_event,
        persist_runner(root),
        on_update=lambda ctl: _draw(stdscr, ctl, current, accent),
    )


def run_tui(
    catalog: Catalog,
    root: str | Path,
    *,
    page_size: int,
    current: str = "",
) -> Outcome:
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise DriverError(
            "Interactive selection requires a terminal",
            hint="Run goselect from an interactive shell.",
        )
    controller = SelectionController(catalog, page_size=page_size)
    try:
        return curses.wrapper(_session, controller, root, current)
    except curses.error as exc:
        logger.error("Terminal driver failed: %s", exc)
        raise DriverError("Terminal driver failed", hint=str(exc)) from exc
