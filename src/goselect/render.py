"""Plain-text views of the selection list and session outcome."""

from __future__ import annotations

from dataclasses import dataclass

from goselect.controller import Outcome, OutcomeKind, SelectionController

TITLE = "Select Go Version"
CURSOR_MARK = ">"
CURRENT_MARK = "*"


@dataclass(frozen=True)
class Line:
    text: str
    role: str = "item"


def format_scroll_indicator(page: int, page_count: int) -> str:
    if page_count <= 1:
        return ""
    return f"[{page + 1}/{page_count}]"


def render_lines(controller: SelectionController, *, current: str = "") -> list[Line]:
    lines = [Line(TITLE, role="title"), Line("", role="spacer")]
    for index, entry in controller.visible_entries():
        marker = CURRENT_MARK if current and entry.name == current else " "
        if index == controller.cursor:
            lines.append(Line(f"{CURSOR_MARK}{marker} {entry.name} - {entry.label}", role="selected"))
        else:
            lines.append(Line(f" {marker} {entry.name} - {entry.label}"))
    indicator = format_scroll_indicator(controller.page, controller.page_count)
    if indicator:
        lines.append(Line(indicator, role="pagination"))
    return lines


def summary_message(outcome: Outcome) -> str:
    if outcome.kind == OutcomeKind.SELECTED and outcome.entry is not None:
        if outcome.persist_failed:
            return f"Error: {outcome.persist_error}"
        return f"Go version: {outcome.entry.label} (named: {outcome.entry.name})"
    return "No Go version selected"
