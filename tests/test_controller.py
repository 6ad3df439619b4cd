from __future__ import annotations

import pytest

from goselect.catalog import Catalog, Entry
from goselect.controller import (
    Action,
    OutcomeKind,
    PersistFailed,
    PersistRequest,
    Resize,
    SelectionController,
    SessionState,
)


def _catalog(count: int) -> Catalog:
    return Catalog(Entry(f"go1.{index:02d}", f"go1.{index}") for index in range(count))


def test_initial_state_is_browsing_at_top() -> None:
    controller = SelectionController(_catalog(3), page_size=2)
    assert controller.cursor == 0
    assert controller.state == SessionState.BROWSING
    assert controller.outcome.kind == OutcomeKind.PENDING
    assert controller.finished is False


def test_empty_catalog_is_rejected() -> None:
    with pytest.raises(ValueError):
        SelectionController(Catalog(), page_size=5)


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SelectionController(_catalog(1), page_size=0)


def test_move_down_and_up_saturate() -> None:
    controller = SelectionController(_catalog(3), page_size=10)
    controller.handle_event(Action.MOVE_UP)
    assert controller.cursor == 0
    for _ in range(5):
        controller.handle_event(Action.MOVE_DOWN)
    assert controller.cursor == 2
    controller.handle_event(Action.MOVE_UP)
    assert controller.cursor == 1


def test_viewport_follows_cursor_by_page() -> None:
    controller = SelectionController(_catalog(5), page_size=2)
    assert controller.viewport == (0, 2)
    assert controller.page_count == 3
    controller.handle_event(Action.MOVE_DOWN)
    assert controller.viewport == (0, 2)
    controller.handle_event(Action.MOVE_DOWN)
    assert controller.viewport == (2, 4)
    assert controller.page == 1
    controller.handle_event(Action.END)
    assert controller.viewport == (4, 5)
    assert [index for index, _ in controller.visible_entries()] == [4]
    controller.handle_event(Action.MOVE_UP)
    assert controller.viewport == (2, 4)


def test_page_navigation_saturates() -> None:
    controller = SelectionController(_catalog(5), page_size=2)
    controller.handle_event(Action.PAGE_DOWN)
    assert controller.cursor == 2
    controller.handle_event(Action.PAGE_DOWN)
    controller.handle_event(Action.PAGE_DOWN)
    assert controller.cursor == 4
    controller.handle_event(Action.PAGE_UP)
    assert controller.cursor == 2
    controller.handle_event(Action.PAGE_UP)
    controller.handle_event(Action.PAGE_UP)
    assert controller.cursor == 0
    controller.handle_event(Action.END)
    controller.handle_event(Action.HOME)
    assert controller.cursor == 0


def test_resize_updates_dimensions_without_transition() -> None:
    controller = SelectionController(_catalog(3), page_size=10)
    controller.handle_event(Action.MOVE_DOWN)
    assert controller.handle_event(Resize(width=120, height=40)) is None
    assert controller.width == 120
    assert controller.cursor == 1
    assert controller.state == SessionState.BROWSING


def test_short_terminal_shrinks_the_page() -> None:
    controller = SelectionController(_catalog(10), page_size=8)
    controller.handle_event(Resize(width=80, height=5))
    assert controller.effective_page_size == 2
    assert controller.viewport == (0, 2)
    controller.handle_event(Resize(width=80, height=1))
    assert controller.effective_page_size == 1


def test_confirm_selects_cursor_entry_and_requests_persist() -> None:
    catalog = Catalog([Entry("a", "go1.0")])
    controller = SelectionController(catalog, page_size=10)

    effect = controller.handle_event(Action.CONFIRM)

    assert effect == PersistRequest(entry=Entry("a", "go1.0"))
    assert controller.state == SessionState.TERMINATED
    assert controller.outcome.kind == OutcomeKind.SELECTED
    assert controller.outcome.entry == Entry("a", "go1.0")
    assert controller.finished is False


def test_confirm_after_moving_selects_that_entry() -> None:
    controller = SelectionController(_catalog(3), page_size=10)
    controller.handle_event(Action.MOVE_DOWN)
    effect = controller.handle_event(Action.CONFIRM)
    assert effect is not None
    assert effect.entry == controller.catalog[1]


def test_cancel_terminates_without_side_effect() -> None:
    controller = SelectionController(_catalog(2), page_size=10)
    assert controller.handle_event(Action.CANCEL) is None
    assert controller.state == SessionState.TERMINATED
    assert controller.outcome.kind == OutcomeKind.CANCELLED
    assert controller.outcome.entry is None
    assert controller.finished is True


def test_outcome_is_fixed_after_termination() -> None:
    controller = SelectionController(_catalog(3), page_size=10)
    controller.handle_event(Action.CANCEL)
    assert controller.handle_event(Action.CONFIRM) is None
    controller.handle_event(Action.MOVE_DOWN)
    assert controller.outcome.kind == OutcomeKind.CANCELLED
    assert controller.cursor == 0


def test_second_confirm_does_not_request_another_persist() -> None:
    controller = SelectionController(_catalog(2), page_size=10)
    assert controller.handle_event(Action.CONFIRM) is not None
    assert controller.handle_event(Action.CONFIRM) is None


def test_persist_completed_finishes_the_session() -> None:
    controller = SelectionController(_catalog(2), page_size=10)
    controller.handle_event(Action.CONFIRM)
    controller.handle_event(Action.PERSIST_COMPLETED)
    assert controller.outcome.persisted is True
    assert controller.outcome.persist_failed is False
    assert controller.finished is True


def test_persist_failed_annotates_selected_outcome() -> None:
    controller = SelectionController(_catalog(2), page_size=10)
    controller.handle_event(Action.CONFIRM)
    controller.handle_event(PersistFailed(error="Permission denied"))
    assert controller.state == SessionState.TERMINATED
    assert controller.outcome.kind == OutcomeKind.SELECTED
    assert controller.outcome.persist_error == "Permission denied"
    assert controller.finished is True


def test_persist_results_before_confirm_are_ignored() -> None:
    controller = SelectionController(_catalog(2), page_size=10)
    controller.handle_event(Action.PERSIST_COMPLETED)
    controller.handle_event(PersistFailed(error="boom"))
    assert controller.state == SessionState.BROWSING
    assert controller.outcome.kind == OutcomeKind.PENDING


def test_persist_result_is_recorded_once() -> None:
    controller = SelectionController(_catalog(2), page_size=10)
    controller.handle_event(Action.CONFIRM)
    controller.handle_event(Action.PERSIST_COMPLETED)
    controller.handle_event(PersistFailed(error="late"))
    assert controller.outcome.persisted is True
    assert controller.outcome.persist_error == ""
