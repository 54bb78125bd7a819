import pytest

from taskwarrior_tui.table_state import TableMode, TableState


def test_default_table_state():
    state = TableState()
    assert state.offset == 0
    assert state.current_selection == 0
    assert state.marked() == frozenset()
    assert state.mode is TableMode.SINGLE_SELECTION


def test_selection_operations():
    state = TableState()
    assert state.current_selection == 0

    state.select(5)
    assert state.current_selection == 5

    state.select(None)
    assert state.current_selection is None
    assert state.offset == 0


def test_select_none_resets_offset():
    state = TableState(offset=7, current_selection=9)
    state.select(None)
    assert state.offset == 0


def test_marking_operations():
    state = TableState()
    state.mark(0)
    state.mark(2)
    state.mark(5)

    marked = state.marked()
    assert len(marked) == 3
    assert {0, 2, 5} == set(marked)

    state.unmark(2)
    marked = state.marked()
    assert len(marked) == 2
    assert 2 not in marked

    state.toggle_mark(3)
    state.toggle_mark(0)
    marked = state.marked()
    assert 3 in marked
    assert 0 not in marked


def test_mode_switching():
    state = TableState()
    assert state.mode is TableMode.SINGLE_SELECTION
    state.multiple_selection()
    assert state.mode is TableMode.MULTIPLE_SELECTION
    state.single_selection()
    assert state.mode is TableMode.SINGLE_SELECTION


def test_clear_marks():
    state = TableState()
    state.mark(1)
    state.mark(3)
    state.mark(7)
    assert len(state.marked()) == 3
    state.clear()
    assert len(state.marked()) == 0


def test_edge_cases():
    state = TableState()
    state.mark(None)
    assert len(state.marked()) == 0
    state.unmark(None)
    assert len(state.marked()) == 0
    state.toggle_mark(None)
    assert len(state.marked()) == 0

    state.mark(5)
    state.unmark(10)
    assert len(state.marked()) == 1


def test_marked_is_a_snapshot():
    state = TableState()
    state.mark(1)
    snapshot = state.marked()
    state.mark(2)
    assert snapshot == frozenset({1})
    assert state.marked() == frozenset({1, 2})


def test_negative_index_rejected():
    state = TableState()
    with pytest.raises(ValueError):
        state.select(-1)
    with pytest.raises(ValueError):
        state.mark(-3)


def test_scroll_keeps_offset_when_selection_visible():
    state = TableState(offset=0, current_selection=3)
    assert state.scroll_to_selection(10) == 0


def test_scroll_down_to_selection_at_bottom():
    state = TableState(offset=0, current_selection=9)
    assert state.scroll_to_selection(10) == 0
    state.select(12)
    assert state.scroll_to_selection(10) == 3
    assert state.offset == 3


def test_scroll_up_to_selection_above_view():
    state = TableState(offset=10, current_selection=4)
    assert state.scroll_to_selection(5) == 4


def test_scroll_without_selection_goes_to_top():
    state = TableState(offset=6, current_selection=None)
    assert state.scroll_to_selection(5) == 0


def test_scroll_with_no_visible_rows_raises():
    state = TableState(offset=0, current_selection=0)
    with pytest.raises(ValueError):
        state.scroll_to_selection(0)