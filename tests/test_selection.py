# tests/test_selection.py
from daily_puzzles.services.selection import SelectionModel, in_bounds


def test_in_bounds():
    assert in_bounds((0, 0))
    assert in_bounds((8, 8))
    assert not in_bounds((9, 0))
    assert not in_bounds((0, -1))
    assert not in_bounds(None)
    assert not in_bounds(("a", 1))


def test_select_only_replaces_selection():
    selection = SelectionModel()
    selection.select_only((1, 1))
    selection.select_only((2, 2))
    assert selection.cells == [(2, 2)]
    assert selection.primary == (2, 2)


def test_clicking_sole_selected_cell_clears():
    selection = SelectionModel()
    selection.select_only((1, 1))
    selection.select_only((1, 1))
    assert selection.cells == []
    assert selection.primary is None


def test_extend_appends_without_duplicates():
    selection = SelectionModel()
    selection.select_only((1, 1))
    selection.extend((1, 2))
    selection.extend((1, 1))
    assert selection.cells == [(1, 1), (1, 2)]


def test_toggle():
    selection = SelectionModel()
    selection.toggle((1, 1))
    selection.toggle((2, 2))
    selection.toggle((1, 1))
    assert selection.cells == [(2, 2)]
    assert selection.primary == (2, 2)


def test_drag_only_extends_while_dragging():
    selection = SelectionModel()
    selection.select_only((0, 0))
    selection.drag_into((0, 1))
    assert selection.cells == [(0, 0)]

    selection.begin_drag()
    selection.drag_into((0, 1))
    selection.drag_into((0, 1))
    selection.drag_into((1, 1))
    selection.end_drag()
    selection.drag_into((2, 2))
    assert selection.cells == [(0, 0), (0, 1), (1, 1)]


def test_move_anchor():
    selection = SelectionModel()
    selection.select_only((4, 4))
    assert selection.move_anchor(0, 1)
    assert selection.cells == [(4, 5)]

    assert selection.move_anchor(1, 0, extending=True)
    assert selection.cells == [(4, 5), (5, 5)]
    assert selection.primary == (4, 5)


def test_move_anchor_stops_at_edges():
    selection = SelectionModel()
    selection.select_only((0, 8))
    assert not selection.move_anchor(-1, 0)
    assert not selection.move_anchor(0, 1)
    assert selection.cells == [(0, 8)]


def test_move_anchor_without_selection():
    selection = SelectionModel()
    assert not selection.move_anchor(0, 1)
    assert len(selection) == 0


def test_out_of_range_coordinates_ignored():
    selection = SelectionModel()
    selection.select_only((9, 9))
    selection.extend((-1, 0))
    selection.toggle((0, 10))
    assert selection.cells == []
    assert (9, 9) not in selection
