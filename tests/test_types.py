import pytest

from trailblazer.types import (
    Color,
    Grid,
    GridEdge,
    Loc,
    grid_from_rows,
    hash_code,
    make_edge,
    make_loc,
)


def test_make_loc_fields():
    loc = make_loc(3, 7)
    assert (loc.row, loc.col) == (3, 7)
    assert loc == Loc(3, 7)


def test_loc_ordering_row_first():
    locs = [Loc(2, 0), Loc(1, 5), Loc(1, 2), Loc(0, 9)]
    assert sorted(locs) == [Loc(0, 9), Loc(1, 2), Loc(1, 5), Loc(2, 0)]
    assert Loc(1, 1) <= Loc(1, 1)
    assert Loc(1, 2) > Loc(1, 1)


def test_make_edge_and_ordering():
    e1 = make_edge(Loc(0, 0), Loc(0, 1))
    e2 = make_edge(Loc(0, 0), Loc(1, 0))
    e3 = make_edge(Loc(1, 0), Loc(0, 0))
    assert e1.start == Loc(0, 0) and e1.end == Loc(0, 1)
    assert sorted([e3, e2, e1]) == [e1, e2, e3]
    assert e1 == GridEdge(Loc(0, 0), Loc(0, 1))


def test_hash_code_loc_column_zero_is_row():
    assert hash_code(Loc(5, 0)) == 5


@pytest.mark.parametrize("loc", [Loc(0, 0), Loc(3, 4), Loc(-2, 7), Loc(399, 399)])
def test_hash_code_is_masked_and_non_negative(loc):
    value = hash_code(loc)
    assert 0 <= value <= 0x7FFFFFF


def test_hash_code_edge_consistent_with_equality():
    a = make_edge(Loc(1, 2), Loc(1, 3))
    b = make_edge(Loc(1, 2), Loc(1, 3))
    assert hash_code(a) == hash_code(b)
    assert 0 <= hash_code(a) <= 0x7FFFFFF


def test_hash_code_rejects_other_types():
    with pytest.raises(TypeError):
        hash_code((1, 2))


def test_color_order_matches_enumeration_in_grid():
    grid = grid_from_rows([list(Color)])
    stored = grid.to_rows()[0]
    assert [c.name for c in stored] == ["UNCOLORED", "WHITE", "GRAY", "YELLOW", "GREEN", "RED"]
    assert grid.get(0, 0) == 0
    assert grid.get(0, 5) == 5


def test_grid_set_get_round_trip():
    grid = Grid(3, 4)
    grid.set(2, 3, 0.5)
    assert grid.get(2, 3) == 0.5
    assert grid[Loc(2, 3)] == 0.5
    grid[(0, 1)] = 0.25
    assert grid.get(0, 1) == 0.25
    assert (grid.num_rows, grid.num_cols) == (3, 4)


def test_grid_in_bounds():
    grid = Grid(2, 3)
    assert grid.in_bounds(1, 2)
    assert not grid.in_bounds(2, 0)
    assert not grid.in_bounds(0, 3)
    assert not grid.in_bounds(-1, 0)


def test_grid_out_of_bounds_access_raises():
    grid = Grid(2, 2)
    with pytest.raises(IndexError):
        grid.get(2, 0)
    with pytest.raises(IndexError):
        grid.set(0, -1, 1.0)


def test_grid_resize_resets_contents():
    grid = Grid(2, 2, fill=Color.UNCOLORED)
    grid.set(1, 1, Color.GREEN)
    grid.resize(3, 1)
    assert (grid.num_rows, grid.num_cols) == (3, 1)
    assert grid.to_rows() == [[Color.UNCOLORED]] * 3


def test_grid_negative_size_rejected():
    with pytest.raises(ValueError):
        Grid(-1, 2)


def test_grid_from_rows_round_trip():
    rows = [[0.0, 1.0, 0.5], [0.25, 0.75, 1.0]]
    grid = grid_from_rows(rows)
    assert grid.to_rows() == rows
    assert [value for _, value in grid.cells()] == [v for row in rows for v in row]
    assert [loc for loc, _ in grid.cells()][3] == Loc(1, 0)


def test_grid_from_rows_ragged_rejected():
    with pytest.raises(ValueError):
        grid_from_rows([[1.0, 0.0], [1.0]])


def test_grid_copy_is_independent():
    grid = grid_from_rows([[1.0, 1.0]])
    clone = grid.copy()
    clone.set(0, 0, 0.0)
    assert grid.get(0, 0) == 1.0
    assert clone.get(0, 0) == 0.0