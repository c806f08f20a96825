import numpy as np
import pytest

from falling_blocks.game import Grid, InvalidDimensions


def _full_row(row, cols=10):
    return [(c, row) for c in range(cols)]


def test_empty_grid_has_no_occupied_cells():
    grid = Grid.empty(10, 20)
    assert (grid.width, grid.height) == (10, 20)
    assert grid.occupied() == frozenset()


@pytest.mark.parametrize("cols,rows", [(0, 20), (10, 0), (-1, 5), (3, -2)])
def test_empty_rejects_non_positive_dimensions(cols, rows):
    with pytest.raises(InvalidDimensions):
        Grid.empty(cols, rows)


@pytest.mark.parametrize("col,row", [(-1, 0), (10, 0), (0, -1), (0, 20), (-3, 25)])
def test_out_of_bounds_counts_as_occupied(col, row):
    assert Grid.empty(10, 20).is_occupied(col, row)


def test_merge_adds_cells_and_keeps_original():
    grid = Grid.empty(10, 20).merge([(0, 19), (1, 19)], 3)
    rect = [(c, r) for c in range(4, 7) for r in range(10, 12)]
    merged = grid.merge(rect, 5)

    assert merged.occupied() == grid.occupied() | set(rect)
    assert (merged.width, merged.height) == (10, 20)
    assert grid.occupied() == {(0, 19), (1, 19)}
    assert merged.cells[10, 4] == 5
    assert merged.cells[19, 0] == 3


def test_cells_are_read_only():
    grid = Grid.empty(4, 4)
    with pytest.raises(ValueError):
        grid.cells[0, 0] = 1


def test_remove_full_rows_without_full_rows_is_noop():
    grid = Grid.empty(10, 20).merge([(0, 19)], 1)
    count, same = grid.remove_full_rows()
    assert count == 0
    assert same == grid


def test_single_full_row_shifts_rows_above_down():
    grid = Grid.empty(10, 20).merge(_full_row(12) + [(2, 5), (7, 11), (0, 18)], 1)
    count, cleared = grid.remove_full_rows()

    assert count == 1
    assert cleared.occupied() == {(2, 6), (7, 12), (0, 18)}
    assert not cleared.cells[0].any()
    assert cleared.height == 20


def test_non_adjacent_full_rows_removed_together():
    grid = Grid.empty(10, 20).merge(_full_row(19) + _full_row(17) + [(3, 18), (4, 16)], 2)
    count, cleared = grid.remove_full_rows()

    assert count == 2
    assert cleared.occupied() == {(3, 19), (4, 18)}
    assert np.count_nonzero(cleared.cells[:2]) == 0


def test_remove_full_rows_is_idempotent():
    grid = Grid.empty(10, 20).merge(_full_row(19) + _full_row(18) + [(5, 17)], 1)
    first_count, once = grid.remove_full_rows()
    second_count, twice = once.remove_full_rows()

    assert first_count == 2
    assert second_count == 0
    assert twice == once


def test_grids_compare_by_contents():
    assert Grid.empty(3, 3).merge([(1, 1)], 4) == Grid.empty(3, 3).merge([(1, 1)], 4)
    assert Grid.empty(3, 3) != Grid.empty(3, 4)


@pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (10, 5), (3, 20)])
def test_merge_rejects_cells_outside_the_grid(cell):
    grid = Grid.empty(10, 20)
    with pytest.raises(ValueError):
        grid.merge([(0, 0), cell], 1)
    assert grid.occupied() == frozenset()


@pytest.mark.parametrize("shape", [(0, 10), (20, 0), (0, 0)])
def test_constructor_rejects_empty_arrays(shape):
    with pytest.raises(InvalidDimensions):
        Grid(np.zeros(shape, dtype=np.int8))


def test_constructor_rejects_non_2d_arrays():
    with pytest.raises(InvalidDimensions):
        Grid(np.zeros(10, dtype=np.int8))
