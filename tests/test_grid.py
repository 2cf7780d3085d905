"""Unit tests for the grid data structure."""

from mazechase.environment import Grid


def test_is_wall_treats_out_of_bounds_as_wall():
    grid = Grid(rows=3, cols=4)
    for y in range(3):
        for x in range(4):
            grid.cells[y][x].is_wall = False

    for coord in [(-1, 0), (0, -1), (4, 0), (0, 3), (4, 3), (100, -100)]:
        assert grid.is_wall(*coord) is True

    # Every in-bounds cell was opened above
    assert grid.is_wall(0, 0) is False
    assert grid.is_wall(3, 2) is False


def test_new_grid_is_all_wall():
    grid = Grid(rows=3, cols=5)
    assert all(cell.is_wall for row in grid.cells for cell in row)
    assert grid.open_cells() == []


def test_cell_at_returns_none_outside_grid():
    grid = Grid(rows=3, cols=4)
    assert grid.cell_at(1, 2) is grid.cells[2][1]
    assert grid.cell_at(4, 0) is None
    assert grid.cell_at(-1, 1) is None
    assert grid.cell_at(0, 3) is None


def test_from_ascii_layout():
    grid = Grid.from_ascii([
        "#####",
        "#. k#",
        "#####",
    ])

    assert (grid.rows, grid.cols) == (3, 5)
    assert grid.cell_at(1, 1).has_wheat
    assert not grid.cell_at(2, 1).has_wheat
    assert grid.cell_at(3, 1).has_key
    assert grid.wheat_total == 1 == grid.count_wheat()
    assert grid.key_positions == [(3, 1)]
    assert grid.open_cells() == [(1, 1), (2, 1), (3, 1)]


def test_to_state_is_a_detached_copy():
    grid = Grid.from_ascii([
        "###",
        "#.#",
        "###",
    ])

    state = grid.to_state()
    assert state.cell(1, 1).has_wheat is True
    assert state.cell(0, 0).is_wall is True

    state.cell(1, 1).has_wheat = False
    assert grid.cells[1][1].has_wheat is True
