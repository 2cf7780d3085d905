"""Tests for braided maze generation."""

import random

import pytest

from mazechase.environment import (
    Grid,
    MazeConfigurationError,
    MazeGenerator,
    generate_maze,
    reachable_cells,
)
from mazechase.randomness import ScriptedRandom


def _border_cells(grid: Grid):
    for y in range(grid.rows):
        for x in range(grid.cols):
            if x in (0, grid.cols - 1) or y in (0, grid.rows - 1):
                yield x, y


@pytest.mark.parametrize("seed", range(12))
def test_generated_maze_invariants(seed):
    grid = MazeGenerator(random.Random(seed)).generate(19, 25)

    # Outer ring is always wall
    assert all(grid.is_wall(x, y) for x, y in _border_cells(grid))

    # Flood fill from the start reaches exactly the open cells
    open_cells = grid.open_cells()
    assert reachable_cells(grid, (1, 1)) == set(open_cells)

    # Reported wheat equals flagged cells
    assert grid.wheat_total == grid.count_wheat()

    # Keys: at most five, recorded where they were placed
    assert len(grid.key_positions) <= 5
    for x, y in grid.key_positions:
        assert grid.cell_at(x, y).has_key

    for row in grid.cells:
        for cell in row:
            if cell.is_wall:
                assert not cell.has_wheat and not cell.has_key
            assert not (cell.has_wheat and cell.has_key)

    # Safe strip at the centre
    for x in (11, 12, 13):
        assert not grid.is_wall(x, 9)


@pytest.mark.parametrize("rows,cols", [(3, 3), (4, 4), (5, 7), (20, 30), (21, 21), (7, 5)])
def test_connectivity_holds_for_other_sizes(rows, cols):
    for seed in range(5):
        grid = generate_maze(rows, cols, random.Random(seed))
        assert grid.is_wall(0, 0)
        assert not grid.is_wall(1, 1)
        assert reachable_cells(grid) == set(grid.open_cells())


def test_smallest_grid_has_single_open_cell():
    grid = generate_maze(3, 3, random.Random(0))
    assert grid.open_cells() == [(1, 1)]


@pytest.mark.parametrize("rows,cols", [(2, 5), (5, 2), (0, 0), (1, 1)])
def test_too_small_grid_is_rejected(rows, cols):
    with pytest.raises(MazeConfigurationError) as excinfo:
        MazeGenerator(random.Random(0)).generate(rows, cols)
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.rows == rows


def test_scripted_random_gives_exact_maze():
    rng = ScriptedRandom(
        [
            # Carving: (1,1) -> (3,1) -> (3,3) -> (1,3)
            0.0, 0.0, 0.0,
            # Braid: pillar (2,2) is not braided; the centre strip opens it
            0.5,
            # Collectibles, row-major over the interior
            0.3,            # (1,1) wheat
            0.7, 0.005,     # (2,1) key
            0.9, 0.5,       # (3,1) nothing
            0.1,            # (1,2) wheat
            0.6, 0.001,     # (2,2) key
            0.2,            # (3,2) wheat
            0.99, 0.99,     # (1,3) nothing
            0.4,            # (2,3) wheat
            0.8, 0.009,     # (3,3) key
        ]
    )

    grid = MazeGenerator(rng).generate(5, 5)

    expected = Grid.from_ascii([
        "#####",
        "#.k #",
        "#.k.#",
        "# .k#",
        "#####",
    ])
    assert grid.cells == expected.cells
    assert grid.wheat_total == 4
    assert grid.key_positions == [(2, 1), (2, 2), (3, 3)]
    assert rng.consumed == 18


def test_key_placement_is_capped():
    generator = MazeGenerator(random.Random(1), wheat_chance=0.0, key_chance=1.0)
    grid = generator.generate(19, 25)
    assert grid.wheat_total == 0
    assert len(grid.key_positions) == 5
    assert sum(cell.has_key for row in grid.cells for cell in row) == 5


def test_braiding_adds_openings():
    # Same carve sequence, braiding on vs off
    perfect = MazeGenerator(random.Random(7), braid_chance=0.0, wheat_chance=0.0, key_chance=0.0)
    braided = MazeGenerator(random.Random(7), braid_chance=1.0, wheat_chance=0.0, key_chance=0.0)

    perfect_open = set(perfect.generate(19, 25).open_cells())
    braided_open = set(braided.generate(19, 25).open_cells())

    assert perfect_open < braided_open
