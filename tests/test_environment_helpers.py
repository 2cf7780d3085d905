"""Tests for environment helper utilities."""

from mazechase.environment import (
    Grid,
    find_empty_cell,
    reachable_cells,
    render_ascii,
)
from mazechase.randomness import ScriptedRandom

ROOM = [
    "#######",
    "#     #",
    "#     #",
    "#     #",
    "#######",
]


def test_reachable_cells_stops_at_walls():
    grid = Grid.from_ascii([
        "#######",
        "#  #  #",
        "#######",
    ])
    assert reachable_cells(grid, (1, 1)) == {(1, 1), (2, 1)}
    assert reachable_cells(grid, (4, 1)) == {(4, 1), (5, 1)}
    assert reachable_cells(grid, (3, 1)) == set()


def test_find_empty_cell_samples_interior():
    grid = Grid.from_ascii(ROOM)
    # randrange(5) + 1 for x, randrange(3) + 1 for y
    assert find_empty_cell(grid, ScriptedRandom([0.0, 0.0])) == (1, 1)
    assert find_empty_cell(grid, ScriptedRandom([0.99, 0.99])) == (5, 3)


def test_find_empty_cell_respects_avoid():
    grid = Grid.from_ascii(ROOM)
    rng = ScriptedRandom([0.0, 0.0, 0.5, 0.5])
    assert find_empty_cell(grid, rng, avoid={(1, 1)}) == (3, 2)
    assert rng.consumed == 4


def test_find_empty_cell_skips_walls():
    grid = Grid.from_ascii([
        "#####",
        "## ##",
        "#####",
    ])
    rng = ScriptedRandom([0.0, 0.0, 0.5, 0.0])
    assert find_empty_cell(grid, rng) == (2, 1)


def test_find_empty_cell_falls_back_to_scan():
    grid = Grid.from_ascii(ROOM)
    # The script keeps hitting the avoided cell
    cell = find_empty_cell(grid, ScriptedRandom([], default=0.0), avoid={(1, 1)}, attempts=3)
    assert cell == (2, 1)


def test_render_ascii_with_markers():
    grid = Grid.from_ascii([
        "####",
        "#.k#",
        "#  #",
        "####",
    ])

    text = render_ascii(grid.to_state(), markers={(1, 2): "P"})
    lines = text.split("\n")

    assert len(lines) == 4
    assert lines[0] == "████████"
    assert lines[1] == "██· k ██"
    assert lines[2] == "██P   ██"


def test_render_ascii_custom_symbols():
    grid = Grid.from_ascii([
        "###",
        "#.#",
        "###",
    ])
    text = render_ascii(grid.to_state(), symbols={"wall": "#", "wheat": "."})
    assert text == "###\n#.#\n###"
