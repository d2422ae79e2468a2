import pytest

from squaremap.grid import (
    DIRECTIONS,
    Coord,
    grid_distance,
    grid_line,
    grid_ring,
    grid_spiral,
)


def test_coord_basics():
    a, b = Coord(1, 2), Coord(-1, 0)
    assert a + b == Coord(0, 2)
    assert a - b == Coord(2, 2)
    assert a * 3 == Coord(3, 6)


def test_grid_distance():
    assert grid_distance(Coord(0, 0), Coord(3, 0)) == 3
    assert grid_distance(Coord(0, 0), Coord(0, 3)) == 3
    assert grid_distance(Coord(0, 0), Coord(3, 4)) == 7
    assert grid_distance(Coord(0, 0), Coord(-2, -2)) == 4
    assert grid_distance(Coord(0, 0), Coord(0, 0)) == 0


def test_grid_ring():
    assert len(grid_ring(Coord(0, 0), 2)) == 8
    assert len(grid_ring(Coord(0, 0), 3)) == 12
    assert grid_ring(Coord(0, 0), 0) == [Coord(0, 0)]


def test_grid_ring_cells_at_radius_and_unique():
    center = Coord(4, -2)
    ring = grid_ring(center, 5)
    assert len(set(ring)) == len(ring)
    assert all(grid_distance(center, c) == 5 for c in ring)
    assert ring[0] == Coord(center.x - 5, center.y)


def test_grid_ring_negative_raises():
    with pytest.raises(ValueError):
        grid_ring(Coord(0, 0), -1)


def test_grid_spiral():
    assert len(grid_spiral(Coord(0, 0), 2)) == 13
    assert len(grid_spiral(Coord(0, 0), 3)) == 25


def test_grid_spiral_ordered_by_distance():
    spiral = grid_spiral(Coord(1, 1), 4)
    assert spiral[0] == Coord(1, 1)
    dists = [grid_distance(Coord(1, 1), c) for c in spiral]
    assert dists == sorted(dists)


def test_grid_spiral_negative_raises():
    with pytest.raises(ValueError):
        grid_spiral(Coord(0, 0), -1)


def test_grid_line():
    line = grid_line(Coord(0, 0), Coord(3, 0))
    assert len(line) == 4
    assert line[0] == Coord(0, 0) and line[3] == Coord(3, 0)

    diag = grid_line(Coord(0, 0), Coord(2, 2))
    assert len(diag) == 5
    assert diag[0] == Coord(0, 0) and diag[-1] == Coord(2, 2)


@pytest.mark.parametrize("end", [Coord(5, -3), Coord(-4, 7), Coord(0, -6), Coord(-2, -2)])
def test_grid_line_is_four_connected(end):
    start = Coord(1, 1)
    line = grid_line(start, end)
    assert len(line) == grid_distance(start, end) + 1
    assert line[0] == start and line[-1] == end
    assert all(grid_distance(a, b) == 1 for a, b in zip(line, line[1:]))


def test_grid_line_single_point():
    assert grid_line(Coord(2, 2), Coord(2, 2)) == [Coord(2, 2)]


def test_neighbor_wrap():
    c = Coord(0, 0)
    assert c.neighbor(4) == c.neighbor(0)
    assert c.neighbor(-1) == c.neighbor(3)


def test_neighbors_four():
    nb = Coord(5, 5).neighbors()
    assert len(nb) == 4
    assert nb[0] == Coord(6, 5)
    assert nb[1] == Coord(5, 4)
    assert nb[2] == Coord(4, 5)
    assert nb[3] == Coord(5, 6)


def test_opposite_directions_cancel():
    for i in range(4):
        assert DIRECTIONS[i] + DIRECTIONS[(i + 2) % 4] == Coord(0, 0)