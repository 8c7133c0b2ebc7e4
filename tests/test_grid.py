import numpy as np
import pytest

from orthogrid.model.behaviours import GameOfLife, GameOfLifeParams, Propagation, PropagationParams
from orthogrid.model.errors import GridStateError
from orthogrid.model.geometry import cube_vertices, translation_vector
from orthogrid.model.profiles import CubeProfile, StructureProfile


def test_build_allocates_one_cube_per_cell(make_grid):
    grid = make_grid(rows=4, cols=6)

    positions = [cube.position for cube in grid.iter_cubes()]
    assert len(positions) == 24
    assert len(set(positions)) == 24
    assert all(grid.cube_at(row, col).position == (row, col) for row in range(4) for col in range(6))


def test_scan_order_is_column_by_column(make_grid):
    grid = make_grid(rows=2, cols=2)
    assert [cube.position for cube in grid.iter_cubes()] == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_cube_centres(make_grid, cube_shape):
    grid = make_grid(rows=3, cols=3)
    dx, dy = translation_vector(cube_shape.edge_length, cube_shape.separation, cube_shape.view_angle_deg)

    assert (grid.cube_at(0, 0).x, grid.cube_at(0, 0).y) == (100.0, 50.0)
    assert grid.cube_at(2, 0).x == pytest.approx(100.0 + 2 * dx)
    assert grid.cube_at(2, 0).y == pytest.approx(50.0 + 2 * dy)
    assert grid.cube_at(0, 1).x == pytest.approx(100.0 - dx)
    assert grid.cube_at(0, 1).y == pytest.approx(50.0 + dy)
    assert grid.cube_at(1, 2).x == pytest.approx(100.0 - 2 * dx + dx)
    assert grid.cube_at(1, 2).y == pytest.approx(50.0 + 2 * dy + dy)


@pytest.mark.parametrize("rows, cols", [(2, 2), (3, 3), (4, 7), (10, 2), (17, 17)])
def test_edge_cube_count(make_grid, rows, cols):
    grid = make_grid(rows=rows, cols=cols)
    assert len(grid.edge_cubes) == 2 * (rows + cols) - 8


def test_corners_are_not_edge_cubes(make_grid):
    grid = make_grid(rows=4, cols=5)
    for row, col in [(0, 0), (0, 4), (3, 0), (3, 4)]:
        cube = grid.cube_at(row, col)
        assert not grid.is_edge_cube(cube)
        assert grid.edge_direction(cube) is None


def test_edge_directions_point_inward(make_grid):
    grid = make_grid(rows=4, cols=5)
    assert grid.edge_direction(grid.cube_at(0, 2)) == (1, 0)
    assert grid.edge_direction(grid.cube_at(3, 2)) == (-1, 0)
    assert grid.edge_direction(grid.cube_at(1, 0)) == (0, 1)
    assert grid.edge_direction(grid.cube_at(2, 4)) == (0, -1)
    assert grid.edge_direction(grid.cube_at(1, 1)) is None


def test_get_all_active_in_scan_order(make_grid):
    grid = make_grid()
    grid.set_active(2, 0, True)
    grid.set_active(0, 1, True)
    grid.set_active(1, 0, True)

    assert [cube.position for cube in grid.get_all_active()] == [(1, 0), (2, 0), (0, 1)]


def test_distance_in_grid_space(make_grid):
    grid = make_grid()
    assert grid.distance(grid.cube_at(0, 0), grid.cube_at(3, 4)) == 5.0
    assert grid.distance(grid.cube_at(2, 2), grid.cube_at(2, 2)) == 0.0


def test_set_active_toggles_without_value(make_grid):
    grid = make_grid()
    grid.set_active(1, 1)
    assert grid.cube_at(1, 1).active
    grid.set_active(1, 1)
    assert not grid.cube_at(1, 1).active


def test_set_active_out_of_bounds(make_grid):
    grid = make_grid(rows=3, cols=3)
    with pytest.raises(IndexError):
        grid.set_active(3, 0, True)
    with pytest.raises(IndexError):
        grid.set_active(0, -1, True)


def test_unbuilt_grid_rejects_behaviour_and_frames(make_grid):
    grid = make_grid(build=False)

    assert not grid.is_built
    with pytest.raises(GridStateError):
        grid.load_behaviour(GameOfLife(GameOfLifeParams()))
    with pytest.raises(GridStateError):
        grid.advance(0.0)


def test_structure_change_needs_explicit_build(make_grid):
    grid = make_grid(rows=3, cols=3)

    grid.load_structure(StructureProfile(0.0, 0.0, 6, 4))
    assert len(grid.cubes) == 3

    grid.build()
    assert len(grid.cubes) == 4
    assert len(grid.cubes[0]) == 6

    grid.load_structure(StructureProfile(0.0, 0.0, 5, 5), rebuild=True)
    assert len(grid.cubes) == 5


def test_cube_shape_change_needs_explicit_build(make_grid):
    grid = make_grid(rows=3, cols=3)
    old_vertices = grid.cube_at(2, 1).vertices.copy()
    old_centre = grid.cube_at(2, 1).center.copy()

    bigger = CubeProfile(edge_length=40.0, separation=4.0, view_angle_deg=90)
    grid.load_cube_shape(bigger)
    assert grid.cube_shape is bigger
    np.testing.assert_allclose(grid.cube_at(2, 1).vertices, old_vertices)
    np.testing.assert_allclose(grid.cube_at(2, 1).center, old_centre)

    grid.build()
    cube = grid.cube_at(2, 1)
    dx, dy = translation_vector(40.0, 4.0, 90)
    np.testing.assert_allclose(cube.vertices, cube_vertices(40.0, bigger.view_angle))
    assert (cube.x, cube.y) == (pytest.approx(100.0 + 2 * dx - dx), pytest.approx(50.0 + 2 * dy + dy))
    assert not np.allclose(cube.center, old_centre)


def test_build_reinitialises_behaviour_state(make_grid):
    grid = make_grid(rows=4, cols=4, behaviour=Propagation(PropagationParams(speed=2)))

    assert grid.cube_at(0, 1).propagation_vector == (2, 0)

    grid.load_structure(StructureProfile(0.0, 0.0, 6, 6), rebuild=True)
    assert grid.cube_at(5, 3).propagation_vector == (-2, 0)
    assert grid.cube_at(2, 2).propagation_vector is None


def test_behaviour_swap_resets_cubes_without_reallocating(make_grid):
    grid = make_grid(behaviour=Propagation(PropagationParams()))
    cubes = grid.cubes
    grid.set_active(2, 2, True)
    grid.cube_at(2, 2).propagation_vector = (1, 0)
    grid.cube_at(2, 2).step = 3

    grid.load_behaviour(GameOfLife(GameOfLifeParams()))

    assert grid.cubes is cubes
    assert grid.get_all_active() == []
    assert all(cube.propagation_vector is None for cube in grid.iter_cubes())
    assert all(cube.step == 0 for cube in grid.iter_cubes())


def test_advance_renders_before_updating(make_grid):
    grid = make_grid(rows=6, cols=6, behaviour=GameOfLife(GameOfLifeParams(max_raise_height=10.0)))
    for row, col in [(2, 2), (2, 3), (3, 2), (3, 3)]:
        grid.set_active(row, col, True)
    cube = grid.cube_at(2, 2)

    first = grid.advance(0.0)
    drawn = next(c for c in first if c.position == (2, 2))
    assert drawn.polygons["top"][0][1] == pytest.approx(cube.y)
    assert cube.raise_height == 10.0

    second = grid.advance(0.0)
    drawn = next(c for c in second if c.position == (2, 2))
    assert drawn.polygons["top"][0][1] == pytest.approx(cube.y - 10.0)
    assert grid.frame_count == 2


def test_advance_rejects_fraction_out_of_range(make_grid):
    grid = make_grid()
    with pytest.raises(ValueError):
        grid.advance(1.5)


def test_advance_without_behaviour_only_renders(make_grid):
    grid = make_grid(rows=3, cols=3)
    grid.set_active(1, 1, True)

    frame = grid.advance(0.5)

    assert len(frame) == 9
    assert grid.cube_at(1, 1).active
