from math import pi, sin, sqrt

import pytest

from orthogrid.model.behaviours import Ripple, RippleParams


def ripple(**kwargs):
    return Ripple(RippleParams(**kwargs))


def test_without_sources_heights_decay_toward_zero(make_grid):
    grid = make_grid(behaviour=ripple(amplitude=5.0))
    for cube in grid.iter_cubes():
        cube.raise_height = 2.0

    previous = 2.0
    for frame in range(60):
        grid.behaviour.update(grid, (frame % 10) / 10)
        heights = {cube.raise_height for cube in grid.iter_cubes()}
        assert heights == {previous * 0.85}
        previous *= 0.85

    assert 0.0 < previous < 2.0


def test_single_source_wave(make_grid):
    grid = make_grid(behaviour=ripple(amplitude=4.0, radius=19))
    grid.set_active(2, 2, True)

    grid.behaviour.update(grid, 0.25)

    assert grid.cube_at(2, 2).raise_height == pytest.approx(4.0)
    assert grid.cube_at(2, 3).raise_height == pytest.approx(4.0 / 2 * sin(pi / 2 + 1))
    d = sqrt(8)
    assert grid.cube_at(0, 0).raise_height == pytest.approx(4.0 / (d + 1) * sin(pi / 2 + d))


def test_sources_are_summed(make_grid):
    grid = make_grid(behaviour=ripple(amplitude=1.0, radius=10))
    grid.set_active(0, 0, True)
    grid.set_active(0, 2, True)

    grid.behaviour.update(grid, 0.0)

    assert grid.cube_at(0, 1).raise_height == pytest.approx(2 * (1.0 / 2 * sin(1.0)))


def test_cells_outside_radius_decay(make_grid):
    grid = make_grid(behaviour=ripple(amplitude=1.0, radius=1))
    grid.cube_at(4, 4).raise_height = 1.0
    grid.set_active(0, 0, True)

    grid.behaviour.update(grid, 0.5)

    assert grid.cube_at(4, 4).raise_height == 0.85
    assert grid.cube_at(1, 1).raise_height == 0.0


def test_sources_never_move(make_grid):
    grid = make_grid(behaviour=ripple())
    grid.set_active(1, 3, True)
    grid.set_active(4, 0, True)

    for frame in range(20):
        grid.behaviour.update(grid, frame / 20)

    assert [cube.position for cube in grid.get_all_active()] == [(4, 0), (1, 3)]


def test_spawn_random_adds_a_source(make_grid):
    grid = make_grid(behaviour=ripple(), seed=5)
    grid.behaviour.spawn_random(grid)
    assert len(grid.get_all_active()) == 1
