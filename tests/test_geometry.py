from math import cos, pi, sin

import numpy as np
import pytest

from orthogrid.model.cube import Cube
from orthogrid.model.geometry import (
    A, B, C, D, E, F, G, cube_vertices, deg2rad, translation_angle, translation_vector,
)


@pytest.mark.parametrize("edge_length", [0.5, 1.0, 22.7, 300.0])
@pytest.mark.parametrize("angle_deg", [1.0, 60.0, 120.0, 179.0])
def test_bottom_vertex_and_mirrored_shoulders(edge_length, angle_deg):
    vertices = cube_vertices(edge_length, deg2rad(angle_deg))

    assert vertices.shape == (7, 2)
    assert tuple(vertices[A]) == (0.0, 0.0)
    assert tuple(vertices[E]) == (0.0, edge_length)
    assert vertices[B][0] == -vertices[C][0]
    assert vertices[B][1] == vertices[C][1]
    assert vertices[D][0] == -vertices[F][0]
    assert vertices[D][1] == vertices[F][1]


def test_vertices_at_120_degrees():
    vertices = cube_vertices(10.0, deg2rad(120))
    half = 10.0 * sin(pi / 3)

    np.testing.assert_allclose(vertices[B], [-half, -5.0])
    np.testing.assert_allclose(vertices[C], [half, -5.0])
    np.testing.assert_allclose(vertices[D], [-half, 5.0])
    np.testing.assert_allclose(vertices[F], [half, 5.0])
    np.testing.assert_allclose(vertices[G], [0.0, -10.0])


def test_top_vertex_is_twice_the_shoulder_height():
    theta = deg2rad(75)
    vertices = cube_vertices(4.0, theta)
    assert vertices[G][1] == pytest.approx(-2 * 4.0 * cos(theta / 2))
    assert vertices[G][1] == pytest.approx(2 * vertices[B][1])


def test_translation_vector():
    assert translation_angle(120) == pytest.approx(pi / 6)
    dx, dy = translation_vector(20.0, 2.0, 120)
    assert dx == pytest.approx(22.0 * cos(pi / 6))
    assert dy == pytest.approx(11.0)


def test_cube_recomputes_vertices_on_shape_change():
    cube = Cube(0, 0, (0.0, 0.0), 10.0, deg2rad(120))

    cube.edge_length = 20.0
    np.testing.assert_array_equal(cube.vertices, cube_vertices(20.0, deg2rad(120)))

    cube.view_angle = deg2rad(90)
    np.testing.assert_array_equal(cube.vertices, cube_vertices(20.0, deg2rad(90)))


def test_cube_reset_behaviour_state():
    cube = Cube(1, 2, (5.0, 6.0), 10.0, deg2rad(120))
    cube.step = 4
    cube.propagation_vector = (1, 0)

    cube.reset_behaviour_state()

    assert cube.step == 0
    assert cube.propagation_vector is None
    assert cube.position == (1, 2)
    assert (cube.x, cube.y) == (5.0, 6.0)
