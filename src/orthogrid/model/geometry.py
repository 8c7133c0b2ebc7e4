"""
Cube Geometry
=============
Local-space vertices of an orthographically projected cube and the
translation used to lay cubes out on the grid.

Vertex layout (A is the cube centre, at the local origin)::

               G
            •     •
         B           C
         •  •     •  •
         •     A     •
         D     •     F
            •  •  •
               E
"""
from __future__ import annotations

from math import cos, pi, sin
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

# Row indices into the (7, 2) vertex array
A, B, C, D, E, F, G = range(7)

# Faces as vertex index loops
TOP_FACE: tuple[int, ...] = (A, B, G, C)
LEFT_FACE: tuple[int, ...] = (A, B, D, E)
RIGHT_FACE: tuple[int, ...] = (A, C, F, E)


def deg2rad(degrees: float) -> float:
    return degrees * pi / 180


def cube_vertices(edge_length: float, view_angle: float) -> npt.NDArray[np.float64]:
    """
    Calculate the seven local vertices of a cube.

    Args:
        edge_length: Length of the cube's edge.
        view_angle: Angle the cube is viewed from, in radians.

    Returns:
        An array of shape (7, 2) holding the (x, y) coordinates of A..G.
    """
    half_sin = edge_length * sin(view_angle / 2)
    half_cos = edge_length * cos(view_angle / 2)
    lower_y = edge_length * (1 - cos(view_angle / 2))

    return np.array([
        [0.0, 0.0],                          # A
        [-half_sin, -half_cos],              # B
        [+half_sin, -half_cos],              # C
        [-half_sin, lower_y],                # D
        [0.0, edge_length],                  # E
        [+half_sin, lower_y],                # F
        [0.0, -2 * half_cos],                # G
    ], dtype=np.float64)


def translation_angle(view_angle_deg: float) -> float:
    """Direction (radians) along which the row index increases."""
    return (pi * (360 - 2 * view_angle_deg)) / 720


def translation_vector(edge_length: float, separation: float, view_angle_deg: float) -> tuple[float, float]:
    """
    Offset between two cubes in consecutive rows of the same column.

    The next column starts from the previous column's origin shifted by
    ``(-dx, +dy)``.

    Args:
        edge_length: Length of the cube's edge.
        separation: Gap between neighbouring cubes.
        view_angle_deg: View angle of the cubes in degrees.

    Returns:
        The (dx, dy) translation.
    """
    angle = translation_angle(view_angle_deg)
    spacing = edge_length + separation
    return spacing * cos(angle), spacing * sin(angle)
