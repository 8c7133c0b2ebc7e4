"""
Render Sink
===========
Turns cube state into drawable data: three face polygons per cube in canvas
coordinates and one RGB fill colour per face. Nothing in here knows about Qt.
"""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING

import numpy as np

from orthogrid.config import DEFAULT_HEIGHT_HEADROOM, FACE_BRIGHTNESS, LERP_UPPER_HEADROOM
from orthogrid.model.geometry import LEFT_FACE, RIGHT_FACE, TOP_FACE

if TYPE_CHECKING:
    import numpy.typing as npt
    from orthogrid.model.cube import Cube
    from orthogrid.model.profiles import Color, RenderProfile

RGB = tuple[int, int, int]

FACES: dict[str, tuple[int, ...]] = {
    "top": TOP_FACE,
    "left": LEFT_FACE,
    "right": RIGHT_FACE,
}


@dataclass
class CubeRender:
    """Drawable snapshot of one cube."""
    position: tuple[int, int]
    polygons: dict[str, npt.NDArray[np.float64]]
    colors: dict[str, RGB]


def as_rgb(color: Color) -> npt.NDArray[np.float64]:
    """A brightness or an (R, G, B) triple as a float RGB array."""
    if isinstance(color, Real):
        return np.full(3, float(color))
    return np.asarray(color, dtype=np.float64)


def color_brightness(color: Color, percentage: float) -> Color:
    """Scale a brightness or every channel of an RGB triple."""
    if isinstance(color, Real):
        return color * percentage
    return tuple(channel * percentage for channel in color)


def lerp_bounds(render: RenderProfile, max_raise_height: float) -> tuple[float, float]:
    """
    Raise heights mapped onto the cold and the warm colour.

    Explicit profile bounds get their upper end stretched by a small headroom;
    otherwise the range follows the behaviour's max raise height.
    """
    if render.lerp_upper_bound is not None:
        lower = render.lerp_lower_bound if render.lerp_lower_bound is not None else 0.0
        return lower, render.lerp_upper_bound * LERP_UPPER_HEADROOM
    return 0.0, DEFAULT_HEIGHT_HEADROOM * max_raise_height


def heat_map_color(
    cold_color: Color,
    warm_color: Color,
    raise_height: float,
    lower_bound: float,
    upper_bound: float,
) -> RGB:
    """
    Linear interpolation between two colours keyed by a raise height.

    Args:
        cold_color: Colour shown when the height is at or below the lower bound.
        warm_color: Colour shown when the height is at or above the upper bound.
        raise_height: Current raise height of the cube.
        lower_bound: Height mapped to the cold colour.
        upper_bound: Height mapped to the warm colour.

    Returns:
        The interpolated (R, G, B) colour, channels in 0..255.
    """
    span = upper_bound - lower_bound
    amount = (raise_height - lower_bound) / span if span > 0 else 0.0
    amount = float(np.clip(amount, 0.0, 1.0))

    cold = np.clip(as_rgb(cold_color), 0, 255)
    warm = np.clip(as_rgb(warm_color), 0, 255)
    mixed = cold + (warm - cold) * amount
    r, g, b = (int(channel) for channel in np.rint(mixed))
    return r, g, b


def render_cube(cube: Cube, render: RenderProfile, bounds: tuple[float, float]) -> CubeRender:
    """Face polygons lifted by the cube's raise height, with their fill colours."""
    lifted = cube.vertices + cube.center - np.array([0.0, cube.raise_height])
    polygons = {face: lifted[list(indices)] for face, indices in FACES.items()}

    if render.dimensional:
        colors = {
            face: heat_map_color(
                color_brightness(render.cold_color, FACE_BRIGHTNESS[face]),
                color_brightness(render.warm_color, FACE_BRIGHTNESS[face]),
                cube.raise_height,
                *bounds,
            )
            for face in FACES
        }
    else:
        flat = heat_map_color(render.cold_color, render.warm_color, cube.raise_height, *bounds)
        colors = {face: flat for face in FACES}

    return CubeRender(position=cube.position, polygons=polygons, colors=colors)
