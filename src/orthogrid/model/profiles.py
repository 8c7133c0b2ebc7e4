"""
Grid Profiles
=============
Configuration data structures loaded into an OrthoGrid, and the catalog of
predefined profile bundles shown by the host.

Classes:
    StructureProfile: Origin and size of the grid.
    CubeProfile: Shape of every cube on the grid.
    RenderProfile: Drawing style and colours.
    Preset: A complete bundle for one behaviour.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from math import cos
from numbers import Real
from typing import Optional, Union

from orthogrid.config import LERP_UPPER_HEADROOM
from orthogrid.model.behaviours import (
    BehaviourParams, GameOfLifeParams, PropagationParams, RippleParams,
)
from orthogrid.model.errors import ConfigurationError
from orthogrid.model.geometry import deg2rad

# A scalar brightness or an (R, G, B) triple, 0..255
Color = Union[float, tuple[float, float, float]]


def _check_color(name: str, value: Color) -> None:
    if isinstance(value, Real):
        return
    if isinstance(value, (tuple, list)) and len(value) == 3 and all(isinstance(c, Real) for c in value):
        return
    raise ConfigurationError(f"{name} must be a brightness or an (R, G, B) triple, got {value!r}.")


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass
class StructureProfile:
    """
    Origin and size of the grid.
    (x, y) is the canvas position of the cube at row 0, column 0.
    """
    x: float
    y: float
    max_row: int
    max_col: int

    def __post_init__(self) -> None:
        for name in ("max_row", "max_col"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}.")


@dataclass
class CubeProfile:
    """Shape shared by every cube on the grid."""
    edge_length: float
    separation: float
    view_angle_deg: float

    def __post_init__(self) -> None:
        if self.edge_length <= 0:
            raise ConfigurationError(f"edge_length must be positive, got {self.edge_length!r}.")
        if self.separation < 0:
            raise ConfigurationError(f"separation must not be negative, got {self.separation!r}.")
        if not 0 < self.view_angle_deg < 180:
            raise ConfigurationError(
                f"view_angle_deg must lie strictly between 0 and 180 degrees, got {self.view_angle_deg!r}."
            )

    @property
    def view_angle(self) -> float:
        """View angle in radians."""
        return deg2rad(self.view_angle_deg)


@dataclass
class RenderProfile:
    """
    Drawing style and colours of the cubes.

    When no lerp bounds are given the colour range follows the max raise
    height of the loaded behaviour.
    """
    dimensional: bool
    cold_color: Color
    warm_color: Color
    lerp_lower_bound: Optional[float] = None
    lerp_upper_bound: Optional[float] = None

    def __post_init__(self) -> None:
        _check_color("cold_color", self.cold_color)
        _check_color("warm_color", self.warm_color)
        if self.lerp_lower_bound is not None and self.lerp_upper_bound is None:
            raise ConfigurationError("lerp_lower_bound requires lerp_upper_bound.")
        if self.lerp_upper_bound is not None:
            lower = self.lerp_lower_bound or 0.0
            if self.lerp_upper_bound * LERP_UPPER_HEADROOM <= lower:
                raise ConfigurationError(
                    f"Colour lerp range is empty: lower={lower!r}, upper={self.lerp_upper_bound!r}."
                )


# ------------------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------------------
class PresetKey(StrEnum):
    PROPAGATION = "propagation"
    RIPPLE = "ripple"
    GAME_OF_LIFE = "game of life"


@dataclass
class Preset:
    """Everything needed to show one behaviour."""
    key: PresetKey
    structure: StructureProfile
    render: RenderProfile
    behaviour: BehaviourParams
    # (row, col) cells activated right after loading
    initial_active: list[tuple[int, int]] = field(default_factory=list)


def centered_structure(
    cube: CubeProfile,
    canvas_width: float,
    canvas_height: float,
    row_col_count: int,
) -> StructureProfile:
    """Square grid whose diamond sits roughly in the middle of the canvas."""
    spacing = cube.edge_length + cube.separation
    return StructureProfile(
        x=canvas_width / 2,
        y=canvas_height / 2 + spacing * cos(deg2rad(cube.view_angle_deg) / 2) * row_col_count / 2,
        max_row=row_col_count,
        max_col=row_col_count,
    )


def default_cube_profile(canvas_height: float) -> CubeProfile:
    return CubeProfile(
        edge_length=canvas_height / 22,
        separation=canvas_height * 0.01,
        view_angle_deg=120,
    )


def build_presets(canvas_width: float, canvas_height: float) -> dict[PresetKey, Preset]:
    """
    Create the predefined profile bundles scaled to the canvas.

    Args:
        canvas_width: Width of the drawing surface in pixels.
        canvas_height: Height of the drawing surface in pixels.

    Returns:
        Mapping from preset key to the preset bundle.
    """
    cube = default_cube_profile(canvas_height)
    edge = cube.edge_length

    return {
        PresetKey.PROPAGATION: Preset(
            key=PresetKey.PROPAGATION,
            structure=centered_structure(cube, canvas_width, canvas_height, 17),
            render=RenderProfile(False, (0, 0, 255), (255, 0, 0), 0, edge * 1.5),
            behaviour=PropagationParams(
                rebound=False,
                speed=1,
                max_raise_height=edge * 1.5,
                max_raise_radius=6,
                limit=3,
                chance=0.05,
            ),
        ),
        PresetKey.RIPPLE: Preset(
            key=PresetKey.RIPPLE,
            structure=centered_structure(cube, canvas_width, canvas_height, 16),
            render=RenderProfile(False, (255, 180, 74), (255, 255, 255), -30, edge * 1),
            behaviour=RippleParams(amplitude=edge * 3, radius=19),
            initial_active=[(3, 0), (0, 9), (2, 5), (9, 12), (7, 11)],
        ),
        PresetKey.GAME_OF_LIFE: Preset(
            key=PresetKey.GAME_OF_LIFE,
            structure=centered_structure(cube, canvas_width, canvas_height, 19),
            render=RenderProfile(True, (80, 80, 80), (255, 255, 255), 0, edge * 1),
            behaviour=GameOfLifeParams(max_raise_height=edge * 0.9),
        ),
    }
