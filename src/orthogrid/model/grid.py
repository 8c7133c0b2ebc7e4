"""
Orthographic Grid
=================
The container of all cubes and the entry point of every frame.

Why is this class needed?
-------------------------
1. Ownership: It is the only owner of the cube array; the host mutates cubes
   through ``set_active`` and the ``load_*`` methods only.
2. Bookkeeping: It classifies the edge cubes and answers distance/adjacency
   queries for the behaviours.
3. Frame order: ``advance`` renders the current state first and only then lets
   the behaviour update the cubes for the next frame.

Cubes are stored as ``cubes[col][row]`` and always enumerated column by
column, row by row.
"""
from __future__ import annotations

from math import sqrt
import logging
from typing import TYPE_CHECKING, Iterator, Optional

import numpy as np

from orthogrid.model.colors import CubeRender, lerp_bounds, render_cube
from orthogrid.model.cube import Cube
from orthogrid.model.errors import GridStateError
from orthogrid.model.geometry import translation_vector

if TYPE_CHECKING:
    from orthogrid.model.behaviours import Behaviour
    from orthogrid.model.profiles import CubeProfile, RenderProfile, StructureProfile

logger = logging.getLogger(__name__)


class OrthoGrid:
    """
    Grid of orthographically rendered cubes driven by a behaviour strategy.
    """
    def __init__(
        self,
        structure: StructureProfile,
        cube_shape: CubeProfile,
        render: RenderProfile,
        behaviour: Optional[Behaviour] = None,
        *,
        rng: Optional[np.random.Generator] = None,
        build: bool = True,
    ) -> None:
        """
        Initialize the grid from its profiles.

        Args:
            structure: Origin and number of rows/columns.
            cube_shape: Edge length, separation and view angle of the cubes.
            render: Drawing style and colours.
            behaviour: Strategy updating the cubes every frame.
            rng: Random source used by the behaviours. Seed it for reproducible runs.
            build: Allocate the cubes immediately.
        """
        self.cubes: list[list[Cube]] = []
        self.edge_cubes: list[Cube] = []
        self._edge_positions: set[tuple[int, int]] = set()
        self.frame_count = 0

        self.rng = rng if rng is not None else np.random.default_rng()
        self.behaviour: Optional[Behaviour] = behaviour

        self.load_structure(structure)
        self.load_cube_shape(cube_shape)
        self.load_render(render)

        if build:
            self.build()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(rows={self.max_row}, cols={self.max_col}, "
            f"behaviour={self.behaviour!r}, built={self.is_built})"
        )

    # ------------------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------------------

    def load_structure(self, structure: StructureProfile, rebuild: bool = False) -> None:
        """Take over the grid origin and size. Takes effect on the next build."""
        self.structure = structure
        self._send_feedback("structure")
        if rebuild:
            self.build()

    def load_cube_shape(self, cube_shape: CubeProfile, rebuild: bool = False) -> None:
        """Take over the cube shape. Takes effect on the next build."""
        self.cube_shape = cube_shape
        self._send_feedback("cube")
        if rebuild:
            self.build()

    def load_render(self, render: RenderProfile, rebuild: bool = False) -> None:
        """Take over the drawing style. Applies to the next rendered frame."""
        self.render_profile = render
        self._send_feedback("render")
        if rebuild:
            self.build()

    def load_behaviour(self, behaviour: Behaviour, rebuild: bool = False) -> None:
        """
        Swap the behaviour strategy without reallocating the cubes.

        Every cube is deactivated and its behaviour-specific fields are
        initialised from scratch.

        Raises:
            GridStateError: If the grid has not been built yet.
        """
        if not self.is_built:
            raise GridStateError("Cannot load a behaviour into a grid that has not been built.")

        self.behaviour = behaviour
        for cube in self.iter_cubes():
            cube.active = False
            cube.reset_behaviour_state()
            behaviour.init_cube_state(self, cube)

        self._send_feedback("behaviour")
        if rebuild:
            self.build()

    # ------------------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------------------

    @property
    def is_built(self) -> bool:
        return bool(self.cubes)

    @property
    def max_row(self) -> int:
        return self.structure.max_row

    @property
    def max_col(self) -> int:
        return self.structure.max_col

    def build(self) -> None:
        """Allocate every cube from the current structure and cube profiles."""
        shape = self.cube_shape
        translation_x, translation_y = translation_vector(
            shape.edge_length, shape.separation, shape.view_angle_deg
        )

        x = self.structure.x
        y = self.structure.y
        cubes: list[list[Cube]] = []
        for col in range(self.max_col):
            column = []
            for row in range(self.max_row):
                center = (x + row * translation_x, y + row * translation_y)
                column.append(Cube(row, col, center, shape.edge_length, shape.view_angle))
            cubes.append(column)

            # The next column starts down-left of this one
            x -= translation_x
            y += translation_y

        self.cubes = cubes
        self.frame_count = 0
        self._classify_edges()

        if self.behaviour is not None:
            for cube in self.iter_cubes():
                self.behaviour.init_cube_state(self, cube)

        self._send_feedback("build")

    def _classify_edges(self) -> None:
        self.edge_cubes = [cube for cube in self.iter_cubes() if self.edge_direction(cube) is not None]
        self._edge_positions = {cube.position for cube in self.edge_cubes}

    def edge_direction(self, cube: Cube) -> Optional[tuple[int, int]]:
        """
        Inward unit step of an edge cube, or None for corners and inner cubes.
        """
        row, col = cube.position
        last_row = self.max_row - 1
        last_col = self.max_col - 1

        if (row, col) in ((0, 0), (0, last_col), (last_row, 0), (last_row, last_col)):
            return None
        if row == 0:
            return 1, 0
        if row == last_row:
            return -1, 0
        if col == 0:
            return 0, 1
        if col == last_col:
            return 0, -1
        return None

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.max_row and 0 <= col < self.max_col

    def cube_at(self, row: int, col: int) -> Cube:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cube ({row}, {col}) is outside of a {self.max_row}x{self.max_col} grid.")
        return self.cubes[col][row]

    def iter_cubes(self) -> Iterator[Cube]:
        """All cubes, column by column."""
        for column in self.cubes:
            yield from column

    def is_edge_cube(self, cube: Cube) -> bool:
        return cube.position in self._edge_positions

    def get_all_active(self) -> list[Cube]:
        """All active cubes in scan order."""
        return [cube for cube in self.iter_cubes() if cube.active]

    @staticmethod
    def distance(cube1: Cube, cube2: Cube) -> float:
        """Euclidean distance between two cubes in grid space."""
        return sqrt((cube1.row - cube2.row) ** 2 + (cube1.col - cube2.col) ** 2)

    def set_active(self, row: int, col: int, active: Optional[bool] = None) -> None:
        """
        Set the active flag of a cube.

        Args:
            row: Row of the cube.
            col: Column of the cube.
            active: New status, or None to toggle the current one.
        """
        cube = self.cube_at(row, col)
        cube.active = (not cube.active) if active is None else active

    # ------------------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------------------

    def render(self) -> list[CubeRender]:
        """Drawable data of every cube in its current state."""
        max_height = self.behaviour.max_raise_height if self.behaviour is not None else 0.0
        bounds = lerp_bounds(self.render_profile, max_height)
        return [render_cube(cube, self.render_profile, bounds) for cube in self.iter_cubes()]

    def advance(self, frame_fraction: float) -> list[CubeRender]:
        """
        Run one frame: render the current state, then update it.

        Args:
            frame_fraction: Position inside the host's animation period, in [0, 1].

        Returns:
            The frame to draw, reflecting the state before this update.

        Raises:
            GridStateError: If the grid has not been built yet.
        """
        if not self.is_built:
            raise GridStateError("Cannot advance a grid that has not been built.")
        if not 0.0 <= frame_fraction <= 1.0:
            raise ValueError(f"frame_fraction must lie in [0, 1], got {frame_fraction!r}.")

        frame = self.render()
        if self.behaviour is not None:
            self.behaviour.update(self, frame_fraction)
        self.frame_count += 1
        return frame

    def _send_feedback(self, source: str) -> None:
        if source == "build":
            logger.info(f"Grid built ({self.max_row}x{self.max_col}, {len(self.edge_cubes)} edge cubes)")
        else:
            logger.info(f"Loaded new {source} profile")
            if source in ("structure", "cube"):
                logger.info("Rebuilding may be required (use build method)")
