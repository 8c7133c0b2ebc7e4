from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from orthogrid.model.geometry import cube_vertices

if TYPE_CHECKING:
    import numpy.typing as npt


class Cube:
    """
    Represents a single cell of the orthographic grid.
    """
    def __init__(
        self,
        row: int,
        col: int,
        center: tuple[float, float],
        edge_length: float,
        view_angle: float,
        active: bool = False,
    ) -> None:
        """
        Initialize the cube at its grid position.

        Args:
            row: Row of the cube on the grid.
            col: Column of the cube on the grid.
            center: (x, y) coordinates of the cube centre on the canvas.
            edge_length: Edge length of the cube.
            view_angle: View angle of the cube in radians.
            active: Whether the cube takes part in a moving effect.
        """
        self._position = (row, col)
        self.center = np.array(center, dtype=np.float64)

        self._edge_length = edge_length
        self._view_angle = view_angle
        self.vertices: npt.NDArray[np.float64] = cube_vertices(edge_length, view_angle)

        self.active = active
        self.raise_height: float = 0.0

        # Behaviour specific state
        self.step: float = 0
        self.propagation_vector: Optional[tuple[int, int]] = None

    def __repr__(self) -> str:
        """String representation of the cube."""
        return (
            f"{self.__class__.__name__}(row={self.row}, col={self.col}, "
            f"active={self.active}, raise_height={self.raise_height:.3f})"
        )

    @property
    def position(self) -> tuple[int, int]:
        """(row, col) position on the grid."""
        return self._position

    @property
    def row(self) -> int:
        return self._position[0]

    @property
    def col(self) -> int:
        return self._position[1]

    @property
    def x(self) -> float:
        """X-coordinate of the cube centre."""
        return float(self.center[0])

    @property
    def y(self) -> float:
        """Y-coordinate of the cube centre."""
        return float(self.center[1])

    @property
    def edge_length(self) -> float:
        return self._edge_length

    @edge_length.setter
    def edge_length(self, value: float) -> None:
        self._edge_length = value
        self.vertices = cube_vertices(self._edge_length, self._view_angle)

    @property
    def view_angle(self) -> float:
        return self._view_angle

    @view_angle.setter
    def view_angle(self, value: float) -> None:
        self._view_angle = value
        self.vertices = cube_vertices(self._edge_length, self._view_angle)

    def reset_behaviour_state(self) -> None:
        """Drop every field owned by a behaviour."""
        self.step = 0
        self.propagation_vector = None
