"""
Behaviour Strategies
====================
Per-frame update rules that drive the cubes of an OrthoGrid.

Every strategy is configured by exactly one parameter dataclass and exposes
the same method set:

- ``init_cube_state``: prepares behaviour-specific fields of one cube,
- ``update``: mutates cube state for the next frame,
- ``spawn_random``: activates cubes at random using the grid's generator.

Classes:
    Propagation: Signals travelling in from the grid edges.
    Ripple: Concentric waves around fixed source cubes.
    GameOfLife: Conway's cellular automaton on the grid.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from math import pi, sin
import logging
from typing import TYPE_CHECKING, Union

from orthogrid.config import DEGENERATION
from orthogrid.model.errors import ConfigurationError

if TYPE_CHECKING:
    from orthogrid.model.cube import Cube
    from orthogrid.model.grid import OrthoGrid

logger = logging.getLogger(__name__)


class BehaviourKind(StrEnum):
    PROPAGATION = "propagation"
    RIPPLE = "ripple"
    GAME_OF_LIFE = "game of life"


# ------------------------------------------------------------------------------
# Parameters
# ------------------------------------------------------------------------------
def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigurationError(message)


@dataclass
class PropagationParams:
    """
    rebound: Active cubes bounce off the edges instead of dying there.
    speed: Number of cubes a signal moves per update.
    max_raise_height: Height of a cube sitting right under a signal.
    max_raise_radius: Largest radius of influence of a signal.
    limit: Without rebound, max number of signals alive at once.
    chance: Without rebound, per-frame probability of spawning a signal.
    """
    rebound: bool = False
    speed: int = 1
    max_raise_height: float = 1.0
    max_raise_radius: float = 6.0
    limit: int = 3
    chance: float = 0.05

    def __post_init__(self) -> None:
        _require(isinstance(self.speed, int) and self.speed >= 1, f"speed must be an integer >= 1, got {self.speed!r}.")
        _require(self.max_raise_height >= 0, f"max_raise_height must not be negative, got {self.max_raise_height!r}.")
        _require(self.max_raise_radius >= 0, f"max_raise_radius must not be negative, got {self.max_raise_radius!r}.")
        _require(isinstance(self.limit, int) and self.limit >= 0, f"limit must be a non-negative integer, got {self.limit!r}.")
        _require(0.0 <= self.chance <= 1.0, f"chance must lie in [0, 1], got {self.chance!r}.")


@dataclass
class RippleParams:
    amplitude: float = 1.0
    radius: float = 19.0

    def __post_init__(self) -> None:
        _require(self.radius >= 0, f"radius must not be negative, got {self.radius!r}.")


@dataclass
class GameOfLifeParams:
    """
    max_raise_height: Height of a living cell.
    seed_limit: Max number of cells activated by one random seeding.
    seed_chance: Probability of each cell being activated while seeding.
    """
    max_raise_height: float = 1.0
    seed_limit: int = 75
    seed_chance: float = 0.25

    def __post_init__(self) -> None:
        _require(self.max_raise_height >= 0, f"max_raise_height must not be negative, got {self.max_raise_height!r}.")
        _require(
            isinstance(self.seed_limit, int) and self.seed_limit >= 0,
            f"seed_limit must be a non-negative integer, got {self.seed_limit!r}."
        )
        _require(0.0 <= self.seed_chance <= 1.0, f"seed_chance must lie in [0, 1], got {self.seed_chance!r}.")


BehaviourParams = Union[PropagationParams, RippleParams, GameOfLifeParams]


# ------------------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------------------
_REGISTRY: dict[type, type[Behaviour]] = {}


def register_behaviour(cls: type[Behaviour]) -> type[Behaviour]:
    """Class decorator to register a behaviour by its parameter type."""
    params_type = getattr(cls, "PARAMS", None)
    if params_type is None:
        raise ValueError(f"{cls.__name__} must define PARAMS")
    _REGISTRY[params_type] = cls
    return cls


def create_behaviour(params: BehaviourParams) -> Behaviour:
    cls = _REGISTRY.get(type(params))
    if not cls:
        raise KeyError(f"No behaviour registered for parameters '{type(params).__name__}'")
    return cls(params)


# ------------------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------------------
class Behaviour(ABC):
    """
    Abstract base class for the update rules of an OrthoGrid.
    """
    KIND: BehaviourKind
    PARAMS: type

    def __init__(self, params: BehaviourParams) -> None:
        if not isinstance(params, self.PARAMS):
            raise TypeError(f"{self.__class__.__name__} expects {self.PARAMS.__name__}, got {type(params).__name__}")
        self.params = params

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.params!r})"

    @property
    def kind(self) -> BehaviourKind:
        return self.KIND

    @property
    @abstractmethod
    def max_raise_height(self) -> float:
        """Largest height this behaviour normally drives a cube to."""
        pass

    def init_cube_state(self, grid: OrthoGrid, cube: Cube) -> None:
        """Prepare behaviour-specific fields of a cube. Nothing by default."""
        pass

    @abstractmethod
    def update(self, grid: OrthoGrid, frame_fraction: float) -> None:
        """Mutate the cubes of the grid for the next frame."""
        pass

    @abstractmethod
    def spawn_random(self, grid: OrthoGrid) -> None:
        """Activate cubes chosen with the grid's random generator."""
        pass


@register_behaviour
class Propagation(Behaviour):
    """
    Signals enter from the edge cubes and travel across the grid along the
    fixed vector of the edge they started from, raising a wake of cubes
    behind them.
    """
    KIND = BehaviourKind.PROPAGATION
    PARAMS = PropagationParams

    params: PropagationParams

    @property
    def max_raise_height(self) -> float:
        return self.params.max_raise_height

    def init_cube_state(self, grid: OrthoGrid, cube: Cube) -> None:
        cube.step = 0
        direction = grid.edge_direction(cube)
        if direction is not None:
            cube.propagation_vector = (direction[0] * self.params.speed, direction[1] * self.params.speed)

    def update(self, grid: OrthoGrid, frame_fraction: float) -> None:
        self._propagate_active(grid)
        self._raise_adjacent_cubes(grid)

        if not self.params.rebound and len(grid.get_all_active()) < self.params.limit:
            if grid.rng.random() > 1 - self.params.chance:
                self.spawn_random(grid)

    def spawn_random(self, grid: OrthoGrid) -> None:
        """Start a new signal on a random edge cube."""
        if not grid.edge_cubes:
            return
        edge_cube = grid.edge_cubes[int(grid.rng.integers(len(grid.edge_cubes)))]
        edge_cube.active = True
        edge_cube.step = 0
        logger.debug(f"Spawned signal at {edge_cube.position}")

    def _propagate_active(self, grid: OrthoGrid) -> None:
        """Move every signal one stride along its propagation vector."""
        for active_cube in grid.get_all_active():
            vector = active_cube.propagation_vector

            # Host-activated cubes without a vector cannot move
            if vector is not None:
                next_row = active_cube.row + vector[0]
                next_col = active_cube.col + vector[1]

                if grid.in_bounds(next_row, next_col):
                    next_cube = grid.cube_at(next_row, next_col)
                    next_cube.step = active_cube.step + self.params.speed
                    next_is_edge = grid.is_edge_cube(next_cube)

                    # An edge cube keeps its own vector, which makes the signal bounce
                    if self.params.rebound:
                        next_cube.active = True
                        if not next_is_edge:
                            next_cube.propagation_vector = vector
                    elif not next_is_edge:
                        next_cube.active = True
                        next_cube.propagation_vector = vector

            active_cube.active = False
            active_cube.step = 0
            if not grid.is_edge_cube(active_cube):
                active_cube.propagation_vector = None

    def _raise_adjacent_cubes(self, grid: OrthoGrid) -> None:
        """Set the height of every cube from the signals around it."""
        active_cubes = grid.get_all_active()
        max_height = self.params.max_raise_height

        for cube in grid.iter_cubes():
            influenced = False
            new_raise_height = 0.0

            for active_cube in active_cubes:
                maximum_range = min(active_cube.step, self.params.max_raise_radius)
                if maximum_range <= 0:
                    continue

                distance = grid.distance(cube, active_cube)
                if distance <= maximum_range:
                    new_raise_height += (maximum_range - distance) * max_height / maximum_range
                    influenced = True

            cube.raise_height = new_raise_height if influenced else cube.raise_height * DEGENERATION


@register_behaviour
class Ripple(Behaviour):
    """
    Waves spread out of every active cube. The sources themselves are placed
    by the host and never move.
    """
    KIND = BehaviourKind.RIPPLE
    PARAMS = RippleParams

    params: RippleParams

    @property
    def max_raise_height(self) -> float:
        return abs(self.params.amplitude)

    def update(self, grid: OrthoGrid, frame_fraction: float) -> None:
        active_cubes = grid.get_all_active()
        phase = 2 * pi * frame_fraction

        for cube in grid.iter_cubes():
            influenced = False
            new_raise_height = 0.0

            for active_cube in active_cubes:
                distance = grid.distance(cube, active_cube)
                if distance <= self.params.radius:
                    new_raise_height += self.params.amplitude / (distance + 1) * sin(phase + distance)
                    influenced = True

            cube.raise_height = new_raise_height if influenced else cube.raise_height * DEGENERATION

    def spawn_random(self, grid: OrthoGrid) -> None:
        """Add a ripple source on a random cube."""
        row = int(grid.rng.integers(grid.max_row))
        col = int(grid.rng.integers(grid.max_col))
        grid.set_active(row, col, True)
        logger.debug(f"Spawned ripple source at {(row, col)}")


@register_behaviour
class GameOfLife(Behaviour):
    """
    Conway's Game of Life with hard edges. Living cells are raised to the
    max raise height, dead cells drop back to zero immediately.
    """
    KIND = BehaviourKind.GAME_OF_LIFE
    PARAMS = GameOfLifeParams

    params: GameOfLifeParams

    @property
    def max_raise_height(self) -> float:
        return self.params.max_raise_height

    def update(self, grid: OrthoGrid, frame_fraction: float) -> None:
        current_state = {cube.position: cube.active for cube in grid.iter_cubes()}

        for cube in grid.iter_cubes():
            alive_count = self._count_neighbours(cube, current_state)
            if cube.active:
                # Under- and overpopulation
                cube.active = alive_count in (2, 3)
            else:
                # Reproduction
                cube.active = alive_count == 3
            cube.raise_height = self.params.max_raise_height if cube.active else 0.0

    def spawn_random(self, grid: OrthoGrid) -> None:
        """Scatter living cells over the grid."""
        count = 0
        for cube in grid.iter_cubes():
            if count >= self.params.seed_limit:
                break
            if grid.rng.random() > 1 - self.params.seed_chance:
                grid.set_active(cube.row, cube.col, True)
                count += 1
        logger.debug(f"Seeded {count} living cells")

    @staticmethod
    def _count_neighbours(cube: Cube, current_state: dict[tuple[int, int], bool]) -> int:
        alive_count = 0
        for d_col in (-1, 0, 1):
            for d_row in (-1, 0, 1):
                if d_row == 0 and d_col == 0:
                    continue
                position = (cube.row + d_row, cube.col + d_col)
                if current_state.get(position, False):
                    alive_count += 1
        return alive_count
