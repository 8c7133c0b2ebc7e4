"""
Simulation Context
==================
This module defines the central object handed to the host animation loop.

Why is this file needed?
------------------------
1. State Management: It holds the grid, the preset catalog and the currently
   shown preset in one explicitly constructed place.
2. Profile Switching: It bundles the two-step "load profile, then rebuild"
   sequence behind single calls the UI can bind to buttons.
3. Decoupling: The Qt host only calls methods of this object; it never
   touches cubes directly.

Classes:
    SimulationContext: The main container class.
"""
from __future__ import annotations

from dataclasses import replace
import logging
from typing import Optional

import numpy as np

from orthogrid.config import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH
from orthogrid.model.behaviours import Propagation, create_behaviour
from orthogrid.model.colors import CubeRender
from orthogrid.model.grid import OrthoGrid
from orthogrid.model.profiles import (
    CubeProfile, Preset, PresetKey, build_presets, default_cube_profile,
)

logger = logging.getLogger(__name__)


def frame_fraction(frame_index: int, frames_per_period: int) -> float:
    """Position of a frame inside its animation period, in [0, 1)."""
    if frames_per_period <= 0:
        raise ValueError(f"frames_per_period must be positive, got {frames_per_period!r}.")
    return (frame_index % frames_per_period) / frames_per_period


class SimulationContext:
    """
    Owns the grid shown by the host and switches it between presets.
    Pass this instance to the host loop.
    """
    def __init__(
        self,
        canvas_width: float = DEFAULT_CANVAS_WIDTH,
        canvas_height: float = DEFAULT_CANVAS_HEIGHT,
        initial: PresetKey = PresetKey.RIPPLE,
        *,
        seed: Optional[int] = None,
        presets: Optional[dict[PresetKey, Preset]] = None,
        cube_shape: Optional[CubeProfile] = None,
    ) -> None:
        self.presets = presets if presets is not None else build_presets(canvas_width, canvas_height)
        self.cube_shape = cube_shape if cube_shape is not None else default_cube_profile(canvas_height)

        preset = self.presets[initial]
        self.current: PresetKey = initial
        self.grid = OrthoGrid(
            preset.structure,
            self.cube_shape,
            preset.render,
            create_behaviour(preset.behaviour),
            rng=np.random.default_rng(seed),
        )
        self._apply_initial_active(preset)

    def load_preset(self, key: PresetKey) -> None:
        """
        Show another behaviour: new structure, new behaviour, full rebuild.

        Raises:
            KeyError: If the catalog has no such preset.
        """
        preset = self.presets[key]
        self.grid.load_structure(preset.structure)
        self.grid.load_behaviour(create_behaviour(preset.behaviour))
        self.grid.build()
        self.current = key
        self._apply_initial_active(preset)
        logger.info(f"Preset '{key}' loaded.")

    def load_render_preset(self, key: PresetKey) -> None:
        """Use the colours of another preset without touching the cubes."""
        self.grid.load_render(self.presets[key].render)

    def toggle_dimensional(self) -> bool:
        render = self.grid.render_profile
        self.grid.load_render(replace(render, dimensional=not render.dimensional))
        return self.grid.render_profile.dimensional

    def toggle_rebound(self) -> Optional[bool]:
        """
        Flip the rebound flag of a running propagation.

        Returns:
            The new flag, or None if the current behaviour has no rebound.
        """
        behaviour = self.grid.behaviour
        if not isinstance(behaviour, Propagation):
            logger.warning("Rebound can only be toggled for the propagation behaviour.")
            return None
        behaviour.params = replace(behaviour.params, rebound=not behaviour.params.rebound)
        logger.info(f"Rebound {'enabled' if behaviour.params.rebound else 'disabled'}.")
        return behaviour.params.rebound

    def spawn_random(self) -> None:
        if self.grid.behaviour is not None:
            self.grid.behaviour.spawn_random(self.grid)

    def advance(self, fraction: float) -> list[CubeRender]:
        return self.grid.advance(fraction)

    def _apply_initial_active(self, preset: Preset) -> None:
        for row, col in preset.initial_active:
            if self.grid.in_bounds(row, col):
                self.grid.set_active(row, col, True)
            else:
                logger.warning(f"Initial active cube {(row, col)} is outside of the grid, skipped.")
