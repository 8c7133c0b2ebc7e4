"""
Configuration & Global Constants
================================
This module serves as the central registry for the numeric constants shared by
the model layer and the Qt host.

Exports:
    DEGENERATION (float): Per-frame decay factor of uninfluenced cubes.
    FACE_BRIGHTNESS (dict): Brightness factor per cube face in dimensional mode.
    LERP_UPPER_HEADROOM (float): Stretch applied to an explicit upper lerp bound.
    DEFAULT_HEIGHT_HEADROOM (float): Upper lerp bound relative to the max raise height.
"""
from typing import Final

# Simulation
DEGENERATION: Final[float] = 0.85

# Rendering
FACE_BRIGHTNESS: Final[dict[str, float]] = {
    "top": 1.0,
    "left": 2 / 3,
    "right": 1 / 3,
}
LERP_UPPER_HEADROOM: Final[float] = 1.1
DEFAULT_HEIGHT_HEADROOM: Final[float] = 1.25

# Host
DEFAULT_CANVAS_WIDTH: Final[int] = 960
DEFAULT_CANVAS_HEIGHT: Final[int] = 500
FRAMES_PER_PERIOD: Final[int] = 48
FRAME_INTERVAL_MS: Final[int] = 1000 // 24
BACKGROUND_COLOR: Final[int] = 30

# Logging
LOG_LEVEL_ENV: Final[str] = "ORTHOGRID_LOG_LEVEL"
LOG_FILE_ENV: Final[str] = "ORTHOGRID_LOG_FILE"
