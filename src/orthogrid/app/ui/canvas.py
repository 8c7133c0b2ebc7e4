from __future__ import annotations

import logging

from PySide6.QtCore import QPointF, QTimer, Qt
from PySide6.QtGui import QColor, QPainter, QPolygonF
from PySide6.QtWidgets import QWidget

from orthogrid.config import BACKGROUND_COLOR, FRAME_INTERVAL_MS, FRAMES_PER_PERIOD
from orthogrid.model.colors import CubeRender, FACES
from orthogrid.model.state import SimulationContext, frame_fraction

logger = logging.getLogger(__name__)


class GridCanvas(QWidget):
    """
    Paints the cube grid and drives it, one ``advance`` call per timer tick.
    Each tick draws the state the grid had before that tick's update.
    """
    def __init__(
        self,
        context: SimulationContext,
        canvas_size: tuple[int, int],
        parent: QWidget | None = None,
        frames_per_period: int = FRAMES_PER_PERIOD,
    ) -> None:
        super().__init__(parent)
        self.context = context
        self.frames_per_period = frames_per_period
        self.setFixedSize(*canvas_size)

        self._frame: list[CubeRender] = []
        self._frame_index = 0

        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._tick)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _tick(self) -> None:
        fraction = frame_fraction(self._frame_index, self.frames_per_period)
        try:
            self._frame = self.context.advance(fraction)
        except Exception:
            logger.exception("Frame update failed, animation stopped.")
            self.stop()
            return
        self._frame_index += 1
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(BACKGROUND_COLOR, BACKGROUND_COLOR, BACKGROUND_COLOR))
        painter.setPen(Qt.PenStyle.NoPen)

        for cube in self._frame:
            for face in FACES:
                painter.setBrush(QColor(*cube.colors[face]))
                polygon = QPolygonF([QPointF(float(x), float(y)) for x, y in cube.polygons[face]])
                painter.drawPolygon(polygon)

        painter.end()
