"""
Main window: the animated canvas plus a toolbar that swaps presets and
render profiles.
"""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QToolBar, QStatusBar, QLabel

from orthogrid.app.application import VISIBLE_APP_NAME
from orthogrid.app.ui.canvas import GridCanvas
from orthogrid.config import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH
from orthogrid.model.behaviours import BehaviourKind
from orthogrid.model.profiles import PresetKey
from orthogrid.model.state import SimulationContext

PRESET_LABELS = {
    PresetKey.PROPAGATION: "Propagation",
    PresetKey.RIPPLE: "Ripple",
    PresetKey.GAME_OF_LIFE: "Game of Life",
}


class MainWindow(QMainWindow):
    def __init__(self, context: SimulationContext | None = None):
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)

        self.context = context or SimulationContext(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)

        self.canvas = GridCanvas(self.context, (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT), parent=self)
        self.setCentralWidget(self.canvas)

        self._build_toolbar()

        self.status = QStatusBar(self)
        self.status_label = QLabel(self)
        self.status.addWidget(self.status_label)
        self.setStatusBar(self.status)
        self._refresh_status()

        self.canvas.start()

    def _build_toolbar(self) -> None:
        tb = QToolBar(self.tr("Behaviour"), self)
        tb.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, tb)

        for key, label in PRESET_LABELS.items():
            act = QAction(self.tr(label), self)
            act.triggered.connect(lambda _=False, k=key: self._on_load_preset(k))
            tb.addAction(act)

        tb.addSeparator()

        self.act_rebound = QAction(self.tr("Rebound"), self)
        self.act_rebound.triggered.connect(lambda _=False: self._on_toggle_rebound())
        tb.addAction(self.act_rebound)

        act_spawn = QAction(self.tr("Spawn random"), self)
        act_spawn.triggered.connect(lambda _=False: self.context.spawn_random())
        tb.addAction(act_spawn)

        self.act_pause = QAction(self.tr("Pause"), self)
        self.act_pause.setCheckable(True)
        self.act_pause.toggled.connect(self._on_pause_toggled)
        tb.addAction(self.act_pause)

        # Render profiles live in a menu, they never touch the simulation
        menu = self.menuBar().addMenu(self.tr("Render"))
        for key, label in PRESET_LABELS.items():
            act = QAction(f"{self.tr(label)} {self.tr('colours')}", self)
            act.triggered.connect(lambda _=False, k=key: self.context.load_render_preset(k))
            menu.addAction(act)
        menu.addSeparator()
        act_dim = QAction(self.tr("Toggle dimensional"), self)
        act_dim.triggered.connect(lambda _=False: self.context.toggle_dimensional())
        menu.addAction(act_dim)

    def _on_load_preset(self, key: PresetKey) -> None:
        self.context.load_preset(key)
        self._refresh_status()

    def _on_toggle_rebound(self) -> None:
        rebound = self.context.toggle_rebound()
        if rebound is None:
            self.status.showMessage(self.tr("Rebound only applies to Propagation."), 3000)
        else:
            self.status.showMessage(self.tr("Rebound on") if rebound else self.tr("Rebound off"), 3000)

    def _on_pause_toggled(self, paused: bool) -> None:
        if paused:
            self.canvas.stop()
        elif not self.canvas.is_running():
            self.canvas.start()

    def _refresh_status(self) -> None:
        grid = self.context.grid
        kind = grid.behaviour.kind if grid.behaviour is not None else None
        behaviour_label = str(kind).capitalize() if kind is not None else self.tr("No behaviour")
        self.status_label.setText(f"{behaviour_label} | {grid.max_row}x{grid.max_col}")
        self.act_rebound.setEnabled(kind == BehaviourKind.PROPAGATION)
