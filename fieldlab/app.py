# -*- coding: utf-8 -*-
"""
fieldlab desktop host.
Three simulations side by side, all driven from one QTimer on the GUI thread.
"""
from __future__ import annotations

import logging
import sys
import traceback

import numpy as np
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import (
    QApplication, QWidget, QLabel, QPushButton, QVBoxLayout, QHBoxLayout, QMessageBox
)

from fieldlab.config import DEFAULT_HEIGHT, DEFAULT_WIDTH, DEMOS, DEMO_TITLES, TIMER_INTERVAL_MS
from fieldlab.demos import build_demo
from fieldlab.utils.image_ops import flatten
from fieldlab.utils.surface import Surface

log = logging.getLogger(__name__)


class CanvasView(QWidget):
    """One simulation: a title and the surface it draws on."""

    def __init__(self, name: str, width: int, height: int, parent=None):
        super().__init__(parent)
        self.name = name
        self.surface = Surface(width, height)
        self.sim = None

        title = QLabel(DEMO_TITLES.get(name, name))
        title.setAlignment(Qt.AlignCenter)
        self.canvas = QLabel()
        self.canvas.setFixedSize(width, height)
        self.canvas.setStyleSheet("background-color: #000000;")

        lay = QVBoxLayout(self)
        lay.setContentsMargins(4, 4, 4, 4)
        lay.addWidget(title)
        lay.addWidget(self.canvas)

    def reset(self, rng: np.random.Generator):
        self.surface.clear()
        self.sim = build_demo(self.name, self.surface, rng)

    def resume(self):
        resume = getattr(self.sim, "resume", None)
        if resume is not None:
            resume()

    def tick(self):
        if self.sim is None:
            return
        self.sim.update()
        qimg = MainWindow.qimage_from_pil(flatten(self.surface.to_image()))
        self.canvas.setPixmap(QPixmap.fromImage(qimg))


class MainWindow(QWidget):
    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT, seed=None):
        super().__init__()
        self.setWindowTitle("fieldlab")
        self.seed = seed
        self.running = False

        self.views = [CanvasView(name, width, height, self) for name in DEMOS]

        row = QHBoxLayout()
        for v in self.views:
            row.addWidget(v)

        self.btn_play = QPushButton("Pause")
        self.btn_play.setCheckable(True)
        self.btn_play.setChecked(True)
        self.btn_play.toggled.connect(self._on_play_toggled)
        self.btn_reset = QPushButton("Reset")
        self.btn_reset.clicked.connect(self.reset)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self.btn_play)
        buttons.addWidget(self.btn_reset)

        root = QVBoxLayout(self)
        root.addLayout(row)
        root.addLayout(buttons)

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.on_tick)

        self.reset()
        self._set_running(True)

    def reset(self):
        rng = np.random.default_rng(self.seed)
        for v in self.views:
            v.reset(rng)
        log.info("simulations reset (seed=%s)", self.seed)

    def _on_play_toggled(self, checked: bool):
        self._set_running(bool(checked))

    def _set_running(self, is_running: bool):
        if self.running == is_running:
            return
        self.running = is_running
        if is_running:
            for v in self.views:
                v.resume()
            self.timer.start(TIMER_INTERVAL_MS)
        else:
            self.timer.stop()
        self.btn_play.setText("Pause" if is_running else "Play")

    def on_tick(self):
        for v in self.views:
            v.tick()

    def closeEvent(self, event):
        self.timer.stop()
        super().closeEvent(event)

    @staticmethod
    def qimage_from_pil(pil_img):
        rgb = pil_img.convert('RGBA')
        data = rgb.tobytes('raw', 'RGBA')
        # copy so the QImage owns its pixels once `data` goes away
        return QImage(data, rgb.width, rgb.height, QImage.Format_RGBA8888).copy()


def main():
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    try:
        app = QApplication(sys.argv)
        w = MainWindow()
        w.show()
        sys.exit(app.exec())
    except Exception as e:
        error_msg = f"Startup failed:\n\n{e}\n\n{traceback.format_exc()}"
        log.error(error_msg)
        if QApplication.instance() is not None:
            msg = QMessageBox()
            msg.setIcon(QMessageBox.Critical)
            msg.setWindowTitle("fieldlab")
            msg.setText(error_msg)
            msg.exec()
        sys.exit(1)


if __name__ == "__main__":
    main()
