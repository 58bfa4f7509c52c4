"""Main window: capture button, live preview, brightness slider, save button."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ...config import MAX_BRIGHTNESS, MIN_BRIGHTNESS, NEUTRAL_BRIGHTNESS, TOAST_DURATION_MS
from ...core.pixel_buffer import PixelBuffer
from .controllers.photo_controller import PhotoController
from .widgets.photo_view import PhotoView


class MainWindow(QMainWindow):
    """Bind the widgets to a :class:`PhotoController`."""

    def __init__(self, controller: PhotoController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self.setWindowTitle("PhotoExpress")
        self.resize(720, 640)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.photo_view = PhotoView(central)
        layout.addWidget(self.photo_view, 1)

        slider_row = QHBoxLayout()
        self.brightness_label = QLabel("Brightness", central)
        self.brightness_slider = QSlider(Qt.Orientation.Horizontal, central)
        self.brightness_slider.setRange(MIN_BRIGHTNESS, MAX_BRIGHTNESS)
        self.brightness_slider.setValue(NEUTRAL_BRIGHTNESS)
        slider_row.addWidget(self.brightness_label)
        slider_row.addWidget(self.brightness_slider, 1)
        layout.addLayout(slider_row)

        button_row = QHBoxLayout()
        self.capture_button = QPushButton("Take Photo", central)
        self.save_button = QPushButton("Save", central)
        self.save_button.setEnabled(False)
        button_row.addWidget(self.capture_button)
        button_row.addStretch(1)
        button_row.addWidget(self.save_button)
        layout.addLayout(button_row)

        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar(self))
        self._set_brightness_visible(False)

        self.capture_button.clicked.connect(controller.take_photo)
        self.save_button.clicked.connect(controller.save_photo)
        self.brightness_slider.valueChanged.connect(controller.set_brightness)
        self.photo_view.viewportResized.connect(controller.set_viewport_size)

        controller.previewChanged.connect(self._handle_preview_changed)
        controller.previewUnavailable.connect(self._handle_preview_unavailable)
        controller.brightnessControlChanged.connect(self._handle_brightness_control)
        controller.saveEnabledChanged.connect(self.save_button.setEnabled)
        controller.exportFinished.connect(self._handle_export_finished)

    # ------------------------------------------------------------------
    # Controller signal handlers
    # ------------------------------------------------------------------
    def _handle_preview_changed(self, buffer: PixelBuffer) -> None:
        self.photo_view.show_buffer(buffer)

    def _handle_preview_unavailable(self, message: str) -> None:
        self.statusBar().showMessage(f"Preview unavailable: {message}", TOAST_DURATION_MS)

    def _handle_brightness_control(self, visible: bool, level: int) -> None:
        self.brightness_slider.blockSignals(True)
        self.brightness_slider.setValue(level)
        self.brightness_slider.blockSignals(False)
        self._set_brightness_visible(visible)

    def _handle_export_finished(self, success: bool, message: str) -> None:
        self.statusBar().showMessage(message, TOAST_DURATION_MS)

    def _set_brightness_visible(self, visible: bool) -> None:
        self.brightness_label.setVisible(visible)
        self.brightness_slider.setVisible(visible)
