"""Preview surface showing the filtered photo."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QImage, QPixmap, QResizeEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QWidget

from ....core.pixel_buffer import PixelBuffer


def buffer_to_qimage(buffer: PixelBuffer) -> QImage:
    """Return a detached ``QImage`` copy of *buffer*."""

    pixels = buffer.pixels
    bytes_per_line = int(pixels.strides[0])
    image = QImage(
        pixels.tobytes(),
        buffer.width,
        buffer.height,
        bytes_per_line,
        QImage.Format.Format_RGBA8888,
    )
    # ``tobytes`` produces a temporary; ``copy`` detaches the QImage from it.
    return image.copy()


class PhotoView(QLabel):
    """Label that scales the latest preview to fit while keeping its aspect."""

    viewportResized = Signal(int, int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(QSize(240, 180))
        # The label stays laid out while empty so its size is known before
        # the first capture is decoded against it.
        self._pixmap: Optional[QPixmap] = None

    def show_buffer(self, buffer: PixelBuffer) -> None:
        self._pixmap = QPixmap.fromImage(buffer_to_qimage(buffer))
        self._update_scaled()

    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        size = event.size()
        self.viewportResized.emit(size.width(), size.height())
        self._update_scaled()

    def _update_scaled(self) -> None:
        if self._pixmap is None or self._pixmap.isNull():
            return
        scaled = self._pixmap.scaled(
            self.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.setPixmap(scaled)
