"""Desktop stand-in for the camera: pick an image and write it as JPEG."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PIL import Image, ImageOps
from PySide6.QtWidgets import QFileDialog, QWidget

from ...config import JPEG_QUALITY
from ...core.capture import path_from_uri

_LOGGER = logging.getLogger(__name__)

_IMAGE_FILTER = "Images (*.jpg *.jpeg *.png *.bmp *.tif *.tiff *.webp)"


class FilePickerCamera:
    """Let the user choose an image file in place of shooting one.

    The chosen file is re-encoded as JPEG into the destination the capture
    session provides, so downstream code always sees a camera-like JPEG.
    Closing the dialog counts as a cancelled capture.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        self._parent = parent

    def set_parent(self, parent: Optional[QWidget]) -> None:
        """Use *parent* as the owner of the file dialog."""

        self._parent = parent

    def take_picture(self, destination_uri: str, callback: Callable[[bool], None]) -> None:
        source, _ = QFileDialog.getOpenFileName(self._parent, "Take Photo", "", _IMAGE_FILTER)
        if not source:
            callback(False)
            return

        destination = path_from_uri(destination_uri)
        try:
            with Image.open(source) as image:
                # Bake the EXIF orientation in, as a camera app would.
                frame = ImageOps.exif_transpose(image).convert("RGB")
            frame.save(destination, format="JPEG", quality=JPEG_QUALITY)
        except (OSError, ValueError) as exc:
            _LOGGER.error("Could not import %s as a photo: %s", source, exc)
            destination.unlink(missing_ok=True)
            callback(False)
            return
        callback(True)


__all__ = ["FilePickerCamera"]
