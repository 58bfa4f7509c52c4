"""Application bootstrap wiring the collaborators into the main window."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

from ..config import CAPTURES_DIR_NAME, DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV, PICTURES_COLLECTION
from ..core.capture import CaptureSession
from ..core.export import ExportPipeline
from ..library.media_store import LocalMediaStore
from ..utils.logging import configure_logging, get_logger
from .ui.camera import FilePickerCamera
from .ui.controllers.photo_controller import PhotoController
from .ui.main_window import MainWindow

logger = get_logger(__name__)


def _captures_dir() -> Path:
    base = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    return Path(base) / CAPTURES_DIR_NAME


def _media_root() -> Path:
    pictures = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.PicturesLocation)
    if pictures:
        # The store appends the collection name itself.
        path = Path(pictures)
        return path.parent if path.name == PICTURES_COLLECTION else path
    return Path.home()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Launch the PhotoExpress window and run the Qt event loop."""

    app = QApplication(list(argv) if argv is not None else sys.argv)
    app.setApplicationName("PhotoExpress")
    configure_logging(os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL))

    captures_dir = _captures_dir()
    media_root = _media_root()
    logger.info("Captures go to %s; exports to %s", captures_dir, media_root / PICTURES_COLLECTION)

    camera = FilePickerCamera()
    controller = PhotoController(
        capture_session=CaptureSession(camera, captures_dir),
        pipeline=ExportPipeline(LocalMediaStore(media_root)),
    )
    window = MainWindow(controller)
    camera.set_parent(window)
    window.show()
    return app.exec()
