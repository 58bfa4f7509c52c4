"""Controller that owns the editing session on the GUI thread."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from ....core.capture import CapturedPhoto, CaptureSession
from ....core.export import ExportPipeline, ExportResult
from ....core.preview import PreviewController
from ....core.session import SessionState
from ....errors import DecodeError
from ..tasks.export_worker import ExportWorker

_LOGGER = logging.getLogger(__name__)


class PhotoController(QObject):
    """Drive capture, live brightness preview and export for one photo.

    The controller is the only writer of :class:`SessionState`.  Exports run
    on a thread pool and receive an immutable snapshot, so a new capture or
    slider move while an export is running cannot race with it.
    """

    previewChanged = Signal(object)
    """Emitted with the freshly rendered :class:`PixelBuffer`."""

    previewUnavailable = Signal(str)
    """Emitted when a captured photo could not be decoded for preview."""

    brightnessControlChanged = Signal(bool, int)
    """Emitted with the slider's visibility and level."""

    saveEnabledChanged = Signal(bool)

    exportFinished = Signal(bool, str)
    """Emitted with the success flag and a user facing message."""

    stateChanged = Signal(object)

    def __init__(
        self,
        *,
        capture_session: CaptureSession,
        pipeline: ExportPipeline,
        preview: Optional[PreviewController] = None,
        submit: Optional[Callable[[QRunnable], None]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._capture_session = capture_session
        self._pipeline = pipeline
        self._preview = preview or PreviewController()
        self._submit = submit or QThreadPool.globalInstance().start
        self._state = SessionState()
        self._viewport = (0, 0)
        self._active_worker: Optional[ExportWorker] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def preview(self) -> PreviewController:
        return self._preview

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def set_viewport_size(self, width: int, height: int) -> None:
        """Record the preview surface size used for the next decode."""

        self._viewport = (int(width), int(height))

    def take_photo(self) -> None:
        """Ask the camera for a new photo."""

        self._capture_session.capture(self._handle_capture_result)

    def set_brightness(self, level: int) -> None:
        """Re-render the preview for the slider position *level*."""

        if not self._state.has_photo:
            return
        new_state = self._state.with_level(level)
        if new_state.level == self._state.level:
            return
        self._set_state(new_state)
        self._render_preview()

    def save_photo(self) -> bool:
        """Start exporting the current photo.

        Returns ``False`` without doing anything when there is no photo or an
        export is already running.
        """

        if not self._state.can_commit:
            _LOGGER.debug(
                "Ignoring save request (has_photo=%s, exporting=%s)",
                self._state.has_photo,
                self._state.exporting,
            )
            return False

        snapshot = self._state.snapshot()
        self._set_state(self._state.with_exporting(True))
        self.saveEnabledChanged.emit(False)

        worker = ExportWorker(self._pipeline, snapshot)
        worker.signals.finished.connect(self._handle_export_finished)
        self._active_worker = worker
        _LOGGER.info("Exporting %s at brightness %d", snapshot.photo.display_name, self._state.level)
        self._submit(worker)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _set_state(self, state: SessionState) -> None:
        self._state = state
        self.stateChanged.emit(state)

    def _render_preview(self) -> None:
        rendered = self._preview.render(self._state.transform)
        self.previewChanged.emit(rendered)

    def _handle_capture_result(self, photo: Optional[CapturedPhoto]) -> None:
        if photo is None:
            # Cancelled or failed captures leave the current photo in place.
            return

        width, height = self._viewport
        try:
            self._preview.load_for_preview(photo, width, height)
        except DecodeError as exc:
            _LOGGER.error("Preview unavailable for %s: %s", photo.display_name, exc)
            self.previewUnavailable.emit(str(exc))
            return

        self._set_state(self._state.with_photo(photo))
        self.brightnessControlChanged.emit(True, self._state.level)
        self._render_preview()
        self.saveEnabledChanged.emit(self._state.can_commit)

    def _handle_export_finished(self, result: ExportResult) -> None:
        self._active_worker = None
        self._set_state(self._state.with_exporting(False))
        self.saveEnabledChanged.emit(self._state.can_commit)
        if result.success:
            saved_name = result.location.name if result.location else result.display_name
            message = f"Photo saved as {saved_name}"
        else:
            message = f"Could not save photo: {result.error}"
        self.exportFinished.emit(result.success, message)


__all__ = ["PhotoController"]
