"""Worker that runs the full resolution export on a background thread."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QRunnable, Signal

from ....core.export import ExportPipeline, ExportResult
from ....core.session import ExportSnapshot

LOGGER = logging.getLogger(__name__)


class ExportSignals(QObject):
    """Signals emitted by :class:`ExportWorker`."""

    finished = Signal(object)
    """Emitted exactly once with the :class:`ExportResult`, success or not."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)


class ExportWorker(QRunnable):
    """Execute :meth:`ExportPipeline.export` in a :class:`QThreadPool` worker."""

    def __init__(self, pipeline: ExportPipeline, snapshot: ExportSnapshot) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._pipeline = pipeline
        self._snapshot = snapshot
        self.signals = ExportSignals()

    def run(self) -> None:  # type: ignore[override]
        """Export the snapshot and notify the control thread."""

        try:
            result = self._pipeline.export(self._snapshot)
        except Exception as exc:  # safety net so the UI always unlocks
            LOGGER.exception("Unexpected failure while exporting %s", self._snapshot.photo.display_name)
            result = ExportResult.failed(self._snapshot, str(exc))
        self.signals.finished.emit(result)


__all__ = ["ExportSignals", "ExportWorker"]
