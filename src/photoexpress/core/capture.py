"""Camera capture into uniquely named temporary files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Protocol
from urllib.parse import urlparse
from urllib.request import url2pathname

from ..config import JPEG_SUFFIX, PHOTO_FILENAME_PREFIX, PHOTO_TIMESTAMP_FORMAT

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapturedPhoto:
    """A photo written by the camera to durable temporary storage."""

    path: Path
    captured_at: datetime = field(compare=False)

    @property
    def display_name(self) -> str:
        return self.path.name


class CameraBackend(Protocol):
    """Collaborator that writes a JPEG into a destination it is handed."""

    def take_picture(self, destination_uri: str, callback: Callable[[bool], None]) -> None:
        """Write a photo to *destination_uri* and report success via *callback*."""


class FileProvider(Protocol):
    """Collaborator translating local paths into references a camera can write to."""

    def uri_for_file(self, path: Path) -> str:
        ...


class LocalFileProvider:
    """Expose local files as ``file://`` URIs."""

    def uri_for_file(self, path: Path) -> str:
        return Path(path).resolve().as_uri()


def path_from_uri(uri: str) -> Path:
    """Return the local path behind a ``file://`` *uri*."""

    parsed = urlparse(uri)
    if parsed.scheme != "file":
        raise ValueError(f"Unsupported destination URI: {uri}")
    return Path(url2pathname(parsed.path))


def photo_filename(timestamp: datetime, suffix: int = 0) -> str:
    """Return ``photo_<YYYYMMDD_HHMMSS>.jpg`` with an optional ``_N`` suffix."""

    stem = PHOTO_FILENAME_PREFIX + timestamp.strftime(PHOTO_TIMESTAMP_FORMAT)
    if suffix:
        stem = f"{stem}_{suffix}"
    return stem + JPEG_SUFFIX


class CaptureSession:
    """Request photos from the camera into fresh destination files."""

    def __init__(
        self,
        camera: CameraBackend,
        storage_dir: Path,
        *,
        file_provider: Optional[FileProvider] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._camera = camera
        self._storage_dir = Path(storage_dir)
        self._file_provider = file_provider or LocalFileProvider()
        self._clock = clock
        self._last_issued: Optional[Path] = None

    def create_destination(self) -> tuple[Path, datetime]:
        """Return a destination path no earlier capture has used."""

        self._storage_dir.mkdir(parents=True, exist_ok=True)
        timestamp = self._clock()
        suffix = 0
        while True:
            candidate = self._storage_dir / photo_filename(timestamp, suffix)
            # Two captures within the same second share a timestamp; the
            # suffix keeps them apart.  Written files are caught by
            # ``exists``; the last issued name also covers a capture the
            # camera has not written yet.
            if candidate != self._last_issued and not candidate.exists():
                self._last_issued = candidate
                return candidate, timestamp
            suffix += 1

    def capture(self, on_complete: Callable[[Optional[CapturedPhoto]], None]) -> Path:
        """Ask the camera for a photo and report the outcome to *on_complete*.

        *on_complete* receives the :class:`CapturedPhoto` on success and
        ``None`` when the camera failed or the user backed out.  Returns the
        destination path handed to the camera.
        """

        destination, timestamp = self.create_destination()
        uri = self._file_provider.uri_for_file(destination)

        def _handle_result(success: bool) -> None:
            if not success:
                _LOGGER.info("Capture into %s was cancelled or failed", destination.name)
                on_complete(None)
                return
            if not destination.is_file():
                _LOGGER.warning("Camera reported success but %s was not written", destination)
                on_complete(None)
                return
            on_complete(CapturedPhoto(destination, timestamp))

        self._camera.take_picture(uri, _handle_result)
        return destination


__all__ = [
    "CameraBackend",
    "CaptureSession",
    "CapturedPhoto",
    "FileProvider",
    "LocalFileProvider",
    "path_from_uri",
    "photo_filename",
]
