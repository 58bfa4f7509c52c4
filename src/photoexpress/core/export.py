"""Full resolution export of the adjusted photo into the media library."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import JPEG_MIME_TYPE, JPEG_QUALITY, PICTURES_COLLECTION
from ..errors import PhotoExpressError
from ..library.media_store import MediaStore
from . import codec
from .filters import apply_transform
from .session import ExportSnapshot

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a single export."""

    success: bool
    display_name: str
    location: Optional[Path] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, snapshot: ExportSnapshot, error: str) -> "ExportResult":
        return cls(False, snapshot.photo.display_name, None, error)


class ExportPipeline:
    """Decode, filter, encode and publish a captured photo.

    The pipeline always decodes the original file at native resolution; the
    preview's downsampled buffer never reaches the exported JPEG.
    """

    def __init__(
        self,
        media_store: MediaStore,
        *,
        collection: str = PICTURES_COLLECTION,
        quality: int = JPEG_QUALITY,
    ) -> None:
        self._media_store = media_store
        self._collection = collection
        self._quality = quality

    def export(self, snapshot: ExportSnapshot) -> ExportResult:
        """Publish *snapshot* and report the outcome instead of raising."""

        photo = snapshot.photo
        try:
            original = codec.decode(photo.path)
            adjusted = apply_transform(original, snapshot.transform)
            payload = codec.encode_jpeg(adjusted, self._quality)
            with self._media_store.insert(
                photo.display_name,
                JPEG_MIME_TYPE,
                self._collection,
            ) as entry:
                entry.write(payload)
        except (PhotoExpressError, OSError) as exc:
            _LOGGER.error("Export of %s failed: %s", photo.display_name, exc)
            return ExportResult.failed(snapshot, str(exc))

        _LOGGER.info(
            "Exported %s (%dx%d) to %s",
            photo.display_name,
            adjusted.width,
            adjusted.height,
            entry.location,
        )
        return ExportResult(True, photo.display_name, entry.location)


__all__ = ["ExportPipeline", "ExportResult"]
