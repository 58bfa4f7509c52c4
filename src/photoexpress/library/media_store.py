"""Media library where finished photos are published for the user."""

from __future__ import annotations

import io
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from ..config import JPEG_MIME_TYPE
from ..errors import MediaStoreError
from ..utils.fileio import atomic_write_bytes

_LOGGER = logging.getLogger(__name__)

_SUFFIX_BY_MIME = {
    JPEG_MIME_TYPE: ".jpg",
}


@dataclass
class PendingMediaEntry:
    """Writable sink for an entry that is not yet visible in the library."""

    display_name: str
    mime_type: str
    collection: str
    stream: io.BytesIO = field(default_factory=io.BytesIO)
    location: Optional[Path] = None
    """Set once the entry has been published."""

    def write(self, data: bytes) -> int:
        return self.stream.write(data)


class MediaStore(ABC):
    """Abstract media library accepting new image entries."""

    @abstractmethod
    @contextmanager
    def insert(
        self,
        display_name: str,
        mime_type: str,
        collection: str,
    ) -> Iterator[PendingMediaEntry]:
        """Yield a sink for a new entry and publish it when the block succeeds.

        If the ``with`` block raises, nothing is published and the exception
        propagates.
        """


class LocalMediaStore(MediaStore):
    """Directory backed media library.

    Each collection is a sub-directory of ``root``.  Entries are staged in
    memory and only moved into the collection with an atomic rename, so an
    interrupted export never leaves a truncated JPEG behind.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def collection_path(self, collection: str) -> Path:
        return self._root / collection

    def entries(self, collection: str) -> list[Path]:
        """Return the published entries of *collection*, sorted by name."""

        directory = self.collection_path(collection)
        if not directory.is_dir():
            return []
        return sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in _SUFFIX_BY_MIME.values()
        )

    @contextmanager
    def insert(
        self,
        display_name: str,
        mime_type: str,
        collection: str,
    ) -> Iterator[PendingMediaEntry]:
        suffix = _SUFFIX_BY_MIME.get(mime_type)
        if suffix is None:
            raise MediaStoreError(f"Unsupported MIME type for the media library: {mime_type}")

        entry = PendingMediaEntry(display_name, mime_type, collection)
        yield entry

        payload = entry.stream.getvalue()
        if not payload:
            raise MediaStoreError(f"Refusing to publish empty entry {display_name!r}")
        with self._lock:
            target = self._unique_target(self.collection_path(collection), display_name, suffix)
            try:
                atomic_write_bytes(target, payload)
            except OSError as exc:
                raise MediaStoreError(f"Failed to write {target}: {exc}") from exc
        entry.location = target
        _LOGGER.info("Published %s (%d bytes) to %s", target.name, len(payload), collection)

    @staticmethod
    def _unique_target(directory: Path, display_name: str, suffix: str) -> Path:
        """Return a free path for *display_name*, adding `` (N)`` on clashes."""

        stem = Path(display_name).stem or "image"
        candidate = directory / f"{stem}{suffix}"
        counter = 1
        while candidate.exists():
            candidate = directory / f"{stem} ({counter}){suffix}"
            counter += 1
        return candidate


__all__ = ["LocalMediaStore", "MediaStore", "PendingMediaEntry"]
