"""Media library integration."""

from .media_store import LocalMediaStore, MediaStore, PendingMediaEntry

__all__ = ["LocalMediaStore", "MediaStore", "PendingMediaEntry"]
