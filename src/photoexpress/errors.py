"""Custom exceptions for PhotoExpress."""

from __future__ import annotations


class PhotoExpressError(Exception):
    """Base error for the package."""


class DecodeError(PhotoExpressError):
    """An image file could not be read or decoded."""


class EncodeError(PhotoExpressError):
    """Pixel data could not be encoded as JPEG."""


class MediaStoreError(PhotoExpressError):
    """The media library rejected or failed to persist an entry."""


class PreviewUnavailableError(PhotoExpressError):
    """A preview render was requested before any photo was loaded."""
