"""Custom widgets used by the main window."""

from .photo_view import PhotoView, buffer_to_qimage

__all__ = ["PhotoView", "buffer_to_qimage"]
