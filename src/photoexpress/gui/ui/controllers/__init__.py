"""Controllers coordinating the main window."""

from .photo_controller import PhotoController

__all__ = ["PhotoController"]
