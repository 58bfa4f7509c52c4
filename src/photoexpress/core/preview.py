"""Viewport sized preview decoding and live re-rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import PreviewUnavailableError
from . import codec
from .capture import CapturedPhoto
from .color_transform import ColorTransform
from .filters import apply_transform
from .pixel_buffer import PixelBuffer

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewSession:
    """The pristine downsampled decode of one captured photo."""

    photo: CapturedPhoto
    source: PixelBuffer
    native_size: tuple[int, int]
    sample_size: int


class PreviewController:
    """Own the preview decode of the current photo and render it on demand.

    Every :meth:`render` starts again from the pristine decode held in the
    session, so dragging the slider back and forth never compounds rounding
    or clipping from an earlier render.
    """

    def __init__(self) -> None:
        self._session: Optional[PreviewSession] = None

    @property
    def has_preview(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[PreviewSession]:
        return self._session

    def load_for_preview(
        self,
        photo: CapturedPhoto,
        viewport_width: int,
        viewport_height: int,
    ) -> PixelBuffer:
        """Decode *photo* at a resolution sized to the viewport and keep it.

        Raises :class:`~photoexpress.errors.DecodeError` when the file cannot
        be read; the previously loaded session, if any, stays in place.
        """

        native_size = codec.probe_size(photo.path)
        sample_size = codec.compute_sample_size(native_size, (viewport_width, viewport_height))
        source = codec.decode(photo.path, sample_size)
        self._session = PreviewSession(photo, source, native_size, sample_size)
        _LOGGER.info(
            "Loaded preview of %s: %dx%d at 1/%d -> %dx%d",
            photo.path.name,
            native_size[0],
            native_size[1],
            sample_size,
            source.width,
            source.height,
        )
        return source

    def render(self, transform: ColorTransform) -> PixelBuffer:
        """Return a freshly filtered copy of the pristine preview decode."""

        if self._session is None:
            raise PreviewUnavailableError("No photo has been loaded for preview")
        return apply_transform(self._session.source, transform)

    def clear(self) -> None:
        self._session = None


__all__ = ["PreviewController", "PreviewSession"]
