"""Image decoding and JPEG encoding built on Pillow."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

from ..config import JPEG_QUALITY
from ..errors import DecodeError, EncodeError
from .pixel_buffer import PixelBuffer

_LOGGER = logging.getLogger(__name__)


def probe_size(path: Path) -> tuple[int, int]:
    """Return the native ``(width, height)`` of *path* without decoding pixels."""

    try:
        # ``Image.open`` only parses the header; pixel data stays on disk until
        # ``load`` is requested.
        with Image.open(path) as image:
            width, height = image.size
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot read image bounds of {path}: {exc}") from exc
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image {path} reports invalid dimensions {width}x{height}")
    return width, height


def compute_sample_size(
    native_size: tuple[int, int],
    viewport_size: tuple[int, int],
) -> int:
    """Return the integer downsampling factor fitting *native_size* to the viewport.

    The factor is the floor of the smaller of the two axis ratios so the
    decoded image still covers the viewport, and never drops below ``1``: a
    viewport larger than the image (or one that has not been laid out yet)
    decodes at native size instead of upsampling.
    """

    native_width, native_height = native_size
    viewport_width, viewport_height = viewport_size
    if viewport_width <= 0 or viewport_height <= 0:
        return 1
    factor = min(native_width // viewport_width, native_height // viewport_height)
    return max(1, int(factor))


def decode(path: Path, sample_size: int = 1) -> PixelBuffer:
    """Decode *path* into an RGBA buffer, reduced by the integer *sample_size*.

    JPEG sources use the codec's DCT scaling through :meth:`Image.draft` so a
    large camera frame is never fully materialised for a small preview; any
    residual difference to the requested size is closed with a box filter.
    """

    sample = max(1, int(sample_size))
    try:
        with Image.open(path) as image:
            native_width, native_height = image.size
            target = (max(1, native_width // sample), max(1, native_height // sample))
            if sample > 1:
                image.draft("RGB", target)
            image.load()
            frame = image.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode {path}: {exc}") from exc

    if frame.size != target:
        frame = frame.resize(target, Image.Resampling.BOX)
    _LOGGER.debug("Decoded %s at 1/%d -> %dx%d", path.name, sample, target[0], target[1])
    return PixelBuffer.from_image(frame)


def encode_jpeg(buffer: PixelBuffer, quality: int = JPEG_QUALITY) -> bytes:
    """Return *buffer* encoded as a baseline JPEG.

    JPEG carries no alpha channel, so the samples are flattened to RGB.
    Chroma subsampling is disabled to keep colour detail at full resolution.
    """

    stream = io.BytesIO()
    try:
        buffer.to_image().convert("RGB").save(
            stream,
            format="JPEG",
            quality=int(quality),
            subsampling=0,
        )
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Cannot encode {buffer.width}x{buffer.height} frame as JPEG: {exc}") from exc
    return stream.getvalue()


__all__ = ["compute_sample_size", "decode", "encode_jpeg", "probe_size"]
