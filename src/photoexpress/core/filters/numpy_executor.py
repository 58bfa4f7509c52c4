"""NumPy executor applying a :class:`ColorTransform` to a pixel buffer."""

from __future__ import annotations

import numpy as np

from ..color_transform import ColorTransform
from ..pixel_buffer import PixelBuffer
from .algorithms import build_channel_luts


def apply_transform(source: PixelBuffer, transform: ColorTransform) -> PixelBuffer:
    """Return a new buffer holding *source* filtered through *transform*.

    Colour channels go through the transform's lookup tables; alpha is copied
    unchanged.  *source* is never modified.
    """

    if transform.is_identity:
        return PixelBuffer(source.pixels.copy())

    luts = build_channel_luts(transform)
    pixels = source.pixels
    result = np.empty_like(pixels)
    for channel in range(3):
        # Fancy indexing through a 256 entry table is exact and avoids a
        # float32 pass over the whole frame.
        result[..., channel] = luts[channel][pixels[..., channel]]
    result[..., 3] = pixels[..., 3]
    return PixelBuffer(result)
