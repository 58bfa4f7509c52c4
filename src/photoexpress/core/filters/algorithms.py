"""Pure per-channel maths behind the brightness colour filter."""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from ..color_transform import ColorTransform

_CHANNEL_VALUES = np.arange(256, dtype=np.float64)


def _channel_response(values: np.ndarray, multiplier: int, additive: int) -> np.ndarray:
    """Return ``clamp(round(values * multiplier / 255 + additive), 0, 255)``."""

    scaled = values * (float(multiplier) / 255.0) + float(additive)
    return np.clip(np.rint(scaled), 0.0, 255.0).astype(np.uint8)


@lru_cache(maxsize=64)
def build_channel_luts(transform: ColorTransform) -> np.ndarray:
    """Pre-compute the filter response for every 8-bit value of R, G and B.

    Returns a read-only ``(3, 256)`` array where row ``c`` maps an input
    sample of channel ``c`` to its filtered value.
    """

    luts = np.stack(
        [
            _channel_response(_CHANNEL_VALUES, multiplier, additive)
            for multiplier, additive in zip(transform.multiplier.rgb, transform.additive.rgb)
        ]
    )
    luts.setflags(write=False)
    return luts
