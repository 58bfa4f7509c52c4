"""Immutable RGBA pixel storage shared by the preview and export pipelines."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """A ``height`` x ``width`` grid of 8-bit RGBA samples.

    The buffer takes ownership of ``pixels`` and marks the array read-only so
    no stage can filter it in place.  Stages that need modified pixels
    allocate a new buffer instead.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = self.pixels
        if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"expected a (height, width, 4) uint8 array, got {pixels.dtype} {pixels.shape}")
        if pixels.shape[0] <= 0 or pixels.shape[1] <= 0:
            raise ValueError(f"pixel buffer dimensions must be positive, got {pixels.shape[1]}x{pixels.shape[0]}")
        pixels.setflags(write=False)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Copy *image* into a new buffer, converting it to RGBA first."""

        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def to_image(self) -> Image.Image:
        """Return a Pillow RGBA image holding a copy of the pixels."""

        return Image.fromarray(self.pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and bool(np.array_equal(self.pixels, other.pixels))

    __hash__ = None  # type: ignore[assignment]


__all__ = ["PixelBuffer"]
