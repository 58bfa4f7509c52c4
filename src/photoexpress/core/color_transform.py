"""Map the brightness slider onto a multiply/add colour transform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from ..config import MAX_BRIGHTNESS, MIN_BRIGHTNESS, NEUTRAL_BRIGHTNESS


class Rgba(NamedTuple):
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int

    @classmethod
    def grey(cls, value: int, alpha: int = 255) -> "Rgba":
        """Return an opaque grey with every colour channel set to *value*."""

        return cls(value, value, value, alpha)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_argb(self) -> int:
        """Return the colour packed as an unsigned ``0xAARRGGBB`` integer."""

        return (self.a << 24) | (self.r << 16) | (self.g << 8) | self.b


PASS_THROUGH = Rgba(255, 255, 255, 255)
TRANSPARENT = Rgba(0, 0, 0, 0)


@dataclass(frozen=True)
class ColorTransform:
    """Per-channel ``in * multiplier / 255 + additive`` colour filter.

    Only one of the two terms departs from identity at a time: darkening
    scales the channels through ``multiplier`` while brightening adds a grey
    offset through ``additive`` and leaves ``multiplier`` at full intensity.
    """

    multiplier: Rgba = PASS_THROUGH
    additive: Rgba = TRANSPARENT

    @property
    def is_identity(self) -> bool:
        return self.multiplier.rgb == PASS_THROUGH.rgb and self.additive.rgb == TRANSPARENT.rgb

    def to_argb_pair(self) -> tuple[int, int]:
        """Return ``(multiplier, additive)`` as packed ARGB integers."""

        return self.multiplier.to_argb(), self.additive.to_argb()


IDENTITY_TRANSFORM = ColorTransform()


def clamp_level(level: float) -> int:
    """Return *level* rounded and limited to the slider's ``[0, 200]`` range."""

    value = int(round(float(level)))
    if value < MIN_BRIGHTNESS:
        return MIN_BRIGHTNESS
    if value > MAX_BRIGHTNESS:
        return MAX_BRIGHTNESS
    return value


def compute_transform(level: int) -> ColorTransform:
    """Return the colour transform for the brightness slider position *level*.

    ``level`` must already lie in ``[0, 200]``.  Values up to the neutral
    point scale the channels down towards black; values above it add a grey
    offset that pushes the channels towards white.
    """

    if level > NEUTRAL_BRIGHTNESS:
        factor = level / 100 - 1
        return ColorTransform(
            multiplier=PASS_THROUGH,
            additive=Rgba.grey(round(255 * factor)),
        )

    factor = level / 100
    return ColorTransform(
        multiplier=Rgba.grey(round(255 * factor)),
        additive=TRANSPARENT,
    )


__all__ = [
    "ColorTransform",
    "IDENTITY_TRANSFORM",
    "PASS_THROUGH",
    "Rgba",
    "TRANSPARENT",
    "clamp_level",
    "compute_transform",
]
