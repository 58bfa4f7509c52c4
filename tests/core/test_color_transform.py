from __future__ import annotations

import numpy as np
import pytest

from photoexpress.core.color_transform import (
    IDENTITY_TRANSFORM,
    PASS_THROUGH,
    TRANSPARENT,
    ColorTransform,
    Rgba,
    clamp_level,
    compute_transform,
)
from photoexpress.core.filters import apply_transform
from photoexpress.core.pixel_buffer import PixelBuffer


@pytest.mark.parametrize("level", range(0, 101))
def test_darkening_levels_only_use_the_multiplier(level: int) -> None:
    transform = compute_transform(level)

    expected = round(255 * level / 100)
    assert transform.additive == TRANSPARENT
    assert transform.multiplier == Rgba(expected, expected, expected, 255)


@pytest.mark.parametrize("level", range(101, 201))
def test_brightening_levels_only_use_the_additive_term(level: int) -> None:
    transform = compute_transform(level)

    expected = round(255 * (level / 100 - 1))
    assert transform.multiplier == PASS_THROUGH
    assert transform.additive == Rgba(expected, expected, expected, 255)


def test_edge_levels() -> None:
    assert compute_transform(0).multiplier.rgb == (0, 0, 0)
    assert compute_transform(0).multiplier.a == 255
    assert compute_transform(100) == IDENTITY_TRANSFORM
    assert compute_transform(100).is_identity
    assert compute_transform(200).additive == Rgba(255, 255, 255, 255)
    assert compute_transform(200).multiplier == PASS_THROUGH


def test_neutral_transform_leaves_pixels_untouched() -> None:
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(17, 23, 4), dtype=np.uint8)
    source = PixelBuffer(pixels.copy())

    result = apply_transform(source, compute_transform(100))

    assert result == source
    assert result.pixels is not source.pixels


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(-20, 0), (0, 0), (99.6, 100), (150, 150), (200, 200), (512, 200)],
)
def test_clamp_level(raw: float, expected: int) -> None:
    assert clamp_level(raw) == expected


def test_argb_packing_matches_lighting_filter_layout() -> None:
    multiplier, additive = ColorTransform().to_argb_pair()
    assert multiplier == 0xFFFFFFFF
    assert additive == 0

    multiplier, additive = compute_transform(150).to_argb_pair()
    assert multiplier == 0xFFFFFFFF
    assert additive == 0xFF808080
