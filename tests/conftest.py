import os
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Headless runs have no display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def gradient_image(width: int, height: int) -> Image.Image:
    """Return a smooth RGB gradient that survives JPEG re-encoding well."""

    x = np.linspace(0, 255, width, dtype=np.float32)
    y = np.linspace(0, 255, height, dtype=np.float32)
    red = np.broadcast_to(x[None, :], (height, width))
    green = np.broadcast_to(y[:, None], (height, width))
    blue = np.full((height, width), 128.0, dtype=np.float32)
    pixels = np.stack([red, green, blue], axis=-1).round().astype(np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def make_jpeg(tmp_path: Path):
    """Factory writing a gradient JPEG of the requested size into ``tmp_path``."""

    def _make(name: str = "source.jpg", size: tuple[int, int] = (64, 48)) -> Path:
        path = tmp_path / name
        gradient_image(*size).save(path, format="JPEG", quality=95)
        return path

    return _make


@pytest.fixture
def make_png(tmp_path: Path):
    """Factory writing a lossless gradient PNG into ``tmp_path``."""

    def _make(name: str = "source.png", size: tuple[int, int] = (64, 48)) -> Path:
        path = tmp_path / name
        gradient_image(*size).save(path, format="PNG")
        return path

    return _make
