from pathlib import Path
from typing import Iterable

import numpy as np
import pytest
from PIL import Image as PILImage

from lightcrop.core.models import Image

BORDER_VALUE = 40
CENTER_VALUE = 180


def solid_pixels(width: int, height: int, value: int = CENTER_VALUE) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)


def framed_pixels(width: int, height: int, border: int,
                  border_value: int = BORDER_VALUE, center_value: int = CENTER_VALUE,
                  sides: Iterable[str] = ("top", "bottom", "left", "right")) -> np.ndarray:
    """Flat image with a band of `border` pixels of a different value on the given sides."""
    pixels = solid_pixels(width, height, center_value)
    sides = set(sides)
    if "top" in sides:
        pixels[:border, :] = border_value
    if "bottom" in sides:
        pixels[height - border:, :] = border_value
    if "left" in sides:
        pixels[:, :border] = border_value
    if "right" in sides:
        pixels[:, width - border:] = border_value
    return pixels


def save_pixels(path: Path, pixels: np.ndarray) -> Path:
    PILImage.fromarray(pixels).save(path)
    return path


@pytest.fixture
def solid():
    return solid_pixels


@pytest.fixture
def framed():
    return framed_pixels


@pytest.fixture
def write_image():
    return save_pixels


@pytest.fixture
def as_image():
    def _as_image(pixels: np.ndarray, path=None) -> Image:
        return Image(pixels=pixels, path=path)
    return _as_image
