"""
luminance.py: Scalar brightness of a pixel and mean brightness of a region.

Uses the Rec. 601 luma weights on 8-bit channel values.
"""

from typing import Sequence

import numpy as np

from .models import Image, Rect

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def _to_8bit(channels: np.ndarray) -> np.ndarray:
    """Scale channel values down to the 0-255 range when stored at 16-bit precision."""
    if channels.dtype == np.uint16:
        return channels >> 8
    return channels


def brightness(pixel: Sequence[int]) -> float:
    """Perceived brightness of one RGB pixel."""
    rgb = _to_8bit(np.asarray(pixel)[:3]).astype(np.float64)
    return float(rgb @ LUMA_WEIGHTS)


def region_brightness(image: Image, rect: Rect) -> float:
    """
    Mean brightness over every pixel in `rect`.

    An empty rect yields 0.0. Cost is proportional to the rect area, so callers
    should keep sampled bands narrow.
    """
    if rect.is_empty:
        return 0.0
    region = _to_8bit(image.region(rect))
    if region.size == 0:
        return 0.0
    return float((region.astype(np.float64) @ LUMA_WEIGHTS).mean())


def deviation_percent(deviation: float, reference: float) -> float:
    """
    Express an absolute brightness deviation as a percentage of `reference`.

    A zero reference gives 0.0 for a zero deviation and infinity otherwise.
    """
    if reference == 0:
        return 0.0 if deviation == 0 else float("inf")
    return deviation / reference * 100


def relative_deviation(value: float, reference: float) -> float:
    """Deviation of `value` from `reference`, in percent of `reference`."""
    return deviation_percent(abs(value - reference), reference)
