"""
materializer.py: Turn a crop rectangle into an output file.

An uncropped result is a verbatim copy of the source file; a cropped result is a
freshly allocated pixel buffer holding exactly the crop region, encoded to disk.
Also provides the per-file operations run by the batch driver.
"""

from pathlib import Path
from typing import Union

import numpy as np

from .crop_engine import find_uniform_crop
from .image_io import copy_file, load_image, save_pixels
from .models import Corner, CropResult, Image, Rect
from .uniformity import is_uniform
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

UNCHANGED_MESSAGE = "already uniform, copied unchanged"


def crop_pixels(image: Image, rect: Rect) -> np.ndarray:
    """Copy the pixels inside `rect` into a new buffer whose origin is (0, 0)."""
    if rect.is_empty:
        raise ValueError(f"Invalid crop bounds would create {rect.width}x{rect.height} image")
    cropped = np.empty((rect.height, rect.width, 3), dtype=image.pixels.dtype)
    cropped[:, :, :] = image.region(rect)
    return cropped


def cropped_area_percent(bounds: Rect, rect: Rect) -> float:
    return (1.0 - rect.area / bounds.area) * 100


def corner_rect(width: int, height: int, corner: Corner, percent: float) -> Rect:
    """
    Rectangle left after removing `percent` of the width and height from the two
    edges that meet at `corner`.
    """
    dx = int(width * percent / 100)
    dy = int(height * percent / 100)
    if corner is Corner.TOP_LEFT:
        return Rect(dx, dy, width, height)
    if corner is Corner.TOP_RIGHT:
        return Rect(0, dy, width - dx, height)
    if corner is Corner.BOTTOM_LEFT:
        return Rect(dx, 0, width, height - dy)
    return Rect(0, 0, width - dx, height - dy)


def materialize(image: Image, rect: Rect, output_path: Union[str, Path]) -> bool:
    """
    Write the region `rect` of `image` to `output_path`.

    Returns False (and copies the source bytes) when `rect` covers the whole image,
    True when a cropped image was encoded.
    """
    if rect == image.bounds:
        copy_file(image.path, output_path)
        return False
    save_pixels(crop_pixels(image, rect), output_path, image.format)
    return True


def crop_image(input_path: Union[str, Path], output_path: Union[str, Path],
               tolerance: float, max_crop_percent: float) -> CropResult:
    """
    Crop edges that are significantly darker or brighter than the image center
    until the brightness is uniform within `tolerance` percent.

    Args:
        input_path: Source JPEG or PNG.
        output_path: Where the cropped image (or the unchanged copy) is written.
        tolerance: Allowed edge-to-center brightness deviation in percent.
        max_crop_percent: Maximum share of each dimension that may be cropped.

    Returns:
        CropResult describing whether the image was cropped.
    """
    image = load_image(input_path)
    bounds = image.bounds

    if is_uniform(image, bounds, tolerance):
        copy_file(input_path, output_path)
        return CropResult(was_cropped=False, message=UNCHANGED_MESSAGE)

    rect = find_uniform_crop(image, bounds, tolerance, max_crop_percent)
    if not materialize(image, rect, output_path):
        return CropResult(was_cropped=False, message=UNCHANGED_MESSAGE)

    percent = cropped_area_percent(bounds, rect)
    logger.debug("%s: kept %dx%d of %dx%d", image.path.name, rect.width, rect.height,
                 bounds.width, bounds.height)
    return CropResult(was_cropped=True, message=f"cropped {percent:.1f}% of image area")


def corner_crop_image(input_path: Union[str, Path], output_path: Union[str, Path],
                      corner: Corner, percent: float) -> CropResult:
    """Remove a fixed percentage of the image anchored at `corner`, without brightness analysis."""
    image = load_image(input_path)
    rect = corner_rect(image.width, image.height, corner, percent)
    if not materialize(image, rect, output_path):
        return CropResult(was_cropped=False, message="crop too small, copied unchanged")
    return CropResult(was_cropped=True, message=f"cropped {percent:g}% from {corner.label} corner")
