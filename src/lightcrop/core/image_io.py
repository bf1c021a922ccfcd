#!/usr/bin/env python3
"""
image_io.py: Decode image files into pixel arrays, encode pixel arrays back to disk,
and copy files byte-for-byte.

Supports JPEG and PNG input. Output format follows the destination extension or the
source decode format; JPEG output is written at a fixed quality.
"""

import shutil
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image as PILImage

from .errors import ImageCodecError
from .models import Image
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

JPEG_QUALITY = 95
PNG_FORMAT = "PNG"
JPEG_FORMAT = "JPEG"
HIGH_DEPTH_MODES = ("I;16", "I;16L", "I;16B", "I")


def _decode_pixels(img: PILImage.Image) -> np.ndarray:
    """
    RGB pixel array for an opened image.

    16-bit grayscale is kept at full precision as uint16 and replicated across the
    three channels; brightness and encoding scale it down to 8 bits. Every other
    mode goes through Pillow's RGB conversion.
    """
    if img.mode in HIGH_DEPTH_MODES:
        gray = np.clip(np.array(img, dtype=np.int64), 0, 0xFFFF).astype(np.uint16)
        return np.repeat(gray[:, :, np.newaxis], 3, axis=2)
    if img.mode != "RGB":
        img = img.convert("RGB")
    return np.array(img, dtype=np.uint8)


def load_image(path: Union[str, Path]) -> Image:
    """Open the image at `path` and return its RGB pixels with the detected format."""
    path = Path(path)
    try:
        with PILImage.open(path) as img:
            fmt = img.format
            pixels = _decode_pixels(img)
    except FileNotFoundError as e:
        raise ImageCodecError(f"failed to open input file: {e}") from e
    except (OSError, ValueError) as e:
        raise ImageCodecError(f"failed to decode image: {e}") from e
    logger.debug("Decoded %s (%s, %dx%d)", path.name, fmt, pixels.shape[1], pixels.shape[0])
    return Image(pixels=pixels, format=fmt, path=path)


def output_format(output_path: Path, source_format: Optional[str]) -> str:
    """PNG when the destination ends in .png or the source was PNG, JPEG otherwise."""
    if output_path.suffix.lower() == ".png" or (source_format or "").upper() == PNG_FORMAT:
        return PNG_FORMAT
    return JPEG_FORMAT


def save_pixels(pixels: np.ndarray, output_path: Union[str, Path],
                source_format: Optional[str] = None) -> None:
    """Encode an (H, W, 3) pixel array to `output_path`."""
    output_path = Path(output_path)
    if pixels.dtype != np.uint8:
        pixels = (pixels >> 8).astype(np.uint8)
    fmt = output_format(output_path, source_format)
    try:
        img = PILImage.fromarray(np.ascontiguousarray(pixels))
        if fmt == PNG_FORMAT:
            img.save(output_path, format=PNG_FORMAT)
        else:
            img.save(output_path, format=JPEG_FORMAT, quality=JPEG_QUALITY)
    except (OSError, ValueError) as e:
        raise ImageCodecError(f"failed to encode {fmt} image: {e}") from e
    logger.debug("Encoded %s as %s", output_path.name, fmt)


def copy_file(input_path: Union[str, Path], output_path: Union[str, Path]) -> None:
    """Copy a file unchanged, preserving its exact bytes."""
    try:
        shutil.copyfile(input_path, output_path)
    except OSError as e:
        raise ImageCodecError(f"failed to copy file: {e}") from e
