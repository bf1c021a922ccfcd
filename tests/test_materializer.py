from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

from lightcrop.core.crop_engine import find_uniform_crop
from lightcrop.core.errors import ImageCodecError
from lightcrop.core.image_io import load_image, output_format
from lightcrop.core.luminance import region_brightness
from lightcrop.core.materializer import (
    UNCHANGED_MESSAGE,
    corner_crop_image,
    corner_rect,
    crop_image,
    crop_pixels,
    cropped_area_percent,
)
from lightcrop.core.models import Corner, Rect


def test_crop_pixels_allocates_translated_copy(as_image, solid):
    pixels = solid(30, 20)
    pixels[5:15, 10:25] = 7
    image = as_image(pixels)

    cropped = crop_pixels(image, Rect(10, 5, 25, 15))

    assert cropped.shape == (10, 15, 3)
    assert (cropped == 7).all()
    assert not np.shares_memory(cropped, image.pixels)
    assert cropped.flags.writeable


def test_crop_pixels_rejects_empty_rect(as_image, solid):
    with pytest.raises(ValueError):
        crop_pixels(as_image(solid(10, 10)), Rect(5, 5, 5, 8))


@pytest.mark.parametrize("corner, expected", [
    (Corner.TOP_LEFT, Rect(10, 5, 101, 57)),
    (Corner.TOP_RIGHT, Rect(0, 5, 91, 57)),
    (Corner.BOTTOM_LEFT, Rect(10, 0, 101, 52)),
    (Corner.BOTTOM_RIGHT, Rect(0, 0, 91, 52)),
])
def test_corner_rect(corner, expected):
    assert corner_rect(101, 57, corner, 10) == expected


def test_top_left_corner_keeps_bottom_right_region(as_image):
    pixels = np.arange(40 * 30 * 3, dtype=np.uint32).reshape(30, 40, 3).astype(np.uint8)
    image = as_image(pixels)
    rect = corner_rect(image.width, image.height, Corner.TOP_LEFT, 25)

    cropped = crop_pixels(image, rect)

    assert cropped.shape == (30 - 7, 40 - 10, 3)
    assert np.array_equal(cropped, pixels[7:, 10:])


def test_cropped_area_percent():
    assert cropped_area_percent(Rect(0, 0, 100, 100), Rect(0, 0, 50, 100)) == pytest.approx(50.0)
    assert cropped_area_percent(Rect(0, 0, 100, 100), Rect(10, 10, 90, 90)) == pytest.approx(36.0)


def test_output_format():
    assert output_format(Path("a.png"), "JPEG") == "PNG"
    assert output_format(Path("a.jpg"), "PNG") == "PNG"
    assert output_format(Path("a.jpg"), "JPEG") == "JPEG"
    assert output_format(Path("a.JPEG"), None) == "JPEG"


def test_uniform_image_is_copied_byte_for_byte(tmp_path, solid, write_image):
    src = write_image(tmp_path / "flat.png", solid(64, 48))
    dest = tmp_path / "out.png"

    result = crop_image(src, dest, 15.0, 30.0)

    assert result.was_cropped is False
    assert result.message == UNCHANGED_MESSAGE
    assert dest.read_bytes() == src.read_bytes()


def test_zero_budget_is_copied_byte_for_byte(tmp_path, framed, write_image):
    src = write_image(tmp_path / "framed.png", framed(64, 48, border=5))
    dest = tmp_path / "out.png"

    result = crop_image(src, dest, 15.0, 0.0)

    assert result.was_cropped is False
    assert dest.read_bytes() == src.read_bytes()


def test_cropped_output_matches_crop_rect(tmp_path, framed, write_image):
    pixels = framed(200, 160, border=10)
    src = write_image(tmp_path / "framed.png", pixels)
    dest = tmp_path / "out.png"
    source = load_image(src)
    rect = find_uniform_crop(source, source.bounds, 15.0, 30.0)

    result = crop_image(src, dest, 15.0, 30.0)

    assert result.was_cropped is True
    assert result.message.startswith("cropped ")
    assert result.message.endswith("% of image area")
    with PILImage.open(dest) as out:
        assert out.format == "PNG"
        assert out.size == (rect.width, rect.height)
        assert np.array_equal(np.array(out), pixels[rect.min_y:rect.max_y, rect.min_x:rect.max_x])


def test_jpeg_source_is_encoded_as_jpeg(tmp_path, framed, write_image):
    src = write_image(tmp_path / "framed.jpg", framed(200, 160, border=12))
    dest = tmp_path / "out.jpg"

    result = crop_image(src, dest, 15.0, 30.0)

    assert result.was_cropped is True
    with PILImage.open(dest) as out:
        assert out.format == "JPEG"
        assert out.size[0] < 200 and out.size[1] < 160


def test_corner_crop_file(tmp_path, solid, write_image):
    src = write_image(tmp_path / "scan.jpg", solid(101, 57))
    dest = tmp_path / "out.jpg"

    result = corner_crop_image(src, dest, Corner.BOTTOM_RIGHT, 10)

    assert result.was_cropped is True
    assert result.message == "cropped 10% from bottom-right corner"
    with PILImage.open(dest) as out:
        assert out.size == (101 - 10, 57 - 5)


def test_corner_crop_smaller_than_a_pixel_copies(tmp_path, solid, write_image):
    src = write_image(tmp_path / "tiny.jpg", solid(5, 5))
    dest = tmp_path / "out.jpg"

    result = corner_crop_image(src, dest, Corner.TOP_LEFT, 10)

    assert result.was_cropped is False
    assert dest.read_bytes() == src.read_bytes()


def test_undecodable_file_raises_codec_error(tmp_path):
    src = tmp_path / "broken.jpg"
    src.write_bytes(b"not an image")
    with pytest.raises(ImageCodecError):
        crop_image(src, tmp_path / "out.jpg", 15.0, 30.0)


def test_missing_file_raises_codec_error(tmp_path):
    with pytest.raises(ImageCodecError):
        load_image(tmp_path / "missing.png")


def _write_16bit_frame(path, size=200, border=20, border_value=0x1000, center_value=0x8000):
    gray = np.full((size, size), center_value, dtype=np.uint16)
    gray[:border, :] = border_value
    gray[size - border:, :] = border_value
    gray[:, :border] = border_value
    gray[:, size - border:] = border_value
    PILImage.fromarray(gray).save(path)
    return path


def test_16bit_png_is_scaled_down_not_clipped(tmp_path):
    src = _write_16bit_frame(tmp_path / "deep.png")

    image = load_image(src)

    assert image.pixels.dtype == np.uint16
    assert region_brightness(image, Rect(90, 90, 110, 110)) == pytest.approx(128.0)
    assert region_brightness(image, Rect(0, 0, 200, 10)) == pytest.approx(16.0)


def test_16bit_png_frame_is_cropped(tmp_path):
    src = _write_16bit_frame(tmp_path / "deep.png")
    dest = tmp_path / "out.png"

    result = crop_image(src, dest, 15.0, 30.0)

    assert result.was_cropped is True
    with PILImage.open(dest) as out:
        assert out.mode == "RGB"
        assert out.size[0] < 200 and out.size[1] < 200
        assert np.array(out)[out.size[1] // 2, out.size[0] // 2].tolist() == [128, 128, 128]
