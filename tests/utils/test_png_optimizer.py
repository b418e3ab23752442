"""Tests for PNG recompression."""

from io import BytesIO

import pytest
from PIL import Image

from cl_resize_tools.common.errors import EncodeError
from cl_resize_tools.utils.png_optimizer import PillowPngOptimizer
from tests.helpers import encode_image


def uncompressed_png(width: int, height: int) -> bytes:
    out = BytesIO()
    Image.new("RGB", (width, height), (40, 80, 120)).save(out, format="PNG", compress_level=0)
    return out.getvalue()


def test_optimize_shrinks_uncompressed_png():
    source = uncompressed_png(200, 200)

    optimized = PillowPngOptimizer().optimize(source, 8)

    assert len(optimized) < len(source)
    with Image.open(BytesIO(optimized)) as img:
        assert img.format == "PNG"
        assert img.size == (200, 200)
        assert img.convert("RGB").getpixel((0, 0)) == (40, 80, 120)


def test_optimize_never_grows_output():
    source = encode_image(50, 50, fmt="PNG")

    optimized = PillowPngOptimizer().optimize(source, 0)

    assert len(optimized) <= len(source)


@pytest.mark.parametrize("level", [-1, 10])
def test_optimize_rejects_invalid_level(level: int):
    with pytest.raises(ValueError):
        _ = PillowPngOptimizer().optimize(uncompressed_png(4, 4), level)


def test_optimize_rejects_non_png_data():
    with pytest.raises(EncodeError):
        _ = PillowPngOptimizer().optimize(encode_image(10, 10, fmt="JPEG"), 8)


def test_optimize_rejects_garbage():
    with pytest.raises(EncodeError):
        _ = PillowPngOptimizer().optimize(b"not a png", 8)
