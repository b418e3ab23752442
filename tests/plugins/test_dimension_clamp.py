"""Unit tests for per-format dimension clamping."""

import pytest

from cl_resize_tools.common.schemas import ImageDimensions, OutputFormat
from cl_resize_tools.plugins.image_resize.algo.dimension_clamp import (
    WEBP_MAX_PIXEL_DIMENSION,
    clamp_dimensions,
)


def dims(width: int, height: int) -> ImageDimensions:
    return ImageDimensions(width=width, height=height)


@pytest.mark.parametrize(
    "output_format",
    [OutputFormat.JPEG, OutputFormat.PNG, OutputFormat.GIF, OutputFormat.TIFF],
)
def test_formats_without_limit_pass_through(output_format: OutputFormat):
    proposed = dims(40000, 30000)
    assert clamp_dimensions(dims(4000, 3000), proposed, output_format) == proposed


def test_webp_within_limit_unchanged():
    proposed = dims(16383, 16383)
    assert clamp_dimensions(dims(1, 1), proposed, OutputFormat.WEBP) == proposed


def test_webp_width_limit_recomputes_height_from_source():
    result = clamp_dimensions(dims(20000, 10000), dims(20000, 10000), OutputFormat.WEBP)
    assert result == dims(WEBP_MAX_PIXEL_DIMENSION, 8192)


def test_webp_height_limit_recomputes_width_from_source():
    result = clamp_dimensions(dims(10000, 20000), dims(10000, 20000), OutputFormat.WEBP)
    assert result == dims(8192, WEBP_MAX_PIXEL_DIMENSION)


def test_webp_both_limits_fire_in_order():
    """Width clamp first yields 16383x32766, then the height clamp fires."""
    result = clamp_dimensions(dims(1, 2), dims(20000, 40000), OutputFormat.WEBP)
    assert result == dims(8192, WEBP_MAX_PIXEL_DIMENSION)


def test_webp_height_clamp_uses_source_ratio_not_proposed():
    """The width recomputed by the height clamp follows the source, not the proposal."""
    result = clamp_dimensions(dims(2, 1), dims(10000, 40000), OutputFormat.WEBP)
    assert result == dims(32766, WEBP_MAX_PIXEL_DIMENSION)


@pytest.mark.parametrize(
    ("source", "proposed"),
    [
        (dims(20000, 10000), dims(20000, 10000)),
        (dims(10000, 20000), dims(30000, 60000)),
        (dims(3, 2), dims(60000, 40000)),
        (dims(800, 600), dims(400, 300)),
        (dims(1, 1), dims(17000, 17000)),
    ],
)
def test_clamp_is_idempotent(source: ImageDimensions, proposed: ImageDimensions):
    once = clamp_dimensions(source, proposed, OutputFormat.WEBP)
    twice = clamp_dimensions(source, once, OutputFormat.WEBP)
    assert twice == once
