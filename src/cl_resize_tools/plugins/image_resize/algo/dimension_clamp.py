"""Per-format hard limits on output pixel extents."""

from typing import Final

from ....common.schemas import ImageDimensions, OutputFormat
from .sizing import size_by_fixed_height, size_by_fixed_width

WEBP_MAX_PIXEL_DIMENSION: Final[int] = 16383

MAX_PIXEL_DIMENSIONS: Final[dict[OutputFormat, int]] = {
    OutputFormat.WEBP: WEBP_MAX_PIXEL_DIMENSION,
}


def clamp_dimensions(
    source: ImageDimensions,
    proposed: ImageDimensions,
    output_format: OutputFormat,
) -> ImageDimensions:
    """
    Shrink ``proposed`` so it fits the output format's maximum extent.

    The width limit is applied before the height limit, and each one
    recomputes the other axis from the source aspect ratio.
    """
    limit = MAX_PIXEL_DIMENSIONS.get(output_format)
    if limit is None:
        return proposed

    width, height = proposed.width, proposed.height

    if width > limit:
        width = limit
        height = size_by_fixed_width(source, width)

    if height > limit:
        height = limit
        width = size_by_fixed_height(source, height)

    return ImageDimensions(width=width, height=height)
