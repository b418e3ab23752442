"""Crop box planning: optimal pre-crop scale and a centered crop rectangle."""

from loguru import logger

from ....common.schemas import ImageDimensions, Rect, ResizeOptions
from .sizing import is_fill_deficient, round_half_up


def optimal_crop_size(source: ImageDimensions, requested: ImageDimensions) -> ImageDimensions:
    """Smallest source-proportional size that still covers ``requested``."""
    height_ratio = source.height / requested.height
    width_ratio = source.width / requested.width
    optimal_ratio = min(height_ratio, width_ratio)

    return ImageDimensions(
        width=max(1, round_half_up(source.width / optimal_ratio)),
        height=max(1, round_half_up(source.height / optimal_ratio)),
    )


def plan_crop(current: ImageDimensions, options: ResizeOptions) -> Rect:
    """
    Center the requested crop box inside the image as it is at crop time.

    When the image is too small for the request, the box falls back to
    a square of the shorter side, stretched to the requested aspect.

    Args:
        current: Dimensions of the (already scaled) image being cropped
        options: Resize request with ``crop`` set

    Returns:
        Rectangle fully contained in ``current``
    """
    box_width, box_height = options.width, options.height

    if is_fill_deficient(current, options):
        box_width = min(current.width, current.height)
        box_height = box_width * options.height // options.width

    box_width = min(max(box_width, 1), current.width)
    box_height = min(max(box_height, 1), current.height)

    rect = Rect(
        x=(current.width - box_width) // 2,
        y=(current.height - box_height) // 2,
        width=box_width,
        height=box_height,
    )
    logger.debug(f"Crop {current.width}x{current.height} -> {rect}")
    return rect
