"""Aspect-ratio sizing helpers shared by the geometry, crop and clamp steps."""

import math

from ....common.schemas import ImageDimensions, ResizeOptions


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def size_by_fixed_width(source: ImageDimensions, new_width: int) -> int:
    """Height that keeps the source aspect ratio at ``new_width``."""
    ratio = source.height / source.width
    return max(1, round_half_up(new_width * ratio))


def size_by_fixed_height(source: ImageDimensions, new_height: int) -> int:
    """Width that keeps the source aspect ratio at ``new_height``."""
    ratio = source.width / source.height
    return max(1, round_half_up(new_height * ratio))


def is_fill_deficient(source: ImageDimensions, options: ResizeOptions) -> bool:
    """True when the source is too small to fill the requested box.

    The four clauses overlap; each one is evaluated as written.
    """
    w, h = source.width, source.height

    strictly_smaller = w < options.width and h < options.height
    square_and_smaller = source.is_square and (w < options.width or h < options.height)
    smaller_width = (options.width == 0 and h < options.height) or (
        h == options.height and w < options.width
    )
    smaller_height = (options.height == 0 and w < options.width) or (
        w == options.width and h < options.height
    )

    return strictly_smaller or square_and_smaller or smaller_width or smaller_height
