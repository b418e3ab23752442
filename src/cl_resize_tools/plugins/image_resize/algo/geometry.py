"""Target dimension resolution for a resize request."""

from loguru import logger

from ....common.schemas import ImageDimensions, ResizeMode, ResizeOptions
from .crop_planner import optimal_crop_size
from .dimension_clamp import clamp_dimensions
from .sizing import is_fill_deficient, size_by_fixed_height, size_by_fixed_width


def size_by_auto(source: ImageDimensions, new_width: int, new_height: int) -> ImageDimensions:
    if source.is_landscape:
        return ImageDimensions(width=new_width, height=size_by_fixed_width(source, new_width))
    if source.is_portrait:
        return ImageDimensions(width=size_by_fixed_height(source, new_height), height=new_height)

    # Square source: the narrower requested axis drives scaling
    if new_height > new_width:
        return ImageDimensions(width=new_width, height=size_by_fixed_width(source, new_width))
    if new_height < new_width:
        return ImageDimensions(width=size_by_fixed_height(source, new_height), height=new_height)

    return ImageDimensions(width=new_width, height=new_height)


def select_resize_mode(options: ResizeOptions) -> ResizeMode:
    if options.crop:
        return ResizeMode.CROP
    if options.force:
        return ResizeMode.EXACT
    if options.width != 0 and options.height == 0:
        return ResizeMode.LANDSCAPE
    if options.width == 0 and options.height != 0:
        return ResizeMode.PORTRAIT
    return ResizeMode.AUTO


def resolve_dimensions(source: ImageDimensions, options: ResizeOptions) -> ImageDimensions:
    """
    Decide the dimensions the source should be scaled to.

    Sources too small for the request are never upscaled unless
    ``options.enlarge`` is set; they only go through format clamping.

    Args:
        source: Dimensions of the decoded image
        options: Resize request

    Returns:
        Target dimensions, already clamped to the output format's limits
    """
    if is_fill_deficient(source, options) and not options.enlarge:
        logger.debug(f"Source {source.width}x{source.height} smaller than request, not enlarging")
        return clamp_dimensions(source, source, options.type)

    mode = select_resize_mode(options)

    match mode:
        case ResizeMode.EXACT:
            target = ImageDimensions(width=options.width, height=options.height)
        case ResizeMode.LANDSCAPE:
            target = ImageDimensions(
                width=options.width,
                height=size_by_fixed_width(source, options.width),
            )
        case ResizeMode.PORTRAIT:
            target = ImageDimensions(
                width=size_by_fixed_height(source, options.height),
                height=options.height,
            )
        case ResizeMode.AUTO:
            target = size_by_auto(source, options.width, options.height)
        case ResizeMode.CROP:
            target = optimal_crop_size(
                source, ImageDimensions(width=options.width, height=options.height)
            )

    logger.debug(
        f"Resize mode {mode}: {source.width}x{source.height} -> {target.width}x{target.height}"
    )
    return clamp_dimensions(source, target, options.type)
